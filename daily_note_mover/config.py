"""
設定管理モジュール

アーカイブ処理の設定値と、その永続化（JSONファイル）を扱います。
設定値は不変のデータクラスとして扱い、変更時は新しい値を作成します。
"""

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

from .date_format import DEFAULT_DATE_FORMAT, resolve_date_format
from .exceptions import ConfigError
from .vault import is_vault_relative


DEFAULT_TARGET_FOLDER = 'Old Daily Notes'

# 再配置コマンドが対象とする旧アーカイブフォルダ
LEGACY_FOLDER = 'Old Daily Notes'

CONFIG_DIR_NAME = '.daily_note_mover'
CONFIG_FILE_NAME = 'data.json'


@dataclass(frozen=True)
class Configuration:
    """アーカイブ処理の設定"""
    target_folder: str = DEFAULT_TARGET_FOLDER
    show_summary_notification: bool = True
    date_format: str = DEFAULT_DATE_FORMAT
    use_year_month_subfolders: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """設定を辞書形式に変換（永続化用）"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Configuration':
        """
        部分的な辞書をデフォルト値に重ねて設定を作成

        未知のキーと型が一致しない値は無視します。

        Args:
            data: 設定の辞書表現（一部のキーのみでもよい）

        Returns:
            作成された設定
        """
        logger = logging.getLogger(__name__)
        defaults = cls()
        values = {}

        for config_field in fields(cls):
            if config_field.name not in data:
                continue
            value = data[config_field.name]
            expected_type = type(getattr(defaults, config_field.name))
            if not isinstance(value, expected_type):
                logger.warning(
                    f"設定値の型が不正なため無視します: {config_field.name}={value!r}"
                )
                continue
            values[config_field.name] = value

        return cls(**values)

    def validated(self) -> 'Configuration':
        """
        検証済みの設定を取得

        無効な日付フォーマットと、空またはVault外を指すターゲットフォルダは
        デフォルト値に置き換えます。
        """
        target_folder = self.target_folder.strip().strip('/') or DEFAULT_TARGET_FOLDER
        if not is_vault_relative(target_folder):
            logging.getLogger(__name__).warning(
                f"Vault外を指す移動先フォルダは使用できません: {target_folder!r}、"
                f"{DEFAULT_TARGET_FOLDER} を使用します"
            )
            target_folder = DEFAULT_TARGET_FOLDER
        return replace(
            self,
            target_folder=target_folder,
            date_format=resolve_date_format(self.date_format)
        )

    def updated(self, **changes: Any) -> 'Configuration':
        """指定した項目を変更した新しい設定を作成"""
        return replace(self, **changes).validated()


class ConfigStore:
    """設定ファイルの読み書きを管理するクラス"""

    def __init__(self, config_path: Path):
        """
        ConfigStoreを初期化

        Args:
            config_path: 設定ファイルのパス
        """
        self.config_path = config_path
        self.logger = logging.getLogger(__name__)

    @classmethod
    def for_vault(cls, vault_root: Path) -> 'ConfigStore':
        """Vault内の既定の場所に設定ファイルを置くConfigStoreを作成"""
        return cls(vault_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME)

    def load(self) -> Configuration:
        """
        設定ファイルを読み込む

        ファイルが存在しない、または読み込めない場合はデフォルト設定を返します。

        Returns:
            読み込んだ設定
        """
        if not self.config_path.exists():
            self.logger.debug(f"設定ファイルなし、デフォルト設定を使用: {self.config_path}")
            return Configuration()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self.logger.error(f"設定読み込みエラー、デフォルト設定を使用: {self.config_path} - {e}")
            return Configuration()

        if not isinstance(data, dict):
            self.logger.error(f"設定ファイルの形式が不正です、デフォルト設定を使用: {self.config_path}")
            return Configuration()

        config = Configuration.from_dict(data)
        self.logger.debug(f"設定を読み込みました: {config}")
        return config

    def save(self, config: Configuration) -> None:
        """
        設定ファイルを保存

        Args:
            config: 保存する設定

        Raises:
            ConfigError: 保存に失敗した場合
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise ConfigError(f"設定保存エラー: {self.config_path} - {e}") from e

        self.logger.debug(f"設定を保存しました: {self.config_path}")
