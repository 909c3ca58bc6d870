"""
ノート移動管理モジュール

Vault全体のデイリーノートのアーカイブと、旧アーカイブフォルダからの再配置を管理します。
設定の読み込み、日付フォーマットのコンパイル、移動処理、結果の通知を統合して提供します。
"""

from datetime import date
from pathlib import Path
from typing import Callable, Optional

from .archiver import Archiver, is_under_folder
from .config import LEGACY_FOLDER, ConfigStore, Configuration
from .date_format import compile_date_format
from .exceptions import ConfigError
from .logger import create_default_logger, get_default_log_file
from .models import ArchiveResult, CandidateFile
from .notifier import Notifier
from .vault import Vault


class NoteManager:
    """デイリーノートの移動処理を担当するクラス"""

    def __init__(self, vault_root: Path, config_store: Optional[ConfigStore] = None,
                 notifier: Optional[Notifier] = None):
        """
        NoteManagerを初期化

        Args:
            vault_root: Vaultのルートディレクトリ
            config_store: 設定ストア（省略時はVault内の既定の場所）
            notifier: ユーザー通知（省略時は新規作成）
        """
        self.vault_root = vault_root
        self.vault = Vault(vault_root)
        self.config_store = config_store or ConfigStore.for_vault(vault_root)
        self.notifier = notifier or Notifier()
        self.archiver = Archiver(self.vault, self.notifier)
        self.progress_logger = None

    def load_configuration(self) -> Configuration:
        """
        設定を読み込んで検証

        無効な日付フォーマットはデフォルトに置き換え、設定ファイルを保存し直します。

        Returns:
            検証済みの設定
        """
        config = self.config_store.load().validated()

        # 設定ファイルが常に存在し、無効な値が修正された状態になるように保存する
        try:
            self.config_store.save(config)
        except ConfigError as e:
            self.notifier.notify(f"設定を保存できませんでした: {e}")

        return config

    def save_configuration(self, config: Configuration) -> Configuration:
        """
        設定を検証して保存

        Args:
            config: 保存する設定

        Returns:
            保存された検証済みの設定

        Raises:
            ConfigError: 保存に失敗した場合
        """
        config = config.validated()
        self.config_store.save(config)
        return config

    def archive_old_notes(self, today: Optional[date] = None,
                          verbose: bool = False) -> Optional[ArchiveResult]:
        """
        Vault全体をスキャンして古いデイリーノートをアーカイブ

        Args:
            today: 今日の日付（省略時はシステム日付）
            verbose: 詳細ログを表示する場合True

        Returns:
            アーカイブ処理結果（予期しないエラーで中断した場合はNone）
        """
        def summarize(config: Configuration, result: ArchiveResult) -> Optional[str]:
            if not config.show_summary_notification:
                return None
            return (
                f"{result.found}件の{config.date_format}形式のノートを発見: "
                f"移動 {result.moved}件, スキップ {result.skipped}件 (移動先: {config.target_folder})"
            )

        return self._run(
            operation='アーカイブ',
            label='移動',
            file_filter=lambda file: True,
            summarize=summarize,
            today=today,
            verbose=verbose
        )

    def relocate_legacy_notes(self, today: Optional[date] = None,
                              verbose: bool = False) -> Optional[ArchiveResult]:
        """
        旧アーカイブフォルダ内のノートを現在の移動先へ再配置

        Args:
            today: 今日の日付（省略時はシステム日付）
            verbose: 詳細ログを表示する場合True

        Returns:
            再配置処理結果（予期しないエラーで中断した場合はNone）
        """
        def summarize(config: Configuration, result: ArchiveResult) -> Optional[str]:
            return (
                f"{result.moved}件のノートを {LEGACY_FOLDER} から "
                f"{config.target_folder} へ再配置しました"
            )

        return self._run(
            operation='再配置',
            label='再配置',
            file_filter=lambda file: is_under_folder(file.path, LEGACY_FOLDER),
            summarize=summarize,
            today=today,
            verbose=verbose
        )

    def _run(self, operation: str, label: str,
             file_filter: Callable[[CandidateFile], bool],
             summarize: Callable[[Configuration, ArchiveResult], Optional[str]],
             today: Optional[date], verbose: bool) -> Optional[ArchiveResult]:
        """
        設定の読み込みから移動、結果通知までを実行

        Args:
            operation: 処理名（ログ用）
            label: 通知に使う操作名
            file_filter: 対象ファイルの絞り込み条件
            summarize: 処理結果から通知メッセージを作成する関数
            today: 今日の日付
            verbose: 詳細ログを表示する場合True

        Returns:
            処理結果（予期しないエラーで中断した場合はNone）
        """
        # 通知は直近の処理の分だけを保持する
        self.notifier.clear()

        log_file = get_default_log_file() if verbose else None
        self.progress_logger = create_default_logger(verbose=verbose, log_file=log_file)

        try:
            self.vault.validate_root()

            config = self.load_configuration()
            self.progress_logger.log_processing_start(operation, self.vault_root, config)

            # フォーマットは処理ごとに1回だけコンパイルする
            compiled = compile_date_format(config.date_format)
            self.progress_logger.log_debug(f"正規表現: {compiled.match_pattern}")

            files = [file for file in self.vault.list_all_files() if file_filter(file)]
            self.progress_logger.log_info(f"ファイルをスキャン: {len(files)}個")

            result = self.archiver.archive_files(
                files,
                config,
                compiled,
                today or date.today(),
                label=label,
                progress_logger=self.progress_logger
            )

            self.progress_logger.log_processing_complete(operation, result)

            message = summarize(config, result)
            if message:
                self.notifier.notify(message)

            return result

        except Exception as e:
            error_msg = f"{operation}処理エラー: {e}"
            self.progress_logger.log_error(self.vault_root, error_msg, e)
            self.notifier.notify(f"ノートの{label}中にエラーが発生しました: {e}")
            return None
