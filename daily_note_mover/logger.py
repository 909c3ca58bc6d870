"""
ロギングシステム

Daily Note Moverのロギング機能を提供します。
標準出力とファイル出力の両方をサポートし、進捗表示とエラーログを管理します。
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import Configuration
from .models import SKIP_ALREADY_ARCHIVED, SKIP_SAME_DAY, SKIP_UNPARSEABLE, ArchiveResult


LOGGER_NAME = 'daily_note_mover'

SKIP_REASON_LABELS = {
    SKIP_ALREADY_ARCHIVED: 'アーカイブ済み',
    SKIP_SAME_DAY: '今日の日付',
    SKIP_UNPARSEABLE: '日付を解析できない',
}


@dataclass
class LogConfig:
    """ログ設定"""
    console_level: int = logging.INFO
    file_level: int = logging.DEBUG
    log_file: Optional[Path] = None
    verbose: bool = False


class ProgressLogger:
    """進捗表示とロギングを管理するクラス"""

    def __init__(self, config: LogConfig):
        self.config = config
        self.logger = self._setup_logger()
        self._start_time: Optional[datetime] = None

    def _setup_logger(self) -> logging.Logger:
        """ロガーのセットアップ"""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)

        # 既存のハンドラーを閉じてからクリア
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        console_formatter = logging.Formatter('%(message)s')
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.config.console_level)
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        if self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(self.config.log_file, encoding='utf-8')
            file_handler.setLevel(self.config.file_level)
            file_handler.setFormatter(file_formatter)
            logger.addHandler(file_handler)

        return logger

    def log_processing_start(self, operation: str, vault_root: Path, config: Configuration):
        """処理開始時のサマリー表示"""
        self._start_time = datetime.now()

        self.logger.info("=" * 60)
        self.logger.info(f"Daily Note Mover - {operation}開始")
        self.logger.info("=" * 60)
        self.logger.info(f"開始時刻: {self._start_time.strftime('%Y-%m-%d %H:%M:%S')}")
        self.logger.info(f"Vault: {vault_root}")
        self.logger.info(f"日付フォーマット: {config.date_format}")
        self.logger.info(f"移動先フォルダ: {config.target_folder}")
        self.logger.info(f"年/月サブフォルダ: {'有効' if config.use_year_month_subfolders else '無効'}")
        self.logger.info("")

    def log_file_found(self, file_path: str):
        """フォーマットに一致したファイルのログ"""
        if self.config.verbose:
            self.logger.info(f"一致: {file_path}")

    def log_skip(self, file_path: str, reason: Optional[str]):
        """スキップしたファイルのログ"""
        label = SKIP_REASON_LABELS.get(reason, reason)
        message = f"スキップ ({label}): {file_path}"
        if self.config.verbose:
            self.logger.info(message)
        else:
            self.logger.debug(message)

    def log_processing_complete(self, operation: str, result: ArchiveResult):
        """処理完了時のサマリー表示"""
        end_time = datetime.now()
        total_time = (end_time - self._start_time).total_seconds() if self._start_time else 0

        self.logger.info("")
        self.logger.info("=" * 60)
        self.logger.info(f"{operation}完了サマリー")
        self.logger.info("=" * 60)
        self.logger.info(f"終了時刻: {end_time.strftime('%Y-%m-%d %H:%M:%S')}")
        self.logger.info(f"総処理時間: {total_time:.2f}秒")
        self.logger.info("")
        self.logger.info("処理結果:")
        self.logger.info(f"  - 一致したノート: {result.found}")
        self.logger.info(f"  - 移動: {result.moved}")
        self.logger.info(f"  - スキップ: {result.skipped}")
        self.logger.info(f"  - 失敗: {result.failed}")

        if result.errors:
            self.logger.info("")
            self.logger.info(f"エラー詳細 ({len(result.errors)}件):")
            for file_path, error_msg in result.errors:
                self.logger.error(f"  - {file_path}: {error_msg}")

        self.logger.info("=" * 60)

    def log_error(self, file_path, error_message: str, exception: Optional[Exception] = None):
        """エラーログの詳細記録"""
        error_msg = f"エラー - {file_path}: {error_message}"

        if exception:
            error_msg += f" ({type(exception).__name__}: {str(exception)})"

        self.logger.error(error_msg)

        # 詳細なスタックトレースはファイルログのみに記録
        if exception and self.config.log_file:
            self.logger.debug("スタックトレース:", exc_info=exception)

    def log_warning(self, message: str):
        """警告メッセージのログ"""
        self.logger.warning(f"警告: {message}")

    def log_info(self, message: str):
        """情報メッセージのログ"""
        self.logger.info(message)

    def log_debug(self, message: str):
        """デバッグメッセージのログ"""
        self.logger.debug(message)


def create_default_logger(verbose: bool = False, log_file: Optional[Path] = None) -> ProgressLogger:
    """デフォルトのロガーを作成"""
    config = LogConfig(
        console_level=logging.DEBUG if verbose else logging.INFO,
        file_level=logging.DEBUG,
        log_file=log_file,
        verbose=verbose
    )
    return ProgressLogger(config)


def get_default_log_file() -> Path:
    """デフォルトのログファイルパスを取得"""
    log_dir = Path.home() / '.daily_note_mover' / 'logs'
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return log_dir / f'daily_note_mover_{timestamp}.log'
