"""
アーカイブ処理モジュール

ファイル名の日付が今日以外のデイリーノートをアーカイブフォルダへ移動します。
年/月のサブフォルダ作成、アーカイブ済みファイルのスキップ、
ファイル単位のエラー処理を含みます。
"""

import logging
from datetime import date
from pathlib import PurePosixPath
from typing import Iterable, List, Optional, Tuple

from .config import Configuration
from .date_parser import DateParser
from .exceptions import FileOperationError
from .models import (
    SKIP_ALREADY_ARCHIVED, SKIP_SAME_DAY, SKIP_UNPARSEABLE,
    ArchiveResult, CandidateFile, CompiledFormat, MoveDecision,
)
from .notifier import Notifier
from .vault import Vault


def is_under_folder(path: str, folder: str) -> bool:
    """パスが指定フォルダ配下にあるかどうか"""
    return path.startswith(folder.rstrip('/') + '/')


def destination_for(file: CandidateFile, file_date: date, config: Configuration) -> str:
    """
    移動先のパスを決定

    Args:
        file: 移動するファイル
        file_date: ファイル名から解析した日付
        config: 設定

    Returns:
        '<target>/<name>' または '<target>/<YYYY>/<MM>/<name>'
    """
    if config.use_year_month_subfolders:
        return f"{config.target_folder}/{file_date.year}/{file_date.month:02d}/{file.name}"
    return f"{config.target_folder}/{file.name}"


class Archiver:
    """デイリーノートの移動判定と移動を行うクラス"""

    def __init__(self, vault: Vault, notifier: Notifier, parser: Optional[DateParser] = None):
        """
        Archiverを初期化

        Args:
            vault: ファイル操作を行うVault
            notifier: ユーザー通知
            parser: 日付パーサー（省略時は新規作成）
        """
        self.vault = vault
        self.notifier = notifier
        self.parser = parser or DateParser()
        self.logger = logging.getLogger(__name__)

    def is_candidate(self, file: CandidateFile, compiled: CompiledFormat) -> bool:
        """拡張子がmdで、ファイル名がフォーマットに一致するかどうか"""
        return file.extension == 'md' and compiled.matches(file.name)

    def decide(self, file: CandidateFile, config: Configuration,
               compiled: CompiledFormat, today: date) -> MoveDecision:
        """
        ファイルを移動するかどうかを判定（ファイル操作は行わない）

        Args:
            file: 対象ファイル
            config: 設定
            compiled: コンパイル済みフォーマット
            today: 今日の日付

        Returns:
            移動判定結果
        """
        file_date = self.parser.parse(file.stem, compiled)
        if file_date is None:
            return MoveDecision(file=file, skip_reason=SKIP_UNPARSEABLE)

        if file_date == today:
            self.logger.debug(f"今日の日付のためスキップ: {file.name}")
            return MoveDecision(file=file, skip_reason=SKIP_SAME_DAY)

        if is_under_folder(file.path, config.target_folder):
            self.logger.debug(f"アーカイブ済みのためスキップ: {file.path}")
            return MoveDecision(file=file, skip_reason=SKIP_ALREADY_ARCHIVED)

        return MoveDecision(file=file, destination_path=destination_for(file, file_date, config))

    def plan_files(self, files: Iterable[CandidateFile], config: Configuration,
                   compiled: CompiledFormat, today: date) -> List[MoveDecision]:
        """
        候補ファイルそれぞれの移動判定を取得

        Args:
            files: ファイルのリスト
            config: 設定
            compiled: コンパイル済みフォーマット
            today: 今日の日付

        Returns:
            フォーマットに一致したファイルの移動判定のリスト
        """
        return [
            self.decide(file, config, compiled, today)
            for file in files
            if self.is_candidate(file, compiled)
        ]

    def ensure_folder(self, folder: str) -> None:
        """
        フォルダが存在しない場合は親から順に作成

        Args:
            folder: Vault相対のフォルダパス

        Raises:
            FileOperationError: フォルダの作成に失敗した場合
        """
        current = PurePosixPath()
        for part in PurePosixPath(folder).parts:
            current = current / part
            path = current.as_posix()
            if not self.vault.path_exists(path):
                self.vault.create_directory(path)
                self.logger.info(f"フォルダを作成: {path}")

    def archive_files(self, files: Iterable[CandidateFile], config: Configuration,
                      compiled: CompiledFormat, today: date,
                      label: str = '移動', progress_logger=None) -> ArchiveResult:
        """
        候補ファイルを判定し、必要なものをアーカイブフォルダへ移動

        Args:
            files: ファイルのリスト（この順に1件ずつ処理）
            config: 設定
            compiled: コンパイル済みフォーマット
            today: 今日の日付
            label: 通知に使う操作名
            progress_logger: 進捗ロガー

        Returns:
            アーカイブ処理結果

        Raises:
            FileOperationError: アーカイブフォルダを作成できない場合
        """
        found_count = 0
        moved_count = 0
        skipped_count = 0
        failed_count = 0
        errors = []

        self.ensure_folder(config.target_folder)

        for file in files:
            self.logger.debug(f"確認中: {file.path}")
            if not self.is_candidate(file, compiled):
                continue

            found_count += 1
            if progress_logger:
                progress_logger.log_file_found(file.path)

            try:
                decision = self.decide(file, config, compiled, today)

                if not decision.should_move:
                    skipped_count += 1
                    if progress_logger:
                        progress_logger.log_skip(file.path, decision.skip_reason)
                    if decision.skip_reason == SKIP_UNPARSEABLE:
                        self.notifier.notify(f"{file.name} の日付を解析できないためスキップしました")
                    continue

                result, error_msg = self._move_single_file_with_error(decision)

                if result == 'success':
                    moved_count += 1
                    self.notifier.notify(f"{file.name} を {decision.destination_path} に{label}しました")
                else:
                    failed_count += 1
                    errors.append((file.path, error_msg))
                    self.notifier.notify(f"{file.name} の{label}に失敗しました: {error_msg}")
                    if progress_logger:
                        progress_logger.log_error(file.path, error_msg)
                    else:
                        self.logger.error(f"ファイル移動エラー: {file.path} - {error_msg}")

            except Exception as e:
                failed_count += 1
                error_msg = f"予期しないエラー: {e}"
                errors.append((file.path, error_msg))
                self.notifier.notify(f"{file.name} の{label}に失敗しました: {error_msg}")

                if progress_logger:
                    progress_logger.log_error(file.path, error_msg, e)
                else:
                    self.logger.error(f"ファイル移動エラー: {file.path} - {error_msg}")

        self.logger.debug(
            f"アーカイブ処理完了: 発見={found_count}, 移動={moved_count}, "
            f"スキップ={skipped_count}, 失敗={failed_count}"
        )
        return ArchiveResult(
            found=found_count,
            moved=moved_count,
            skipped=skipped_count,
            failed=failed_count,
            errors=errors
        )

    def _move_single_file_with_error(self, decision: MoveDecision) -> Tuple[str, Optional[str]]:
        """
        単一ファイルを移動（エラーメッセージ付き）

        Args:
            decision: 移動判定結果

        Returns:
            (結果文字列, エラーメッセージ) のタプル
            結果文字列: 'success', 'failed'
        """
        destination = decision.destination_path
        parent = PurePosixPath(destination).parent.as_posix()

        try:
            # 年/月のサブフォルダは存在しない場合のみ作成
            self.ensure_folder(parent)
            self.vault.rename(decision.file, destination)
        except FileOperationError as e:
            self.logger.error(f"移動失敗: {decision.file.path} - {e}")
            return 'failed', str(e)

        self.logger.debug(f"移動成功: {decision.file.path} -> {destination}")
        return 'success', None
