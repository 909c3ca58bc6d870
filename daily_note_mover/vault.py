"""
Vaultファイル操作モジュール

ノートが格納されたディレクトリ（Vault）に対するファイル一覧の取得、
フォルダ作成、ファイル移動を提供します。パスはすべてVault相対のPOSIX形式です。
"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import List

from .exceptions import FileOperationError, ValidationError
from .models import CandidateFile


def is_vault_relative(path: str) -> bool:
    """
    パスがVault内を指す相対パスかどうか

    絶対パスや '..' を含むパスはVaultの外を指す可能性があるためFalseを返します。
    """
    pure = PurePosixPath(path)
    return not pure.is_absolute() and '..' not in pure.parts


class Vault:
    """Vaultディレクトリへのファイル操作を行うクラス"""

    def __init__(self, root: Path):
        """
        Vaultを初期化

        Args:
            root: Vaultのルートディレクトリ
        """
        self.root = root
        self.logger = logging.getLogger(__name__)

    def validate_root(self) -> None:
        """
        ルートディレクトリの存在とアクセス権を検証

        Raises:
            ValidationError: ディレクトリが存在しない、ディレクトリではない、
                           または読み書きできない場合
        """
        if not self.root.exists():
            raise ValidationError(f"ディレクトリが存在しません: {self.root}")

        if not self.root.is_dir():
            raise ValidationError(f"指定されたパスはディレクトリではありません: {self.root}")

        if not os.access(self.root, os.R_OK | os.W_OK):
            raise ValidationError(f"ディレクトリに読み書き権限がありません: {self.root}")

    def resolve(self, path: str) -> Path:
        """
        Vault相対パスを実際のファイルシステム上のパスに変換

        Raises:
            FileOperationError: パスがVaultの外を指している場合
        """
        if not is_vault_relative(path):
            raise FileOperationError(f"Vault外のパスは操作できません: {path}")
        return self.root.joinpath(*PurePosixPath(path).parts)

    def list_all_files(self) -> List[CandidateFile]:
        """
        Vault内のすべてのファイルを取得

        '.' で始まるフォルダ（.obsidian や設定フォルダなど）は対象外です。

        Returns:
            パス順に並んだファイルのリスト
        """
        files = []

        for file_path in self.root.rglob('*'):
            relative = file_path.relative_to(self.root)
            if any(part.startswith('.') for part in relative.parts[:-1]):
                continue
            if not file_path.is_file():
                continue

            files.append(CandidateFile(
                name=file_path.name,
                path=relative.as_posix(),
                extension=file_path.suffix[1:] if file_path.suffix else ''
            ))

        return sorted(files, key=lambda f: f.path)

    def path_exists(self, path: str) -> bool:
        """Vault相対パスが存在するかどうか"""
        return self.resolve(path).exists()

    def create_directory(self, path: str) -> None:
        """
        フォルダを作成（親フォルダは既に存在している必要がある）

        Args:
            path: 作成するフォルダのVault相対パス

        Raises:
            FileOperationError: 親フォルダが存在しない、既に存在する、または作成に失敗した場合
        """
        try:
            self.resolve(path).mkdir()
        except FileNotFoundError as e:
            raise FileOperationError(f"親フォルダが存在しません: {path}") from e
        except FileExistsError as e:
            raise FileOperationError(f"既に存在します: {path}") from e
        except OSError as e:
            raise FileOperationError(f"フォルダ作成エラー: {path} - {e}") from e

        self.logger.debug(f"フォルダを作成: {path}")

    def rename(self, file: CandidateFile, new_path: str) -> CandidateFile:
        """
        ファイルを移動

        Args:
            file: 移動するファイル
            new_path: 移動先のVault相対パス

        Returns:
            移動後のファイル

        Raises:
            FileOperationError: 移動元が存在しない、移動先が既に存在する、
                              移動先フォルダが存在しない、または移動に失敗した場合
        """
        source = self.resolve(file.path)
        destination = self.resolve(new_path)

        if not source.exists():
            raise FileOperationError("移動元のファイルが存在しません")

        if destination.exists():
            raise FileOperationError("移動先に同名のファイルが既に存在します")

        if not destination.parent.is_dir():
            raise FileOperationError("移動先のフォルダが存在しません")

        try:
            source.rename(destination)
        except PermissionError as e:
            raise FileOperationError(f"アクセス権限エラー: {e}") from e
        except OSError as e:
            raise FileOperationError(f"ファイル操作エラー: {e}") from e

        self.logger.debug(f"移動成功: {file.path} -> {new_path}")
        new_name = PurePosixPath(new_path).name
        return CandidateFile(name=new_name, path=new_path, extension=file.extension)
