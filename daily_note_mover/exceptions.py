"""
カスタム例外クラス定義

Daily Note Moverで使用する例外クラスを定義します。
"""


class ProcessingError(Exception):
    """処理エラーの基底クラス"""
    pass


class ValidationError(ProcessingError):
    """検証エラー"""
    pass


class FileOperationError(ProcessingError):
    """ファイル操作エラー"""
    pass


class DateFormatError(ProcessingError):
    """日付フォーマットのコンパイルエラー"""
    pass


class ConfigError(ProcessingError):
    """設定ファイルの読み書きエラー"""
    pass
