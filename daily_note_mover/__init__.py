# Daily Note Mover
# A Python tool to archive old daily notes by the date in their filename

from .models import (
    FormatToken, CompiledFormat, CandidateFile, MoveDecision, ArchiveResult
)
from .exceptions import (
    ProcessingError, ValidationError, FileOperationError, DateFormatError, ConfigError
)
from .date_format import (
    DEFAULT_DATE_FORMAT, DateFormatCompiler, DateFormatValidator, compile_date_format
)
from .date_parser import DateParser
from .config import Configuration, ConfigStore
from .vault import Vault
from .notifier import Notifier
from .archiver import Archiver
from .logger import ProgressLogger, LogConfig, create_default_logger, get_default_log_file
from .note_manager import NoteManager

__all__ = [
    'FormatToken',
    'CompiledFormat',
    'CandidateFile',
    'MoveDecision',
    'ArchiveResult',
    'ProcessingError',
    'ValidationError',
    'FileOperationError',
    'DateFormatError',
    'ConfigError',
    'DEFAULT_DATE_FORMAT',
    'DateFormatCompiler',
    'DateFormatValidator',
    'compile_date_format',
    'DateParser',
    'Configuration',
    'ConfigStore',
    'Vault',
    'Notifier',
    'Archiver',
    'ProgressLogger',
    'LogConfig',
    'create_default_logger',
    'get_default_log_file',
    'NoteManager'
]
