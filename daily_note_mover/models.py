"""
データモデル定義

Daily Note Moverで使用するデータクラスを定義します。
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Tuple


# フィールド種別
FIELD_DAY = 'day'
FIELD_MONTH = 'month'
FIELD_YEAR = 'year'

# スキップ理由
SKIP_ALREADY_ARCHIVED = 'already-archived'
SKIP_SAME_DAY = 'same-day'
SKIP_UNPARSEABLE = 'unparseable'


@dataclass(frozen=True)
class FormatToken:
    """日付フォーマットのトークン"""
    name: str  # 'DD', 'MM', 'YYYY', 'YY', 'MMM', 'MMMM'
    match_pattern: str
    field_type: str  # FIELD_DAY, FIELD_MONTH, FIELD_YEAR


@dataclass(frozen=True)
class CompiledFormat:
    """コンパイル済みの日付フォーマット"""
    date_format: str
    match_pattern: str
    fields: Tuple[Tuple[str, str], ...]  # (トークン, フィールド種別) の並び
    separator: str  # '-', '/' または区切りなしの場合は ''
    regex: Pattern = field(compare=False, repr=False)

    def match(self, filename: str) -> Optional[re.Match]:
        """ファイル名全体がパターンに一致する場合はマッチオブジェクトを返す"""
        return self.regex.fullmatch(filename)

    def matches(self, filename: str) -> bool:
        """ファイル名全体がパターンに一致するかどうか"""
        return self.match(filename) is not None


@dataclass(frozen=True)
class CandidateFile:
    """移動候補のファイル"""
    name: str  # '15-07-2019.md'
    path: str  # Vault相対のPOSIXパス 'Daily/15-07-2019.md'
    extension: str  # 先頭のドットなし 'md'

    @property
    def stem(self) -> str:
        """拡張子を除いたファイル名"""
        if self.extension and self.name.endswith('.' + self.extension):
            return self.name[:-(len(self.extension) + 1)]
        return self.name


@dataclass(frozen=True)
class MoveDecision:
    """ファイルごとの移動判定結果"""
    file: CandidateFile
    destination_path: Optional[str] = None
    skip_reason: Optional[str] = None

    @property
    def should_move(self) -> bool:
        return self.skip_reason is None and self.destination_path is not None


@dataclass
class ArchiveResult:
    """アーカイブ処理結果"""
    found: int
    moved: int
    skipped: int
    failed: int
    errors: List[Tuple[str, str]]  # (file_path, error_message)
