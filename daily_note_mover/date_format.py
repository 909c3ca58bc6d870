"""
日付フォーマットのコンパイルモジュール

'DD-MM-YYYY' のような日付トークンのフォーマット文字列を、
ファイル名全体に一致する正規表現とフィールドの並びに変換します。
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from .exceptions import DateFormatError
from .models import FIELD_DAY, FIELD_MONTH, FIELD_YEAR, CompiledFormat, FormatToken


DEFAULT_DATE_FORMAT = 'DD-MM-YYYY'

# 区切り文字として扱う文字
SEPARATORS = ('-', '/')

TOKENS: Dict[str, FormatToken] = {
    'DD': FormatToken('DD', r'\d{2}', FIELD_DAY),
    'MM': FormatToken('MM', r'\d{2}', FIELD_MONTH),
    'YYYY': FormatToken('YYYY', r'\d{4}', FIELD_YEAR),
    'YY': FormatToken('YY', r'\d{2}', FIELD_YEAR),
    'MMM': FormatToken('MMM', r'[A-Za-z]{3}', FIELD_MONTH),
    'MMMM': FormatToken('MMMM', r'[A-Za-z]{4,}', FIELD_MONTH),
}

# 長いトークンを優先して照合する（YYYY と YY、MMMM と MMM と MM を取り違えないため）
TOKEN_NAMES_BY_LENGTH: Tuple[str, ...] = tuple(
    sorted(TOKENS, key=len, reverse=True)
)

# 月名（英語のみ）から月番号への対応表
MONTH_NAMES: Dict[str, int] = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
    'january': 1, 'february': 2, 'march': 3, 'april': 4, 'june': 6,
    'july': 7, 'august': 8, 'september': 9, 'october': 10,
    'november': 11, 'december': 12,
}

_SPLIT_PATTERN = re.compile(r'([-/])')

logger = logging.getLogger(__name__)


def split_format(date_format: str) -> List[str]:
    """
    フォーマット文字列を区切り文字で分割（区切り文字も要素として残す）

    Args:
        date_format: フォーマット文字列

    Returns:
        トークン部分と区切り文字が交互に並んだリスト（空要素は除く）
    """
    return [part for part in _SPLIT_PATTERN.split(date_format) if part]


def tokenize_segment(segment: str) -> Optional[List[str]]:
    """
    区切り文字を含まないセグメントをトークンに分解

    'DDMMMYYYY' のように区切りなしで連結されたトークンは
    長いトークンを優先して先頭から分解します。長いトークンを選ぶと
    残りを分解できない場合（'MMMMM' など）は短いトークンで再試行します。

    Args:
        segment: 区切り文字を含まないセグメント

    Returns:
        トークン名のリスト（トークンのみで構成されていない場合はNone）
    """
    if not segment:
        return None
    if segment in TOKENS:
        return [segment]

    for name in TOKEN_NAMES_BY_LENGTH:
        if not segment.startswith(name):
            continue
        rest = segment[len(name):]
        if not rest:
            return [name]
        tokens = tokenize_segment(rest)
        if tokens is not None:
            return [name] + tokens
    return None


class DateFormatValidator:
    """日付フォーマット文字列の検証を行うユーティリティクラス"""

    @staticmethod
    def find_tokens(date_format: str) -> List[str]:
        """
        フォーマット文字列に含まれる認識可能なトークンを順に取得

        Args:
            date_format: フォーマット文字列

        Returns:
            トークン名のリスト
        """
        if not date_format or not isinstance(date_format, str):
            return []

        found = []
        for part in split_format(date_format):
            if part in SEPARATORS:
                continue
            tokens = tokenize_segment(part)
            if tokens:
                found.extend(tokens)
        return found

    @staticmethod
    def has_usable_tokens(date_format: str) -> bool:
        """フォーマットに使用可能なトークンが1つ以上含まれるかどうか"""
        return bool(DateFormatValidator.find_tokens(date_format))

    @staticmethod
    def has_mixed_separators(date_format: str) -> bool:
        """'-' と '/' が混在しているかどうか"""
        if not date_format or not isinstance(date_format, str):
            return False
        return len({c for c in date_format if c in SEPARATORS}) > 1

    @staticmethod
    def validate(date_format: str) -> List[str]:
        """
        フォーマット文字列を検証して問題点を列挙

        Args:
            date_format: フォーマット文字列

        Returns:
            問題点のメッセージのリスト（問題がなければ空リスト）
        """
        if not date_format or not isinstance(date_format, str):
            return ["日付フォーマットが空です"]

        problems = []
        if not DateFormatValidator.has_usable_tokens(date_format):
            problems.append(
                f"使用可能なトークンが含まれていません: {date_format} "
                f"(使用可能: {', '.join(TOKENS)})"
            )
        if DateFormatValidator.has_mixed_separators(date_format):
            problems.append(
                f"区切り文字 '-' と '/' を混在させることはできません: {date_format}"
            )

        for part in split_format(date_format):
            if part not in SEPARATORS and tokenize_segment(part) is None:
                problems.append(f"認識できない部分は無視されます: {part}")

        return problems

    @staticmethod
    def is_valid(date_format: str) -> bool:
        """
        フォーマット文字列が使用可能かどうか

        認識できない部分が含まれていても、トークンが1つ以上あり
        区切り文字が混在していなければ有効とします。
        """
        return (DateFormatValidator.has_usable_tokens(date_format)
                and not DateFormatValidator.has_mixed_separators(date_format))


class DateFormatCompiler:
    """日付フォーマット文字列をCompiledFormatに変換するクラス"""

    def __init__(self):
        """DateFormatCompilerを初期化"""
        self.logger = logging.getLogger(__name__)

    def compile(self, date_format: str) -> CompiledFormat:
        """
        フォーマット文字列をコンパイル

        Args:
            date_format: フォーマット文字列（例: 'DD-MM-YYYY'）

        Returns:
            コンパイル済みフォーマット

        Raises:
            DateFormatError: 区切り文字が混在している、または正規表現の構築に失敗した場合
        """
        if DateFormatValidator.has_mixed_separators(date_format):
            raise DateFormatError(
                f"区切り文字 '-' と '/' を混在させることはできません: {date_format}"
            )

        self.logger.debug(f"正規表現を構築中: {date_format}")
        pattern = '^'
        fields = []
        separator = ''

        for part in split_format(date_format):
            if part in SEPARATORS:
                separator = part
                pattern += re.escape(part)
                self.logger.debug(f"区切り文字を追加: {part}")
                continue

            tokens = tokenize_segment(part)
            if tokens is None:
                self.logger.warning(f"認識できない部分を無視: {part}")
                continue

            for name in tokens:
                token = TOKENS[name]
                pattern += f'({token.match_pattern})'
                fields.append((token.name, token.field_type))
                self.logger.debug(f"トークンを追加: {name}: {token.match_pattern}")

        pattern += r'\.md$'

        try:
            # \d は ASCII の数字のみに一致させる（全角数字のファイル名は対象外）
            regex = re.compile(pattern, re.ASCII)
        except re.error as e:
            raise DateFormatError(f"正規表現の構築に失敗しました: {date_format} ({e})") from e

        self.logger.debug(f"{date_format} の正規表現: {pattern}")
        return CompiledFormat(
            date_format=date_format,
            match_pattern=pattern,
            fields=tuple(fields),
            separator=separator,
            regex=regex
        )


def resolve_date_format(date_format: str) -> str:
    """
    フォーマット文字列を検証し、無効な場合はデフォルトに置き換える

    Args:
        date_format: フォーマット文字列

    Returns:
        有効なフォーマット文字列
    """
    if DateFormatValidator.is_valid(date_format):
        return date_format

    logger.warning(
        f"無効な日付フォーマット: {date_format!r}、{DEFAULT_DATE_FORMAT} を使用します"
    )
    return DEFAULT_DATE_FORMAT


def compile_date_format(date_format: str) -> CompiledFormat:
    """
    検証してからコンパイル

    検証に失敗したフォーマットはコンパイル前にデフォルトへ置き換えます。

    Args:
        date_format: フォーマット文字列

    Returns:
        コンパイル済みフォーマット
    """
    return DateFormatCompiler().compile(resolve_date_format(date_format))
