"""
日付解析モジュール

コンパイル済みフォーマットを使用してファイル名から日付を取り出し、
暦として正しい日付かどうかを検証します。
"""

import logging
from datetime import date
from typing import Optional

from .date_format import MONTH_NAMES
from .models import FIELD_DAY, FIELD_MONTH, FIELD_YEAR, CompiledFormat


MARKDOWN_SUFFIX = '.md'

# 2桁年の世紀を決める境界（この値未満は2000年代、以上は1900年代）
TWO_DIGIT_YEAR_PIVOT = 50

MIN_YEAR = 1000
MAX_YEAR = 9999


def resolve_two_digit_year(value: int) -> int:
    """
    2桁の年を4桁に変換

    Args:
        value: 0〜99の年

    Returns:
        4桁の年（50未満は2000年代、それ以外は1900年代）
    """
    return 2000 + value if value < TWO_DIGIT_YEAR_PIVOT else 1900 + value


class DateParser:
    """ファイル名から日付を解析するクラス"""

    def __init__(self):
        """DateParserを初期化"""
        self.logger = logging.getLogger(__name__)

    def parse(self, stem: str, compiled: CompiledFormat) -> Optional[date]:
        """
        拡張子を除いたファイル名から日付を解析

        失敗した場合は例外を送出せずNoneを返します。

        Args:
            stem: 拡張子を除いたファイル名（例: '15-07-2019'）
            compiled: コンパイル済みフォーマット

        Returns:
            検証済みの日付（解析できない場合はNone）
        """
        match = compiled.match(stem + MARKDOWN_SUFFIX)
        if not match:
            self.logger.debug(f"パターン不一致: {stem}{MARKDOWN_SUFFIX} ({compiled.match_pattern})")
            return None

        # フィールドごとに1つのセグメントが左から順に対応する
        segments = [segment for segment in match.groups() if segment]

        day = month = year = None

        for offset, (token, field_type) in enumerate(compiled.fields):
            if offset >= len(segments):
                self.logger.debug(f"セグメント不足: オフセット {offset}")
                return None
            segment = segments[offset]

            if field_type == FIELD_DAY:
                day = int(segment)
                if day < 1 or day > 31:
                    self.logger.debug(f"無効な日: {day}")
                    return None

            elif field_type == FIELD_MONTH:
                if token in ('MMM', 'MMMM'):
                    month = MONTH_NAMES.get(segment.lower())
                    if month is None:
                        self.logger.debug(f"無効な月名: {segment}")
                        return None
                else:
                    month = int(segment)
                    if month < 1 or month > 12:
                        self.logger.debug(f"無効な月: {month}")
                        return None

            elif field_type == FIELD_YEAR:
                year = int(segment)
                if token == 'YY':
                    year = resolve_two_digit_year(year)
                if year < MIN_YEAR or year > MAX_YEAR:
                    self.logger.debug(f"無効な年: {year}")
                    return None

        if day is None or month is None or year is None:
            self.logger.debug(f"年月日が不足しています: {year}-{month}-{day}")
            return None

        # 月の日数を超える日付（4月31日など）はここで弾かれる
        try:
            parsed = date(year, month, day)
        except ValueError:
            self.logger.debug(f"存在しない日付: {year}-{month}-{day}")
            return None

        self.logger.debug(f"日付を解析: {parsed.isoformat()}")
        return parsed

    def parse_filename(self, filename: str, compiled: CompiledFormat) -> Optional[date]:
        """
        拡張子付きのファイル名から日付を解析

        Args:
            filename: ファイル名（例: '15-07-2019.md'）
            compiled: コンパイル済みフォーマット

        Returns:
            検証済みの日付（解析できない場合はNone）
        """
        stem = filename[:-len(MARKDOWN_SUFFIX)] if filename.endswith(MARKDOWN_SUFFIX) else filename
        return self.parse(stem, compiled)
