"""
DateFormatCompilerとDateFormatValidatorのプロパティベーステスト

Property 1: トークンの並びの保存性を検証します。
"""

import pytest
from hypothesis import given, strategies as st
from hypothesis import settings

from daily_note_mover.date_format import (
    DEFAULT_DATE_FORMAT, TOKENS, DateFormatCompiler, DateFormatValidator,
    compile_date_format, resolve_date_format, split_format, tokenize_segment,
)
from daily_note_mover.exceptions import DateFormatError
from daily_note_mover.models import FIELD_DAY, FIELD_MONTH, FIELD_YEAR


@st.composite
def separated_format_strategy(draw):
    """区切り文字で区切られたフォーマット文字列を生成するストラテジー"""
    tokens = draw(st.lists(st.sampled_from(sorted(TOKENS)), min_size=1, max_size=4))
    separator = draw(st.sampled_from(['-', '/']))
    return tokens, separator, separator.join(tokens)


@settings(max_examples=100)
@given(separated_format_strategy())
def test_field_order_property(scenario):
    """
    **Feature: daily-note-mover, Property 1: トークンの並びの保存性**

    任意の区切り文字付きフォーマットに対して、コンパイル結果のフィールドは
    フォーマット文字列の左から右のトークン順と一致するべきである。
    """
    tokens, separator, date_format = scenario

    compiled = DateFormatCompiler().compile(date_format)

    assert [token for token, _ in compiled.fields] == tokens
    assert [field_type for _, field_type in compiled.fields] == [TOKENS[t].field_type for t in tokens]
    if len(tokens) > 1:
        assert compiled.separator == separator
    assert compiled.match_pattern.startswith('^')
    assert compiled.match_pattern.endswith(r'\.md$')


@settings(max_examples=100)
@given(st.lists(st.sampled_from(sorted(TOKENS)), min_size=1, max_size=4))
def test_compact_tokenization_property(tokens):
    """
    **Feature: daily-note-mover, Property 1: トークンの並びの保存性**

    区切りなしで連結したフォーマットは長いトークン優先で分解され、
    分解結果を連結すると元のフォーマットに戻るべきである。
    """
    segment = ''.join(tokens)

    result = tokenize_segment(segment)

    assert result is not None
    assert ''.join(result) == segment
    assert all(name in TOKENS for name in result)


class TestDateFormatCompiler:
    """DateFormatCompilerの単体テスト"""

    def test_default_format(self):
        compiled = DateFormatCompiler().compile('DD-MM-YYYY')

        assert compiled.match_pattern == r'^(\d{2})\-(\d{2})\-(\d{4})\.md$'
        assert compiled.fields == (('DD', FIELD_DAY), ('MM', FIELD_MONTH), ('YYYY', FIELD_YEAR))
        assert compiled.separator == '-'
        assert compiled.matches('15-07-2019.md')
        assert not compiled.matches('15-07-2019.txt')
        assert not compiled.matches('x15-07-2019.md')
        assert not compiled.matches('15-07-2019.md.bak')

    def test_slash_separator(self):
        compiled = DateFormatCompiler().compile('YYYY/MM/DD')

        assert compiled.separator == '/'
        assert compiled.matches('2019/07/15.md')

    def test_compact_month_name_format(self):
        compiled = DateFormatCompiler().compile('DDMMMYYYY')

        assert [token for token, _ in compiled.fields] == ['DD', 'MMM', 'YYYY']
        assert compiled.separator == ''
        assert compiled.matches('15Jul2019.md')
        assert compiled.matches('15jul2019.md')
        assert not compiled.matches('15July2019.md')

    def test_longest_token_wins(self):
        assert tokenize_segment('YYYYMMDD') == ['YYYY', 'MM', 'DD']
        assert tokenize_segment('YYMMDD') == ['YY', 'MM', 'DD']
        assert tokenize_segment('DDMMMMYYYY') == ['DD', 'MMMM', 'YYYY']

    def test_shorter_token_retried_when_longest_leaves_remainder(self):
        # 'MMMM' を選ぶと 'M' が残るため 'MMM' + 'MM' に分解される
        assert tokenize_segment('MMMMM') == ['MMM', 'MM']
        assert tokenize_segment('DDMMMMMYYYY') == ['DD', 'MMM', 'MM', 'YYYY']
        assert tokenize_segment('DDM') is None

    def test_unrecognized_segment_is_ignored(self):
        compiled = DateFormatCompiler().compile('Daily-DD-MM-YYYY')

        assert [token for token, _ in compiled.fields] == ['DD', 'MM', 'YYYY']
        assert compiled.match_pattern == r'^\-(\d{2})\-(\d{2})\-(\d{4})\.md$'

    def test_no_tokens_still_compiles(self):
        compiled = DateFormatCompiler().compile('notes')

        assert compiled.fields == ()
        assert compiled.matches('.md')
        assert not compiled.matches('15-07-2019.md')

    def test_mixed_separators_rejected(self):
        with pytest.raises(DateFormatError):
            DateFormatCompiler().compile('DD-MM/YYYY')

    def test_split_keeps_separators(self):
        assert split_format('DD-MM/YYYY') == ['DD', '-', 'MM', '/', 'YYYY']
        assert split_format('-DD') == ['-', 'DD']


class TestDateFormatValidator:
    """DateFormatValidatorの単体テスト"""

    @pytest.mark.parametrize('date_format', [
        'DD-MM-YYYY', 'YYYY-MM-DD', 'DDMMMYYYY', 'MM/DD/YY', 'MMMM-YYYY', 'Daily-DD-MM-YYYY',
    ])
    def test_valid_formats(self, date_format):
        assert DateFormatValidator.is_valid(date_format)
        assert resolve_date_format(date_format) == date_format

    @pytest.mark.parametrize('date_format', [
        '', None, 'notes', 'DD.MM.YYYY', 'DD-MM/YYYY', 'dd-mm-yyyy',
    ])
    def test_invalid_formats_fall_back_to_default(self, date_format):
        assert not DateFormatValidator.is_valid(date_format)
        assert resolve_date_format(date_format) == DEFAULT_DATE_FORMAT

    def test_zero_usable_tokens(self):
        assert not DateFormatValidator.has_usable_tokens('notes')
        assert DateFormatValidator.find_tokens('notes-DD') == ['DD']

    def test_validate_reports_problems(self):
        assert DateFormatValidator.validate('DD-MM-YYYY') == []

        problems = DateFormatValidator.validate('DD-MM/YYYY')
        assert any('混在' in problem for problem in problems)

        problems = DateFormatValidator.validate('Daily-DD')
        assert problems == ['認識できない部分は無視されます: Daily']

        problems = DateFormatValidator.validate('')
        assert problems == ['日付フォーマットが空です']

    def test_compile_date_format_uses_default_for_invalid(self):
        compiled = compile_date_format('DD-MM/YYYY')

        assert compiled.date_format == DEFAULT_DATE_FORMAT
        assert compiled.matches('15-07-2019.md')
