"""
Tests for furigana.py and the package-level parse_furigana().
"""

import pytest

import furiawase
from furiawase import parse_furigana
from furiawase.align import Pairing, dictionary_order
from furiawase.errors import SearchBudgetExceeded, UnresolvableError
from furiawase.furigana import FuriganaString, Kanji, Other, assemble
from furiawase.segments import Segment, literal_segment


class TestRecords:
    """Tests for the Kanji and Other records."""

    def test_kanji(self):
        k = Kanji('時', 'じ')
        assert k.to_writing() == '時'
        assert k.to_reading() == 'じ'

    def test_other(self):
        o = Other('べ')
        assert o.to_writing() == 'べ'
        assert o.to_reading() == 'べ'


class TestFuriganaString:
    """Tests for projections and renderers."""

    @pytest.fixture
    def taberu(self):
        return FuriganaString([Kanji('食', 'た'), Other('べ'), Other('る')])

    def test_writing_and_reading(self, taberu):
        assert taberu.to_writing() == '食べる'
        assert taberu.to_reading() == 'たべる'

    def test_sequence_behaviour(self, taberu):
        assert len(taberu) == 3
        assert taberu[0] == Kanji('食', 'た')
        assert taberu[1:] == FuriganaString([Other('べ'), Other('る')])
        assert taberu.to_list() == [Kanji('食', 'た'), Other('べ'), Other('る')]

    def test_equality(self, taberu):
        same = FuriganaString([Kanji('食', 'た'), Other('べ'), Other('る')])
        assert taberu == same
        assert hash(taberu) == hash(same)

    def test_bracket(self, taberu):
        assert taberu.to_bracket() == '食[た]べる'

    def test_bracket_space_after_kana(self):
        furigana = FuriganaString([Other('お'), Kanji('茶', 'ちゃ')])
        assert furigana.to_bracket() == 'お 茶[ちゃ]'

    def test_bracket_consecutive_kanji(self):
        furigana = FuriganaString([Kanji('時', 'じ'), Kanji('間', 'かん')])
        assert furigana.to_bracket() == '時[じ]間[かん]'

    def test_html(self, taberu):
        assert taberu.to_html() == '<ruby>食<rt>た</rt></ruby>べる'

    def test_html_escapes(self):
        assert FuriganaString([Other('<')]).to_html() == '&lt;'

    def test_empty(self):
        empty = FuriganaString()
        assert empty.to_writing() == ''
        assert empty.to_reading() == ''


class TestAssemble:
    """Tests for turning assignments into records."""

    def test_classifies_by_segment(self):
        segments = [Segment('食', ('た', 'しょく')), literal_segment('べ')]
        assignment = (Pairing('食', 'た'), Pairing('べ', 'べ'))
        assert assemble(segments, assignment) == FuriganaString(
            [Kanji('食', 'た'), Other('べ')])

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            assemble([literal_segment('べ')], ())

    def test_anchor_mismatch(self):
        with pytest.raises(ValueError):
            assemble([literal_segment('べ')], (Pairing('る', 'る'),))


class TestParseFurigana:
    """Tests for the high-level API."""

    def test_jikan(self, sample_readings):
        result = parse_furigana('時間', 'じかん', sample_readings)
        assert result.to_list() == [Kanji('時', 'じ'), Kanji('間', 'かん')]

    def test_mixed_word(self, sample_readings):
        result = parse_furigana('食べる', 'たべる', sample_readings)
        assert result.to_list() == [Kanji('食', 'た'), Other('べ'), Other('る')]

    def test_iteration_mark_is_annotated(self, sample_readings):
        result = parse_furigana('着々', 'ちゃくちゃく', sample_readings)
        assert result.to_list() == [Kanji('着', 'ちゃく'), Kanji('々', 'ちゃく')]

    def test_round_trip(self, sample_readings):
        result = parse_furigana('噴煙', 'ふんえん', sample_readings)
        assert result.to_writing() == '噴煙'
        assert result.to_reading() == 'ふんえん'

    def test_order_option(self):
        readings = {'甲': ['a', 'ab'], '乙': ['bc', 'c']}
        assert parse_furigana('甲乙', 'abc', readings)[0] == Kanji('甲', 'ab')
        result = parse_furigana('甲乙', 'abc', readings, order=dictionary_order)
        assert result[0] == Kanji('甲', 'a')

    def test_unresolvable(self, sample_readings):
        with pytest.raises(UnresolvableError) as exc_info:
            parse_furigana('時間', 'じけ', sample_readings)
        assert exc_info.value.word == '時間'

    def test_budget(self, sample_readings):
        with pytest.raises(SearchBudgetExceeded):
            parse_furigana('時間', 'じかん', sample_readings, max_attempts=1)

    def test_version(self):
        assert furiawase.__version__ == '0.1.0'
