"""
Tests for the reading database: kanjidic.py, kanji.py and conn.py.
"""

import gzip

import pytest

from furiawase import conn
from furiawase.kanji import KANJI_CACHE, KanjiInfo, get_kanji, kanji_readings, readings_for
from furiawase.kanjidic import is_gzip_file, load_kanjidic, load_readings, load_readings_json


class TestLoadKanjidic:
    """Tests for loading KANJIDIC2 XML."""

    def test_counts_characters(self, db, kanjidic_file):
        assert load_kanjidic(kanjidic_file) == 3
        assert conn.query_column("SELECT character FROM kanji ORDER BY id") == ['着', '連', '関']

    def test_gzipped(self, db, kanjidic_file, tmp_path):
        gz_path = tmp_path / 'kanjidic2.xml.gz'
        gz_path.write_bytes(gzip.compress(kanjidic_file.read_bytes()))
        assert is_gzip_file(gz_path)
        assert load_kanjidic(gz_path) == 3

    def test_gz_suffix_fallback(self, db, kanjidic_file, tmp_path):
        gz_path = tmp_path / 'other.xml.gz'
        gz_path.write_bytes(gzip.compress(kanjidic_file.read_bytes()))
        assert load_kanjidic(tmp_path / 'other.xml') == 3

    def test_missing_file(self, db, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_kanjidic(tmp_path / 'missing.xml')

    def test_progress_callback(self, db, kanjidic_file):
        calls = []
        load_kanjidic(kanjidic_file, lambda loaded, total: calls.append((loaded, total)))
        assert calls[-1] == (3, 3)

    def test_metadata(self, db, kanjidic_file):
        load_kanjidic(kanjidic_file)
        kanji = get_kanji('着')
        assert isinstance(kanji, KanjiInfo)
        assert kanji.grade == 3
        assert kanji.strokes == 12
        assert kanji.freq == 269
        assert kanji.jlpt == 3

    def test_readings_by_type(self, db, kanjidic_file):
        load_kanjidic(kanjidic_file)
        kanji = get_kanji('連')
        assert kanji.readings_on == ['レン']
        assert kanji.readings_kun == ['つら.なる', 'つら.ねる', 'つ.れる', '-づ.れ']
        assert kanji.readings_other == ['むらじ']

    def test_reload_replaces(self, db, kanjidic_file):
        load_kanjidic(kanjidic_file)
        load_kanjidic(kanjidic_file)
        assert conn.query_column("SELECT COUNT(*) FROM kanji") == [3]
        assert len(get_kanji('関').readings) == 6


class TestLoadReadings:
    """Tests for loading hand-made reading mappings."""

    def test_mapping(self, db, sample_readings):
        assert load_readings(sample_readings) == len(sample_readings)
        assert get_kanji('時').readings == ['とき', 'じ', 'どき']

    def test_json(self, db, readings_json, sample_readings):
        assert load_readings_json(readings_json) == len(sample_readings)

    def test_json_must_be_object(self, db, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('["時"]', encoding='utf-8')
        with pytest.raises(ValueError):
            load_readings_json(path)

    @pytest.mark.parametrize('value', ['とき', None, ['とき', 1]])
    def test_readings_must_be_list_of_strings(self, db, value):
        with pytest.raises(ValueError, match="readings for '時'"):
            load_readings({'時': value})
        assert conn.query_column("SELECT COUNT(*) FROM kanji") == [0]

    def test_json_readings_must_be_list_of_strings(self, db, tmp_path):
        path = tmp_path / 'bad.json'
        path.write_text('{"時": "とき"}', encoding='utf-8')
        with pytest.raises(ValueError, match='must be a list of strings'):
            load_readings_json(path)

    def test_single_characters_only(self, db):
        with pytest.raises(ValueError):
            load_readings({'時間': ['じかん']})

    def test_loading_clears_cache(self, db):
        load_readings({'時': ['じ']})
        assert readings_for('時') == ['じ']
        load_readings({'時': ['とき', 'じ']})
        assert readings_for('時') == ['とき', 'じ']


class TestLookup:
    """Tests for turning stored readings into candidates."""

    def test_readings_for(self, db, kanjidic_file):
        load_kanjidic(kanjidic_file)
        assert readings_for('着') == ['ちゃく', 'じゃく', 'き', 'ぎ', 'つ']

    def test_readings_for_unknown(self, db):
        assert readings_for('猫') == []
        assert KANJI_CACHE['猫'] is None

    def test_readings_for_with_variants(self, db):
        load_readings({'学': ['ガク']})
        assert readings_for('学', gemination=True) == ['がく', 'がっ']

    def test_kanji_readings(self, db, kanjidic_file):
        load_kanjidic(kanjidic_file)
        readings = kanji_readings('関連する')
        assert set(readings) == {'関', '連'}
        assert readings['関'] == ['かん', 'せき', 'ぜき', 'かか', 'からくり', 'かんぬき']
        assert readings['連'] == ['れん', 'つら', 'つ', 'づ', 'むらじ']

    def test_kanji_readings_skip_unknown(self, db, kanjidic_file):
        load_kanjidic(kanjidic_file)
        assert kanji_readings('猫') == {}

    def test_end_to_end(self, db, kanjidic_file):
        from furiawase import parse_furigana

        load_kanjidic(kanjidic_file)
        result = parse_furigana('関連', 'かんれん', kanji_readings('関連'))
        assert result.to_bracket() == '関[かん]連[れん]'


class TestConnection:
    """Tests for connection handling."""

    def test_with_connection_overrides(self, db, tmp_path):
        load_readings({'時': ['じ']})
        other = tmp_path / 'other.db'
        with conn.with_connection(other) as c:
            conn.create_schema()
            assert conn.query_column("SELECT COUNT(*) FROM kanji") == [0]
            assert conn.get_connection() is c
        assert conn.query_column("SELECT COUNT(*) FROM kanji") == [1]

    def test_execute(self, db):
        conn.execute("INSERT INTO kanji (character) VALUES (?)", ('猫',))
        row = conn.query_one("SELECT character FROM kanji")
        assert row['character'] == '猫'

    def test_executemany(self, db):
        conn.executemany("INSERT INTO kanji (character) VALUES (?)", [('猫',), ('犬',)])
        assert conn.query_column("SELECT character FROM kanji ORDER BY id") == ['猫', '犬']

    def test_memory_database(self):
        conn.connect(':memory:')
        try:
            conn.create_schema()
            assert conn.query("SELECT * FROM kanji") == []
        finally:
            conn.close()

    def test_connect_creates_data_directory(self, tmp_path):
        db_path = tmp_path / 'data' / 'nested' / 'furiawase.db'
        conn.connect(db_path)
        try:
            conn.create_schema()
            assert db_path.parent.is_dir()
            assert db_path.exists()
        finally:
            conn.close()
