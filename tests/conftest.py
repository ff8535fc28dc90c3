"""
Shared fixtures for furiawase tests.
"""

import json

import pytest

from furiawase import conn
from furiawase.kanji import clear_kanji_cache


# Readings as they appear in a hand-made dictionary (already hiragana)
SAMPLE_READINGS = {
    '時': ['とき', 'じ', 'どき'],
    '間': ['あいだ', 'ま', 'かん', 'けん', 'あい'],
    '噴': ['ふ', 'く', 'ふん'],
    '煙': ['けむ', 'る', 'けむり', 'けむ', 'い', 'えん'],
    '関': ['せき', 'ぜき', 'かか', 'から', 'かんぬき', 'か', 'かん'],
    '連': ['つら', 'つ', 'づ', 'れ', 'れん'],
    '着': ['き', 'ぎ', 'つ', 'ちゃく', 'じゃく'],
    '食': ['しょく', 'じき', 'く', 'た'],
    '人': ['じん', 'にん', 'ひと', 'と'],
}


KANJIDIC_XML = """<?xml version="1.0" encoding="UTF-8"?>
<kanjidic2>
<header><file_version>4</file_version></header>
<character>
<literal>着</literal>
<misc><grade>3</grade><stroke_count>12</stroke_count><freq>269</freq><jlpt>3</jlpt></misc>
<reading_meaning>
<rmgroup>
<reading r_type="pinyin">zhuo2</reading>
<reading r_type="ja_on">チャク</reading>
<reading r_type="ja_on">ジャク</reading>
<reading r_type="ja_kun">き.る</reading>
<reading r_type="ja_kun">-ぎ</reading>
<reading r_type="ja_kun">き.せる</reading>
<reading r_type="ja_kun">つ.く</reading>
<meaning>don</meaning>
<meaning m_lang="fr">vêtement</meaning>
</rmgroup>
</reading_meaning>
</character>
<character>
<literal>連</literal>
<misc><grade>4</grade><stroke_count>10</stroke_count></misc>
<reading_meaning>
<rmgroup>
<reading r_type="ja_on">レン</reading>
<reading r_type="ja_kun">つら.なる</reading>
<reading r_type="ja_kun">つら.ねる</reading>
<reading r_type="ja_kun">つ.れる</reading>
<reading r_type="ja_kun">-づ.れ</reading>
</rmgroup>
<nanori>むらじ</nanori>
</reading_meaning>
</character>
<character>
<literal>関</literal>
<misc><grade>4</grade><stroke_count>14</stroke_count></misc>
<reading_meaning>
<rmgroup>
<reading r_type="ja_on">カン</reading>
<reading r_type="ja_kun">せき</reading>
<reading r_type="ja_kun">-ぜき</reading>
<reading r_type="ja_kun">かか.わる</reading>
<reading r_type="ja_kun">からくり</reading>
<reading r_type="ja_kun">かんぬき</reading>
</rmgroup>
</reading_meaning>
</character>
</kanjidic2>
"""


@pytest.fixture
def sample_readings():
    """Copy of the sample reading dictionary."""
    return {k: list(v) for k, v in SAMPLE_READINGS.items()}


@pytest.fixture
def kanjidic_file(tmp_path):
    """A tiny KANJIDIC2 document on disk."""
    path = tmp_path / 'kanjidic2.xml'
    path.write_text(KANJIDIC_XML, encoding='utf-8')
    return path


@pytest.fixture
def readings_json(tmp_path, sample_readings):
    """The sample readings as a JSON file."""
    path = tmp_path / 'readings.json'
    path.write_text(json.dumps(sample_readings, ensure_ascii=False), encoding='utf-8')
    return path


@pytest.fixture
def db(tmp_path):
    """A fresh reading database as the current connection."""
    db_path = tmp_path / 'furiawase.db'
    connection = conn.connect(db_path)
    conn.create_schema()
    clear_kanji_cache()
    yield connection
    conn.close()
    clear_kanji_cache()
