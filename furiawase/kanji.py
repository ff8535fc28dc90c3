"""
Kanji reading lookup for furiawase.

Reads kanji and their readings from the database and turns them into
alignment candidates.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from furiawase.characters import is_kanji_char
from furiawase.conn import query, query_one
from furiawase.readings import candidate_readings


# ============================================================================
# Kanji Data Classes
# ============================================================================

@dataclass
class KanjiInfo:
    """
    A kanji's dictionary entry.

    Only the readings feed alignment. grade, strokes, freq and jlpt are
    KANJIDIC's <misc> metadata, kept on the record for callers that want
    to show or filter by them; entries loaded from JSON leave them None.
    """
    char: str
    grade: Optional[int] = None
    strokes: Optional[int] = None
    freq: Optional[int] = None
    jlpt: Optional[int] = None
    readings_on: List[str] = field(default_factory=list)
    readings_kun: List[str] = field(default_factory=list)
    readings_other: List[str] = field(default_factory=list)

    @property
    def readings(self) -> List[str]:
        """All readings: on'yomi, then kun'yomi, then the rest."""
        return self.readings_on + self.readings_kun + self.readings_other


# ============================================================================
# Kanji Cache
# ============================================================================

KANJI_CACHE: Dict[str, Optional[KanjiInfo]] = {}


def get_kanji(char: str) -> Optional[KanjiInfo]:
    """
    Get kanji information from the database.

    Args:
        char: Single kanji character.

    Returns:
        KanjiInfo or None if not found.
    """
    if char in KANJI_CACHE:
        return KANJI_CACHE[char]

    row = query_one(
        """SELECT id, character, grade, strokes, freq, jlpt
           FROM kanji WHERE character = ?""",
        (char,)
    )

    if not row:
        KANJI_CACHE[char] = None
        return None

    kanji = KanjiInfo(
        char=char,
        grade=row['grade'],
        strokes=row['strokes'],
        freq=row['freq'],
        jlpt=row['jlpt'],
    )

    for r in query(
        "SELECT reading, type FROM kanji_reading WHERE kanji_id = ? ORDER BY ord, id",
        (row['id'],)
    ):
        if r['type'] == 'on':
            kanji.readings_on.append(r['reading'])
        elif r['type'] == 'kun':
            kanji.readings_kun.append(r['reading'])
        else:
            kanji.readings_other.append(r['reading'])

    KANJI_CACHE[char] = kanji
    return kanji


def clear_kanji_cache():
    """Clear the kanji cache."""
    KANJI_CACHE.clear()


# ============================================================================
# Candidate Lookup
# ============================================================================

def readings_for(char: str, voicing: bool = False, gemination: bool = False) -> List[str]:
    """
    Candidate readings for one character.

    Returns an empty list for characters without an entry, which makes
    them literal segments.
    """
    kanji = get_kanji(char)
    if kanji is None:
        return []
    return candidate_readings(kanji.readings, voicing=voicing, gemination=gemination)


def kanji_readings(word: str, voicing: bool = False,
                   gemination: bool = False) -> Dict[str, List[str]]:
    """
    Build the reading dictionary for every kanji in a word.

    Args:
        word: Written word.
        voicing: Add rendaku variants.
        gemination: Add sokuon variants.

    Returns:
        Mapping of kanji -> candidate readings, for kanji that have any.
    """
    result: Dict[str, List[str]] = {}

    for char in word:
        if char in result or not is_kanji_char(char):
            continue
        readings = readings_for(char, voicing, gemination)
        if readings:
            result[char] = readings

    return result
