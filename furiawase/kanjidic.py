"""
Loading kanji readings into the furiawase database.

Reads KANJIDIC2 XML (plain or gzipped) or a JSON mapping of
character -> readings, and stores the readings in dictionary order.
"""

import gzip
import json
import logging
import os
import xml.etree.ElementTree as ET
from typing import Callable, Dict, List, Optional, Tuple, Union
from pathlib import Path

from furiawase.conn import create_schema, get_connection
from furiawase.kanji import clear_kanji_cache
from furiawase.readings import check_reading_map
from furiawase.settings import KANJIDIC_PATH

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Optional[int]], None]


def is_gzip_file(path: Union[str, Path]) -> bool:
    """Check the gzip magic bytes."""
    with open(path, 'rb') as f:
        return f.read(2) == b'\x1f\x8b'


def _store_kanji(conn, literal: str, readings: List[Tuple[str, str]],
                 grade=None, strokes=None, freq=None, jlpt=None) -> int:
    conn.execute("DELETE FROM kanji WHERE character = ?", (literal,))
    cursor = conn.execute(
        """INSERT INTO kanji (character, grade, strokes, freq, jlpt)
           VALUES (?, ?, ?, ?, ?)""",
        (literal, grade, strokes, freq, jlpt)
    )
    kanji_id = cursor.lastrowid

    conn.executemany(
        """INSERT INTO kanji_reading (kanji_id, reading, type, ord)
           VALUES (?, ?, ?, ?)""",
        [(kanji_id, reading, rtype, i) for i, (reading, rtype) in enumerate(readings)]
    )
    return kanji_id


def _int_text(parent, tag: str) -> Optional[int]:
    if parent is None:
        return None
    elem = parent.find(tag)
    if elem is not None and elem.text:
        return int(elem.text)
    return None


def _load_kanjidic_entry(conn, char_elem) -> bool:
    """Load a single KANJIDIC character. Returns False if it was skipped."""
    literal = char_elem.findtext('literal', '')
    if not literal:
        return False

    misc = char_elem.find('misc')

    readings: List[Tuple[str, str]] = []
    rmgroup = char_elem.find('reading_meaning/rmgroup')
    if rmgroup is not None:
        for reading in rmgroup.findall("reading[@r_type='ja_on']"):
            if reading.text:
                readings.append((reading.text, 'on'))
        for reading in rmgroup.findall("reading[@r_type='ja_kun']"):
            if reading.text:
                readings.append((reading.text, 'kun'))

    # Name readings are used in compounds too (e.g. 大和 やまと)
    rm = char_elem.find('reading_meaning')
    if rm is not None:
        for nanori in rm.findall('nanori'):
            if nanori.text:
                readings.append((nanori.text, 'nanori'))

    _store_kanji(
        conn, literal, readings,
        grade=_int_text(misc, 'grade'),
        strokes=_int_text(misc, 'stroke_count'),
        freq=_int_text(misc, 'freq'),
        jlpt=_int_text(misc, 'jlpt'),
    )
    return True


def load_kanjidic(path: Optional[Union[str, Path]] = None,
                  progress_callback: Optional[ProgressCallback] = None) -> int:
    """
    Load KANJIDIC2 XML into the database.

    Args:
        path: Path to the KANJIDIC2 XML file (gzipped or plain).
            Defaults to settings.KANJIDIC_PATH.
        progress_callback: Optional callback(loaded, total) for progress;
            total is None until loading finishes.

    Returns:
        Number of characters loaded.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = str(path or KANJIDIC_PATH)

    if not os.path.exists(path) and os.path.exists(path + '.gz'):
        path = path + '.gz'

    if not os.path.exists(path):
        raise FileNotFoundError(f"KANJIDIC not found at: {path}")

    create_schema()
    logger.info("Loading KANJIDIC from %s", path)

    if path.endswith('.gz') or is_gzip_file(path):
        f = gzip.open(path, 'rb')
    else:
        f = open(path, 'rb')

    try:
        conn = get_connection()
        loaded = 0

        for _, elem in ET.iterparse(f, events=('end',)):
            if elem.tag != 'character':
                continue
            if _load_kanjidic_entry(conn, elem):
                loaded += 1
                if progress_callback and loaded % 500 == 0:
                    progress_callback(loaded, None)
            elem.clear()

        conn.commit()
    finally:
        f.close()

    clear_kanji_cache()

    if progress_callback:
        progress_callback(loaded, loaded)

    logger.info("Loaded %d kanji", loaded)
    return loaded


def load_readings(mapping: Dict[str, List[str]]) -> int:
    """
    Store a character -> readings mapping.

    Existing entries for the same characters are replaced.

    Returns:
        Number of characters stored.
    """
    check_reading_map(mapping)
    create_schema()
    conn = get_connection()

    for char, readings in mapping.items():
        if len(char) != 1:
            raise ValueError(f"expected a single character, got {char!r}")
        _store_kanji(conn, char, [(r, 'custom') for r in readings])

    conn.commit()
    clear_kanji_cache()
    logger.info("Stored readings for %d characters", len(mapping))
    return len(mapping)


def load_readings_json(path: Union[str, Path]) -> int:
    """Load a JSON file of {character: [readings]} into the database."""
    with open(path, encoding='utf-8') as f:
        mapping = json.load(f)

    check_reading_map(mapping, str(path))
    return load_readings(mapping)
