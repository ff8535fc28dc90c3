"""
furiawase: furigana alignment for Japanese words.

Given a written word, its full reading and the candidate readings of
its kanji, works out which reading each kanji takes.
"""

from typing import Mapping, Optional, Sequence

__version__ = "0.1.0"


def parse_furigana(
    word: str,
    reading: str,
    kanji_readings: Mapping[str, Sequence[str]],
    order=None,
    max_attempts: Optional[int] = None,
    expand_iteration_marks: bool = True,
):
    """
    Align the reading of a word with its characters.

    This is the main high-level API.

    Args:
        word: Written form, e.g. '時間'.
        reading: Full reading in the same kana as the candidates, e.g. 'じかん'.
        kanji_readings: Candidate readings per kanji. Kanji without an
            entry must appear verbatim in the reading.
        order: Candidate ordering (default: longest reading first).
        max_attempts: Optional cap on candidate attempts.
        expand_iteration_marks: Let 々 repeat the previous kanji's readings.

    Returns:
        FuriganaString with one record per character.

    Raises:
        UnresolvableError: If no combination of readings spells ``reading``.
        SearchBudgetExceeded: If ``max_attempts`` is exceeded.

    Example:
        >>> import furiawase
        >>> readings = {'時': ['とき', 'じ', 'どき'], '間': ['あいだ', 'ま', 'かん']}
        >>> furiawase.parse_furigana('時間', 'じかん', readings).to_bracket()
        '時[じ]間[かん]'
    """
    from furiawase.align import longest_first, resolve_or_raise
    from furiawase.furigana import assemble
    from furiawase.segments import build_segments

    segments = build_segments(word, kanji_readings,
                              expand_iteration_marks=expand_iteration_marks)
    assignment = resolve_or_raise(segments, reading, order or longest_first, max_attempts)
    return assemble(segments, assignment)
