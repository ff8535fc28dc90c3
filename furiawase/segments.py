"""
Segments: the units the alignment engine assigns readings to.

A written word becomes one segment per character. Kanji with a
dictionary entry get their readings as candidates; every other
character is a literal segment whose only candidate is the character
itself, so it has to appear verbatim in the reading.
"""

from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

from furiawase.characters import is_iteration_mark, is_multi_reading, rendaku


@dataclass(frozen=True)
class Segment:
    """One character of the written word and the readings it may take."""
    anchor: str
    candidates: Tuple[str, ...]

    def __post_init__(self):
        # Accept any sequence, store a tuple
        object.__setattr__(self, 'candidates', tuple(self.candidates))
        if not self.candidates:
            raise ValueError(f"segment {self.anchor!r} has no candidates")
        if any(not c for c in self.candidates):
            raise ValueError(f"segment {self.anchor!r} has an empty candidate")

    @property
    def is_literal(self) -> bool:
        return self.candidates == (self.anchor,)


def literal_segment(char: str) -> Segment:
    """Segment that can only be read as itself."""
    return Segment(char, (char,))


def _iteration_candidates(previous: Sequence[str]) -> List[str]:
    # The repeated kanji is read as before, or voiced (人々 ひとびと)
    result: List[str] = []
    for reading in list(previous) + [rendaku(r) for r in previous]:
        if reading not in result:
            result.append(reading)
    return result


def build_segments(
    word: str,
    kanji_readings: Mapping[str, Sequence[str]],
    classifier: Callable[[str], bool] = is_multi_reading,
    expand_iteration_marks: bool = True,
) -> List[Segment]:
    """
    Build the segment sequence for a written word.

    Args:
        word: The written form, e.g. '時間' or '食べる'.
        kanji_readings: Candidate readings per character. Missing or empty
            entries make the character a literal segment.
        classifier: Predicate telling which characters may take readings.
        expand_iteration_marks: Let 々 repeat the readings of the kanji
            before it (plain, then voiced).

    Returns:
        One segment per character of ``word``.
    """
    segments: List[Segment] = []
    previous: Optional[Segment] = None

    for char in word:
        readings = kanji_readings.get(char) if classifier(char) else None

        if readings:
            segment = Segment(char, tuple(readings))
        elif (expand_iteration_marks and is_iteration_mark(char)
              and previous is not None and not previous.is_literal):
            segment = Segment(char, tuple(_iteration_candidates(previous.candidates)))
        else:
            segment = literal_segment(char)

        segments.append(segment)
        previous = segment

    return segments
