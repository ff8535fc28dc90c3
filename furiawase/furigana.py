"""
Furigana output types.

An Assignment pairs every written character with the reading it was
given. Here those pairs become ``Kanji`` records (characters that carry
furigana) or ``Other`` records (kana and symbols that stand for
themselves), with projections back to the written form and the reading
and renderers for ruby markup.
"""

import html
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from furiawase.align import Pairing
from furiawase.segments import Segment


@dataclass(frozen=True)
class Kanji:
    """A character annotated with its reading."""
    character: str
    reading: str

    def to_writing(self) -> str:
        return self.character

    def to_reading(self) -> str:
        return self.reading


@dataclass(frozen=True)
class Other:
    """A character that is read as written."""
    character: str

    def to_writing(self) -> str:
        return self.character

    def to_reading(self) -> str:
        return self.character


Furigana = Union[Kanji, Other]


class FuriganaString(Sequence):
    """Immutable sequence of furigana records for one word."""

    __slots__ = ('_items',)

    def __init__(self, items: Iterable[Furigana] = ()):
        self._items = tuple(items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return FuriganaString(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        if isinstance(other, FuriganaString):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"FuriganaString({list(self._items)!r})"

    def to_writing(self) -> str:
        """The written word."""
        return ''.join(f.to_writing() for f in self._items)

    def to_reading(self) -> str:
        """The full reading."""
        return ''.join(f.to_reading() for f in self._items)

    def to_list(self) -> List[Furigana]:
        return list(self._items)

    def to_bracket(self) -> str:
        """
        Render in Anki's bracket notation, e.g. 'お 茶[ちゃ]'.

        A space separates a kanji from preceding text so that the reading
        attaches to the right characters.
        """
        parts = []
        for i, f in enumerate(self._items):
            if isinstance(f, Kanji):
                prefix = ' ' if i > 0 and isinstance(self._items[i - 1], Other) else ''
                parts.append(f"{prefix}{f.character}[{f.reading}]")
            else:
                parts.append(f.character)
        return ''.join(parts)

    def to_html(self) -> str:
        """Render as HTML ruby markup, one <ruby> element per kanji."""
        parts = []
        for f in self._items:
            if isinstance(f, Kanji):
                parts.append(
                    f"<ruby>{html.escape(f.character)}"
                    f"<rt>{html.escape(f.reading)}</rt></ruby>"
                )
            else:
                parts.append(html.escape(f.character))
        return ''.join(parts)


def assemble(segments: Sequence[Segment],
             assignment: Sequence[Pairing]) -> FuriganaString:
    """
    Turn a resolved Assignment into furigana records.

    Each pairing is zipped with the segment it resolved: segments built
    from dictionary readings (kanji, and iteration marks that took a
    reading) become ``Kanji``, literal segments become ``Other``.

    Args:
        segments: The segments passed to resolve().
        assignment: Pairings as returned by resolve().

    Returns:
        FuriganaString with one record per pairing.

    Raises:
        ValueError: If the assignment does not line up with the segments.
    """
    if len(segments) != len(assignment):
        raise ValueError(
            f"{len(assignment)} pairings for {len(segments)} segments")

    items: List[Furigana] = []

    for segment, (anchor, chosen) in zip(segments, assignment):
        if anchor != segment.anchor:
            raise ValueError(f"pairing {anchor!r} does not match segment {segment.anchor!r}")
        if segment.is_literal:
            items.append(Other(anchor))
        else:
            items.append(Kanji(anchor, chosen))

    return FuriganaString(items)
