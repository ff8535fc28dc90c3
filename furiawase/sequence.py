"""
Sequential matchers for furiawase.

A matcher is a callable ``matcher(text, pos)`` that tries to consume a
prefix of ``text[pos:]``. It returns a ``Match`` carrying its result and
the cursor after the consumed prefix, or a ``MatchFailure`` describing
where it stopped. Matchers never mutate their input; backtracking is
simply trying another matcher at the same cursor.

These are the building blocks of the alignment engine: literal matchers
for candidate readings, and ``series`` to chain matchers over
contiguous, non-overlapping prefixes.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True)
class Match(Generic[T]):
    """A successful match: the matcher's value and the cursor after it."""
    value: T
    end: int


@dataclass(frozen=True)
class MatchFailure:
    """
    A failed match.

    Attributes:
        position: Offset into the target where matching stopped.
        segment_index: Index of the segment being matched there, if known.
            ``len(segments)`` means input was left over after the last one.
        expected: What was expected at ``position``; None means end of input.
        remaining: Snapshot of the unconsumed target from ``position`` on.
    """
    position: int
    segment_index: Optional[int] = None
    expected: Optional[str] = None
    remaining: str = ""

    def __bool__(self) -> bool:
        return False

    def describe(self) -> str:
        where = f"position {self.position}"
        if self.segment_index is not None:
            where = f"segment {self.segment_index} ({where})"
        wanted = "end of input" if self.expected is None else repr(self.expected)
        return f"expected {wanted} at {where}, remaining {self.remaining!r}"


MatchResult = Union[Match, MatchFailure]
Matcher = Callable[[str, int], MatchResult]


def deeper(current: Optional[MatchFailure], candidate: MatchFailure) -> MatchFailure:
    """
    Return whichever failure got further.

    Failures are ordered by target position, then by segment index, so
    that the reported failure points at the furthest the search reached.
    An earlier failure wins ties.
    """
    if current is None:
        return candidate

    def rank(f: MatchFailure):
        return (f.position, -1 if f.segment_index is None else f.segment_index)

    return candidate if rank(candidate) > rank(current) else current


# ============================================================================
# Primitive Matchers
# ============================================================================

def literal(char: str) -> Matcher:
    """Match exactly one character equal to ``char``."""
    def match(text: str, pos: int) -> MatchResult:
        if pos < len(text) and text[pos] == char:
            return Match(char, pos + 1)
        return MatchFailure(pos, expected=char, remaining=text[pos:])
    return match


def end_of_input() -> Matcher:
    """Succeed with an empty list only when nothing is left to consume."""
    def match(text: str, pos: int) -> MatchResult:
        if pos == len(text):
            return Match([], pos)
        return MatchFailure(pos, expected=None, remaining=text[pos:])
    return match


# ============================================================================
# Composition
# ============================================================================

def series(matchers: Sequence[Matcher]) -> Matcher:
    """
    Chain matchers over contiguous prefixes of the input.

    The composed matcher succeeds iff every matcher succeeds in order,
    each starting where the previous one stopped, and yields the list of
    their values. With no matchers the result only matches at end of
    input; a single matcher is returned with its value wrapped in a list.

    Args:
        matchers: Matchers to run in order.

    Returns:
        A matcher producing the list of sub-results.
    """
    matchers = list(matchers)

    if not matchers:
        return end_of_input()

    if len(matchers) == 1:
        only = matchers[0]

        def single(text: str, pos: int) -> MatchResult:
            result = only(text, pos)
            if isinstance(result, MatchFailure):
                return result
            return Match([result.value], result.end)
        return single

    def chained(text: str, pos: int) -> MatchResult:
        values: List[Any] = []
        for matcher in matchers:
            result = matcher(text, pos)
            if isinstance(result, MatchFailure):
                return result
            values.append(result.value)
            pos = result.end
        return Match(values, pos)
    return chained


def string_matcher(word: str) -> Matcher:
    """
    Match ``word`` character by character at the cursor.

    The value is the list of matched characters. An empty word only
    matches at end of input; callers that want "consume nothing" should
    not ask for it.
    """
    if not word:
        return end_of_input()
    return series([literal(c) for c in word])


def run(matcher: Matcher, text: str) -> MatchResult:
    """
    Apply a matcher to the whole of ``text``.

    Succeeds only if the matcher starts at offset 0 and consumes
    everything; a match that stops short fails at the position where it
    stopped.
    """
    result = matcher(text, 0)
    if isinstance(result, MatchFailure):
        return result
    if result.end != len(text):
        return MatchFailure(result.end, expected=None, remaining=text[result.end:])
    return result
