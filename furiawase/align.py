"""
Alignment of candidate readings against a full reading.

Given segments (one per written character, each with candidate
readings) and the reading of the whole word, find one candidate per
segment whose concatenation is exactly the reading.

The matcher is built as a right fold over the segments: the
continuation matching segments ``i+1..n`` exists before the matcher for
segment ``i``, which uses it as a gate. A candidate is committed only if
it matches literally at the cursor *and* the continuation can consume
everything after it. Otherwise the next candidate is tried, and when
none is left the failure goes back to the previous segment, which moves
on to its own next candidate.

The search returns the first assignment found under a fixed candidate
order. It is complete (every assignment is eventually tried) but not
memoized, so the worst case is exponential in the number of ambiguous
segments. That is fine for words; pass ``max_attempts`` to bound it.
"""

import logging
from functools import reduce
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

from furiawase.errors import SearchBudgetExceeded, UnresolvableError
from furiawase.segments import Segment
from furiawase.sequence import (
    Match, MatchFailure, Matcher, deeper, end_of_input, run, string_matcher,
)

logger = logging.getLogger(__name__)


class Pairing(NamedTuple):
    """A segment's anchor and the candidate chosen for it."""
    anchor: str
    chosen: str


Assignment = Tuple[Pairing, ...]
CandidateOrder = Callable[[Sequence[str]], List[str]]


# ============================================================================
# Candidate Ordering
# ============================================================================

def longest_first(candidates: Sequence[str]) -> List[str]:
    """
    Try longer readings first.

    The longest matching reading is more often the right one, so this
    cuts down backtracking on typical words. Equal lengths keep their
    dictionary order.
    """
    return sorted(candidates, key=len, reverse=True)


def dictionary_order(candidates: Sequence[str]) -> List[str]:
    """Try readings in the order the dictionary lists them."""
    return list(candidates)


CANDIDATE_ORDERS = {
    'longest': longest_first,
    'dictionary': dictionary_order,
}


# ============================================================================
# Search
# ============================================================================

class _Budget:
    """Counts literal candidate attempts across one resolution."""

    def __init__(self, limit: Optional[int]):
        self.limit = limit
        self.attempts = 0

    def spend(self):
        self.attempts += 1
        if self.limit is not None and self.attempts > self.limit:
            logger.debug("search budget of %d attempts exhausted", self.limit)
            raise SearchBudgetExceeded(self.attempts, self.limit)


def _finish(segment_count: int) -> Matcher:
    at_end = end_of_input()

    def match(text: str, pos: int):
        result = at_end(text, pos)
        if isinstance(result, MatchFailure):
            # Input left over after the last segment
            return MatchFailure(pos, segment_count, None, text[pos:])
        return Match((), pos)
    return match


def _segment_matcher(index: int, segment: Segment, rest: Matcher,
                     order: CandidateOrder, budget: _Budget) -> Matcher:
    candidates = order(segment.candidates)
    literals = [(c, string_matcher(c)) for c in candidates]

    def match(text: str, pos: int):
        failure: Optional[MatchFailure] = None

        for candidate, matcher in literals:
            budget.spend()
            head = matcher(text, pos)
            if isinstance(head, MatchFailure):
                failure = deeper(failure, MatchFailure(
                    pos, index, candidate, text[pos:]))
                continue

            # Gate: the remaining segments must consume the rest exactly
            tail = rest(text, head.end)
            if isinstance(tail, MatchFailure):
                failure = deeper(failure, tail)
                continue

            return Match((Pairing(segment.anchor, candidate),) + tail.value, tail.end)

        return failure
    return match


def build_matcher(segments: Sequence[Segment], order: CandidateOrder = longest_first,
                  max_attempts: Optional[int] = None) -> Matcher:
    """
    Build the matcher for a whole segment sequence.

    Args:
        segments: Segments in reading order.
        order: How to order each segment's candidates.
        max_attempts: Give up with SearchBudgetExceeded after this many
            candidate attempts. None means no limit.

    Returns:
        A matcher whose value is the Assignment.
    """
    budget = _Budget(max_attempts)
    indexed = list(enumerate(segments))

    return reduce(
        lambda rest, item: _segment_matcher(item[0], item[1], rest, order, budget),
        reversed(indexed),
        _finish(len(indexed)),
    )


def resolve(
    segments: Sequence[Segment],
    target: str,
    order: CandidateOrder = longest_first,
    max_attempts: Optional[int] = None,
) -> Union[Assignment, MatchFailure]:
    """
    Assign one candidate to every segment so that they spell ``target``.

    Args:
        segments: Segments in reading order.
        target: The full reading.
        order: Candidate ordering heuristic (default longest first).
        max_attempts: Optional cap on candidate attempts.

    Returns:
        The Assignment, one Pairing per segment, or a MatchFailure
        pointing at the furthest position the search reached.

    Raises:
        SearchBudgetExceeded: If ``max_attempts`` is exceeded.

    Example:
        >>> resolve([Segment('時', ('とき', 'じ')), Segment('間', ('ま', 'かん'))], 'じかん')
        (Pairing(anchor='時', chosen='じ'), Pairing(anchor='間', chosen='かん'))
    """
    matcher = build_matcher(segments, order, max_attempts)
    result = run(matcher, target)

    if isinstance(result, MatchFailure):
        logger.debug("no alignment for %r against %r: %s",
                     ''.join(s.anchor for s in segments), target, result.describe())
        return result

    return result.value


def resolve_or_raise(
    segments: Sequence[Segment],
    target: str,
    order: CandidateOrder = longest_first,
    max_attempts: Optional[int] = None,
) -> Assignment:
    """Like resolve(), but raise UnresolvableError instead of returning a failure."""
    result = resolve(segments, target, order, max_attempts)
    if isinstance(result, MatchFailure):
        raise UnresolvableError(result, ''.join(s.anchor for s in segments))
    return result
