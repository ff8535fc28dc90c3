"""
Exceptions raised by furiawase.
"""

from furiawase.sequence import MatchFailure


class FuriganaError(Exception):
    """Base class for furiawase errors."""


class UnresolvableError(FuriganaError):
    """Raised when no assignment of readings reproduces the target reading."""

    def __init__(self, failure: MatchFailure, word: str = ""):
        self.failure = failure
        self.word = word
        subject = f"'{word}'" if word else "reading"
        super().__init__(f"could not resolve {subject}: {failure.describe()}")

    @property
    def segment_index(self):
        return self.failure.segment_index


class SearchBudgetExceeded(FuriganaError):
    """Raised when the search tries more candidates than it was allowed."""

    def __init__(self, attempts: int, limit: int):
        self.attempts = attempts
        self.limit = limit
        super().__init__(f"search gave up after {attempts} attempts (limit {limit})")
