"""
Pydantic models for furiawase JSON output.

Usage:
    from furiawase.models import FuriganaResult

    furigana = parse_furigana('時間', 'じかん', readings)
    print(FuriganaResult.from_furigana('時間', 'じかん', furigana).model_dump_json())
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from furiawase.errors import SearchBudgetExceeded
from furiawase.furigana import FuriganaString, Kanji
from furiawase.sequence import MatchFailure


class FuriganaSegment(BaseModel):
    """One written character and what it is read as."""
    text: str = Field(..., description="Written character")
    reading: str = Field(..., description="Reading in kana")
    kind: str = Field(..., description="'kanji' if annotated, 'other' if read as written")


class FuriganaResult(BaseModel):
    """
    A resolved word.

    Example response:
        {
            "word": "時間",
            "reading": "じかん",
            "segments": [
                {"text": "時", "reading": "じ", "kind": "kanji"},
                {"text": "間", "reading": "かん", "kind": "kanji"}
            ],
            "bracket": "時[じ]間[かん]",
            "html": "<ruby>時<rt>じ</rt></ruby><ruby>間<rt>かん</rt></ruby>"
        }
    """
    word: str = Field(..., description="Written form")
    reading: str = Field(..., description="Full reading")
    segments: List[FuriganaSegment] = Field(default_factory=list)
    bracket: str = Field("", description="Anki bracket notation")
    html: str = Field("", description="HTML ruby markup")

    @classmethod
    def from_furigana(cls, word: str, reading: str,
                      furigana: FuriganaString) -> "FuriganaResult":
        """Create FuriganaResult from a resolved FuriganaString."""
        return cls(
            word=word,
            reading=reading,
            segments=[
                FuriganaSegment(
                    text=f.to_writing(),
                    reading=f.to_reading(),
                    kind='kanji' if isinstance(f, Kanji) else 'other',
                )
                for f in furigana
            ],
            bracket=furigana.to_bracket(),
            html=furigana.to_html(),
        )


class ResolutionFailure(BaseModel):
    """Why a word could not be resolved."""
    word: str
    reading: str
    segment_index: Optional[int] = Field(None, description="Segment where the search bottomed out")
    position: Optional[int] = Field(None, description="Offset into the reading")
    remaining: str = Field("", description="Unconsumed part of the reading")
    attempts: Optional[int] = Field(None, description="Candidate attempts made before giving up")
    error: str = Field("unresolvable", description="'unresolvable' or 'budget_exceeded'")

    @classmethod
    def from_failure(cls, word: str, reading: str,
                     failure: MatchFailure) -> "ResolutionFailure":
        return cls(
            word=word,
            reading=reading,
            segment_index=failure.segment_index,
            position=failure.position,
            remaining=failure.remaining,
        )

    @classmethod
    def from_budget(cls, word: str, reading: str,
                    error: SearchBudgetExceeded) -> "ResolutionFailure":
        """The search was cut off; no failure position is known."""
        return cls(
            word=word,
            reading=reading,
            attempts=error.attempts,
            error='budget_exceeded',
        )
