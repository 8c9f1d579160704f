"""
Pydantic models for the terminal engine.

Defines the transcript entry record, the quiz question and answer
records, and the persisted visit statistics.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator


def _format_utc_timestamp() -> str:
    """Return current UTC timestamp as ISO 8601 string with 'Z' suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class EntryKind(str, Enum):
    """Kinds of transcript entries."""

    INPUT = "input"
    OUTPUT = "output"
    SYSTEM = "system"


class TranscriptEntry(BaseModel):
    """
    One displayed line (or block of lines) in a transcript.

    Entries are immutable once created. Multi-line blocks keep their lines
    joined with newlines in ``content``; renderers split on newlines.

    Example:
        >>> entry = TranscriptEntry(sequence=1, kind=EntryKind.INPUT, content="help")
        >>> entry.lines
        ('help',)
    """

    sequence: int = Field(..., ge=1, description="Monotonic sequence number, never reused")
    kind: EntryKind = Field(..., description="Entry kind: input, output or system")
    content: str = Field(..., description="Renderable text payload")
    created_at: str = Field(
        default_factory=_format_utc_timestamp,
        description="ISO 8601 UTC timestamp when the entry was appended",
    )

    model_config = {"frozen": True}

    @property
    def lines(self) -> tuple[str, ...]:
        """Content split into display lines."""
        return tuple(self.content.split("\n"))


class AnswerOption(str, Enum):
    """Binary choice for quiz questions."""

    A = "a"
    B = "b"


class QuizQuestion(BaseModel):
    """
    Immutable binary-choice quiz question.

    The correct option is stored as a lower-case letter so a case-folded
    answer can be compared directly.
    """

    question_id: int = Field(..., ge=1, description="1-based question number")
    prompt: str = Field(..., min_length=1)
    option_a: str = Field(..., min_length=1)
    option_b: str = Field(..., min_length=1)
    correct_option: AnswerOption
    feedback_on_correct: str = Field(..., min_length=1)
    feedback_on_incorrect: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    def is_correct(self, answer: str) -> bool:
        """Return True if the normalized answer matches the correct letter."""
        return (answer or "").strip().lower() == self.correct_option.value

    def display_lines(self) -> tuple[str, ...]:
        return (
            f"Q{self.question_id}: {self.prompt}",
            f"A) {self.option_a}",
            f"B) {self.option_b}",
        )


class QuizAnswer(BaseModel):
    """Record of one submitted quiz answer."""

    question_id: int
    selected_answer: str
    is_correct: bool
    feedback: str


class VisitStats(BaseModel):
    """
    Persisted visit tally.

    Serialized as ``{"count": int, "days": ["YYYY-MM-DD", ...]}`` under the
    visits key of the flag store.
    """

    count: int = Field(default=0, ge=0, description="Total recorded visits")
    days: list[str] = Field(default_factory=list, description="Distinct visit dates")

    @field_validator("days")
    @classmethod
    def dedupe_days(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for day in value:
            if day not in seen:
                seen.append(day)
        return seen

    @property
    def unique_days(self) -> int:
        return len(self.days)
