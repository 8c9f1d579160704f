"""Culture-fit quiz state machine hosted inside the terminal interpreter."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable

from .content import (
    QUIZ_HIGH_LINES,
    QUIZ_INTRO_LINES,
    QUIZ_LOW_LINES,
    QUIZ_MIXED_LINES,
    QUIZ_QUESTIONS,
    QUIZ_SUMMARY_HEADER,
    QUIZ_TERMINATED_MESSAGE,
)
from .models import QuizAnswer, QuizQuestion
from .scheduling import Scheduler, TimerGroup
from .transcript import Transcript


__all__ = [
    "QuizState",
    "Verdict",
    "QuizStateMachine",
    "CANCEL_KEYWORDS",
    "classify_score",
    "build_summary_lines",
]


logger = logging.getLogger(__name__)


CANCEL_KEYWORDS = frozenset({"exit", "quit"})


class QuizState(str, Enum):
    """Quiz lifecycle state."""

    INACTIVE = "inactive"
    AWAITING_ANSWER = "awaiting_answer"


class Verdict(str, Enum):
    """Tiered outcome of a finished quiz."""

    HIGH_ALIGNMENT = "high_alignment"
    MIXED_SIGNALS = "mixed_signals"
    LOW_ALIGNMENT = "low_alignment"


def classify_score(score: int, high_threshold: int = 8, mixed_threshold: int = 6) -> Verdict:
    if score >= high_threshold:
        return Verdict.HIGH_ALIGNMENT
    if score >= mixed_threshold:
        return Verdict.MIXED_SIGNALS
    return Verdict.LOW_ALIGNMENT


def _percent(score: int, total: int) -> int:
    if total <= 0:
        return 0
    ratio = Decimal(score) / Decimal(total) * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_summary_lines(
    score: int,
    total: int,
    high_threshold: int = 8,
    mixed_threshold: int = 6,
) -> list[str]:
    """
    Build the summary block shown after the last answer.

    Args:
        score: Number of matching answers.
        total: Number of questions asked.
        high_threshold: Minimum score for the high-alignment verdict.
        mixed_threshold: Minimum score for the mixed verdict.

    Returns:
        Lines of the summary block, header first.
    """
    lines = [QUIZ_SUMMARY_HEADER, f"SCORE: {score}/{total}"]
    verdict = classify_score(score, high_threshold, mixed_threshold)
    if verdict == Verdict.HIGH_ALIGNMENT:
        percent = _percent(score, total)
        lines.extend(line.format(percent=percent) for line in QUIZ_HIGH_LINES)
    elif verdict == Verdict.MIXED_SIGNALS:
        lines.extend(QUIZ_MIXED_LINES)
    else:
        lines.extend(QUIZ_LOW_LINES)
    return lines


class QuizStateMachine:
    """
    Multi-step binary-choice quiz that owns input while active.

    The machine writes into a transcript it does not own. Feedback for an
    answer is appended immediately; the next question (or the summary after
    the last answer) is appended after ``reveal_delay`` on a tracked timer,
    so ``cancel`` and ``teardown`` can drop it. A finished run's summary is
    kept on its own timer group: restarting the quiz does not drop it, only
    ``teardown`` does.

    Example:
        >>> quiz = QuizStateMachine(transcript, scheduler)
        >>> quiz.start()
        >>> quiz.handle_input("b")
        >>> quiz.step_index, quiz.score
        (1, 1)
    """

    def __init__(
        self,
        transcript: Transcript,
        scheduler: Scheduler,
        questions: Iterable[QuizQuestion] = QUIZ_QUESTIONS,
        reveal_delay: float = 0.5,
        high_threshold: int = 8,
        mixed_threshold: int = 6,
    ) -> None:
        self._questions = tuple(questions)
        if not self._questions:
            raise RuntimeError("Quiz must contain at least one question.")
        self._transcript = transcript
        self._reveal_delay = reveal_delay
        self._high_threshold = high_threshold
        self._mixed_threshold = mixed_threshold
        self._timers = TimerGroup(scheduler, name="quiz reveals")
        self._summary_timers = TimerGroup(scheduler, name="quiz summaries")

        self._state = QuizState.INACTIVE
        self._step_index = 0
        self._score = 0
        self._answers: list[QuizAnswer] = []
        self._completed_runs = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> QuizState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == QuizState.AWAITING_ANSWER

    @property
    def step_index(self) -> int:
        return self._step_index

    @property
    def score(self) -> int:
        return self._score

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def answers(self) -> list[QuizAnswer]:
        """Answers recorded during the current run."""
        return list(self._answers)

    @property
    def progress(self) -> tuple[int, int]:
        """Current progress as (answered, total) tuple"""
        return (len(self._answers), len(self._questions))

    @property
    def completed_runs(self) -> int:
        return self._completed_runs

    @property
    def pending_timers(self) -> int:
        return self._timers.pending_count + self._summary_timers.pending_count

    @property
    def current_question(self) -> QuizQuestion | None:
        if not self.is_active:
            return None
        return self._questions[self._step_index]

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """
        Enter the quiz: intro lines plus the first question as one entry.

        A summary still pending from the previous run is left to fire.
        """
        self._timers.cancel_all()
        self._reset()
        self._state = QuizState.AWAITING_ANSWER
        first = self._questions[0]
        self._transcript.append_block([*QUIZ_INTRO_LINES, *first.display_lines()])
        logger.info("Quiz started (%d questions)", len(self._questions))

    def handle_input(self, normalized: str) -> None:
        """
        Route one already-normalized input line while the quiz is active.

        Cancel keywords terminate the quiz; anything else is scored against
        the current question. Inputs arriving while inactive are ignored.
        """
        if not self.is_active:
            logger.debug("Quiz input ignored while inactive")
            return

        if normalized in CANCEL_KEYWORDS:
            self.cancel()
            return

        question = self._questions[self._step_index]
        correct = question.is_correct(normalized)
        feedback = question.feedback_on_correct if correct else question.feedback_on_incorrect
        if correct:
            self._score += 1
        self._answers.append(
            QuizAnswer(
                question_id=question.question_id,
                selected_answer=normalized,
                is_correct=correct,
                feedback=feedback,
            )
        )
        self._transcript.append_output(feedback)
        logger.debug(
            "Quiz answer Q%d: %r -> %s",
            question.question_id,
            normalized,
            "correct" if correct else "incorrect",
        )

        if self._step_index < len(self._questions) - 1:
            self._step_index += 1
            next_question = self._questions[self._step_index]
            self._timers.schedule(self._reveal_delay, lambda: self._reveal(next_question))
            return

        final_score = self._score
        total = len(self._questions)
        self._reset()
        self._completed_runs += 1
        verdict = classify_score(final_score, self._high_threshold, self._mixed_threshold)
        logger.info("Quiz completed: %d/%d (%s)", final_score, total, verdict.value)
        self._summary_timers.schedule(self._reveal_delay, lambda: self._show_summary(final_score, total))

    def cancel(self) -> None:
        """Terminate the quiz without a summary."""
        if not self.is_active:
            return
        dropped = self._timers.cancel_all()
        logger.info("Quiz terminated at step %d (%d pending reveals dropped)", self._step_index, dropped)
        self._reset()
        self._transcript.append_output(QUIZ_TERMINATED_MESSAGE)

    def teardown(self) -> None:
        """Drop pending reveals and summaries and return to inactive silently."""
        self._timers.cancel_all()
        self._summary_timers.cancel_all()
        self._reset()

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _reset(self) -> None:
        self._state = QuizState.INACTIVE
        self._step_index = 0
        self._score = 0
        self._answers = []

    def _reveal(self, question: QuizQuestion) -> None:
        if not self.is_active:
            return
        self._transcript.append_block(question.display_lines())

    def _show_summary(self, score: int, total: int) -> None:
        self._transcript.append_block(
            build_summary_lines(score, total, self._high_threshold, self._mixed_threshold)
        )

    def get_status(self) -> dict:
        answered, total = self.progress
        return {
            "state": self._state.value,
            "active": self.is_active,
            "step_index": self._step_index,
            "score": self._score,
            "answered": answered,
            "total_questions": total,
            "completed_runs": self._completed_runs,
        }
