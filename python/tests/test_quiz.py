"""
Tests for the culture-fit quiz state machine and its scoring.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import pytest

from terminal_engine import (
    QuizState,
    QuizStateMachine,
    Transcript,
    Verdict,
    build_summary_lines,
    classify_score,
)
from terminal_engine.content import QUIZ_INTRO_LINES, QUIZ_QUESTIONS

from tests.mock_data import SAMPLE_QUESTIONS, ManualScheduler


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def transcript() -> Transcript:
    return Transcript()


@pytest.fixture
def quiz(transcript: Transcript, scheduler: ManualScheduler) -> QuizStateMachine:
    return QuizStateMachine(transcript, scheduler, questions=SAMPLE_QUESTIONS, reveal_delay=0.5)


# =============================================================================
# Scoring Tests
# =============================================================================


class TestScoring:
    """Tests for verdict tiers and the summary block."""

    @pytest.mark.parametrize(
        "score,verdict",
        [
            (10, Verdict.HIGH_ALIGNMENT),
            (8, Verdict.HIGH_ALIGNMENT),
            (7, Verdict.MIXED_SIGNALS),
            (6, Verdict.MIXED_SIGNALS),
            (5, Verdict.LOW_ALIGNMENT),
            (0, Verdict.LOW_ALIGNMENT),
        ],
    )
    def test_classify_score(self, score: int, verdict: Verdict):
        assert classify_score(score) == verdict

    def test_summary_high(self):
        lines = build_summary_lines(9, 10)
        assert lines[0] == "DIAGNOSTIC COMPLETE"
        assert lines[1] == "SCORE: 9/10"
        assert lines[2] == ">> COMPATIBILITY CONFIRMED (90%)"

    def test_summary_percent_rounds_half_up(self):
        lines = build_summary_lines(5, 8, high_threshold=5, mixed_threshold=3)
        # 62.5% rounds to 63
        assert lines[2] == ">> COMPATIBILITY CONFIRMED (63%)"

    def test_summary_mixed(self):
        lines = build_summary_lines(7, 10)
        assert lines[2] == ">> MIXED SIGNALS DETECTED"

    def test_summary_low(self):
        lines = build_summary_lines(2, 10)
        assert lines[2] == ">> LOW ALIGNMENT DETECTED"


class TestQuestionBank:
    """Tests for the bundled question set."""

    def test_ten_questions(self):
        assert len(QUIZ_QUESTIONS) == 10
        assert [q.question_id for q in QUIZ_QUESTIONS] == list(range(1, 11))

    def test_display_lines(self):
        lines = QUIZ_QUESTIONS[0].display_lines()
        assert lines[0].startswith("Q1: ")
        assert lines[1].startswith("A) ")
        assert lines[2].startswith("B) ")

    def test_answer_matching_is_case_insensitive(self):
        question = QUIZ_QUESTIONS[0]
        assert question.is_correct("b")
        assert question.is_correct(" B ")
        assert not question.is_correct("a")
        assert not question.is_correct("maybe")


# =============================================================================
# State Machine Tests
# =============================================================================


class TestQuizStateMachine:
    """Tests for QuizStateMachine transitions."""

    def test_start_appends_intro_and_first_question(self, quiz, transcript):
        quiz.start()

        assert quiz.state == QuizState.AWAITING_ANSWER
        assert quiz.step_index == 0
        assert len(transcript) == 1
        lines = transcript.entries[0].lines
        assert lines[: len(QUIZ_INTRO_LINES)] == QUIZ_INTRO_LINES
        assert lines[len(QUIZ_INTRO_LINES)] == "Q1: Tabs or spaces?"

    def test_correct_answer_scores_and_reveals_next(self, quiz, transcript, scheduler):
        quiz.start()
        quiz.handle_input("b")

        assert quiz.score == 1
        assert quiz.step_index == 1
        assert transcript.entries[-1].content == "Aligned."

        scheduler.advance(0.49)
        assert len(transcript) == 2
        scheduler.advance(0.02)
        assert transcript.entries[-1].lines[0] == "Q2: Ship on Friday?"

    def test_any_other_answer_is_incorrect(self, quiz, transcript):
        quiz.start()
        quiz.handle_input("maybe")

        assert quiz.score == 0
        assert quiz.step_index == 1
        assert transcript.entries[-1].content == "Noted."
        assert quiz.answers[0].is_correct is False

    def test_last_answer_shows_summary_after_delay(self, quiz, transcript, scheduler):
        quiz.start()
        quiz.handle_input("b")
        scheduler.advance(0.5)
        quiz.handle_input("a")

        assert not quiz.is_active
        assert quiz.completed_runs == 1
        assert transcript.entries[-1].content == "Safe choice."

        scheduler.advance(0.5)
        summary = transcript.entries[-1].lines
        assert summary[0] == "DIAGNOSTIC COMPLETE"
        assert summary[1] == "SCORE: 1/2"

    def test_exit_cancels_without_summary(self, quiz, transcript, scheduler):
        quiz.start()
        quiz.handle_input("b")
        quiz.handle_input("exit")

        assert not quiz.is_active
        assert transcript.entries[-1].content == "Quiz terminated."

        scheduler.advance(5.0)
        assert transcript.entries[-1].content == "Quiz terminated."
        assert quiz.pending_timers == 0

    def test_quit_is_cancel_keyword(self, quiz, transcript):
        quiz.start()
        quiz.handle_input("quit")
        assert quiz.state == QuizState.INACTIVE

    def test_input_while_inactive_ignored(self, quiz, transcript):
        quiz.handle_input("b")
        assert len(transcript) == 0
        assert quiz.score == 0

    def test_teardown_drops_pending_reveal(self, quiz, transcript, scheduler):
        quiz.start()
        quiz.handle_input("b")
        quiz.teardown()
        scheduler.advance(5.0)

        assert transcript.entries[-1].content == "Aligned."
        assert not quiz.is_active

    def test_restart_keeps_previous_summary(self, quiz, transcript, scheduler):
        quiz.start()
        quiz.handle_input("b")
        scheduler.advance(0.5)
        quiz.handle_input("b")
        quiz.start()
        scheduler.advance(5.0)

        summaries = [entry for entry in transcript.entries if entry.lines[0] == "DIAGNOSTIC COMPLETE"]
        assert len(summaries) == 1
        assert summaries[0].lines[1] == "SCORE: 2/2"
        assert quiz.is_active
        assert quiz.step_index == 0

    def test_teardown_drops_pending_summary(self, quiz, transcript, scheduler):
        quiz.start()
        quiz.handle_input("b")
        scheduler.advance(0.5)
        quiz.handle_input("b")
        quiz.teardown()
        scheduler.advance(5.0)

        assert transcript.entries[-1].content == "Brave and careful."
        assert quiz.pending_timers == 0

    def test_full_bank_all_correct(self, transcript, scheduler):
        quiz = QuizStateMachine(transcript, scheduler)
        quiz.start()
        for _ in range(10):
            quiz.handle_input("b")
            scheduler.advance(0.5)

        summary = transcript.entries[-1].lines
        assert summary[1] == "SCORE: 10/10"
        assert summary[2] == ">> COMPATIBILITY CONFIRMED (100%)"

    def test_get_status(self, quiz):
        quiz.start()
        quiz.handle_input("b")
        status = quiz.get_status()
        assert status["active"] is True
        assert status["answered"] == 1
        assert status["total_questions"] == 2

    def test_empty_bank_rejected(self, transcript, scheduler):
        with pytest.raises(RuntimeError):
            QuizStateMachine(transcript, scheduler, questions=())


# =============================================================================
# Full Bank Tests
# =============================================================================


class TestFullBankRuns:
    """End-to-end runs over the bundled ten-question bank."""

    @pytest.fixture
    def bank_quiz(self, transcript: Transcript, scheduler: ManualScheduler) -> QuizStateMachine:
        return QuizStateMachine(transcript, scheduler, reveal_delay=0.5)

    @pytest.mark.parametrize("answered", range(10))
    def test_exit_at_any_step_terminates_once(self, bank_quiz, transcript, scheduler, answered: int):
        bank_quiz.start()
        for index in range(answered):
            bank_quiz.handle_input(QUIZ_QUESTIONS[index].correct_option.value)
            if index < answered - 1:
                scheduler.advance(0.5)

        bank_quiz.handle_input("exit")
        terminated_at = len(transcript)
        scheduler.advance(5.0)

        contents = [entry.content for entry in transcript.entries]
        assert contents.count("Quiz terminated.") == 1
        assert contents[-1] == "Quiz terminated."
        assert len(transcript) == terminated_at
        assert bank_quiz.state == QuizState.INACTIVE
        assert (bank_quiz.step_index, bank_quiz.score) == (0, 0)
        assert bank_quiz.pending_timers == 0

    @pytest.mark.parametrize(
        "correct_count,verdict_line",
        [
            (5, ">> LOW ALIGNMENT DETECTED"),
            (6, ">> MIXED SIGNALS DETECTED"),
            (7, ">> MIXED SIGNALS DETECTED"),
            (8, ">> COMPATIBILITY CONFIRMED (80%)"),
        ],
    )
    def test_mixed_run_scores_matching_answers(
        self, bank_quiz, transcript, scheduler, correct_count: int, verdict_line: str
    ):
        bank_quiz.start()
        for index, question in enumerate(QUIZ_QUESTIONS):
            answer = question.correct_option.value if index < correct_count else "definitely not"
            bank_quiz.handle_input(answer)
            scheduler.advance(0.5)

        summary = transcript.entries[-1].lines
        assert summary[0] == "DIAGNOSTIC COMPLETE"
        assert summary[1] == f"SCORE: {correct_count}/10"
        assert summary[2] == verdict_line
        assert bank_quiz.completed_runs == 1
        assert not bank_quiz.is_active
