"""
SwitchUp terminal engine.

The scripted-sequence and command-interpreter core behind the simulated
terminal: timed boot and shutdown narration, a pass-phrase gate, a
line-oriented command interpreter, the culture-fit quiz, persisted session
flags and the live log feed.

Main Components:
    - TerminalSession: Orchestrates one session from boot to offline
    - CommandInterpreter: Dispatches submitted lines
    - QuizStateMachine: Nested quiz sub-mode
    - Sequencer: Cancellable timed line reveal
    - Transcript: Append-only entry log

Example:
    >>> from terminal_engine import AsyncioScheduler, InMemoryFlagStore, SessionFlags, TerminalSession
    >>> session = TerminalSession(SessionFlags(InMemoryFlagStore()), AsyncioScheduler())
    >>> session.start()
"""

from .boot import BootController, PasswordResult
from .flags import (
    FlagStore,
    FlagStoreReadError,
    FlagStoreWriteError,
    InMemoryFlagStore,
    JsonFileFlagStore,
    SessionFlags,
)
from .interpreter import CommandInterpreter
from .live_log import LiveLogEntry, LiveLogFeed, LogLevel
from .models import AnswerOption, EntryKind, QuizAnswer, QuizQuestion, TranscriptEntry, VisitStats
from .quiz import QuizState, QuizStateMachine, Verdict, build_summary_lines, classify_score
from .scheduling import AsyncioScheduler, Scheduler, TimerGroup
from .sequencer import Sequencer, SequencerScript, SequencerState
from .session import SessionSettings, SessionView, TerminalSession
from .shutdown import ShutdownController
from .transcript import Transcript
from .visits import VisitTracker


__all__ = [
    # Session
    "TerminalSession",
    "SessionSettings",
    "SessionView",
    # Components
    "BootController",
    "PasswordResult",
    "CommandInterpreter",
    "QuizStateMachine",
    "QuizState",
    "Verdict",
    "classify_score",
    "build_summary_lines",
    "Sequencer",
    "SequencerScript",
    "SequencerState",
    "ShutdownController",
    "LiveLogFeed",
    "LiveLogEntry",
    "LogLevel",
    "VisitTracker",
    "Transcript",
    # Scheduling
    "Scheduler",
    "AsyncioScheduler",
    "TimerGroup",
    # Persistence
    "FlagStore",
    "InMemoryFlagStore",
    "JsonFileFlagStore",
    "SessionFlags",
    "FlagStoreReadError",
    "FlagStoreWriteError",
    # Models
    "AnswerOption",
    "EntryKind",
    "QuizAnswer",
    "QuizQuestion",
    "TranscriptEntry",
    "VisitStats",
]

__version__ = "0.1.0"
