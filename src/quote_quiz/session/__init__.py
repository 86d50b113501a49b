"""
Module: session

Purpose:
    Question sequencing and distractor generation. Pure functions for
    shuffling and option generation, plus the QuizSession orchestrator
    that owns position, score and the feedback pause.

Key Functions:
    - shuffle(): Fisher-Yates shuffle on a copy
    - generate_options(): Correct author plus shuffled distractors

Key Classes:
    - QuizSession: Session orchestrator
    - SessionConfig: Session configuration
    - ImmediateScheduler, ManualScheduler: Deferred callbacks

QtScheduler lives in session.qt_scheduler and is imported from there, so
this package does not need PySide6.
"""

from .config import SessionConfig
from .engine import AnswerResult, QuizSession, SessionState
from .options import DEFAULT_OPTIONS_COUNT, generate_options
from .scheduler import ImmediateScheduler, ManualScheduler, Scheduler
from .shuffle import shuffle
from .summary import ScoreBand, SessionSummary

__all__ = [
    # Pure functions
    "shuffle",
    "generate_options",
    "DEFAULT_OPTIONS_COUNT",
    # Session
    "QuizSession",
    "SessionState",
    "AnswerResult",
    "SessionConfig",
    "SessionSummary",
    "ScoreBand",
    # Scheduling
    "Scheduler",
    "ImmediateScheduler",
    "ManualScheduler",
]
