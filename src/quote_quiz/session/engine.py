"""
Module: session.engine

Purpose:
    Thin stateful orchestrator for one quiz session. Loads and shuffles the
    quote set, serves the option set for the current question, scores
    answers and advances after the feedback delay.

Key Classes:
    - QuizSession: Session orchestrator
    - SessionState: NOT_STARTED / AWAITING_ANSWER / SHOWING_FEEDBACK / FINISHED
    - AnswerResult: Outcome of submit_answer()

State machine:
    NOT_STARTED -> AWAITING_ANSWER <-> SHOWING_FEEDBACK -> FINISHED
    start() restarts from any state. An empty quote set goes straight to
    FINISHED with score 0 and total 0.

Dependencies:
    - loading: load_quotes(), ConfigProvider
    - session.shuffle, session.options, session.scheduler, session.summary

Used By:
    - cli: console runner
    - any presentation layer (Qt or otherwise)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

from quote_quiz.core.models import QuoteRecord, authors_of
from quote_quiz.loading import ConfigProvider, load_quotes

from .config import SessionConfig
from .options import generate_options
from .scheduler import CancelHandle, ImmediateScheduler, Scheduler
from .shuffle import RandomSource, shuffle
from .summary import SessionSummary

logger = logging.getLogger(__name__)


Loader = Callable[[Optional[ConfigProvider]], Tuple[QuoteRecord, ...]]
Listener = Callable[["QuizSession"], None]


class SessionState(Enum):
    NOT_STARTED = auto()
    AWAITING_ANSWER = auto()
    SHOWING_FEEDBACK = auto()
    FINISHED = auto()


@dataclass(frozen=True)
class AnswerResult:
    """
    Outcome of a submitted answer.

    Attributes:
        accepted: False if the session was not awaiting an answer
        correct: Whether selected matched the author exactly
        selected: The submitted option
        correct_author: Author of the answered quote (None if not accepted)
        score: Score after this answer
        position: Position the session moves to once feedback ends
        total: Number of questions in the session
        finished: True if this answer ends (or the session had already ended)
    """

    accepted: bool
    correct: bool
    selected: str
    correct_author: Optional[str]
    score: int
    position: int
    total: int
    finished: bool


class QuizSession:
    """
    One run-through of a shuffled quote set.

    Args:
        provider: Source of the phrases JSON, passed to the loader
        config: Session configuration (default SessionConfig())
        scheduler: Deferred-callback scheduler for the feedback pause
            (default ImmediateScheduler)
        rng: Random source for shuffles; built from config.seed if omitted
        loader: Callable returning the quote set for a provider

    Example:
        >>> session = QuizSession(LiteralConfigProvider(raw_json))
        >>> records = session.start()
        >>> result = session.submit_answer(session.current_options[0])
    """

    def __init__(
        self,
        provider: Optional[ConfigProvider] = None,
        config: Optional[SessionConfig] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[RandomSource] = None,
        loader: Loader = load_quotes,
    ) -> None:
        self.provider = provider
        self.config = config or SessionConfig()
        self.scheduler = scheduler or ImmediateScheduler()
        if rng is None and self.config.seed is not None:
            rng = random.Random(self.config.seed)
        self._rng = rng
        self._loader = loader

        self._state = SessionState.NOT_STARTED
        self._records: Tuple[QuoteRecord, ...] = ()
        self._all_authors: List[str] = []
        self._position = 0
        self._score = 0
        self._options: Dict[int, List[str]] = {}
        self._last_answer: Optional[AnswerResult] = None
        self._pending: Optional[CancelHandle] = None
        self._generation = 0
        self._listeners: List[Listener] = []

    # ─────────────────────────────────────────────────────────────────────────
    # Read-only state
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def ordered_records(self) -> Tuple[QuoteRecord, ...]:
        return self._records

    @property
    def current_position(self) -> int:
        return self._position

    @property
    def score(self) -> int:
        return self._score

    @property
    def total(self) -> int:
        return len(self._records)

    @property
    def is_finished(self) -> bool:
        return self._state is SessionState.FINISHED

    @property
    def current_record(self) -> Optional[QuoteRecord]:
        """Record being asked, None before start and after the last question."""
        if self._state in (SessionState.AWAITING_ANSWER, SessionState.SHOWING_FEEDBACK):
            return self._records[self._position]
        return None

    @property
    def current_options(self) -> List[str]:
        """Options for the current record, empty when no question is active."""
        if self.current_record is None:
            return []
        return self.options_for(self._position)

    @property
    def last_answer(self) -> Optional[AnswerResult]:
        """Most recent accepted answer of this session, for feedback display."""
        return self._last_answer

    # ─────────────────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────────────────

    def add_listener(self, listener: Listener) -> None:
        """Call listener(session) after every state change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def start(self) -> Tuple[QuoteRecord, ...]:
        """
        Begin (or restart) a session.

        Cancels any pending advance from the previous session, reloads the
        quote set, shuffles it and resets position and score.

        Returns:
            The shuffled records for this session
        """
        self._cancel_pending()
        self._generation += 1

        records = self._loader(self.provider)
        self._records = tuple(shuffle(records, self._rng))
        self._all_authors = authors_of(self._records)
        self._position = 0
        self._score = 0
        self._options = {}
        self._last_answer = None

        if self._records:
            self._state = SessionState.AWAITING_ANSWER
            logger.info("Session started with %d questions", len(self._records))
        else:
            self._state = SessionState.FINISHED
            logger.warning("Session started with no questions")

        self._notify()
        return self._records

    def options_for(self, position: int) -> List[str]:
        """
        Option set for the record at position.

        Uses the authors of the full loaded set. Computed once per position
        per session, so repeated calls return the same order.

        Raises:
            IndexError: If position is outside [0, total)
        """
        if not (0 <= position < len(self._records)):
            raise IndexError(f"position out of range: {position} (total {len(self._records)})")
        if position not in self._options:
            self._options[position] = generate_options(
                self._records[position].author,
                self._all_authors,
                self.config.options_count,
                rng=self._rng,
                dedupe_distractors=self.config.dedupe_distractors,
            )
        return list(self._options[position])

    def submit_answer(self, option: str) -> AnswerResult:
        """
        Score an answer for the current question.

        Compares option to the current author by exact string equality,
        shows feedback and schedules the advance. Ignored (accepted=False)
        unless the session is awaiting an answer.
        """
        if self._state is not SessionState.AWAITING_ANSWER:
            logger.debug("Ignoring answer %r in state %s", option, self._state.name)
            return AnswerResult(
                accepted=False,
                correct=False,
                selected=option,
                correct_author=None,
                score=self._score,
                position=self._position,
                total=self.total,
                finished=self.is_finished,
            )

        record = self._records[self._position]
        correct = option == record.author
        if correct:
            self._score += 1
        next_position = self._position + 1

        result = AnswerResult(
            accepted=True,
            correct=correct,
            selected=option,
            correct_author=record.author,
            score=self._score,
            position=next_position,
            total=self.total,
            finished=next_position >= self.total,
        )
        logger.debug(
            "Answer %r for question %d: %s (score %d)",
            option, self._position + 1, "correct" if correct else "wrong", self._score,
        )

        self._last_answer = result
        self._state = SessionState.SHOWING_FEEDBACK
        self._notify()

        generation = self._generation
        self._pending = self.scheduler.schedule(
            lambda: self._advance(generation), self.config.feedback_delay_ms
        )
        return result

    def summary(self) -> SessionSummary:
        return SessionSummary(score=self._score, total=self.total)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _advance(self, generation: int) -> None:
        if generation != self._generation or self._state is not SessionState.SHOWING_FEEDBACK:
            logger.debug("Dropping stale advance from session %d", generation)
            return

        self._pending = None
        self._position += 1
        if self._position >= len(self._records):
            self._state = SessionState.FINISHED
            logger.info("Session finished: %d/%d", self._score, len(self._records))
        else:
            self._state = SessionState.AWAITING_ANSWER
        self._notify()

    def _cancel_pending(self) -> None:
        if self._pending is not None and self._pending.active:
            logger.debug("Cancelling pending advance")
            self._pending.cancel()
        self._pending = None

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
