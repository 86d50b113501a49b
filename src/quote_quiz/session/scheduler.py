"""
Module: session.scheduler

Purpose:
    Deferred callbacks for the feedback pause between answering and
    advancing. schedule() returns a handle the session keeps so a pending
    advance can be cancelled when a new session starts.

Key Classes:
    - Scheduler: Protocol implemented by all schedulers
    - CancelHandle: Protocol for the value returned by schedule()
    - ImmediateScheduler: Runs callbacks synchronously
    - ManualScheduler: Queues callbacks until advanced explicitly

Used By:
    - session.engine: QuizSession
    - cli: console runner (ImmediateScheduler)
    - session.qt_scheduler: QtScheduler (PySide6)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Protocol


Callback = Callable[[], None]


class CancelHandle(Protocol):
    @property
    def active(self) -> bool:
        ...

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def schedule(self, callback: Callback, delay_ms: int) -> CancelHandle:
        ...


# ─────────────────────────────────────────────────────────────────────────────
# Synchronous / manual
# ─────────────────────────────────────────────────────────────────────────────

class _DoneHandle:
    """Handle for a callback that has already run."""

    active = False

    def cancel(self) -> None:
        pass


class ImmediateScheduler:
    """Run callbacks immediately, ignoring the delay."""

    def schedule(self, callback: Callback, delay_ms: int) -> _DoneHandle:
        callback()
        return _DoneHandle()


@dataclass
class ManualHandle:
    """Pending entry of a ManualScheduler."""

    callback: Callback
    due_ms: int
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """
    Deterministic scheduler driven by an explicit clock.

    Callbacks run only when advance() moves the clock past their due time,
    or when run_pending() flushes everything still active.

    Example:
        >>> scheduler = ManualScheduler()
        >>> calls = []
        >>> _ = scheduler.schedule(lambda: calls.append(1), 100)
        >>> scheduler.advance(99); calls
        []
        >>> scheduler.advance(1); calls
        [1]
    """

    now_ms: int = 0
    _pending: List[ManualHandle] = field(default_factory=list)

    def schedule(self, callback: Callback, delay_ms: int) -> ManualHandle:
        handle = ManualHandle(callback, self.now_ms + max(0, delay_ms))
        self._pending.append(handle)
        return handle

    @property
    def pending(self) -> List[ManualHandle]:
        """Handles still waiting to fire."""
        return [h for h in self._pending if h.active]

    def advance(self, ms: int) -> None:
        """Move the clock forward and fire everything now due, in due order."""
        self.now_ms += ms
        due = sorted((h for h in self.pending if h.due_ms <= self.now_ms), key=lambda h: h.due_ms)
        self._run(due)

    def run_pending(self) -> None:
        """Fire every active callback regardless of due time."""
        due = sorted(self.pending, key=lambda h: h.due_ms)
        if due:
            self.now_ms = max(self.now_ms, due[-1].due_ms)
        self._run(due)

    def _run(self, handles: List[ManualHandle]) -> None:
        for handle in handles:
            # An earlier callback may have cancelled a later one.
            if not handle.active:
                continue
            handle.fired = True
            handle.callback()
        self._pending = [h for h in self._pending if h.active]
