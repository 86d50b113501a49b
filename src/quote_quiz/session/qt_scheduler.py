"""
Module: session.qt_scheduler

Purpose:
    Scheduler backed by single-shot QTimers, for presentation layers that
    run a Qt event loop. Kept apart from session.scheduler so the session
    engine and the console runner import without Qt.

Key Classes:
    - QtScheduler: Single-shot QTimer on the Qt event loop
    - QtTimerHandle: Cancellable handle returned by QtScheduler.schedule()

Dependencies:
    - PySide6.QtCore: QTimer

Used By:
    - Qt presentation layers (pass QtScheduler() to QuizSession)
"""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QTimer

from .scheduler import Callback


class QtTimerHandle:
    """Handle wrapping a single-shot QTimer."""

    def __init__(self, timer: QTimer, on_done: Callable[["QtTimerHandle"], None] = lambda h: None) -> None:
        self._timer = timer
        self._on_done = on_done
        self._fired = False
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not (self._fired or self._cancelled)

    def cancel(self) -> None:
        if not self.active:
            return
        self._cancelled = True
        self._timer.stop()
        self._timer.deleteLater()
        self._on_done(self)

    def _mark_fired(self) -> None:
        self._fired = True
        self._timer.deleteLater()
        self._on_done(self)


class QtScheduler:
    """
    Schedule callbacks on the Qt event loop.

    Requires a running QCoreApplication (or QApplication); callbacks run on
    the thread that owns the event loop.
    """

    def __init__(self) -> None:
        # Parentless timers must stay referenced until they fire or are cancelled.
        self._handles: set[QtTimerHandle] = set()

    def schedule(self, callback: Callback, delay_ms: int) -> QtTimerHandle:
        timer = QTimer()
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer, on_done=self._handles.discard)
        self._handles.add(handle)

        def _fire() -> None:
            if not handle.active:
                return
            handle._mark_fired()
            callback()

        timer.timeout.connect(_fire)
        timer.start(max(0, delay_ms))
        return handle
