"""Playback controller: timed or manual advancement through a Trace.

The controller is a small state machine (IDLE / PLAYING / PAUSED) driven
by user commands and by ticks delivered through a ``Scheduler``. Every
state-changing command bumps an epoch counter; a tick carries the epoch it
was scheduled under and silently does nothing once that epoch is stale, so
a tick from a superseded trace can never apply a step.

``COMPLETED`` is not a separate state: it is PAUSED with the cursor at the
end of the trace.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

from .algorithms import OperationResult
from .run_types import PlaybackConfig
from .structure_types import Structure
from .trace_types import Step, Trace

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


# ── Scheduling ───────────────────────────────────────────────────


class ScheduledCall(ABC):
    """Handle to a pending delayed callback."""

    @abstractmethod
    def cancel(self) -> None: ...


class Scheduler(ABC):
    """Abstract source of delayed callbacks on the controller's thread."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        """Arrange for *callback* to run once after *delay_ms* milliseconds."""
        ...


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop via ``loop.call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledCall:
        loop = self._loop or asyncio.get_running_loop()
        return _TimerCall(loop.call_later(delay_ms / 1000.0, callback))


class _TimerCall(ScheduledCall):
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()


# ── Controller ───────────────────────────────────────────────────

Listener = Callable[[Step, "PlaybackController"], None]


class PlaybackController:
    """Owns one trace/cursor pair and advances it on ticks or on demand."""

    def __init__(self, scheduler: Scheduler, config: PlaybackConfig = PlaybackConfig()):
        self._scheduler = scheduler
        self._speed_ms = config.speed_ms
        self._first_delay_ms = config.first_tick_delay_ms
        self._state = PlaybackState.IDLE
        self._trace: Trace | None = None
        self._cursor = 0
        self._epoch = 0
        self._pending: ScheduledCall | None = None
        self._current: Step | None = None
        self._snapshot: Structure | None = None
        self._listeners: list[Listener] = []

    # ── observation ──────────────────────────────────────────────

    def current_step(self) -> Step | None:
        """The most recently applied step, or None before the first one."""
        return self._current

    def current_snapshot(self) -> Structure | None:
        """The latest snapshot among the steps applied so far."""
        return self._snapshot

    def progress(self) -> tuple[int, int]:
        return self._cursor, len(self._trace) if self._trace is not None else 0

    def controller_state(self) -> PlaybackState:
        return self._state

    @property
    def speed_ms(self) -> float:
        return self._speed_ms

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def is_complete(self) -> bool:
        return self._trace is not None and self._cursor >= len(self._trace)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for applied steps; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── commands ─────────────────────────────────────────────────

    def load(self, source: Trace | OperationResult) -> None:
        """Load a trace for manual stepping without starting auto-advance."""
        self._invalidate()
        self._install(source)
        self._state = PlaybackState.IDLE

    def start(self, source: Trace | OperationResult) -> None:
        self._invalidate()
        self._install(source)
        logger.info("Starting playback of %d steps at %sms", len(self._trace), self._speed_ms)
        if self.is_complete:
            self._state = PlaybackState.PAUSED
            return
        self._state = PlaybackState.PLAYING
        self._schedule(self._first_delay_ms)

    def pause(self) -> None:
        if self._state != PlaybackState.PLAYING:
            return
        self._invalidate()
        self._state = PlaybackState.PAUSED

    def resume(self) -> None:
        if self._trace is None or self.is_complete or self._state == PlaybackState.PLAYING:
            return
        self._invalidate()
        self._state = PlaybackState.PLAYING
        self._schedule(self._speed_ms)

    play = resume

    def step(self) -> Step | None:
        """Apply the next step by hand; a no-op without a trace or at the end."""
        if self._trace is None or self.is_complete:
            return None
        if self._state == PlaybackState.PLAYING:
            self.pause()
        applied = self._apply()
        if self.is_complete:
            self._state = PlaybackState.PAUSED
        return applied

    def reset(self) -> None:
        self._invalidate()
        self._state = PlaybackState.IDLE
        self._trace = None
        self._cursor = 0
        self._current = None
        self._snapshot = None

    def set_speed(self, speed_ms: float) -> None:
        """Change the delay used by future ticks; a pending tick keeps its delay."""
        if isinstance(speed_ms, bool) or not isinstance(speed_ms, (int, float)) or not speed_ms > 0:
            raise ValueError(f"Playback speed must be a positive number of milliseconds, got {speed_ms!r}")
        self._speed_ms = speed_ms

    # ── internals ────────────────────────────────────────────────

    def _install(self, source: Trace | OperationResult) -> None:
        self._trace = source.trace if isinstance(source, OperationResult) else source
        self._cursor = 0
        self._current = None
        self._snapshot = None

    def _invalidate(self) -> None:
        self._epoch += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule(self, delay_ms: float) -> None:
        epoch = self._epoch
        self._pending = self._scheduler.call_later(delay_ms, lambda: self._tick(epoch))

    def _tick(self, epoch: int) -> None:
        if epoch != self._epoch or self._state != PlaybackState.PLAYING:
            logger.debug("Dropping stale tick (epoch %d, current %d)", epoch, self._epoch)
            return
        self._pending = None
        self._apply()
        if epoch != self._epoch:
            # a listener took control during _apply()
            return
        if self.is_complete:
            self._state = PlaybackState.PAUSED
            logger.info("Playback complete after %d steps", self._cursor)
            return
        self._schedule(self._speed_ms)

    def _apply(self) -> Step:
        step = self._trace[self._cursor]
        self._cursor += 1
        self._current = step
        if step.snapshot is not None:
            self._snapshot = step.snapshot
        logger.debug("Applied step %d: %s", step.sequence, step.label)
        for listener in list(self._listeners):
            listener(step, self)
        return step

