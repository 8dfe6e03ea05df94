"""Stopwatch for a reading session: stopped, running, or paused."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

log = logging.getLogger(__name__)

Clock = Callable[[], float]


class TimerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class Stopped:
    state = TimerState.STOPPED


@dataclass(frozen=True)
class Running:
    anchor: float  # clock reading when this running interval began
    state = TimerState.RUNNING


@dataclass(frozen=True)
class Paused:
    state = TimerState.PAUSED


Phase = Union[Stopped, Running, Paused]


class SessionTimer:
    """Accumulates reading time across start/pause cycles.

    Time in the current running interval is never stored; it is derived
    from the running anchor whenever ``elapsed()`` is asked. Pausing folds
    that interval into ``accumulated`` and drops the anchor.
    """

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._phase: Phase = Stopped()
        self._accumulated = 0.0

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> TimerState:
        return self._phase.state

    @property
    def accumulated(self) -> float:
        """Seconds folded in by earlier pauses, excluding a live interval."""
        return self._accumulated

    def elapsed(self) -> float:
        if isinstance(self._phase, Running):
            return self._accumulated + max(0.0, self._clock() - self._phase.anchor)
        return self._accumulated

    def start(self) -> bool:
        """Begin a running interval. Returns False if already running."""
        if isinstance(self._phase, Running):
            return False
        self._phase = Running(anchor=self._clock())
        log.debug("Timer running (%.1fs accumulated)", self._accumulated)
        return True

    def pause(self) -> bool:
        """Fold the running interval into the total. Returns False unless running."""
        if not isinstance(self._phase, Running):
            return False
        self._accumulated += max(0.0, self._clock() - self._phase.anchor)
        self._phase = Paused()
        log.debug("Timer paused at %.1fs", self._accumulated)
        return True

    def finish(self) -> float:
        """Pause if running and return the accumulated seconds.

        The timer keeps its total; call ``reset()`` to end the session.
        """
        self.pause()
        return self._accumulated

    def reset(self) -> None:
        self._phase = Stopped()
        self._accumulated = 0.0
