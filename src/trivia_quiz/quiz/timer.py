"""Countdown ticker for the quiz phase.

``SessionTimer`` knows nothing about quiz state: it only delivers ticks to a
bound handler while running. Ticks arrive from one of three sources:

* a scheduler (``schedule(callback) -> handle`` where ``handle.stop()``
  cancels it), which is how the Textual app drives it via ``set_interval``;
* ``poll()``, which converts elapsed clock time into whole-second ticks for
  front ends that block on input;
* ``advance()``, for explicit or simulated ticks.
"""

from __future__ import annotations

import time
from functools import lru_cache
from typing import Callable, Optional, Protocol

TickHandler = Callable[[], None]
Clock = Callable[[], float]


class TimerHandle(Protocol):
    def stop(self) -> None: ...


Scheduler = Callable[[Callable[[], object]], TimerHandle]


class SessionTimer:
    def __init__(
        self,
        on_tick: Optional[TickHandler] = None,
        *,
        clock: Clock = time.monotonic,
        schedule: Optional[Scheduler] = None,
    ) -> None:
        self._on_tick = on_tick
        self._clock = clock
        self._schedule = schedule
        self._handle: Optional[TimerHandle] = None
        self._running = False
        self._anchor = 0.0
        self._delivered = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def delivered(self) -> int:
        """Ticks delivered since the last ``start()``."""
        return self._delivered

    def bind(self, on_tick: TickHandler) -> None:
        self._on_tick = on_tick

    def start(self) -> None:
        if self._running:
            return
        if self._on_tick is None:
            raise RuntimeError("SessionTimer has no tick handler bound.")
        self._running = True
        self._anchor = self._clock()
        self._delivered = 0
        if self._schedule is not None:
            self._handle = self._schedule(self.advance)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        handle, self._handle = self._handle, None
        if handle is not None:
            handle.stop()

    def advance(self, count: int = 1) -> int:
        """Deliver up to ``count`` ticks; stops early if the timer stops."""

        fired = 0
        while fired < count and self._running:
            self._delivered += 1
            fired += 1
            self._on_tick()  # type: ignore[misc]
        return fired

    def poll(self) -> int:
        """Deliver one tick per whole second elapsed and not yet delivered."""

        if not self._running:
            return 0
        due = int(self._clock() - self._anchor) - self._delivered
        return self.advance(due) if due > 0 else 0


@lru_cache(maxsize=4096)
def format_clock(seconds: int) -> str:
    """Render remaining seconds as ``MM:SS``."""

    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"
