"""Per-session debounce timer on top of an event-loop style scheduler."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``call_later``; an asyncio loop satisfies this directly."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class LoopScheduler:
    """Schedules on whichever asyncio loop is running when the timer is set."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay, callback, *args)


class Debouncer:
    """At most one outstanding timer. Each ``call`` replaces the previous one."""

    def __init__(self, delay: float, scheduler: Scheduler | None = None) -> None:
        self.delay = delay
        self.scheduler = scheduler or LoopScheduler()
        self._handle: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, fn: Callable[..., Any], *args: Any) -> None:
        self.cancel()
        self._handle = self.scheduler.call_later(self.delay, self._fire, fn, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, fn: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._handle = None
        fn(*args)
