from __future__ import annotations

import math
import threading
from typing import Any, Callable, Generic, Protocol, TypeVar

T = TypeVar("T")


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], ScheduledTask]


def timer_scheduler(delay_sec: float, callback: Callable[[], None]) -> ScheduledTask:
    timer = threading.Timer(delay_sec, callback)
    timer.daemon = True
    timer.start()
    return timer


def _same(a: Any, b: Any) -> bool:
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


class Debouncer(Generic[T]):
    """Holds back a changing value until it stays unchanged for ``delay_ms``.

    Every push cancels the pending emission and schedules a new one, so only the last
    value of a burst settles. A superseded task that fires anyway is ignored.
    """

    def __init__(
        self,
        initial: T,
        delay_ms: int,
        *,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.delay_ms = delay_ms
        self._scheduler = scheduler or timer_scheduler
        self._lock = threading.Lock()
        self._settled: T = initial
        self._latest: T = initial
        self._generation = 0
        self._pending: ScheduledTask | None = None
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._settled

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def subscribe(self, callback: Callable[[T], None]) -> None:
        self._subscribers.append(callback)

    def push(self, value: T) -> ScheduledTask | None:
        with self._lock:
            if _same(value, self._latest):
                return self._pending
            self._latest = value
            self._generation += 1
            generation = self._generation
            if self._pending is not None:
                self._pending.cancel()
            self._pending = self._scheduler(
                self.delay_ms / 1000,
                lambda: self._settle(generation, value),
            )
            return self._pending

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._latest = self._settled

    def _settle(self, generation: int, value: T) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._pending = None
            self._settled = value
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(value)
