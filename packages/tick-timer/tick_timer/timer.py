"""Timer - restartable, cancellable delay with callbacks and an awaitable."""
from __future__ import annotations

import logging
from typing import Any, Callable

from tick_timer.completion import Completion, make_completion
from tick_timer.duration import Duration, ensure_duration
from tick_timer.scheduler import DelayScheduler, LoopScheduler, Registration

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Timer:
    """A single logical timer built on a delayed-execution scheduler.

    A Timer is idle until ``start`` is called. When its delay elapses every
    callback runs in the order it was added, then the current completion
    (see ``as_awaitable``) resolves and a fresh one takes its place.

    Firing does not clear the pending registration: after a fire ``start``
    stays a no-op until ``stop`` is called, while ``reset`` re-arms the same
    registration from now.
    """

    def __init__(
        self, duration: Duration, *, scheduler: DelayScheduler | None = None
    ) -> None:
        self._duration = ensure_duration(duration, finite=True)
        self._scheduler: DelayScheduler = scheduler if scheduler is not None else LoopScheduler()
        self._registration: Registration | None = None
        self._callbacks: list[Callback] = []
        self._fire_count = 0
        self._completion, self._resolve = make_completion()

    @classmethod
    def create(cls, duration: Duration, *, scheduler: DelayScheduler | None = None) -> Timer:
        """Create an idle timer. It does not run until ``start`` is called."""
        return cls(duration, scheduler=scheduler)

    @staticmethod
    def wait_for(duration: Duration, *, scheduler: DelayScheduler | None = None) -> Completion:
        """Return a Completion that resolves once ``duration`` has elapsed.

        Standalone one-shot wait; no Timer is involved.
        """
        duration = ensure_duration(duration, finite=True)
        if scheduler is None:
            scheduler = LoopScheduler()
        completion, resolve = make_completion()
        scheduler.arm(duration.to_milliseconds(), resolve)
        return completion

    @property
    def duration(self) -> Duration:
        return self._duration

    @property
    def is_running(self) -> bool:
        return self._registration is not None

    @property
    def callbacks(self) -> tuple[Callback, ...]:
        return tuple(self._callbacks)

    @property
    def fire_count(self) -> int:
        return self._fire_count

    def start(self) -> Timer:
        if self._registration is not None:
            return self
        self._registration = self._scheduler.arm(
            self._duration.to_milliseconds(), self._fire
        )
        logger.debug("armed %r", self)
        return self

    def stop(self) -> Timer:
        if self._registration is None:
            return self
        self._scheduler.cancel(self._registration)
        self._registration = None
        logger.debug("stopped %r", self)
        return self

    def reset(self) -> Timer:
        if self._registration is None:
            return self.start()
        self._scheduler.rearm(self._registration, self._duration.to_milliseconds())
        logger.debug("rearmed %r", self)
        return self

    def add_callback(self, callback: Callback) -> Timer:
        self._callbacks.append(callback)
        return self

    def as_awaitable(self) -> Completion:
        """Completion for the next fire. Does not start the timer."""
        return self._completion

    def close(self) -> None:
        self.stop()

    def __enter__(self) -> Timer:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _fire(self) -> None:
        self._fire_count += 1
        logger.debug("fired %r", self)
        for callback in list(self._callbacks):
            try:
                callback()
            except Exception as exc:
                self._scheduler.report_exception(
                    "Exception in timer callback", exc, timer=self, callback=callback
                )
        self._resolve()
        self._completion, self._resolve = make_completion()

    def __repr__(self) -> str:
        state = "running" if self._registration is not None else "idle"
        return (
            f"<Timer {self._duration} {state} "
            f"callbacks={len(self._callbacks)} fired={self._fire_count}>"
        )
