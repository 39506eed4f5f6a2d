"""Delayed-execution primitives that a Timer arms, cancels and re-arms."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[dict[str, Any]], None]


class Registration:
    """Handle for one armed delay. Reused across re-arms."""

    def __init__(self, on_elapse: Callable[[], None]) -> None:
        self._on_elapse = on_elapse
        self._cancelled = False
        self._elapsed = False

    def cancelled(self) -> bool:
        return self._cancelled

    def elapsed(self) -> bool:
        return self._elapsed

    def _run(self) -> None:
        self._elapsed = True
        self._on_elapse()


class DelayScheduler(Protocol):
    def arm(self, delay_ms: float, on_elapse: Callable[[], None]) -> Registration: ...

    def cancel(self, registration: Registration) -> None: ...

    def rearm(self, registration: Registration, delay_ms: float) -> None: ...

    def report_exception(
        self, message: str, exc: BaseException, **extra: Any
    ) -> None: ...


class LoopRegistration(Registration):
    def __init__(self, on_elapse: Callable[[], None]) -> None:
        super().__init__(on_elapse)
        self._handle: asyncio.TimerHandle | None = None

    def when(self) -> float | None:
        """Loop time at which this registration elapses, None if never armed."""
        if self._handle is None:
            return None
        return self._handle.when()


class LoopScheduler:
    """Arms delays with ``loop.call_later``.

    When no loop is given, the running loop is looked up on first use, so
    a scheduler (and any Timer using it) can be built outside a coroutine
    as long as it is armed from inside one.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def arm(self, delay_ms: float, on_elapse: Callable[[], None]) -> LoopRegistration:
        registration = LoopRegistration(on_elapse)
        self._schedule(registration, delay_ms)
        return registration

    def cancel(self, registration: Registration) -> None:
        assert isinstance(registration, LoopRegistration)
        if registration._handle is not None:
            registration._handle.cancel()
        registration._cancelled = True

    def rearm(self, registration: Registration, delay_ms: float) -> None:
        assert isinstance(registration, LoopRegistration)
        if registration._handle is not None:
            registration._handle.cancel()
        self._schedule(registration, delay_ms)

    def report_exception(self, message: str, exc: BaseException, **extra: Any) -> None:
        context = {"message": message, "exception": exc, **extra}
        self.loop.call_exception_handler(context)

    def _schedule(self, registration: LoopRegistration, delay_ms: float) -> None:
        registration._cancelled = False
        registration._elapsed = False
        registration._handle = self.loop.call_later(delay_ms / 1000.0, registration._run)


class ManualRegistration(Registration):
    def __init__(self, on_elapse: Callable[[], None]) -> None:
        super().__init__(on_elapse)
        self.deadline_ms = 0.0
        self._sequence = 0


class ManualScheduler:
    """Fake clock that only moves when ``advance`` is called.

    Registrations elapse in deadline order, ties broken by arm order.
    Callbacks run synchronously inside ``advance``.
    """

    def __init__(self, exception_handler: ExceptionHandler | None = None) -> None:
        self._now_ms = 0.0
        self._sequence = 0
        self._armed: list[ManualRegistration] = []
        self._exception_handler = exception_handler

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        return len(self._armed)

    def arm(self, delay_ms: float, on_elapse: Callable[[], None]) -> ManualRegistration:
        registration = ManualRegistration(on_elapse)
        self._schedule(registration, delay_ms)
        return registration

    def cancel(self, registration: Registration) -> None:
        assert isinstance(registration, ManualRegistration)
        registration._cancelled = True
        if registration in self._armed:
            self._armed.remove(registration)

    def rearm(self, registration: Registration, delay_ms: float) -> None:
        assert isinstance(registration, ManualRegistration)
        if registration in self._armed:
            self._armed.remove(registration)
        self._schedule(registration, delay_ms)

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` and run everything that comes due.

        Returns the number of registrations that elapsed.
        """
        if ms < 0:
            raise ValueError("ms must be non-negative")
        target = self._now_ms + ms
        fired = 0
        while True:
            due = [r for r in self._armed if r.deadline_ms <= target]
            if not due:
                break
            registration = min(due, key=lambda r: (r.deadline_ms, r._sequence))
            self._armed.remove(registration)
            self._now_ms = max(self._now_ms, registration.deadline_ms)
            registration._run()
            fired += 1
        self._now_ms = target
        return fired

    def report_exception(self, message: str, exc: BaseException, **extra: Any) -> None:
        context = {"message": message, "exception": exc, **extra}
        if self._exception_handler is not None:
            self._exception_handler(context)
            return
        logger.error(message, exc_info=exc)

    def _schedule(self, registration: ManualRegistration, delay_ms: float) -> None:
        self._sequence += 1
        registration._cancelled = False
        registration._elapsed = False
        registration._sequence = self._sequence
        registration.deadline_ms = self._now_ms + delay_ms
        self._armed.append(registration)
