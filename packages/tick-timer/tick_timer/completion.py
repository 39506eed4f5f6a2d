"""One-shot completion signal split into an awaitable handle and its resolver."""
from __future__ import annotations

import asyncio
from typing import Callable, Generator


class Completion:
    """Read-only view of a one-shot signal.

    Awaiting a resolved Completion returns immediately. Awaiting an
    unresolved one suspends the current task until the paired resolver
    runs. Any number of tasks may await the same Completion.
    """

    __slots__ = ("_done", "_waiters")

    def __init__(self) -> None:
        self._done = False
        self._waiters: list[asyncio.Future[None]] = []

    def done(self) -> bool:
        return self._done

    def _resolve(self) -> None:
        if self._done:
            return
        self._done = True
        waiters = self._waiters
        self._waiters = []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(None)

    def __await__(self) -> Generator[object, None, None]:
        if self._done:
            return
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            yield from waiter.__await__()
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)

    def __repr__(self) -> str:
        state = "done" if self._done else "pending"
        return f"<Completion {state}>"


def make_completion() -> tuple[Completion, Callable[[], None]]:
    """Return a fresh unresolved Completion and the callable that resolves it."""
    completion = Completion()
    return completion, completion._resolve
