"""tick-timer - Restartable, cancellable, awaitable timer."""
from __future__ import annotations

from tick_timer.completion import Completion, make_completion
from tick_timer.duration import Duration, ensure_duration
from tick_timer.errors import InvalidArgumentError
from tick_timer.scheduler import (
    DelayScheduler,
    LoopScheduler,
    ManualScheduler,
    Registration,
)
from tick_timer.timer import Timer

__all__ = [
    "Timer",
    "Duration",
    "Completion",
    "DelayScheduler",
    "LoopScheduler",
    "ManualScheduler",
    "Registration",
    "InvalidArgumentError",
    "ensure_duration",
    "make_completion",
]
