"""Duration value with a distinguished unbounded state."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, ClassVar

from tick_timer.errors import InvalidArgumentError

_MS_PER_SECOND = 1000.0
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


@dataclass(frozen=True, slots=True)
class Duration:
    """Non-negative span of time in milliseconds, or FOREVER."""

    milliseconds: float

    FOREVER: ClassVar[Duration]

    def __post_init__(self) -> None:
        if isinstance(self.milliseconds, bool) or not isinstance(
            self.milliseconds, (int, float)
        ):
            raise InvalidArgumentError(
                f"milliseconds must be a number, got {type(self.milliseconds).__name__}"
            )
        if math.isnan(self.milliseconds):
            raise InvalidArgumentError("milliseconds must not be NaN")
        if self.milliseconds < 0:
            raise InvalidArgumentError(
                f"milliseconds must be non-negative, got {self.milliseconds}"
            )

    @classmethod
    def of_milliseconds(cls, ms: float) -> Duration:
        return cls(ms)

    @classmethod
    def of_seconds(cls, seconds: float) -> Duration:
        return cls(seconds * _MS_PER_SECOND)

    @classmethod
    def of_minutes(cls, minutes: float) -> Duration:
        return cls(minutes * _MS_PER_MINUTE)

    @classmethod
    def of_hours(cls, hours: float) -> Duration:
        return cls(hours * _MS_PER_HOUR)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Duration:
        return cls(delta.total_seconds() * _MS_PER_SECOND)

    def is_forever(self) -> bool:
        return math.isinf(self.milliseconds)

    def to_milliseconds(self) -> float:
        return self.milliseconds

    def to_seconds(self) -> float:
        return self.milliseconds / _MS_PER_SECOND

    def __str__(self) -> str:
        if self.is_forever():
            return "forever"
        return f"{self.milliseconds:g}ms"


Duration.FOREVER = Duration(math.inf)


def ensure_duration(value: Any, *, finite: bool) -> Duration:
    """Validate a duration argument at an API boundary.

    Rejects None and anything that is not a Duration. With ``finite=True``
    the FOREVER value is rejected as well.
    """
    if value is None:
        raise InvalidArgumentError("duration is None")
    if not isinstance(value, Duration):
        raise InvalidArgumentError(
            f"duration must be a Duration, got {type(value).__name__}"
        )
    if finite and value.is_forever():
        raise InvalidArgumentError("duration is forever, cannot wait for it")
    return value
