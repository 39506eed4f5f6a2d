"""Exceptions raised by tick-timer."""
from __future__ import annotations


class InvalidArgumentError(ValueError, TypeError):
    """Raised when a duration is missing, of the wrong type, or unbounded where a finite wait is required."""
