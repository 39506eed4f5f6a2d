"""Tests for Duration and ensure_duration."""
from __future__ import annotations

import math
from datetime import timedelta

import pytest

from tick_timer import Duration, InvalidArgumentError, ensure_duration


class TestDurationConstruction:
    """Building Duration values and rejecting bad magnitudes."""

    def test_milliseconds_stored(self):
        """Magnitude round-trips through to_milliseconds."""
        assert Duration(250).to_milliseconds() == 250

    def test_zero_is_valid(self):
        """Zero is a valid duration."""
        assert Duration(0).to_milliseconds() == 0

    def test_unit_constructors(self):
        """Unit constructors convert to milliseconds."""
        assert Duration.of_milliseconds(15).to_milliseconds() == 15
        assert Duration.of_seconds(1.5).to_milliseconds() == 1500
        assert Duration.of_minutes(2).to_milliseconds() == 120_000
        assert Duration.of_hours(1).to_milliseconds() == 3_600_000

    def test_from_timedelta(self):
        """timedelta converts to milliseconds."""
        assert Duration.from_timedelta(timedelta(seconds=3)).to_milliseconds() == 3000

    def test_to_seconds(self):
        """to_seconds divides by 1000."""
        assert Duration(2500).to_seconds() == 2.5

    def test_equal_magnitudes_compare_equal(self):
        """Durations compare by magnitude."""
        assert Duration(1000) == Duration.of_seconds(1)

    def test_negative_rejected(self):
        """Negative magnitudes raise."""
        with pytest.raises(InvalidArgumentError):
            Duration(-1)

    def test_nan_rejected(self):
        """NaN raises."""
        with pytest.raises(InvalidArgumentError):
            Duration(math.nan)

    def test_non_number_rejected(self):
        """Strings are not magnitudes."""
        with pytest.raises(InvalidArgumentError):
            Duration("100")  # type: ignore[arg-type]

    def test_bool_rejected(self):
        """Booleans are not magnitudes."""
        with pytest.raises(InvalidArgumentError):
            Duration(True)

    def test_frozen(self):
        """Duration is immutable."""
        d = Duration(10)
        with pytest.raises(AttributeError):
            d.milliseconds = 20  # type: ignore[misc]


class TestForever:
    """The unbounded FOREVER value."""

    def test_forever_is_forever(self):
        """Only FOREVER reports is_forever."""
        assert Duration.FOREVER.is_forever()
        assert not Duration(10).is_forever()

    def test_forever_magnitude_is_infinite(self):
        """FOREVER has an infinite magnitude."""
        assert math.isinf(Duration.FOREVER.to_milliseconds())

    def test_str(self):
        """str renders milliseconds or 'forever'."""
        assert str(Duration.FOREVER) == "forever"
        assert str(Duration(1500)) == "1500ms"


class TestEnsureDuration:
    """Boundary validation shared by Timer operations."""

    def test_returns_valid_duration(self):
        """A valid Duration is returned unchanged."""
        d = Duration(5)
        assert ensure_duration(d, finite=True) is d

    def test_none_rejected(self):
        """None is rejected."""
        with pytest.raises(InvalidArgumentError, match="None"):
            ensure_duration(None, finite=False)

    def test_wrong_type_rejected(self):
        """Plain numbers are rejected."""
        with pytest.raises(InvalidArgumentError, match="must be a Duration"):
            ensure_duration(100, finite=False)

    def test_forever_rejected_when_finite_required(self):
        """FOREVER is rejected when a finite wait is required."""
        with pytest.raises(InvalidArgumentError, match="forever"):
            ensure_duration(Duration.FOREVER, finite=True)

    def test_forever_allowed_otherwise(self):
        """FOREVER passes when finiteness is not required."""
        assert ensure_duration(Duration.FOREVER, finite=False) is Duration.FOREVER

    def test_error_is_value_and_type_error(self):
        """InvalidArgumentError is catchable as ValueError and TypeError."""
        with pytest.raises(ValueError):
            ensure_duration(None, finite=True)
        with pytest.raises(TypeError):
            ensure_duration("soon", finite=True)
