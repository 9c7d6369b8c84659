"""
Tests for datekit/utils/date.py

Reference point: Wednesday 2024-01-03 12:00 UTC (2024 is a leap year, Jan 1
was a Monday), chosen so every field is easy to verify by hand.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd
import pytest

from datekit.config.settings import reset_settings
from datekit.utils import date as date_util
from datekit.utils.errors import InvalidArgumentError

WEDNESDAY = datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Tests for to_immutable()
# ============================================================================

def test_to_immutable_returns_aware_timestamp_unchanged():
    """An aware Timestamp is already canonical and is returned as-is."""
    ts = pd.Timestamp("2024-01-03 12:00", tz="UTC")
    assert date_util.to_immutable(ts) is ts


def test_to_immutable_converts_aware_datetime():
    """An aware datetime keeps its instant and zone."""
    ts = date_util.to_immutable(WEDNESDAY)

    assert isinstance(ts, pd.Timestamp)
    assert ts == pd.Timestamp("2024-01-03 12:00", tz="UTC")
    assert ts.utcoffset().total_seconds() == 0


def test_to_immutable_localizes_naive_values_to_default_timezone():
    """Naive values get the configured default timezone (UTC in tests)."""
    ts = date_util.to_immutable(datetime(2024, 1, 3, 12, 0))

    assert ts.tz is not None
    assert str(ts.tz) == "UTC"
    assert ts.hour == 12


def test_to_immutable_uses_configured_timezone(monkeypatch):
    """DATEKIT_DEFAULT_TIMEZONE decides the zone attached to naive values."""
    monkeypatch.setenv("DATEKIT_DEFAULT_TIMEZONE", "Europe/Berlin")
    reset_settings()

    ts = date_util.to_immutable(datetime(2024, 1, 3, 12, 0))

    assert ts.hour == 12
    assert date_util.timezone_offset(ts) == 3600


def test_to_immutable_date_is_midnight():
    """A plain date becomes midnight of that day."""
    ts = date_util.to_immutable(date(2024, 1, 3))

    assert (ts.year, ts.month, ts.day, ts.hour, ts.minute) == (2024, 1, 3, 0, 0)


def test_to_immutable_numpy_datetime64():
    """numpy datetime64 values are accepted."""
    ts = date_util.to_immutable(np.datetime64("2024-01-03T12:00"))
    assert ts == pd.Timestamp("2024-01-03 12:00", tz="UTC")


@pytest.mark.parametrize("value", ["2024-01-03", 1704283200, None, pd.NaT])
def test_to_immutable_rejects_unsupported_values(value):
    """Strings, numbers, None and NaT are not points in time."""
    with pytest.raises(InvalidArgumentError):
        date_util.to_immutable(value)


# ============================================================================
# Tests for field accessors
# ============================================================================

def test_reference_wednesday_fields():
    """Every accessor on the reference Wednesday."""
    assert date_util.year(WEDNESDAY) == 2024
    assert date_util.month(WEDNESDAY) == 1
    assert date_util.day(WEDNESDAY) == 3
    assert date_util.day_of_week(WEDNESDAY) == 3
    assert date_util.day_of_year(WEDNESDAY) == 2
    assert date_util.days_in_month(WEDNESDAY) == 31
    assert date_util.day_name(WEDNESDAY) == "Wednesday"
    assert date_util.day_name_short(WEDNESDAY) == "Wed"
    assert date_util.month_name(WEDNESDAY) == "January"
    assert date_util.month_name_short(WEDNESDAY) == "Jan"
    assert date_util.timezone_offset(WEDNESDAY) == 0
    assert date_util.iso_week(WEDNESDAY) == 1


def test_reference_wednesday_predicates():
    """A UTC Wednesday is a weekday and never in daylight saving time."""
    assert date_util.is_weekday(WEDNESDAY) is True
    assert date_util.is_daylight_savings(WEDNESDAY) is False


def test_accessors_return_plain_python_types():
    """Results are plain int/str/bool, not numpy scalars."""
    assert type(date_util.year(WEDNESDAY)) is int
    assert type(date_util.days_in_month(WEDNESDAY)) is int
    assert type(date_util.day_name(WEDNESDAY)) is str
    assert type(date_util.is_weekday(WEDNESDAY)) is bool


def test_day_of_week_counts_from_sunday():
    """0 = Sunday ... 6 = Saturday."""
    assert date_util.day_of_week(date(2024, 1, 7)) == 0  # Sunday
    assert date_util.day_of_week(date(2024, 1, 8)) == 1  # Monday
    assert date_util.day_of_week(date(2024, 1, 6)) == 6  # Saturday


def test_is_weekday_false_on_weekend():
    assert date_util.is_weekday(date(2024, 1, 6)) is False
    assert date_util.is_weekday(date(2024, 1, 7)) is False
    assert date_util.is_weekday(date(2024, 1, 5)) is True


def test_day_of_year_range():
    """Jan 1 is day 0; Dec 31 of a leap year is day 365."""
    assert date_util.day_of_year(date(2024, 1, 1)) == 0
    assert date_util.day_of_year(date(2024, 12, 31)) == 365
    assert date_util.day_of_year(date(2023, 12, 31)) == 364


def test_days_in_month_february():
    assert date_util.days_in_month(date(2024, 2, 10)) == 29
    assert date_util.days_in_month(date(2023, 2, 10)) == 28
    assert date_util.days_in_month(date(2023, 4, 10)) == 30


def test_timezone_offset_and_dst_in_new_york():
    """West of UTC the offset is negative; summer time sets the DST flag."""
    new_york = ZoneInfo("America/New_York")
    summer = datetime(2024, 7, 1, 12, 0, tzinfo=new_york)
    winter = datetime(2024, 1, 3, 12, 0, tzinfo=new_york)

    assert date_util.timezone_offset(summer) == -4 * 3600
    assert date_util.is_daylight_savings(summer) is True
    assert date_util.timezone_offset(winter) == -5 * 3600
    assert date_util.is_daylight_savings(winter) is False


def test_timezone_offset_east_of_utc():
    ts = pd.Timestamp("2024-01-03 12:00", tz="Asia/Tokyo")
    assert date_util.timezone_offset(ts) == 9 * 3600


def test_iso_week_at_year_boundary():
    """Dec 30 2024 (a Monday) already belongs to ISO week 1 of 2025."""
    assert date_util.iso_week(date(2024, 12, 30)) == 1
    assert date_util.iso_week(date(2024, 12, 29)) == 52
