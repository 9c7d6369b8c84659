"""
Read-only field accessors and predicates over a point in time.

**Conceptual**: A "point in time" here is a timezone-aware pandas Timestamp.
Callers may pass a Timestamp, a datetime, a date, or a numpy datetime64; every
function first runs the value through to_immutable(), which returns an
aware Timestamp (naive values get the configured default timezone). The
accessors then read one calendar field each.

Numbering follows the conventions callers of these helpers expect:
  - day_of_week() counts from Sunday: 0 = Sunday ... 6 = Saturday.
  - day_of_year() counts from zero: Jan 1 is day 0.
"""

from datetime import date, datetime
from typing import Optional, Union

import numpy as np
import pandas as pd

from datekit.config.settings import get_settings
from datekit.utils.errors import InvalidArgumentError

PointInTimeLike = Union[pd.Timestamp, datetime, date, np.datetime64]


def to_immutable(value: PointInTimeLike) -> pd.Timestamp:
    """
    Return a timezone-aware Timestamp for a point-in-time value.

    **Functionally**:
      - An aware pandas Timestamp is returned unchanged (it is already
        immutable and carries its zone).
      - datetime, date, numpy datetime64 and naive Timestamps are converted.
        A date becomes midnight of that day.
      - Naive values are localized to Settings.default_timezone.

    Args:
        value: Point in time.

    Returns:
        Timezone-aware pandas Timestamp.

    Raises:
        InvalidArgumentError: If value is not a supported type, or is NaT.
    """
    if isinstance(value, pd.Timestamp):
        if value.tz is not None:
            return value
        ts = value
    elif isinstance(value, (datetime, date, np.datetime64)):
        ts = pd.Timestamp(value)
    else:
        raise InvalidArgumentError(
            f"Point in time must be Timestamp, datetime, date, or datetime64, "
            f"given: {type(value).__name__}"
        )

    if ts is pd.NaT:
        raise InvalidArgumentError("Point in time must not be NaT")

    if ts.tz is None:
        ts = ts.tz_localize(get_settings().default_timezone)
    return ts


def year(value: PointInTimeLike) -> int:
    """Returns the year as a 4-digit integer."""
    return int(to_immutable(value).year)


def month(value: PointInTimeLike) -> int:
    """Returns the month, 1 through 12."""
    return int(to_immutable(value).month)


def day(value: PointInTimeLike) -> int:
    """Returns the day of the month, 1 through 31."""
    return int(to_immutable(value).day)


def day_of_week(value: PointInTimeLike) -> int:
    """
    Returns the day of the week as an integer.

    0 for Sunday, 1 for Monday, ..., 6 for Saturday. (pandas counts from
    Monday = 0, hence the shift.)
    """
    return (int(to_immutable(value).dayofweek) + 1) % 7


def day_of_year(value: PointInTimeLike) -> int:
    """Returns the day of the year, 0 through 365."""
    return int(to_immutable(value).dayofyear) - 1


def days_in_month(value: PointInTimeLike) -> int:
    """Returns the number of days in the month, 28 through 31."""
    return int(to_immutable(value).days_in_month)


def day_name(value: PointInTimeLike, locale: Optional[str] = None) -> str:
    """
    Returns the full name of the day of the week (e.g. "Sunday").

    Args:
        value: Point in time.
        locale: Locale for the name (e.g. "fr_FR.utf8"). English when omitted.
    """
    return to_immutable(value).day_name(locale=locale)


def day_name_short(value: PointInTimeLike) -> str:
    """Returns the three-letter day name (e.g. "Sun")."""
    return to_immutable(value).strftime("%a")


def month_name(value: PointInTimeLike, locale: Optional[str] = None) -> str:
    """
    Returns the full name of the month (e.g. "January").

    Args:
        value: Point in time.
        locale: Locale for the name (e.g. "fr_FR.utf8"). English when omitted.
    """
    return to_immutable(value).month_name(locale=locale)


def month_name_short(value: PointInTimeLike) -> str:
    """Returns the three-letter month name (e.g. "Jan")."""
    return to_immutable(value).strftime("%b")


def timezone_offset(value: PointInTimeLike) -> int:
    """
    Returns the timezone offset from UTC in seconds.

    The offset for timezones west of UTC is always negative, and for those
    east of UTC is always positive.
    """
    return int(to_immutable(value).utcoffset().total_seconds())


def iso_week(value: PointInTimeLike) -> int:
    """ISO-8601 week number of the year, weeks starting on Monday."""
    return int(to_immutable(value).isocalendar()[1])


def is_weekday(value: PointInTimeLike) -> bool:
    """Whether the date is a weekday (Monday through Friday)."""
    dow = day_of_week(value)
    return dow != 0 and dow != 6


def is_daylight_savings(value: PointInTimeLike) -> bool:
    """
    Whether the date is in daylight saving time.

    Fixed-offset zones (UTC, "+02:00") report no DST adjustment and are never
    in daylight saving time.
    """
    return bool(to_immutable(value).dst())
