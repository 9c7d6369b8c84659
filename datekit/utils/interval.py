"""
Interval (duration) values and the helpers that measure and compare them.

**Conceptual**: An interval mixes calendar units (years, months, days) with
clock units (hours, minutes, seconds). Clock units have a fixed length in
seconds; calendar units do not: "1 month" is 28 to 31 days depending on where
it is applied. This module keeps that distinction explicit. An Interval only
knows its exact length when it came out of date arithmetic that already
resolved the calendar (Interval.between, Interval.from_timedelta), and the
measuring helpers refuse to guess otherwise.

**What lives here**:
  - Interval: immutable value type with years/months/days/hours/minutes/
    seconds/fraction components, a direction (invert) flag, and the resolved
    total day count when known.
  - normalize(): turn an int (days), a relative-date string ("3 days"), or an
    existing Interval into an Interval.
  - to_seconds(), to_microseconds(), compare(), are_equal(), get_hash():
    measurement and comparison.
  - build_spec(): ISO-8601 duration specification builder ("P1Y2DT3H").
"""

import logging
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from datekit.utils.date import PointInTimeLike, to_immutable
from datekit.utils.errors import (
    AmbiguousIntervalError,
    InvalidArgumentError,
    IntervalSpecError,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Designators of the specification grammar (months and minutes share "M";
# the "T" separator tells them apart)
SPEC_YEARS = "Y"
SPEC_MONTHS = "M"
SPEC_DAYS = "D"
SPEC_WEEKS = "W"
SPEC_HOURS = "H"
SPEC_MINUTES = "M"
SPEC_SECONDS = "S"

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = SECONDS_PER_MINUTE * 60
SECONDS_PER_DAY = SECONDS_PER_HOUR * 24
SECONDS_PER_WEEK = SECONDS_PER_DAY * 7
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = MINUTES_PER_HOUR * 24
MINUTES_PER_WEEK = MINUTES_PER_DAY * 7
HOURS_PER_DAY = 24
HOURS_PER_WEEK = HOURS_PER_DAY * 7

_SPEC_RE = re.compile(
    r"^P"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)(?:[.,](?P<fraction>\d+))?S)?"
    r")?$"
)

# One "[+|-]N unit" term of a relative-date expression
_RELATIVE_TERM_RE = re.compile(r"\s*(?P<sign>[+-]?)\s*(?P<amount>\d+)\s*(?P<unit>[a-z]+)\s*,?", re.IGNORECASE)
_AGO_RE = re.compile(r"\s+ago\s*$", re.IGNORECASE)

# unit word -> (Interval field, multiplier)
_RELATIVE_UNITS = {
    "y": ("years", 1),
    "yr": ("years", 1),
    "yrs": ("years", 1),
    "year": ("years", 1),
    "years": ("years", 1),
    "mon": ("months", 1),
    "mons": ("months", 1),
    "month": ("months", 1),
    "months": ("months", 1),
    "fortnight": ("days", 14),
    "fortnights": ("days", 14),
    "w": ("days", 7),
    "wk": ("days", 7),
    "wks": ("days", 7),
    "week": ("days", 7),
    "weeks": ("days", 7),
    "d": ("days", 1),
    "day": ("days", 1),
    "days": ("days", 1),
    "h": ("hours", 1),
    "hr": ("hours", 1),
    "hrs": ("hours", 1),
    "hour": ("hours", 1),
    "hours": ("hours", 1),
    "m": ("minutes", 1),
    "min": ("minutes", 1),
    "mins": ("minutes", 1),
    "minute": ("minutes", 1),
    "minutes": ("minutes", 1),
    "s": ("seconds", 1),
    "sec": ("seconds", 1),
    "secs": ("seconds", 1),
    "second": ("seconds", 1),
    "seconds": ("seconds", 1),
}


# ============================================================================
# Interval value type
# ============================================================================

@dataclass(frozen=True)
class Interval:
    """
    An immutable duration with calendar and clock components.

    **Conceptual**: Mirrors what a calendar-aware platform reports for a
    duration: separate year/month/day/hour/minute/second components, a
    fractional-second part, a direction flag, and (only when date arithmetic
    produced the interval) the exact number of whole days it spans.

    Components are stored as given. Intervals parsed from relative-date
    strings may carry negative components ("-3 days"); intervals produced by
    between()/from_timedelta() carry magnitudes plus invert=True instead.

    Attributes:
        years: Calendar years.
        months: Calendar months.
        days: Days (weeks are folded in as 7 days each).
        hours: Hours.
        minutes: Minutes.
        seconds: Whole seconds.
        fraction: Fractional seconds in [0, 1).
        invert: True when the interval runs backwards in time.
        total_days: Whole days spanned, when calendar ambiguity has been
                    resolved by date arithmetic; None otherwise.
    """
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    fraction: float = 0.0
    invert: bool = False
    total_days: Optional[int] = None

    @classmethod
    def from_spec(cls, spec: str) -> "Interval":
        """
        Parse an ISO-8601 duration specification such as "P1Y2M10DT2H30M".

        Accepts the grammar build_spec() produces, plus fractional seconds
        ("PT1.5S"). Weeks are converted to days. "P" on its own is the zero
        interval.

        Args:
            spec: Specification string.

        Returns:
            Interval with total_days unset.

        Raises:
            InvalidArgumentError: If spec does not follow the grammar.
        """
        match = _SPEC_RE.match(spec.strip()) if isinstance(spec, str) else None
        if match is None or spec.strip().endswith("T"):
            raise InvalidArgumentError(f"Invalid interval specification: {spec!r}")

        parts = {name: int(value) for name, value in match.groupdict().items()
                 if value is not None and name != "fraction"}
        fraction_digits = match.group("fraction")

        return cls(
            years=parts.get("years", 0),
            months=parts.get("months", 0),
            days=parts.get("days", 0) + parts.get("weeks", 0) * 7,
            hours=parts.get("hours", 0),
            minutes=parts.get("minutes", 0),
            seconds=parts.get("seconds", 0),
            fraction=float(f"0.{fraction_digits}") if fraction_digits else 0.0,
        )

    @classmethod
    def from_date_string(cls, text: str) -> "Interval":
        """
        Parse a relative-date expression such as "3 days" or "1 year 2 months ago".

        **Grammar**: one or more "[+|-]N unit" terms, optionally separated by
        commas, optionally followed by "ago" (which negates every term).
        Units are year, month, fortnight, week, day, hour, minute, second,
        their plurals, and common abbreviations (yr, mon, wk, hr, min, sec).

        Components keep their sign ("-3 days" gives days=-3); invert stays
        False and total_days stays unset.

        Args:
            text: Relative-date expression.

        Returns:
            Interval built from the summed terms.

        Raises:
            InvalidArgumentError: If text contains anything outside the grammar.
        """
        body = text.strip()
        ago = _AGO_RE.search(body)
        if ago:
            body = body[: ago.start()]

        totals = {"years": 0, "months": 0, "days": 0, "hours": 0, "minutes": 0, "seconds": 0}
        pos = 0
        terms = 0
        while pos < len(body):
            match = _RELATIVE_TERM_RE.match(body, pos)
            if match is None:
                break
            unit = _RELATIVE_UNITS.get(match.group("unit").lower())
            if unit is None:
                raise InvalidArgumentError(
                    f"Unknown unit {match.group('unit')!r} in relative date string: {text!r}"
                )
            field, multiplier = unit
            amount = int(match.group("amount")) * multiplier
            if match.group("sign") == "-":
                amount = -amount
            totals[field] += amount
            terms += 1
            pos = match.end()

        if terms == 0 or pos < len(body):
            raise InvalidArgumentError(f"Cannot parse relative date string: {text!r}")

        if ago:
            totals = {field: -value for field, value in totals.items()}

        logger.debug("Parsed relative date string %r as %s", text, totals)
        return cls(**totals)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Interval":
        """
        Build an Interval from a timedelta (or pandas Timedelta).

        A timedelta has no calendar units, so the day count is exact and is
        recorded as total_days. Negative deltas set invert=True and store the
        magnitude.
        """
        invert = delta < timedelta(0)
        if invert:
            delta = -delta
        hours, remainder = divmod(delta.seconds, SECONDS_PER_HOUR)
        minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)

        return cls(
            days=delta.days,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            fraction=delta.microseconds / 1_000_000,
            invert=invert,
            total_days=delta.days,
        )

    @classmethod
    def between(cls, start: PointInTimeLike, end: PointInTimeLike) -> "Interval":
        """
        Calendar difference from start to end.

        **Conceptual**: This is where calendar ambiguity gets resolved. The
        difference between Jan 31 and Mar 1 is "1 month 1 day" in calendar
        components, but it also spans an exact number of days (29 or 30),
        which is recorded in total_days so to_seconds() can measure it.

        Both values are compared on the wall clock of start's timezone; end is
        converted to that zone first.

        Args:
            start: Earlier point in time (any shape to_immutable() accepts).
            end: Later point in time. If end is before start the result has
                 invert=True and positive components.

        Returns:
            Interval with total_days set.
        """
        start_ts = to_immutable(start)
        end_ts = to_immutable(end).tz_convert(start_ts.tz)

        invert = end_ts < start_ts
        low, high = (end_ts, start_ts) if invert else (start_ts, end_ts)

        # Wall-clock arithmetic, so DST transitions do not shave hours off days
        low_wall = low.tz_localize(None)
        high_wall = high.tz_localize(None)
        delta = relativedelta(high_wall.to_pydatetime(), low_wall.to_pydatetime())

        return cls(
            years=delta.years,
            months=delta.months,
            days=delta.days,
            hours=delta.hours,
            minutes=delta.minutes,
            seconds=delta.seconds,
            fraction=delta.microseconds / 1_000_000,
            invert=invert,
            total_days=(high_wall - low_wall).days,
        )

    def to_relativedelta(self) -> relativedelta:
        """Convert to a dateutil relativedelta, applying invert as a sign."""
        sign = -1 if self.invert else 1
        return relativedelta(
            years=sign * self.years,
            months=sign * self.months,
            days=sign * self.days,
            hours=sign * self.hours,
            minutes=sign * self.minutes,
            seconds=sign * self.seconds,
            microseconds=sign * round(self.fraction * 1_000_000),
        )


IntervalLike = Union[Interval, int, str]


# ============================================================================
# Normalization and measurement
# ============================================================================

def normalize(value: IntervalLike) -> Interval:
    """
    Return an Interval from an int, string, or existing Interval.

    **Functionally**:
      - Interval: returned unchanged.
      - int: interpreted as a number of days.
      - str: interpreted as a relative-date expression (see
        Interval.from_date_string), e.g. "3 days" or "2 weeks".

    Args:
        value: Interval, int, or str.

    Returns:
        Interval.

    Raises:
        InvalidArgumentError: If value is none of the accepted types, or the
                              string cannot be parsed.
    """
    if isinstance(value, Interval):
        return value
    # bool is an int subclass but never means "N days"
    if isinstance(value, int) and not isinstance(value, bool):
        return Interval(days=value)
    if isinstance(value, str):
        return Interval.from_date_string(value)

    raise InvalidArgumentError(
        f"Interval must be Interval, integer, or string, given: {type(value).__name__}"
    )


def to_seconds(interval: Interval) -> int:
    """
    Return the interval length in whole seconds.

    **Policy**:
      - If total_days is known, days contribute total_days * 86400, even when
        years or months are also non-zero (date arithmetic already resolved
        them into that day count).
      - Otherwise non-zero years or months are ambiguous and raise.
      - Otherwise days contribute days * 86400.
    Hours, minutes and seconds are added on top. The invert flag is not
    applied; components carry their own sign.

    Args:
        interval: Interval to measure.

    Returns:
        Length in seconds.

    Raises:
        AmbiguousIntervalError: If years or months are non-zero and total_days
                                is unknown.
    """
    if interval.total_days is not None:
        sec = interval.total_days * SECONDS_PER_DAY
    else:
        if interval.years or interval.months:
            raise AmbiguousIntervalError(
                "Cannot get interval in seconds: years and months are ambiguous"
            )
        sec = interval.days * SECONDS_PER_DAY

    sec += (
        interval.hours * SECONDS_PER_HOUR
        + interval.minutes * SECONDS_PER_MINUTE
        + interval.seconds
    )
    return sec


def to_microseconds(interval: Interval) -> float:
    """Return the interval length in seconds, including the fractional part."""
    return to_seconds(interval) + interval.fraction


def compare(a: Interval, b: Interval) -> int:
    """
    Compare two intervals by their length in seconds.

    NOTE: invert is not taken into account, so two intervals of the same
    length where only one is inverted compare as equal.

    Returns:
        -1, 0 or 1 as a is shorter than, equal to, or longer than b.

    Raises:
        AmbiguousIntervalError: If either interval cannot be measured.
    """
    sec_a = to_seconds(a)
    sec_b = to_seconds(b)
    return (sec_a > sec_b) - (sec_a < sec_b)


def are_equal(a: Interval, b: Interval) -> bool:
    """
    Whether two intervals have the same length in seconds and the same direction.

    Never raises: an interval that cannot be measured (years/months without a
    resolved day count) makes the pair unequal.
    """
    try:
        return to_seconds(a) == to_seconds(b) and a.invert == b.invert
    except Exception as exc:
        logger.debug("Treating intervals as unequal, comparison failed: %s", exc)
        return False


def get_hash(interval: Interval) -> int:
    """Cheap bucketing key: length in seconds, or 0 for an empty interval."""
    return to_seconds(interval) or 0


# ============================================================================
# Specification builder
# ============================================================================

def build_spec(
    years: int = 0,
    months: int = 0,
    weeks: int = 0,
    days: int = 0,
    hours: int = 0,
    minutes: int = 0,
    seconds: int = 0,
) -> str:
    """
    Build an interval specification as per ISO 8601.

    **Grammar**: P[{Y}Y][{M}M][{W}W][{D}D][T[{H}H][{Mi}M][{S}S]]
      - Each component is emitted only when it is greater than zero.
      - The "T" time section is emitted only when hours, minutes or seconds
        is non-zero.

    **Examples**:
        >>> build_spec(years=1, days=2, hours=3)
        'P1Y2DT3H'
        >>> build_spec()
        'P'

    Raises:
        IntervalSpecError: If both weeks and days are non-zero.
    """
    if weeks and days:
        raise IntervalSpecError("Cannot build spec using both weeks and days")

    spec = "P"
    for value, designator in (
        (years, SPEC_YEARS),
        (months, SPEC_MONTHS),
        (weeks, SPEC_WEEKS),
        (days, SPEC_DAYS),
    ):
        if value > 0:
            spec += f"{value}{designator}"

    if hours or minutes or seconds:
        spec += "T"
        for value, designator in (
            (hours, SPEC_HOURS),
            (minutes, SPEC_MINUTES),
            (seconds, SPEC_SECONDS),
        ):
            if value > 0:
                spec += f"{value}{designator}"

    return spec
