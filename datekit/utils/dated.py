"""
Write-once date storage for entities, plus the DatedMixin accessor set.

**Conceptual**: Many entities own exactly one point in time: an event has a
start, a record has a creation date, a bar has a timestamp. That date is
fixed when the entity is built and must not change afterwards. DateSlot
models this explicitly as a holder with two states:

    Unset --set()--> Set        (allowed once)
    Set   --set()--> error      (DateAlreadySetError)

DatedMixin embeds a DateSlot in the owning object and exposes the date
accessors of datekit.utils.date bound to the stored value, so an entity gets
`event.get_year()`, `event.is_weekday()` and friends for free.

**Usage example**:
    >>> class Event(DatedMixin):
    ...     def __init__(self, name, when):
    ...         self.name = name
    ...         self.set_datetime(when)
    >>> event = Event("launch", datetime(2024, 1, 3, 12, 0))
    >>> event.get_day_name()
    'Wednesday'
    >>> event.set_datetime(datetime(2025, 1, 1))
    Traceback (most recent call last):
    ...
    DateAlreadySetError: Cannot modify date once set
"""

import copy
import logging
import math
import threading
from typing import Optional

import pandas as pd

from datekit.utils import date as date_util
from datekit.utils.date import PointInTimeLike
from datekit.utils.errors import DateAlreadySetError, DateNotSetError

logger = logging.getLogger(__name__)

_SLOT_ATTR = "_datekit_date_slot"


class DateSlot:
    """
    Holder for a single point in time that accepts exactly one assignment.

    The check-and-set in set() runs under a lock, so two threads racing to
    initialize the same slot cannot both succeed. Copies and unpickled slots
    keep the value (set or unset) and get a lock of their own.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self, value: Optional[pd.Timestamp] = None):
        self._value: Optional[pd.Timestamp] = value
        self._lock = threading.Lock()

    def __getstate__(self):
        # Locks cannot be pickled; the dict is never empty so __setstate__ always runs
        return {"value": self._value}

    def __setstate__(self, state):
        self._value = state["value"]
        self._lock = threading.Lock()

    def __copy__(self) -> "DateSlot":
        return DateSlot(self._value)

    def __deepcopy__(self, memo) -> "DateSlot":
        # Timestamps are immutable, so the value can be shared
        return DateSlot(self._value)

    @property
    def is_set(self) -> bool:
        return self._value is not None

    def set(self, value: PointInTimeLike) -> pd.Timestamp:
        """
        Store an immutable snapshot of value.

        Returns:
            The stored Timestamp.

        Raises:
            DateAlreadySetError: If the slot already holds a value.
            InvalidArgumentError: If value is not a supported point-in-time type.
        """
        snapshot = date_util.to_immutable(value)
        with self._lock:
            if self._value is not None:
                raise DateAlreadySetError("Cannot modify date once set")
            self._value = snapshot
        logger.debug("Date slot set to %s", snapshot)
        return snapshot

    def get(self) -> pd.Timestamp:
        """
        Return the stored value.

        Raises:
            DateNotSetError: If set() has not been called yet.
        """
        value = self._value
        if value is None:
            raise DateNotSetError("Date has not been set")
        return value


class DatedMixin:
    """
    Gives a class one write-once associated date and accessors over it.

    The slot is created on first use, so subclasses do not need to call a
    mixin __init__. Owners normally call set_datetime() from their own
    constructor; every get_* accessor raises DateNotSetError until then.

    copy.copy() gives the copy its own slot holding the same state, so
    setting the date on a copy never touches the original.
    """

    @property
    def _date_slot(self) -> DateSlot:
        slot = self.__dict__.get(_SLOT_ATTR)
        if slot is None:
            # dict.setdefault is atomic, so concurrent first use yields one slot
            slot = self.__dict__.setdefault(_SLOT_ATTR, DateSlot())
        return slot

    def __copy__(self):
        cls = self.__class__
        clone = cls.__new__(cls)
        clone.__dict__.update(self.__dict__)
        slot = self.__dict__.get(_SLOT_ATTR)
        if slot is not None:
            clone.__dict__[_SLOT_ATTR] = copy.copy(slot)
        return clone

    def set_datetime(self, value: PointInTimeLike) -> None:
        """
        Sets the associated date/time.

        Raises:
            DateAlreadySetError: If the date is already set.
        """
        self._date_slot.set(value)

    def get_datetime(self) -> pd.Timestamp:
        """Returns the associated date/time as an aware Timestamp."""
        return self._date_slot.get()

    def has_datetime(self) -> bool:
        """Whether the associated date/time has been set."""
        return self._date_slot.is_set

    def get_timestamp(self) -> int:
        """Returns the associated date/time as a Unix timestamp."""
        # Floor, not truncation: 1969-12-31 23:59:59.5 is second -1
        return math.floor(self.get_datetime().timestamp())

    def get_year(self) -> int:
        return date_util.year(self.get_datetime())

    def get_month(self) -> int:
        return date_util.month(self.get_datetime())

    def get_day(self) -> int:
        return date_util.day(self.get_datetime())

    def get_day_of_week(self) -> int:
        """0 for Sunday, 1 for Monday, ... 6 for Saturday."""
        return date_util.day_of_week(self.get_datetime())

    def get_day_of_year(self) -> int:
        """0 through 365."""
        return date_util.day_of_year(self.get_datetime())

    def get_days_in_month(self) -> int:
        return date_util.days_in_month(self.get_datetime())

    def get_day_name(self, locale: Optional[str] = None) -> str:
        return date_util.day_name(self.get_datetime(), locale=locale)

    def get_day_name_short(self) -> str:
        return date_util.day_name_short(self.get_datetime())

    def get_month_name(self, locale: Optional[str] = None) -> str:
        return date_util.month_name(self.get_datetime(), locale=locale)

    def get_month_name_short(self) -> str:
        return date_util.month_name_short(self.get_datetime())

    def get_timezone_offset(self) -> int:
        """Offset from UTC in seconds, negative west of UTC."""
        return date_util.timezone_offset(self.get_datetime())

    def get_iso_week(self) -> int:
        return date_util.iso_week(self.get_datetime())

    def is_weekday(self) -> bool:
        """Whether the associated date is a weekday (Monday through Friday)."""
        return date_util.is_weekday(self.get_datetime())

    def is_daylight_savings(self) -> bool:
        return date_util.is_daylight_savings(self.get_datetime())
