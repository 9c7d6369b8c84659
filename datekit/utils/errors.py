"""
Exception types raised by the date and interval helpers.

**Conceptual**: Every error this package raises derives from DateKitError, so
callers can catch the whole family in one place or pick out a specific case.
Each concrete error also derives from the matching built-in (ValueError for
bad input, RuntimeError for operations that cannot be completed), which keeps
plain `except ValueError` handlers working.
"""


class DateKitError(Exception):
    """
    Base exception for all datekit errors.

    Caller can catch DateKitError to handle every failure raised by the
    interval and date helpers, or catch a subclass for fine-grained handling.
    """
    pass


class InvalidArgumentError(DateKitError, ValueError):
    """
    Raised when a value has a shape the helpers do not understand.

    **Examples**: normalize() given a float or None, a malformed interval
    specification string, an unrecognized relative-date expression, or a
    point-in-time value of an unsupported type.
    """
    pass


class AmbiguousIntervalError(DateKitError, RuntimeError):
    """
    Raised when an interval cannot be expressed as a fixed number of seconds.

    **Conceptual**: Years and months have no fixed length. An interval such as
    "1 month" is 28 to 31 days depending on where it is applied, so it can
    only be measured once date arithmetic has resolved its total day count.
    """
    pass


class IntervalSpecError(DateKitError, RuntimeError):
    """
    Raised when an interval specification cannot be built.

    **Example**: requesting both weeks and days, which the specification
    grammar treats as conflicting units.
    """
    pass


class DateAlreadySetError(DateKitError, RuntimeError):
    """Raised when a write-once date is assigned a second time."""
    pass


class DateNotSetError(DateKitError, RuntimeError):
    """Raised when a write-once date is read before it has been assigned."""
    pass
