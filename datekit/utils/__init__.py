"""
Interval and date helpers.

Includes interval normalization/measurement, point-in-time field accessors,
the write-once DatedMixin, and the error classes they raise.
"""
