"""
datekit – convenience helpers over date/time and interval values.

Normalizes and measures intervals, builds ISO-8601 duration specifications,
reads calendar fields from points in time, and gives entities a write-once
date via DatedMixin.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
