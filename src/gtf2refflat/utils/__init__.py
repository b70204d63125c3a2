"""Utility functions for gtf2refflat.

This module provides common utilities used across gtf2refflat:

- Interval continuation and union for exon backbone merging
- Logging configuration and timing

Example:
    >>> from gtf2refflat.utils import Interval, union
    >>> union(Interval(0, 10), Interval(5, 20))
    Interval(start=0, end=20)
"""

from gtf2refflat.utils.intervals import Interval, continues, union
from gtf2refflat.utils.logging import Timer, setup_logging

__all__ = [
    "Interval",
    "continues",
    "union",
    "Timer",
    "setup_logging",
]
