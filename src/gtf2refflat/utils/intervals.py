"""Genomic interval operations.

This module provides the interval helpers used when exon structure has to be
approximated from non-exon features (CDS, codons, UTRs):

- Interval representation (0-based, half-open)
- Running-interval continuation test
- Interval union

Example:
    >>> from gtf2refflat.utils.intervals import Interval, continues, union
    >>> running = Interval(100, 150)
    >>> continues(running, Interval(120, 180))
    True
    >>> union(running, Interval(120, 180))
    Interval(start=100, end=180)
"""

from typing import NamedTuple

# =============================================================================
# Data Structures
# =============================================================================


class Interval(NamedTuple):
    """A simple genomic interval.

    Attributes:
        start: Start position (0-based, inclusive).
        end: End position (0-based, exclusive).
    """

    start: int
    end: int


# =============================================================================
# Merge Operations
# =============================================================================


def continues(running: Interval, candidate: Interval) -> bool:
    """Check whether a candidate interval extends a running merged interval.

    The candidate continues the running interval when it starts at or before
    the running end, or when it ends at or before the running end. Abutting
    intervals (candidate.start == running.end) therefore merge.

    Args:
        running: The interval merged so far.
        candidate: The next interval in stream order.

    Returns:
        True if the candidate should be merged into the running interval.
    """
    return candidate.start <= running.end or candidate.end <= running.end


def union(a: Interval, b: Interval) -> Interval:
    """Smallest interval spanning both inputs.

    Args:
        a: First interval.
        b: Second interval.

    Returns:
        Interval from the lower start to the higher end.
    """
    return Interval(min(a.start, b.start), max(a.end, b.end))
