"""Single-pass grouping of features into transcripts.

The accumulator consumes features in stream order, expecting the features of
one transcript to arrive as a contiguous run. It keeps exactly one live
TranscriptState and finalizes it into a RefFlat row whenever the transcript
identifier changes, and once more at the end of the stream.

A transcript whose features disagree on strand is dropped: the conflict is
logged, the state is discarded and every later feature carrying that
identifier is ignored for the rest of the run.
A transcript with an unstranded (``.``) feature is dropped the same way.

Example:
    >>> from gtf2refflat.core.accumulator import accumulate_transcripts
    >>> for row in accumulate_transcripts(features):
    ...     print(row.to_line())
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Iterator

import attrs

from gtf2refflat.core.reducers import reduce_exon_interval, resolve_cds_bounds
from gtf2refflat.io.gtf import FeatureRecord, Strand
from gtf2refflat.io.refflat import RefFlatRow, format_row
from gtf2refflat.utils.intervals import Interval

logger = logging.getLogger(__name__)


class AccumulatorPhase(Enum):
    """Phase of the transcript accumulator."""

    IDLE = "idle"
    ACCUMULATING = "accumulating"
    IGNORING = "ignoring"


@attrs.define(slots=True)
class TranscriptState:
    """Accumulated structure of the transcript currently being read.

    Attributes:
        gene_id: Gene identifier (from the latest feature).
        transcript_id: Transcript identifier.
        chromosome: Scaffold/chromosome name.
        strand: Transcript strand.
        exon_starts: Exon starts in arrival order (0-based).
        exon_ends: Exon ends in arrival order, same length as exon_starts.
        cds_start: CDS start, 1-based, or None while unresolved.
        cds_end: CDS end, or None while unresolved.
        has_exon_record: Whether an explicit exon feature was seen.
        running: Pending merged interval of non-exon features, used only
            while has_exon_record is False.
        stop_resolved: Whether a stop codon has fixed cds_end.
        last_type: Type of the latest merged feature.
    """

    gene_id: str
    transcript_id: str
    chromosome: str
    strand: Strand
    exon_starts: list[int] = attrs.Factory(list)
    exon_ends: list[int] = attrs.Factory(list)
    cds_start: int | None = None
    cds_end: int | None = None
    has_exon_record: bool = False
    running: Interval | None = None
    stop_resolved: bool = False
    last_type: str = ""

    @classmethod
    def open(cls, feature: FeatureRecord) -> TranscriptState:
        """Start a fresh state for the transcript of a feature."""
        return cls(
            gene_id=feature.gene_id,
            transcript_id=feature.transcript_id,
            chromosome=feature.contig,
            strand=feature.strand,
        )

    @property
    def n_exons(self) -> int:
        """Number of exon intervals collected so far."""
        return len(self.exon_starts)

    def add_exon(self, interval: Interval) -> None:
        """Append one exon interval to the coordinate lists."""
        self.exon_starts.append(interval.start)
        self.exon_ends.append(interval.end)

    def merge(self, feature: FeatureRecord) -> None:
        """Fold one feature of this transcript into the state."""
        reduce_exon_interval(self, feature)
        resolve_cds_bounds(self, feature)
        self.gene_id = feature.gene_id
        self.chromosome = feature.contig
        self.strand = feature.strand
        self.last_type = feature.type


class TranscriptAccumulator:
    """Group a contiguous feature stream into finalized RefFlat rows.

    Attributes:
        n_features: Features fed so far.
        n_rows: Rows emitted so far.
        conflicts: Transcript ids dropped for strand conflicts, in order.
        unstranded: Transcript ids dropped for an unstranded feature, in order.

    Example:
        >>> accumulator = TranscriptAccumulator()
        >>> rows = list(accumulator.consume(features))
        >>> accumulator.conflicts
        []
    """

    def __init__(self) -> None:
        self._state: TranscriptState | None = None
        self._current_id: str | None = None
        self._ignored: set[str] = set()
        self.n_features = 0
        self.n_rows = 0
        self.conflicts: list[str] = []
        self.unstranded: list[str] = []

    @property
    def phase(self) -> AccumulatorPhase:
        """Current phase of the state machine."""
        if self._current_id is not None and self._current_id in self._ignored:
            return AccumulatorPhase.IGNORING
        if self._state is not None:
            return AccumulatorPhase.ACCUMULATING
        return AccumulatorPhase.IDLE

    @property
    def state(self) -> TranscriptState | None:
        """The live transcript state, if any."""
        return self._state

    def feed(self, feature: FeatureRecord) -> RefFlatRow | None:
        """Consume one feature.

        Args:
            feature: Next feature in stream order.

        Returns:
            The row of the previous transcript when this feature starts a
            new one, otherwise None.
        """
        self.n_features += 1
        transcript_id = feature.transcript_id
        self._current_id = transcript_id

        if transcript_id in self._ignored:
            return None

        finished = None
        if self._state is not None and transcript_id != self._state.transcript_id:
            finished = self._finalize()

        if feature.strand is Strand.UNSTRANDED:
            logger.warning(
                f"Transcript {transcript_id}: unstranded feature ('.'); dropping transcript"
            )
            self._ignored.add(transcript_id)
            self.unstranded.append(transcript_id)
            self._state = None
            return finished

        if self._state is not None and feature.strand is not self._state.strand:
            logger.error(
                f"Transcript {transcript_id}: all group members must be on the "
                f"same strand; dropping transcript"
            )
            self._ignored.add(transcript_id)
            self.conflicts.append(transcript_id)
            self._state = None
            return None

        if self._state is None:
            self._state = TranscriptState.open(feature)
        self._state.merge(feature)
        return finished

    def finish(self) -> RefFlatRow | None:
        """Finalize the live transcript at end of input.

        Returns:
            The last row, or None if nothing is live.
        """
        if self._state is None:
            return None
        return self._finalize()

    def consume(self, features: Iterable[FeatureRecord]) -> Iterator[RefFlatRow]:
        """Feed a whole stream and yield rows as transcripts complete."""
        for feature in features:
            row = self.feed(feature)
            if row is not None:
                yield row

        row = self.finish()
        if row is not None:
            yield row

    def _finalize(self) -> RefFlatRow:
        assert self._state is not None
        row = format_row(self._state)
        logger.debug(
            f"Finalized {row.transcript_name} ({row.exon_count} exons, "
            f"{row.chromosome}:{row.tx_start}-{row.tx_end})"
        )
        self._state = None
        self.n_rows += 1
        return row


def accumulate_transcripts(features: Iterable[FeatureRecord]) -> Iterator[RefFlatRow]:
    """Group a contiguous feature stream into RefFlat rows.

    Args:
        features: Features in stream order.

    Yields:
        One row per transcript without a strand conflict.
    """
    yield from TranscriptAccumulator().consume(features)
