"""RefFlat row formatting.

A RefFlat file is a headerless, tab-delimited table with one row per
transcript and 11 columns:

    geneName  name  chrom  strand  txStart  txEnd  cdsStart  cdsEnd
    exonCount  exonStarts  exonEnds

Coordinates are 0-based half-open; exon starts and ends are comma-joined.

Example:
    >>> from gtf2refflat.io.refflat import RefFlatRow
    >>> row = RefFlatRow("G1", "T1", "chr1", "+", 100, 200, 100, 200, (100,), (200,))
    >>> row.to_line()
    'G1\\tT1\\tchr1\\t+\\t100\\t200\\t100\\t200\\t1\\t100\\t200'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import attrs

if TYPE_CHECKING:
    from gtf2refflat.core.accumulator import TranscriptState

COLUMN_DELIMITER = "\t"
COORDINATE_DELIMITER = ","
ROW_DELIMITER = "\n"


@attrs.frozen
class RefFlatRow:
    """One finalized RefFlat row.

    Attributes:
        gene_name: Gene identifier.
        transcript_name: Transcript identifier.
        chromosome: Scaffold/chromosome name.
        strand: Strand symbol (+ or -).
        tx_start: Transcription start (lowest exon start).
        tx_end: Transcription end (highest exon end).
        cds_start: Coding start (0-based).
        cds_end: Coding end (exclusive).
        exon_starts: Sorted exon starts.
        exon_ends: Sorted exon ends.
    """

    gene_name: str
    transcript_name: str
    chromosome: str
    strand: str
    tx_start: int
    tx_end: int
    cds_start: int
    cds_end: int
    exon_starts: tuple[int, ...]
    exon_ends: tuple[int, ...]

    @property
    def exon_count(self) -> int:
        """Number of exons."""
        return len(self.exon_starts)

    def to_line(self) -> str:
        """Render the row as 11 tab-separated fields."""
        return COLUMN_DELIMITER.join(
            [
                self.gene_name,
                self.transcript_name,
                self.chromosome,
                self.strand,
                str(self.tx_start),
                str(self.tx_end),
                str(self.cds_start),
                str(self.cds_end),
                str(self.exon_count),
                COORDINATE_DELIMITER.join(str(start) for start in self.exon_starts),
                COORDINATE_DELIMITER.join(str(end) for end in self.exon_ends),
            ]
        )


def format_row(state: TranscriptState) -> RefFlatRow:
    """Finalize an accumulated transcript into a RefFlat row.

    A pending merged interval is added when the transcript had no exon
    records. Starts and ends are sorted independently of each other.
    Unresolved CDS bounds fall back to the transcript bounds; a resolved
    CDS start is stored 1-based and is shifted back to 0-based here.

    The state is not modified.

    Args:
        state: The just-completed transcript state.

    Returns:
        The finalized row.
    """
    starts = list(state.exon_starts)
    ends = list(state.exon_ends)

    if not state.has_exon_record and state.running is not None:
        starts.append(state.running.start)
        ends.append(state.running.end)

    starts.sort()
    ends.sort()

    cds_start = starts[0] if state.cds_start is None else state.cds_start - 1
    cds_end = ends[-1] if state.cds_end is None else state.cds_end

    return RefFlatRow(
        gene_name=state.gene_id,
        transcript_name=state.transcript_id,
        chromosome=state.chromosome,
        strand=state.strand.symbol,
        tx_start=starts[0],
        tx_end=ends[-1],
        cds_start=cds_start,
        cds_end=cds_end,
        exon_starts=tuple(starts),
        exon_ends=tuple(ends),
    )


def format_refflat(rows: Iterable[RefFlatRow]) -> Iterable[str]:
    """Render rows as RefFlat lines (without terminators)."""
    return (row.to_line() for row in rows)
