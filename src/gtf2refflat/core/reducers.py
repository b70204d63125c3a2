"""Per-feature reductions applied to a live transcript state.

Two reductions run for every feature merged into a transcript:

- reduce_exon_interval: builds the exon start/end lists. Explicit exon
  records are collected as-is. Until the first exon record is seen, every
  other feature (CDS, codons, UTRs) is folded into a running merged interval
  so that transcripts without exon records still get an exon backbone.
- resolve_cds_bounds: derives the coding start and end from start/stop
  codons and CDS records, with codon roles swapped on the reverse strand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gtf2refflat.io.gtf import (
    FEATURE_CDS,
    FEATURE_EXON,
    FEATURE_START_CODON,
    FEATURE_STOP_CODON,
    FeatureRecord,
    Strand,
)
from gtf2refflat.utils.intervals import Interval, continues, union

if TYPE_CHECKING:
    from gtf2refflat.core.accumulator import TranscriptState


def reduce_exon_interval(state: TranscriptState, feature: FeatureRecord) -> None:
    """Fold a feature's interval into the exon lists of a transcript.

    Args:
        state: Live transcript state, updated in place.
        feature: Feature belonging to the state's transcript.
    """
    interval = Interval(feature.start, feature.end)

    if feature.type == FEATURE_EXON:
        if not state.has_exon_record:
            # Real exons replace whatever backbone was merged so far
            state.exon_starts.clear()
            state.exon_ends.clear()
            state.running = None
        state.add_exon(interval)
        state.has_exon_record = True
        return

    if state.has_exon_record:
        return

    if state.running is None:
        state.running = interval
    elif continues(state.running, interval):
        state.running = union(state.running, interval)
    else:
        state.add_exon(state.running)
        state.running = interval


def resolve_cds_bounds(state: TranscriptState, feature: FeatureRecord) -> None:
    """Update the coding bounds of a transcript from one feature.

    On the forward strand a start codon opens the CDS and a stop codon closes
    it; on the reverse strand the roles are swapped. The opening bound is
    kept 1-based until the row is formatted. CDS records set the opening
    bound if still unresolved, and move the closing bound forward until a
    closing codon has been seen.

    Args:
        state: Live transcript state, updated in place.
        feature: Feature belonging to the state's transcript.
    """
    if feature.strand is Strand.FORWARD:
        opening, closing = FEATURE_START_CODON, FEATURE_STOP_CODON
    else:
        opening, closing = FEATURE_STOP_CODON, FEATURE_START_CODON

    if feature.type == opening:
        state.cds_start = feature.start + 1
    elif feature.type == closing:
        state.cds_end = feature.end
        state.stop_resolved = True
    elif feature.type == FEATURE_CDS:
        if state.cds_start is None:
            state.cds_start = feature.start + 1
        if not state.stop_resolved:
            state.cds_end = feature.end
