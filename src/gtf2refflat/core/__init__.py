"""Core conversion logic for gtf2refflat.

- accumulator: groups contiguous features into transcript rows
- reducers: exon backbone merging and CDS bound resolution
- pipeline: end-to-end GTF to RefFlat conversion

Example:
    >>> from gtf2refflat.core import convert_gtf
    >>> convert_gtf("annotation.gtf").refflat_path
"""

from gtf2refflat.core.accumulator import (
    AccumulatorPhase,
    TranscriptAccumulator,
    TranscriptState,
    accumulate_transcripts,
)
from gtf2refflat.core.pipeline import (
    ConversionResult,
    convert_gtf,
    group_by_transcript,
    output_paths,
    run_conversion,
)

__all__: list[str] = [
    "AccumulatorPhase",
    "TranscriptAccumulator",
    "TranscriptState",
    "accumulate_transcripts",
    "ConversionResult",
    "convert_gtf",
    "group_by_transcript",
    "output_paths",
    "run_conversion",
]
