"""Input/output handlers for gtf2refflat.

- gtf: GTF attribute normalization and feature parsing
- refflat: RefFlat row formatting

Example:
    >>> from gtf2refflat.io import iter_features, read_lines
    >>> features = iter_features(read_lines("annotation.gtf.gff3"))
"""

from gtf2refflat.io.gtf import (
    FeatureRecord,
    Strand,
    iter_features,
    iter_normalized_lines,
    normalize_attributes,
    normalize_line,
    parse_feature,
    read_lines,
    write_lines,
)
from gtf2refflat.io.refflat import RefFlatRow, format_refflat, format_row

__all__: list[str] = [
    "FeatureRecord",
    "Strand",
    "iter_features",
    "iter_normalized_lines",
    "normalize_attributes",
    "normalize_line",
    "parse_feature",
    "read_lines",
    "write_lines",
    "RefFlatRow",
    "format_refflat",
    "format_row",
]
