"""gtf2refflat: Convert GTF gene annotations into RefFlat tables.

gtf2refflat reads a GTF annotation, groups its features by transcript and
writes one RefFlat row per transcript describing exon and CDS boundaries,
ready for RNA-seq metrics tools such as CollectRnaSeqMetrics.

Example:
    >>> import gtf2refflat
    >>> result = gtf2refflat.convert_gtf("annotation.gtf")
    >>> result.refflat_path.name
    'annotation.gtf.refflat'

Modules:
    io: GTF normalization, feature parsing and RefFlat formatting
    core: Transcript accumulation and the conversion pipeline
    utils: Interval helpers and logging setup
"""

__version__ = "0.1.0"
__author__ = "Arun Seetharam"

from gtf2refflat.config import Config
from gtf2refflat.core.pipeline import ConversionResult, convert_gtf, run_conversion
from gtf2refflat.exceptions import (
    ConversionError,
    FailureKind,
    GtfToRefFlatFailure,
    ReadWriteError,
    RefFlatError,
)

__all__ = [
    "__version__",
    "__author__",
    "Config",
    "ConversionResult",
    "convert_gtf",
    "run_conversion",
    "RefFlatError",
    "ReadWriteError",
    "ConversionError",
    "FailureKind",
    "GtfToRefFlatFailure",
]
