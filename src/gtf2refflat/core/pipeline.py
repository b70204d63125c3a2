"""GTF to RefFlat conversion pipeline.

The conversion runs in two passes over files:

1. Every retained GTF line is normalized and written to an intermediate
   file next to the input (``<name>.gff3`` by default).
2. The intermediate file is streamed back as feature records, grouped into
   transcripts and written as RefFlat (``<name>.refflat`` by default).

convert_gtf raises the typed ReadWriteError / ConversionError. run_conversion
wraps it for callers that only need one failure type with a fixed message.

Example:
    >>> from gtf2refflat.core.pipeline import convert_gtf
    >>> result = convert_gtf("annotation.gtf")
    >>> result.n_rows
    42
"""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Iterator

import attrs

from gtf2refflat.config import Config
from gtf2refflat.core.accumulator import TranscriptAccumulator
from gtf2refflat.exceptions import ConversionError, GtfToRefFlatFailure, ReadWriteError
from gtf2refflat.io.gtf import (
    FeatureRecord,
    iter_features,
    iter_normalized_lines,
    read_lines,
    write_lines,
)
from gtf2refflat.io.refflat import format_refflat
from gtf2refflat.utils.logging import Timer

logger = logging.getLogger(__name__)


@attrs.frozen
class ConversionResult:
    """Outcome of a successful conversion.

    Attributes:
        gtf_path: Input annotation.
        normalized_path: Intermediate normalized-attribute file.
        refflat_path: RefFlat output file.
        n_features: Feature records read (lines with a transcript id).
        n_rows: RefFlat rows written.
        conflicts: Transcript ids dropped for strand conflicts.
        unstranded: Transcript ids dropped for an unstranded (`.`) feature.
    """

    gtf_path: Path
    normalized_path: Path
    refflat_path: Path
    n_features: int
    n_rows: int
    conflicts: tuple[str, ...] = ()
    unstranded: tuple[str, ...] = ()


def output_paths(gtf_path: Path | str, config: Config | None = None) -> tuple[Path, Path]:
    """Compute the intermediate and RefFlat paths for an input.

    Both artifacts keep the full input file name and append a suffix.

    Args:
        gtf_path: Input annotation path.
        config: Conversion settings.

    Returns:
        Tuple of (normalized_path, refflat_path).
    """
    config = config or Config()
    gtf_path = Path(gtf_path)
    out_dir = config.output_dir if config.output_dir is not None else gtf_path.parent
    return (
        out_dir / f"{gtf_path.name}{config.normalized_suffix}",
        out_dir / f"{gtf_path.name}{config.refflat_suffix}",
    )


def group_by_transcript(features: Iterable[FeatureRecord]) -> Iterator[FeatureRecord]:
    """Stably regroup features so each transcript is contiguous.

    Transcripts keep the order in which their ids were first seen, and
    features keep their relative order within a transcript. The whole
    stream is buffered.

    Args:
        features: Features in arbitrary order.

    Yields:
        Features grouped by transcript id.
    """
    groups: dict[str, list[FeatureRecord]] = defaultdict(list)
    for feature in features:
        groups[feature.transcript_id].append(feature)

    logger.debug(f"Regrouped features into {len(groups)} transcripts")
    for group in groups.values():
        yield from group


def convert_gtf(gtf_path: Path | str, config: Config | None = None) -> ConversionResult:
    """Convert a GTF file into a RefFlat file.

    Args:
        gtf_path: Input GTF annotation.
        config: Conversion settings (defaults if None).

    Returns:
        ConversionResult describing the written artifacts.

    Raises:
        ReadWriteError: If the input cannot be read or an output written.
        ConversionError: If a line cannot be normalized or parsed.
    """
    config = config or Config()
    gtf_path = Path(gtf_path)
    normalized_path, refflat_path = output_paths(gtf_path, config)

    # A missing input must not leave empty artifacts behind
    if not gtf_path.is_file():
        raise ReadWriteError("GTF file not found", gtf_path)
    if config.output_dir is not None:
        try:
            config.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ReadWriteError("Could not create output directory", config.output_dir) from e

    with Timer(f"Converting {gtf_path.name}", logger):
        normalized = iter_normalized_lines(
            read_lines(gtf_path),
            filename=gtf_path.name,
            comment_prefix=config.comment_prefix,
        )
        n_normalized = write_lines(normalized_path, normalized)
        logger.info(f"Wrote {n_normalized} normalized lines to {normalized_path}")

        features: Iterable[FeatureRecord] = iter_features(
            read_lines(normalized_path), filename=normalized_path.name
        )
        if config.sort_by_transcript:
            features = group_by_transcript(features)

        # The RefFlat file is only opened once every row is built
        accumulator = TranscriptAccumulator()
        rows = list(format_refflat(accumulator.consume(features)))
        n_rows = write_lines(refflat_path, rows)

    if accumulator.conflicts:
        logger.warning(
            f"Dropped {len(accumulator.conflicts)} transcript(s) with strand conflicts"
        )
    if accumulator.unstranded:
        logger.warning(
            f"Dropped {len(accumulator.unstranded)} unstranded transcript(s)"
        )
    logger.info(f"Wrote {n_rows} RefFlat rows to {refflat_path}")

    return ConversionResult(
        gtf_path=gtf_path,
        normalized_path=normalized_path,
        refflat_path=refflat_path,
        n_features=accumulator.n_features,
        n_rows=n_rows,
        conflicts=tuple(accumulator.conflicts),
        unstranded=tuple(accumulator.unstranded),
    )


def run_conversion(gtf_path: Path | str, config: Config | None = None) -> ConversionResult:
    """Convert a GTF file, collapsing failures into one error type.

    Args:
        gtf_path: Input GTF annotation.
        config: Conversion settings (defaults if None).

    Returns:
        ConversionResult describing the written artifacts.

    Raises:
        GtfToRefFlatFailure: On any failure. Read, write and conversion
            errors are available as ``cause`` and ``__cause__``. Any other
            exception is wrapped in a ConversionError ``cause`` and kept
            as ``__cause__``.
    """
    try:
        return convert_gtf(gtf_path, config)
    except (ReadWriteError, ConversionError) as e:
        logger.debug(f"Conversion failed ({e.kind.value}): {e}")
        raise GtfToRefFlatFailure(e) from e
    except Exception as e:
        cause = ConversionError(f"Unexpected {type(e).__name__}: {e}", Path(gtf_path).name)
        logger.debug(f"Conversion failed unexpectedly: {e!r}")
        raise GtfToRefFlatFailure(cause) from e
