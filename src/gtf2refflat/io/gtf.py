"""GTF reading and attribute normalization.

GTF attribute columns use space-separated ``key "value";`` tokens. Before
features are grouped into transcripts, every retained line is rewritten into
a compact GFF3-style ``key=value`` attribute syntax keeping only the gene and
transcript identifiers, and the normalized lines are then parsed into
FeatureRecord objects.

Features:
    - Attribute normalization (gene_id -> ID, transcript_id -> transcript_id)
    - Lazy parsing of normalized lines into immutable FeatureRecord objects
    - Coordinate conversion (1-based inclusive to 0-based half-open)
    - Comment, blank and transcript-less lines skipped

Example:
    >>> from gtf2refflat.io.gtf import normalize_line, parse_feature
    >>> line = 'chr1\\tsrc\\texon\\t101\\t200\\t.\\t+\\t.\\tgene_id "G1"; transcript_id "T1";'
    >>> normalized = normalize_line(line)
    >>> normalized.split("\\t")[-1]
    'ID=G1;transcript_id=T1'
    >>> parse_feature(normalized).start
    100
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

import attrs

from gtf2refflat.exceptions import ConversionError, ReadWriteError

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# GTF column indices
COL_SEQID = 0
COL_SOURCE = 1
COL_TYPE = 2
COL_START = 3
COL_END = 4
COL_SCORE = 5
COL_STRAND = 6
COL_FRAME = 7
COL_ATTRIBUTES = 8
N_COLUMNS = 9

COLUMN_DELIMITER = "\t"
ATTRIBUTE_DELIMITER = " "
COMMENT_PREFIX = "#"
ENCODING = "utf-8"

# GTF attribute keys retained by normalization, and their normalized names
GTF_GENE_ID = "gene_id"
GTF_TRANSCRIPT_ID = "transcript_id"
NORMALIZED_KEYS = {
    GTF_GENE_ID: "ID",
    GTF_TRANSCRIPT_ID: "transcript_id",
}

# Feature types (lowercased)
FEATURE_EXON = "exon"
FEATURE_CDS = "cds"
FEATURE_START_CODON = "start_codon"
FEATURE_STOP_CODON = "stop_codon"


class Strand(Enum):
    """Feature strand.

    UNSTRANDED (``.``) is accepted when parsing so that the transcript can be
    dropped by the accumulator. It never reaches a RefFlat row.
    """

    FORWARD = "+"
    REVERSE = "-"
    UNSTRANDED = "."

    @property
    def symbol(self) -> str:
        """Single-character strand symbol."""
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> Strand:
        """Parse a ``+``/``-``/``.`` strand column.

        Raises:
            ValueError: For any other symbol.
        """
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unsupported strand '{symbol}' (expected '+', '-' or '.')") from None


# =============================================================================
# Data Models
# =============================================================================


@attrs.frozen
class FeatureRecord:
    """One annotation feature belonging to a transcript.

    Attributes:
        contig: Scaffold/chromosome name.
        start: Start position (0-based, inclusive).
        end: End position (0-based, exclusive).
        strand: Feature strand.
        type: Lowercased feature type (exon, cds, start_codon, ...).
        gene_id: Gene identifier, empty if absent.
        transcript_id: Transcript identifier used for grouping.
    """

    contig: str
    start: int
    end: int
    strand: Strand
    type: str
    gene_id: str
    transcript_id: str


# =============================================================================
# Attribute Normalization
# =============================================================================


def normalize_attributes(attr_string: str) -> str:
    """Rewrite a GTF attribute column into normalized key=value syntax.

    The column is split on single spaces. Each recognized key consumes the
    following token as its value, with quote characters removed. Fragments
    are concatenated as-is and the final character is dropped, so the GTF
    token's trailing ``;`` separates fragments and the last one is trimmed.

    Args:
        attr_string: Raw GTF attribute column.

    Returns:
        Normalized attribute string, e.g. ``ID=G1;transcript_id=T1``.

    Raises:
        ValueError: If a recognized key has no value token.
    """
    tokens = attr_string.split(ATTRIBUTE_DELIMITER)
    fragments = []

    i = 0
    while i < len(tokens):
        key = NORMALIZED_KEYS.get(tokens[i])
        if key is None:
            i += 1
            continue
        if i + 1 >= len(tokens):
            raise ValueError(f"Attribute '{tokens[i]}' has no value")
        value = tokens[i + 1].replace('"', "")
        fragments.append(f"{key}={value}")
        i += 2

    return "".join(fragments)[:-1]


def normalize_line(line: str, comment_prefix: str = COMMENT_PREFIX) -> str | None:
    """Normalize the attribute column of a single GTF line.

    Args:
        line: Raw GTF line.
        comment_prefix: Lines starting with this prefix are skipped.

    Returns:
        The line with its attribute column rewritten, or None for blank
        and comment lines.

    Raises:
        ValueError: If the line does not have 9 tab-separated columns.
    """
    line = line.rstrip("\r\n")
    if not line.strip() or line.startswith(comment_prefix):
        return None

    columns = line.split(COLUMN_DELIMITER)
    if len(columns) != N_COLUMNS:
        raise ValueError(
            f"Expected {N_COLUMNS} tab-separated columns, found {len(columns)}"
        )

    columns[COL_ATTRIBUTES] = normalize_attributes(columns[COL_ATTRIBUTES])
    return COLUMN_DELIMITER.join(columns)


def iter_normalized_lines(
    lines: Iterable[str],
    filename: str = "",
    comment_prefix: str = COMMENT_PREFIX,
) -> Iterator[str]:
    """Normalize a stream of GTF lines, skipping blanks and comments.

    Args:
        lines: Raw GTF lines.
        filename: Source name used in error messages.
        comment_prefix: Lines starting with this prefix are skipped.

    Yields:
        Normalized lines.

    Raises:
        ConversionError: If a line cannot be normalized.
    """
    for line_number, line in enumerate(lines, 1):
        try:
            normalized = normalize_line(line, comment_prefix)
        except ValueError as e:
            raise ConversionError(str(e), filename, line_number) from e
        if normalized is not None:
            yield normalized


# =============================================================================
# Feature Parsing
# =============================================================================


def parse_attributes(attr_string: str) -> dict[str, str]:
    """Parse normalized attribute string into dictionary.

    Args:
        attr_string: Semicolon-separated key=value pairs.

    Returns:
        Dictionary of attribute key-value pairs.
    """
    attributes = {}
    if not attr_string or attr_string == ".":
        return attributes

    for item in attr_string.split(";"):
        item = item.strip()
        if not item or "=" not in item:
            continue

        key, value = item.split("=", 1)
        # URL decode
        value = value.replace("%3B", ";").replace("%3D", "=").replace("%26", "&")
        value = value.replace("%2C", ",")
        attributes[key] = value

    return attributes


def parse_feature(line: str) -> FeatureRecord | None:
    """Parse a single normalized line.

    Args:
        line: Normalized GTF line.

    Returns:
        FeatureRecord, or None if the line has no transcript identifier.

    Raises:
        ValueError: If columns, coordinates or strand are malformed.
    """
    parts = line.rstrip("\r\n").split(COLUMN_DELIMITER)
    if len(parts) != N_COLUMNS:
        raise ValueError(f"Expected {N_COLUMNS} tab-separated columns, found {len(parts)}")

    attributes = parse_attributes(parts[COL_ATTRIBUTES])
    transcript_id = attributes.get(NORMALIZED_KEYS[GTF_TRANSCRIPT_ID], "")
    if not transcript_id:
        return None

    try:
        start = int(parts[COL_START]) - 1  # Convert to 0-based
        end = int(parts[COL_END])  # Keep as exclusive end
    except ValueError:
        raise ValueError(
            f"Invalid coordinates '{parts[COL_START]}'-'{parts[COL_END]}'"
        ) from None

    return FeatureRecord(
        contig=parts[COL_SEQID],
        start=start,
        end=end,
        strand=Strand.from_symbol(parts[COL_STRAND]),
        type=parts[COL_TYPE].lower(),
        gene_id=attributes.get(NORMALIZED_KEYS[GTF_GENE_ID], ""),
        transcript_id=transcript_id,
    )


def iter_features(lines: Iterable[str], filename: str = "") -> Iterator[FeatureRecord]:
    """Lazily parse normalized lines into feature records.

    Args:
        lines: Normalized lines, in file order.
        filename: Source name used in error messages.

    Yields:
        FeatureRecord objects for lines carrying a transcript identifier.

    Raises:
        ConversionError: If a line cannot be parsed.
    """
    for line_number, line in enumerate(lines, 1):
        if not line.strip():
            continue
        try:
            feature = parse_feature(line)
        except ValueError as e:
            raise ConversionError(str(e), filename, line_number) from e

        if feature is None:
            logger.debug(f"Skipping line {line_number} without transcript_id")
            continue
        yield feature


# =============================================================================
# File Access
# =============================================================================


def read_lines(path: Path | str) -> Iterator[str]:
    """Iterate over the lines of a UTF-8 text file.

    Lines are decoded one at a time so that an undecodable byte is reported
    on the line that holds it.

    Args:
        path: File to read.

    Yields:
        Lines including their line terminators.

    Raises:
        ReadWriteError: If the file cannot be opened or read.
        ConversionError: If a line is not valid UTF-8.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            for line_number, raw in enumerate(f, 1):
                try:
                    line = raw.decode(ENCODING)
                except UnicodeDecodeError as e:
                    raise ConversionError(
                        f"Invalid {ENCODING} byte at position {e.start}", path.name, line_number
                    ) from e
                yield line
    except OSError as e:
        raise ReadWriteError(f"Could not read file ({e.strerror or e})", path) from e


def write_lines(path: Path | str, lines: Iterable[str]) -> int:
    """Write lines joined by newlines, without a trailing newline.

    Args:
        path: Output file path.
        lines: Lines without terminators.

    Returns:
        Number of lines written.

    Raises:
        ReadWriteError: If the file cannot be written.
    """
    path = Path(path)
    n_lines = 0
    try:
        with open(path, "w", encoding=ENCODING) as f:
            for line in lines:
                if n_lines:
                    f.write("\n")
                f.write(line)
                n_lines += 1
    except OSError as e:
        raise ReadWriteError(f"Could not write to file ({e.strerror or e})", path) from e
    return n_lines
