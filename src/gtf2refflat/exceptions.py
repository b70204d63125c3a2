"""Exceptions raised while converting GTF to RefFlat.

Two failure kinds are distinguished internally:

- ReadWriteError: the input cannot be read or an artifact cannot be written
- ConversionError: a line cannot be normalized or parsed

Both are collapsed into a single GtfToRefFlatFailure at the command-line
boundary, which always carries the same user-facing message plus the cause.
Strand conflicts are not exceptions; they are logged and the transcript is
dropped.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

FAILURE_MESSAGE = (
    "There was an error while converting the given GTF to a refFlat for "
    "CollectRnaSeqMetrics. Make sure the GTF file is tab separated."
)


class FailureKind(Enum):
    """Category of an unrecoverable conversion failure."""

    READ_WRITE = "read_write"
    CONVERSION = "conversion"


class RefFlatError(Exception):
    """Base exception for all gtf2refflat errors."""


class ReadWriteError(RefFlatError):
    """An input could not be read or an output could not be written."""

    kind = FailureKind.READ_WRITE

    def __init__(self, message: str, path: Path | str = "") -> None:
        super().__init__(message)
        self.path = Path(path) if path else None

    def __str__(self) -> str:
        if self.path is not None:
            return f"{super().__str__()}: {self.path}"
        return super().__str__()


class ConversionError(RefFlatError):
    """A line could not be normalized, parsed or reduced."""

    kind = FailureKind.CONVERSION

    def __init__(self, message: str, filename: str = "", line_number: int = 0) -> None:
        super().__init__(message)
        self.filename = filename
        self.line_number = line_number

    def __str__(self) -> str:
        if self.filename and self.line_number:
            return f"{self.filename}, line {self.line_number}: {super().__str__()}"
        elif self.filename:
            return f"{self.filename}: {super().__str__()}"
        return super().__str__()


class GtfToRefFlatFailure(RefFlatError):
    """Unified failure reported to the caller of a conversion run.

    Attributes:
        kind: Whether the underlying cause was a read/write or conversion failure.
        cause: The typed error that triggered the failure.
    """

    def __init__(self, cause: ReadWriteError | ConversionError) -> None:
        super().__init__(FAILURE_MESSAGE)
        self.kind = cause.kind
        self.cause = cause
