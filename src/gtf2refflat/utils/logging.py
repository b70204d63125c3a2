"""Logging configuration for gtf2refflat.

This module provides logging setup for gtf2refflat, with rich console
output and optional file output.

Example:
    >>> import logging
    >>> from gtf2refflat.utils.logging import Timer, setup_logging
    >>> setup_logging(verbosity=2)
    >>> with Timer("Conversion", logging.getLogger("gtf2refflat")):
    ...     pass
"""

import logging
import time
from pathlib import Path
from types import TracebackType

from rich.logging import RichHandler

# =============================================================================
# Constants
# =============================================================================

# File log format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Rich console format
RICH_FORMAT = "%(message)s"

# Log levels by verbosity
VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

ROOT_LOGGER_NAME = "gtf2refflat"


# =============================================================================
# Setup Functions
# =============================================================================


def setup_logging(
    verbosity: int = 1,
    log_file: Path | str | None = None,
) -> None:
    """Configure logging for gtf2refflat.

    Args:
        verbosity: Verbosity level (0=warning, 1=info, 2=debug).
        log_file: Optional file to log to.
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else level)

    # Remove existing handlers
    logger.handlers.clear()

    console_handler = RichHandler(
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    console_handler.setFormatter(logging.Formatter(RICH_FORMAT))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        file_handler.setLevel(logging.DEBUG)  # Always log debug to file
        logger.addHandler(file_handler)


# =============================================================================
# Timing Utilities
# =============================================================================


class Timer:
    """Context manager for timing operations.

    Example:
        >>> with Timer("Conversion", logger):
        ...     convert()
        # Logs: "Conversion completed in 1.23s"
    """

    def __init__(self, description: str, logger: logging.Logger | None = None) -> None:
        """Initialize timer.

        Args:
            description: Description of the operation.
            logger: Logger for output (module logger if None).
        """
        self.description = description
        self.logger = logger or logging.getLogger(__name__)
        self.start_time: float = 0
        self.elapsed: float = 0

    def __enter__(self) -> "Timer":
        """Start timing."""
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Stop timing and log result."""
        self.elapsed = time.perf_counter() - self.start_time
        if exc_type is not None:
            self.logger.info(f"{self.description} failed after {self.elapsed:.2f}s")
        else:
            self.logger.info(f"{self.description} completed in {self.elapsed:.2f}s")
