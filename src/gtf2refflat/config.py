"""Configuration management for gtf2refflat.

This module handles loading, validating, and providing access to
conversion settings. Configuration can come from:
- Default values
- A TOML or YAML configuration file
- Command-line arguments (applied with Config.evolve)

Example:
    >>> from gtf2refflat.config import Config
    >>> config = Config.load("gtf2refflat.toml")
    >>> config.refflat_suffix
    '.refflat'
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import attrs
import yaml

# =============================================================================
# Default Configuration Values
# =============================================================================

DEFAULT_NORMALIZED_SUFFIX = ".gff3"
DEFAULT_REFFLAT_SUFFIX = ".refflat"
DEFAULT_COMMENT_PREFIX = "#"

# Optional table name when settings live in a shared configuration file
CONFIG_TABLE = "gtf2refflat"

YAML_SUFFIXES = (".yaml", ".yml")


# =============================================================================
# Configuration Classes
# =============================================================================


def _optional_path(value: Path | str | None) -> Path | None:
    return None if value is None else Path(value)


@attrs.define(frozen=True)
class Config:
    """Settings for one GTF to RefFlat conversion.

    Attributes:
        normalized_suffix: Suffix appended to the input name for the
            intermediate normalized-attribute file.
        refflat_suffix: Suffix appended to the input name for the RefFlat file.
        output_dir: Directory for both artifacts. Defaults to the input's directory.
        sort_by_transcript: Regroup features by transcript id before
            accumulation, for inputs whose transcripts are interleaved.
        comment_prefix: Lines starting with this prefix are skipped.
    """

    normalized_suffix: str = attrs.field(
        default=DEFAULT_NORMALIZED_SUFFIX, validator=attrs.validators.instance_of(str)
    )
    refflat_suffix: str = attrs.field(
        default=DEFAULT_REFFLAT_SUFFIX, validator=attrs.validators.instance_of(str)
    )
    output_dir: Path | None = attrs.field(default=None, converter=_optional_path)
    sort_by_transcript: bool = attrs.field(
        default=False, validator=attrs.validators.instance_of(bool)
    )
    comment_prefix: str = attrs.field(
        default=DEFAULT_COMMENT_PREFIX, validator=attrs.validators.instance_of(str)
    )

    @normalized_suffix.validator
    @refflat_suffix.validator
    def _check_suffix(self, attribute: attrs.Attribute, value: str) -> None:
        if not value:
            raise ValueError(f"{attribute.name} must not be empty")

    def __attrs_post_init__(self) -> None:
        if self.normalized_suffix == self.refflat_suffix:
            raise ValueError("normalized_suffix and refflat_suffix must differ")

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from a TOML or YAML file.

        Files ending in ``.yaml`` or ``.yml`` are read as YAML, anything else
        as TOML. Settings may sit at the top level of the file or inside a
        ``gtf2refflat`` table.

        Args:
            path: Path to configuration file. If None, returns default
                configuration.

        Returns:
            Loaded configuration object.

        Raises:
            FileNotFoundError: If configuration file doesn't exist.
            ValueError: If configuration file is invalid.
        """
        if path is None:
            return cls()

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            if path.suffix.lower() in YAML_SUFFIXES:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}
            else:
                with open(path, "rb") as f:
                    data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Invalid configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration file {path}: expected a mapping")
        if isinstance(data.get(CONFIG_TABLE), dict):
            data = data[CONFIG_TABLE]

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build a configuration from a plain dictionary.

        Args:
            data: Mapping of setting name to value.

        Returns:
            Configuration object.

        Raises:
            ValueError: If a key is unknown or a value has the wrong type.
        """
        known = {field.name for field in attrs.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

        try:
            return cls(**data)
        except TypeError as e:
            raise ValueError(f"Invalid configuration value: {e}") from e

    def evolve(self, **overrides: Any) -> Config:
        """Return a copy with the given settings replaced.

        Overrides whose value is None are ignored, so unset CLI options
        keep the file or default value.
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        return attrs.evolve(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration.
        """
        return attrs.asdict(self)
