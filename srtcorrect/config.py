"""
Configuration for srtcorrect runs.

Settings can be built directly or read from a YAML file:

    generate_log: true
    dictionary_path: ~/subtitles/extra.properties
    backup_extension: .orig
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from srtcorrect.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class CorrectionConfig:
    """
    Configuration for correcting subtitle files.

    All options have sensible defaults. Create a config only
    if you need to customize behavior.

    Example:
        >>> config = CorrectionConfig(generate_log=True, verbose=True)
        >>> for path, outcome in srtcorrect.process_files(["movie.srt"], config):
        ...     print(path, outcome)
    """

    # Reporting
    generate_log: bool = False  # Write <name>.log with original=corrected pairs
    verbose: bool = False
    quiet: bool = False  # Suppresses all console output; wins over verbose

    # Extra dictionary entries, layered over the bundled autocorrect.properties
    dictionary_path: Path | None = None

    # File handling
    backup_extension: str = ".bak"
    log_extension: str = ".log"
    encoding: str = "utf-8"

    def __post_init__(self):
        """Validate configuration."""
        if self.quiet:
            self.verbose = False

        if self.dictionary_path is not None:
            self.dictionary_path = Path(self.dictionary_path).expanduser()

        for name in ("backup_extension", "log_extension"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.startswith(".") or len(value) < 2:
                raise ConfigurationError(f"{name} must start with '.', got {value!r}")

        if self.backup_extension == self.log_extension:
            raise ConfigurationError(
                f"backup_extension and log_extension must differ, "
                f"both are {self.backup_extension!r}"
            )

        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ConfigurationError(f"Unknown encoding {self.encoding!r}") from e


def load_config(path: str | Path) -> CorrectionConfig:
    """
    Load a CorrectionConfig from a YAML file.

    Args:
        path: Path to a YAML file containing a mapping of option names.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If the file is unreadable, not a mapping,
            or names an unknown option.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(CorrectionConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown option(s) in {path}: {', '.join(unknown)}")

    logger.debug("Loaded config from %s: %s", path, data)
    return CorrectionConfig(**data)
