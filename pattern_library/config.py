"""
Configuration for the pattern library.

The only required setting is the patterns directory, supplied through the
PATTERNS_DIR environment variable. It is read once at startup and passed
explicitly to the loader and the writer.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError
from .types import PATTERN_EXTENSION


ENV_PATTERNS_DIR = "PATTERNS_DIR"
ENV_VERBOSE = "PATTERN_LIBRARY_VERBOSE"


@dataclass(frozen=True)
class LibraryConfig:
    """Complete library configuration."""
    patterns_dir: Path
    extension: str = PATTERN_EXTENSION


def load_config(environ: Optional[Mapping[str, str]] = None) -> LibraryConfig:
    """
    Build configuration from the environment.

    Raises:
        ConfigError: If PATTERNS_DIR is unset or empty
    """
    if environ is None:
        environ = os.environ

    patterns_dir = environ.get(ENV_PATTERNS_DIR)
    if not patterns_dir:
        raise ConfigError(f"{ENV_PATTERNS_DIR} environment variable must be set")

    return LibraryConfig(patterns_dir=Path(patterns_dir).expanduser())


def is_verbose(environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when PATTERN_LIBRARY_VERBOSE=1 asks for debug logging."""
    if environ is None:
        environ = os.environ
    return environ.get(ENV_VERBOSE) == "1"
