"""
Pattern Library

A library of reusable software development patterns stored as markdown
files with a YAML header, searchable by text, category, framework and tag.

Quick Start:
    from pattern_library import PatternLibrary, load_config

    library = PatternLibrary.load(load_config())   # reads PATTERNS_DIR
    for pattern in library.search(query="retry", tag="go"):
        print(pattern.name)

CLI Usage:
    pattern-library list
    pattern-library search "backoff" --category resilience
    pattern-library mcp

Environment Variables:
    PATTERNS_DIR              - Directory holding the pattern documents (required)
    PATTERN_LIBRARY_VERBOSE   - Set to 1 for debug logging on stderr
    PATTERN_LIBRARY_HOME      - Where errors.log is written (default ~/.pattern-library)

Patterns are loaded once. Patterns created afterwards are written to disk
and appear after the library is loaded again.
"""

from .config import LibraryConfig, load_config
from .errors import (
    ConfigError,
    PatternLibraryError,
    PatternValidationError,
    PatternWriteError,
)
from .library import PatternLibrary, load_patterns
from .parser import parse_pattern
from .types import Pattern, PatternMetadata, validate_pattern_name
from .writer import render_pattern_document, write_pattern

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "LibraryConfig",
    "Pattern",
    "PatternLibrary",
    "PatternLibraryError",
    "PatternMetadata",
    "PatternValidationError",
    "PatternWriteError",
    "load_config",
    "load_patterns",
    "parse_pattern",
    "render_pattern_document",
    "validate_pattern_name",
    "write_pattern",
]
