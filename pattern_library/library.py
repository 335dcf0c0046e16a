"""
Pattern library — load pattern documents once and query them.

The collection is read at load time into an immutable tuple and never
changes afterwards. Readers share it without locking. New patterns are
written straight to disk and only become visible to a freshly loaded
library.

Usage:
    library = PatternLibrary.load(load_config())
    library.search(query="retry", tag="go")
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Sequence

from .config import LibraryConfig
from .parser import load_pattern_file
from .types import PATTERN_EXTENSION, Pattern, validate_pattern_name
from .writer import write_pattern

logger = logging.getLogger(__name__)


def load_patterns(directory: Path, extension: str = PATTERN_EXTENSION) -> list[Pattern]:
    """
    Load every well-formed pattern document in a directory.

    Entries are visited in the order the OS lists them. Files without the
    pattern extension are ignored, unreadable or malformed ones are skipped.
    An unreadable directory yields an empty list.
    """
    suffix = f".{extension}"
    try:
        entries = list(Path(directory).iterdir())
    except OSError as e:
        logger.warning("Cannot read patterns directory %s: %s", directory, e)
        return []

    patterns = []
    for entry in entries:
        if entry.suffix != suffix:
            continue
        pattern = load_pattern_file(entry)
        if pattern is not None:
            patterns.append(pattern)

    logger.info("Loaded %d patterns from %s", len(patterns), directory)
    return patterns


class PatternLibrary:
    """
    Read-only view over the patterns loaded at startup.

    Queries are linear scans in collection order. create() writes a new
    document but leaves this instance unchanged.
    """

    def __init__(self, config: LibraryConfig, patterns: Sequence[Pattern] = ()):
        self._config = config
        self._patterns: tuple[Pattern, ...] = tuple(patterns)

    @classmethod
    def load(cls, config: LibraryConfig) -> "PatternLibrary":
        """Load the configured patterns directory."""
        return cls(config, load_patterns(config.patterns_dir, config.extension))

    @property
    def config(self) -> LibraryConfig:
        return self._config

    @property
    def patterns(self) -> tuple[Pattern, ...]:
        return self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list_patterns(self) -> list[tuple[str, str]]:
        """(name, category) for every pattern."""
        return [(p.name, p.category) for p in self._patterns]

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        framework: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[Pattern]:
        """
        Find patterns matching every supplied criterion.

        Args:
            query: Case-insensitive substring of name and content
            category: Exact category
            framework: Exact framework
            tag: Exact tag, must be one of the pattern's tags

        Returns:
            Matching patterns in collection order; all of them when no
            criterion is given.
        """
        needle = query.lower() if query is not None else None
        return [
            p for p in self._patterns
            if (category is None or p.metadata.category == category)
            and (framework is None or p.metadata.framework == framework)
            and (tag is None or tag in p.metadata.tags)
            and (needle is None or needle in f"{p.name} {p.content}".lower())
        ]

    def get(self, name: str) -> Optional[Pattern]:
        """First pattern named exactly ``name``, or None."""
        for p in self._patterns:
            if p.name == name:
                return p
        return None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(
        self,
        name: str,
        category: str,
        framework: str,
        tags: Sequence[str],
        content: str,
        projects: Optional[Sequence[str]] = None,
    ) -> Path:
        """
        Validate the name and write a new pattern document.

        The loaded collection is not updated; the pattern shows up after
        the next load.

        Raises:
            PatternValidationError: Invalid name, nothing is written
            PatternWriteError: The file could not be written
        """
        validate_pattern_name(name)
        return write_pattern(
            self._config.patterns_dir,
            name,
            category,
            framework,
            tags,
            content,
            projects=projects,
            extension=self._config.extension,
        )
