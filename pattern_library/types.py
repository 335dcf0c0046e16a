"""
Data types for the pattern library.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import PatternValidationError


# File extension reserved for pattern documents (without the dot)
PATTERN_EXTENSION = "md"

MAX_NAME_LENGTH = 100

# Characters allowed in a pattern name besides alphanumerics
_NAME_EXTRA_CHARS = frozenset("-_")


@dataclass(frozen=True)
class PatternMetadata:
    """
    Header block of a pattern document.

    Attributes:
        pattern: Pattern name, the lookup key (not enforced unique)
        category: Free-text classification, e.g. "rust" or "resilience"
        framework: Optional framework label, e.g. "axum"
        projects: Projects in which the pattern was used, in document order
        tags: Tags as written; duplicates are kept
    """
    pattern: str
    category: str
    framework: Optional[str] = None
    projects: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Pattern:
    """A parsed pattern document."""
    metadata: PatternMetadata
    content: str
    filepath: Path = field(compare=False)

    @property
    def name(self) -> str:
        return self.metadata.pattern

    @property
    def category(self) -> str:
        return self.metadata.category


def validate_pattern_name(name: str) -> None:
    """Validate a proposed pattern name before it becomes a file name.

    Names are 1-100 characters of letters, digits, ``-`` and ``_``. That
    excludes path separators, dots and whitespace, so a valid name can
    never escape the patterns directory.

    Raises:
        PatternValidationError: With a message naming the failed rule
    """
    if not name or len(name) > MAX_NAME_LENGTH:
        raise PatternValidationError(f"Pattern name must be 1-{MAX_NAME_LENGTH} characters")
    if any(not c.isalnum() and c not in _NAME_EXTRA_CHARS for c in name):
        raise PatternValidationError(
            "Pattern name can only contain alphanumeric, dash and underscore characters"
        )
