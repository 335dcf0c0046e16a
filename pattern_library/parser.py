"""
Parse pattern documents: a YAML header between ``---`` lines, then a body.

Parsing is permissive. A document that does not fit the format produces no
pattern rather than an error, so one bad file never hides the rest of the
library.
"""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .types import Pattern, PatternMetadata

logger = logging.getLogger(__name__)

DELIMITER = "---"
_OPENING = DELIMITER + "\n"
_SEPARATOR = "\n" + DELIMITER + "\n"


def _string_list(value: Any) -> Optional[tuple[str, ...]]:
    """Coerce an optional YAML list of strings. None means wrong type."""
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return None
    return tuple(value)


def parse_metadata(header: str) -> Optional[PatternMetadata]:
    """Parse the header block. Returns None if it is malformed."""
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError:
        return None
    if not isinstance(data, dict):
        return None

    name = data.get("pattern")
    category = data.get("category")
    if not isinstance(name, str) or not name:
        return None
    if not isinstance(category, str) or not category:
        return None

    framework = data.get("framework")
    if framework is not None and not isinstance(framework, str):
        return None

    projects = _string_list(data.get("projects"))
    tags = _string_list(data.get("tags"))
    if projects is None or tags is None:
        return None

    return PatternMetadata(
        pattern=name,
        category=category,
        framework=framework,
        projects=projects,
        tags=tags,
    )


def parse_pattern(text: str, path: Path) -> Optional[Pattern]:
    """
    Parse document text into a Pattern.

    Returns:
        The Pattern, or None when the opening delimiter, the closing
        delimiter or a valid header is missing.
    """
    if not text.startswith(_OPENING):
        return None
    header, sep, body = text[len(_OPENING):].partition(_SEPARATOR)
    if not sep:
        return None

    metadata = parse_metadata(header)
    if metadata is None:
        return None

    return Pattern(metadata=metadata, content=body.strip(), filepath=path)


def load_pattern_file(path: Path) -> Optional[Pattern]:
    """Read and parse one pattern file. Unreadable or malformed files give None."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable pattern file %s: %s", path, e)
        return None

    pattern = parse_pattern(text, path)
    if pattern is None:
        logger.debug("Skipping malformed pattern file %s", path)
    return pattern
