"""
Write new pattern documents in the canonical on-disk format.

The writer only touches the filesystem. A running PatternLibrary does not
see the new document until it is loaded again.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

import yaml

from .errors import PatternWriteError
from .parser import DELIMITER
from .types import PATTERN_EXTENSION

logger = logging.getLogger(__name__)

# Unicode line breaks YAML folds inside plain and single-quoted scalars
_UNICODE_BREAKS = ("\x85", "\u2028", "\u2029")


def _header_line(key: str, value) -> str:
    """One ``key: value`` header line, quoted only where YAML needs it.

    Lists come out in flow style (``tags: [go, retry]``). Values holding a
    Unicode line break are double-quoted so the break is escaped.
    """
    strings = value if isinstance(value, list) else [value]
    needs_escape = any(b in s for s in strings for b in _UNICODE_BREAKS)
    return yaml.safe_dump(
        {key: value},
        default_style='"' if needs_escape else None,
        default_flow_style=None if isinstance(value, list) else False,
        allow_unicode=True,
        sort_keys=False,
        width=float("inf"),
    ).rstrip("\n")


def render_pattern_document(
    name: str,
    category: str,
    framework: str,
    tags: Sequence[str],
    content: str,
    projects: Optional[Sequence[str]] = None,
) -> str:
    """Render a pattern in the canonical document format."""
    lines = [
        DELIMITER,
        _header_line("pattern", name),
        _header_line("category", category),
        _header_line("framework", framework),
    ]
    if projects:
        lines.append(_header_line("projects", list(projects)))
    if tags:
        lines.append(_header_line("tags", list(tags)))
    lines.append(DELIMITER)
    lines.append("")
    lines.append(content)
    return "\n".join(lines) + "\n"


def write_pattern(
    directory: Path,
    name: str,
    category: str,
    framework: str,
    tags: Sequence[str],
    content: str,
    projects: Optional[Sequence[str]] = None,
    extension: str = PATTERN_EXTENSION,
) -> Path:
    """
    Write a pattern document to ``directory/<name>.<extension>``.

    The name must already have passed validate_pattern_name(); no further
    sanitising happens here. An existing file with the same name is
    overwritten. The directory is not created.

    Returns:
        Path of the written file

    Raises:
        PatternWriteError: On any I/O failure
    """
    file_path = Path(directory) / f"{name}.{extension}"
    document = render_pattern_document(
        name, category, framework, tags, content, projects=projects,
    )
    try:
        file_path.write_text(document, encoding="utf-8")
    except OSError as e:
        raise PatternWriteError(f"Failed to create pattern: {e}") from e

    logger.info("Wrote pattern %s to %s", name, file_path)
    return file_path
