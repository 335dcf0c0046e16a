"""
MCP stdio server for the pattern library.

Exposes PatternLibrary operations as MCP tools so local AI agents can
discover, search and create reusable code patterns.

Usage:
    PATTERNS_DIR=~/patterns pattern-library mcp
    claude mcp add patterns -e PATTERNS_DIR=~/patterns -- pattern-library mcp

Patterns are loaded once at startup. Reads share the immutable collection
without locking. create_pattern writes to disk only, so a new pattern is
not returned by the other tools until the server restarts.
"""

import logging
import sys
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations
from pydantic import Field

from .cli import (
    render_created,
    render_not_found,
    render_pattern_list,
    render_search_results,
)
from .config import is_verbose, load_config
from .errors import ConfigError, PatternValidationError, PatternWriteError, log_exception
from .library import PatternLibrary
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Server setup
# ---------------------------------------------------------------------------

mcp = FastMCP(
    "pattern-library",
    instructions=(
        "I manage a library of software development patterns stored as markdown "
        "files with YAML frontmatter. Use me to discover, search, and create "
        "reusable code patterns and architectural solutions.\n\n"
        "Available operations:\n"
        "- list_patterns: Get overview of all available patterns\n"
        "- search_patterns: Find patterns by text, category, framework, or tags\n"
        "- get_pattern: Retrieve full content of a specific pattern\n"
        "- create_pattern: Add new patterns with proper metadata\n\n"
        "Patterns include categories like 'rust', 'aws', 'web' and frameworks "
        "like 'axum', 'lambda'. Each pattern contains implementation details, "
        "best practices, and usage examples.\n\n"
        "When creating patterns, include relevant tags and specify which projects "
        "used them for better discoverability. New patterns become searchable "
        "after the server restarts."
    ),
)

_library: Optional[PatternLibrary] = None


def _get_library() -> PatternLibrary:
    """Lazy-load the library from PATTERNS_DIR.

    main() calls this before serving, so a missing PATTERNS_DIR stops the
    server at startup rather than on the first tool call.
    """
    global _library
    if _library is None:
        _library = PatternLibrary.load(load_config())
    return _library


# ---------------------------------------------------------------------------
# Tool annotations
# ---------------------------------------------------------------------------

_READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False)
# Creating a pattern overwrites any existing file with the same name
_OVERWRITE = ToolAnnotations(destructiveHint=True, idempotentHint=True)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool(
    description="List all available patterns",
    annotations=_READ_ONLY,
)
async def list_patterns() -> str:
    """List all patterns as name and category."""
    return render_pattern_list(_get_library().list_patterns())


@mcp.tool(
    description="Search patterns by query, category, framework or tag",
    annotations=_READ_ONLY,
)
async def search_patterns(
    query: Annotated[Optional[str], Field(
        description="Text Search",
    )] = None,
    category: Annotated[Optional[str], Field(
        description="Filter by category",
    )] = None,
    framework: Annotated[Optional[str], Field(
        description="Filter by framework",
    )] = None,
    tag: Annotated[Optional[str], Field(
        description="Filter by tag",
    )] = None,
) -> str:
    """Search patterns."""
    results = _get_library().search(
        query=query, category=category, framework=framework, tag=tag,
    )
    return render_search_results(results)


@mcp.tool(
    description="Get the pattern based on the pattern name",
    annotations=_READ_ONLY,
)
async def get_pattern(
    pattern_name: Annotated[str, Field(description="Pattern Name")],
) -> str:
    """Retrieve the full content of a pattern."""
    pattern = _get_library().get(pattern_name)
    if pattern is None:
        return render_not_found(pattern_name)
    return pattern.content


@mcp.tool(
    description=(
        "Create patterns by providing, category, framework, projects this pattern "
        "was used in, tags, and the content. Look to existing patterns for examples "
        "on how this should look"
    ),
    annotations=_OVERWRITE,
)
async def create_pattern(
    pattern_name: Annotated[str, Field(description="Pattern name")],
    category: Annotated[str, Field(description="Pattern category")],
    framework: Annotated[str, Field(description="Pattern framework")],
    tag: Annotated[list[str], Field(description="Pattern tags")],
    content: Annotated[str, Field(description="Pattern content")],
    projects: Annotated[Optional[list[str]], Field(
        description="Projects in which these patterns were used",
    )] = None,
) -> str:
    """Write a new pattern document.

    Failures reach the client as an error result whose text carries
    "Invalid pattern name:" or "Failed to create pattern:".
    """
    library = _get_library()
    try:
        path = library.create(
            pattern_name, category, framework, tag, content, projects=projects,
        )
    except PatternValidationError as e:
        raise ToolError(f"Invalid pattern name: {e}") from e
    except PatternWriteError as e:
        log_exception(e, context="create_pattern")
        raise ToolError(str(e)) from e
    return render_created(pattern_name, path)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main():
    """Run the MCP stdio server."""
    configure_logging(verbose=is_verbose())
    logger.info("Starting MCP server")

    try:
        library = _get_library()
    except ConfigError as e:
        print(f"pattern-library: {e}", file=sys.stderr)
        raise SystemExit(1)
    logger.info("Serving %d patterns from %s", len(library), library.config.patterns_dir)

    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
