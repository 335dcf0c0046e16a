"""
CLI interface for the pattern library.

Usage:
    pattern-library mcp                      # stdio MCP server
    pattern-library list
    pattern-library search "retry" --tag go
    pattern-library get retry-backoff
    pattern-library create my-pattern -c rust -f axum -t web < body.md
"""

import sys
from pathlib import Path
from typing import Optional, Sequence

import typer
from typing_extensions import Annotated

from .config import ENV_PATTERNS_DIR, LibraryConfig, is_verbose, load_config
from .errors import ConfigError, PatternValidationError, PatternWriteError
from .library import PatternLibrary
from .logging_config import configure_logging
from .types import Pattern

# Characters of content shown per search result
SEARCH_PREVIEW_CHARS = 200

NO_PATTERNS_FOUND = "No patterns found."


# -----------------------------------------------------------------------------
# Output Formatting
#
# Shared by the CLI commands and the MCP tools, so both surfaces render
# results identically.
# -----------------------------------------------------------------------------

def render_pattern_list(rows: Sequence[tuple[str, str]]) -> str:
    """One ``- name (category)`` line per pattern."""
    return "\n".join(f"- {name} ({category})" for name, category in rows)


def render_search_results(patterns: Sequence[Pattern]) -> str:
    """Name in bold followed by a content preview, blocks separated by a blank line."""
    if not patterns:
        return NO_PATTERNS_FOUND
    return "\n\n".join(
        f"**{p.name}**\n{p.content[:SEARCH_PREVIEW_CHARS]}" for p in patterns
    )


def render_not_found(name: str) -> str:
    return f"Pattern '{name}' not found."


def render_created(name: str, path: Path) -> str:
    return f"Pattern '{name}' created at {path}"


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------

app = typer.Typer(
    name="pattern-library",
    help="Library of reusable code patterns stored as markdown files.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

# Global state for CLI options
_patterns_dir_override: Optional[Path] = None


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option(
        "--verbose", "-v",
        help="Enable debug-level logging to stderr",
    )] = False,
    patterns_dir: Annotated[Optional[Path], typer.Option(
        "--patterns-dir", "-d",
        envvar=ENV_PATTERNS_DIR,
        help="Directory holding the pattern documents",
    )] = None,
):
    """Library of reusable code patterns stored as markdown files."""
    global _patterns_dir_override
    _patterns_dir_override = patterns_dir
    configure_logging(verbose=verbose or is_verbose())


def _get_library() -> PatternLibrary:
    """Load the library from --patterns-dir, or exit if none is configured."""
    if _patterns_dir_override is not None:
        config = LibraryConfig(patterns_dir=_patterns_dir_override.expanduser())
    else:
        try:
            config = load_config()
        except ConfigError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    return PatternLibrary.load(config)


@app.command("list")
def list_cmd():
    """List all available patterns."""
    library = _get_library()
    typer.echo(render_pattern_list(library.list_patterns()))


@app.command()
def search(
    query: Annotated[Optional[str], typer.Argument(
        help="Text to find in pattern names and content (case-insensitive)",
    )] = None,
    category: Annotated[Optional[str], typer.Option(
        "--category", "-c", help="Exact category",
    )] = None,
    framework: Annotated[Optional[str], typer.Option(
        "--framework", "-f", help="Exact framework",
    )] = None,
    tag: Annotated[Optional[str], typer.Option(
        "--tag", "-t", help="Exact tag",
    )] = None,
):
    """Search patterns by text, category, framework or tag."""
    library = _get_library()
    results = library.search(query=query, category=category, framework=framework, tag=tag)
    typer.echo(render_search_results(results))


@app.command()
def get(
    name: Annotated[str, typer.Argument(help="Pattern name")],
):
    """Print the full content of a pattern."""
    library = _get_library()
    pattern = library.get(name)
    if pattern is None:
        typer.echo(render_not_found(name))
        return
    typer.echo(pattern.content)


@app.command()
def create(
    name: Annotated[str, typer.Argument(help="Pattern name (letters, digits, - and _)")],
    category: Annotated[str, typer.Option(
        "--category", "-c", help="Pattern category",
    )],
    framework: Annotated[str, typer.Option(
        "--framework", "-f", help="Pattern framework",
    )],
    tag: Annotated[Optional[list[str]], typer.Option(
        "--tag", "-t", help="Tag (repeatable)",
    )] = None,
    project: Annotated[Optional[list[str]], typer.Option(
        "--project", "-p", help="Project that used this pattern (repeatable)",
    )] = None,
    content: Annotated[Optional[str], typer.Option(
        "--content", help="Pattern body; read from stdin when omitted",
    )] = None,
):
    """Write a new pattern document to the patterns directory."""
    if content is None:
        content = sys.stdin.read()

    library = _get_library()
    try:
        path = library.create(
            name, category, framework, tag or [], content, projects=project,
        )
    except (PatternValidationError, PatternWriteError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(render_created(name, path))


@app.command()
def mcp():
    """Start MCP stdio server for AI agent integration."""
    import os
    if _patterns_dir_override is not None:
        os.environ[ENV_PATTERNS_DIR] = str(_patterns_dir_override)
    from .mcp import main as mcp_main
    mcp_main()


# -----------------------------------------------------------------------------

def main():
    try:
        app()
    except SystemExit:
        raise  # Let typer handle exit codes
    except KeyboardInterrupt:
        raise SystemExit(130)  # Standard exit code for Ctrl+C
    except Exception as e:
        # Log full traceback to file, show clean message to user
        from .errors import log_exception
        log_path = log_exception(e, context="pattern-library CLI")
        typer.echo(f"Error: {e}", err=True)
        typer.echo(f"Details logged to {log_path}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
