"""
Shared pytest fixtures for pattern-library tests.

Provides pattern directories on tmp_path with well-formed and malformed
documents.
"""

from pathlib import Path

import pytest

from pattern_library.config import LibraryConfig
from pattern_library.types import Pattern, PatternMetadata


RETRY_BACKOFF_DOC = """---
pattern: retry-backoff
category: resilience
framework: tokio
projects: [billing, ingest]
tags: [go, retry]
---

Retry failed calls with exponential backoff and jitter.

Cap the delay and give up after a fixed number of attempts.
"""


def write_doc(directory: Path, filename: str, text: str) -> Path:
    path = directory / filename
    path.write_text(text, encoding="utf-8")
    return path


def make_pattern(name="p", category="rust", framework=None, tags=(),
                 projects=(), content="body"):
    """Create a test Pattern without touching disk."""
    return Pattern(
        metadata=PatternMetadata(
            pattern=name,
            category=category,
            framework=framework,
            projects=tuple(projects),
            tags=tuple(tags),
        ),
        content=content,
        filepath=Path(f"/patterns/{name}.md"),
    )


@pytest.fixture
def patterns_dir(tmp_path: Path) -> Path:
    """Empty patterns directory."""
    d = tmp_path / "patterns"
    d.mkdir()
    return d


@pytest.fixture
def config(patterns_dir: Path) -> LibraryConfig:
    return LibraryConfig(patterns_dir=patterns_dir)


@pytest.fixture
def retry_dir(patterns_dir: Path) -> Path:
    """Directory with the single retry-backoff document."""
    write_doc(patterns_dir, "retry-backoff.md", RETRY_BACKOFF_DOC)
    return patterns_dir


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real PATTERNS_DIR and ~/.pattern-library."""
    monkeypatch.delenv("PATTERNS_DIR", raising=False)
    monkeypatch.delenv("PATTERN_LIBRARY_VERBOSE", raising=False)
    monkeypatch.setenv("PATTERN_LIBRARY_HOME", str(tmp_path / "home"))


@pytest.fixture(autouse=True)
def restore_package_logger():
    """configure_logging() attaches handlers bound to the captured stderr."""
    import logging
    logger = logging.getLogger("pattern_library")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
