"""
Error types and error logging for pattern-library.

Logs full stack traces for debugging while showing clean messages to users.
"""

import os
import traceback
from datetime import datetime, timezone
from pathlib import Path


class PatternLibraryError(Exception):
    """Base class for pattern-library errors."""


class ConfigError(PatternLibraryError):
    """Required configuration is missing. Fatal at startup."""


class PatternValidationError(PatternLibraryError, ValueError):
    """A proposed pattern name was rejected. The message is user-facing."""


class PatternWriteError(PatternLibraryError):
    """Writing a pattern document failed. The OSError is chained as __cause__."""


def _error_log_path() -> Path:
    """Resolve error log path, respecting PATTERN_LIBRARY_HOME."""
    home = os.environ.get("PATTERN_LIBRARY_HOME")
    if home:
        return Path(home) / "errors.log"
    return Path.home() / ".pattern-library" / "errors.log"


def log_exception(exc: Exception, context: str = "") -> Path:
    """
    Log exception with full traceback to file.

    Args:
        exc: The exception that occurred
        context: Optional context string (e.g., tool name)

    Returns:
        Path to the error log file
    """
    log_path = _error_log_path()
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(log_path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o600)
        with os.fdopen(fd, "a") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"[{timestamp}]")
            if context:
                f.write(f" {context}")
            f.write("\n")
            f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    except OSError:
        pass  # Can't write error log — don't crash over it
    return log_path
