"""
Logging configuration for pattern-library.

All output goes to stderr: stdout carries the MCP stdio protocol.
"""

import logging
import sys
import warnings

LOGGER_NAME = "pattern_library"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _stderr_handler(logger: logging.Logger):
    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler) and h.stream == sys.stderr:
            return h
    return None


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the pattern_library logger.

    Safe to call more than once; the handler is added only the first time
    and its level is updated on later calls.

    Args:
        verbose: DEBUG level if True, WARNING otherwise.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(LOGGER_NAME)

    handler = _stderr_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    handler.setLevel(level)
    logger.setLevel(level)

    if verbose:
        warnings.filterwarnings("default")
        logging.getLogger("mcp").setLevel(logging.DEBUG)
    else:
        logging.getLogger("mcp").setLevel(logging.WARNING)

    return logger
