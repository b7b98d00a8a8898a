"""Console logging setup for the command-line entry point.

Library modules only create `logging.getLogger(__name__)` loggers; the
handler lives here so importing the package never touches global
logging state.
"""
import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(message)s"

_console = None


def configure_logging(verbose: bool = False, stream=None) -> logging.Logger:
    """Attach one console handler to the package logger.

    Safe to call repeatedly: the handler from a previous call is replaced,
    never duplicated.
    """
    global _console
    log = logging.getLogger("sierpinski")
    level = logging.DEBUG if verbose else logging.INFO
    if _console is not None:                                # avoid dupes on re-entry
        log.removeHandler(_console)
    _console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    _console.setFormatter(logging.Formatter(LOG_FORMAT))
    _console.setLevel(level)
    log.addHandler(_console)
    log.setLevel(level)
    log.propagate = False
    return log
