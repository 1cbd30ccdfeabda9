"""
Logging setup for the command-line run.

Modules log through ``logging.getLogger(__name__)``; only the entry point
installs a handler.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Send all ``tastescore`` log records at *level* or above to stderr."""
    root = logging.getLogger("tastescore")
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
