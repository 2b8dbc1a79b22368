"""Central logging setup for the project."""
from __future__ import annotations
import logging
import sys

def setup_logging(level: int = logging.WARNING) -> None:
    """
    Configure root logger to write to stderr.

    stdout is reserved for the streamed summary and the report.

    Args:
        level: Logging level.
    """
    handler = logging.StreamHandler(sys.stderr)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
