"""
Logging setup for the percolation tools.
Human-readable lines on stderr; reports themselves go to stdout.
"""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# loggers of this project; third-party loggers (numba, matplotlib) stay at WARNING
PROJECT_LOGGERS = (
    "union_find",
    "percolation",
    "percolation_stats",
    "percolation_plots",
    "percolation_cli",
)


def configure_logging(level="WARNING"):
    """
    Install a single stderr handler on the root logger and apply `level`
    to the project loggers only.

    :param level: level name ("DEBUG", "INFO", ...) or numeric level.
    :return: the root logger.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"unknown log level {level!r}")
        level = numeric

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_percolation_handler", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._percolation_handler = True
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    for name in PROJECT_LOGGERS:
        logging.getLogger(name).setLevel(level)
    return root
