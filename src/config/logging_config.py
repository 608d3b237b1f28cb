# src/config/logging_config.py

"""Per-run logging for chango.

Every CLI invocation writes to its own ``logs/run_<timestamp>.log`` file.
Child loggers (``chango.pricing``, ``chango.catalog``, ...) propagate to
the ``chango`` project logger configured here, so one file holds the
whole run.  The console only shows warnings unless ``verbose`` is set.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

PROJECT_LOGGER = "chango"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)
_CONSOLE_FORMAT = "%(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    verbose: bool = False,
    logs_dir: Path | None = None,
) -> Path:
    """Attach file and console handlers to the project logger.

    Args:
        verbose: Lower the console threshold from WARNING to INFO.
        logs_dir: Directory for the run log; defaults to
            ``Settings.LOGS_DIR``.

    Returns:
        Path of the log file for this run.
    """
    directory = logs_dir or Settings.LOGS_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / (
        f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    )

    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(logging.DEBUG)

    # Already configured in this process (repeated CLI calls, tests)
    if project_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(
        logging.INFO if verbose else logging.WARNING
    )
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    project_logger.addHandler(file_handler)
    project_logger.addHandler(console_handler)
    project_logger.debug("Logging to %s", log_file)

    return log_file
