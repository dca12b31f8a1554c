# storefront_prices/config/logging_config.py

"""Logging for scheduled price update runs.

A run writes everything (DEBUG and up) to ``logs/run_<timestamp>.log``
and echoes warnings and errors to stderr, where the CI job output shows
them next to the exit status. Provider warnings and the failure
traceback of an aborted run end up in both places.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from storefront_prices.config.settings import Settings

LOGGER_NAME = "storefront_prices"

_RUN_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [%(name)s] %(funcName)s:%(lineno)d %(message)s"
)
_STDERR_FORMAT = "%(levelname)s: %(message)s"
_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _existing_run_log(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(logs_dir: Path | None = None) -> Path:
    """Attach the run log and stderr handlers to the package logger.

    Only the first call configures anything; later calls return the
    file the current run is already logging to.

    Args:
        logs_dir: Where to create the run log. Defaults to
            :attr:`Settings.LOGS_DIR`.

    Returns:
        Path of the run log file.
    """
    logger = logging.getLogger(LOGGER_NAME)
    current = _existing_run_log(logger)
    if current is not None:
        return current

    target_dir = Settings.LOGS_DIR if logs_dir is None else logs_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    log_file = target_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"

    run_log = logging.FileHandler(log_file, encoding="utf-8")
    run_log.setLevel(logging.DEBUG)
    run_log.setFormatter(
        logging.Formatter(_RUN_LOG_FORMAT, datefmt=_TIMESTAMP_FORMAT)
    )

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(logging.WARNING)
    stderr.setFormatter(logging.Formatter(_STDERR_FORMAT))

    logger.setLevel(logging.DEBUG)
    logger.addHandler(run_log)
    logger.addHandler(stderr)
    logger.debug("Run log opened at %s", log_file)
    return log_file
