# src/config/logging_config.py

"""Per-run log file for the catalog browser CLI.

``setup_logging`` opens ``logs/run_<YYYYmmdd_HHMMSS>.log`` and attaches
it to the ``catalog_browser`` logger.  Every module logs under a child
of that name:

* ``catalog_browser.api``: each failed request with its operation,
  key and raw upstream message, plus products dropped or fields
  ignored while decoding.
* ``catalog_browser.services``: controller loads, supersessions,
  failures and disposal.
* ``catalog_browser.pipeline``: the size of each projection and the
  query that produced it.
* ``catalog_browser.cli`` / ``catalog_browser.main``: the command run
  and its summary.

The file receives everything from DEBUG up.  stderr only shows
WARNING and above, since stdout is reserved for command output.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

ROOT_LOGGER_NAME = "catalog_browser"

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | "
    "%(message)s"
)

# No timestamp: these lines sit between rich status output on stderr
_STDERR_FORMAT = "%(levelname)s %(name)s: %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _active_log_file(root_logger: logging.Logger) -> Path | None:
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging() -> Path:
    """Attach the per-run file and stderr handlers to ``catalog_browser``.

    Returns:
        The log file for this run.  When handlers are already attached
        (a second call in the same process) they are left alone and the
        file they write to is returned.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    if root_logger.handlers:
        existing = _active_log_file(root_logger)
        if existing is not None:
            return existing

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(logging.Formatter(_STDERR_FORMAT))
    root_logger.addHandler(stderr_handler)

    root_logger.info(
        "Catalog browser logging to %s (API base %s)",
        log_file,
        Settings.API_BASE_URL,
    )
    return log_file
