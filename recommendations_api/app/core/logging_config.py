"""
Logging setup for the service.

``setup_logging`` wires the root logger from ``settings``: a console
handler always, and a UTF-8 file handler when ``LOG_FILE`` is set.
The uvicorn loggers are pointed at the same handlers so request logs
and service logs share one format.  Calling it again is a no-op, which
keeps repeated ``create_app`` calls in the test suite from duplicating
output.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _build_handlers(logfile: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : Optional[str]
        Level name, case insensitive; defaults to ``settings.log_level``.
        Unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Log file path; defaults to ``settings.log_file`` (empty means
        console only).
    """
    root = logging.getLogger()
    if root.handlers:
        return

    level_name = (level or settings.log_level).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _build_handlers(logfile if logfile is not None else settings.log_file):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # uvicorn installs its own handlers when run from the CLI; route its
    # records through the root handlers instead.
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True
