"""
Logging setup for the song library service.

``setup_logging`` is called once by ``create_app``.  The configured
level is always applied, also to the uvicorn loggers, even when a
server or test runner attached its own handlers first; only the
console handler is skipped in that case.  Components never configure
logging themselves: they accept a ``logger`` argument and fall back to
their module logger.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_level(level: str) -> int:
    """Map a level name (case insensitive) to its number; unknown names mean INFO."""
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    return any(
        isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path
        for handler in logger.handlers
    )


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name applied to the root and uvicorn loggers.
    logfile : Optional[str]
        Path of a file to log to as well.  Calling again with the same
        path does not add a second handler.
    """
    numeric_level = resolve_level(level)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not root.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        if not _has_file_handler(root, log_path):
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
