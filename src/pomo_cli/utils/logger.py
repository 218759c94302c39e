"""Application-wide logging to a rotating file in platformdirs user_log_dir.

The terminal is owned by the timer loop, so records never go to a stream
handler. Modules log through ``get_logger(__name__)``; their records
propagate to the ``pomo_cli`` logger, which owns the single file handler.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "pomo_cli"
_LOG_FILE = "pomo.log"
_MAX_BYTES = 1024 * 1024  # 1 MB
_BACKUP_COUNT = 3

_file_handler: logging.handlers.RotatingFileHandler | None = None


def _open_file_handler() -> logging.handlers.RotatingFileHandler:
    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger, or the child logger ``name``.

    The log file is attached to the ``pomo_cli`` logger on first use. Other
    handlers already present on that logger (e.g. a test harness's capture
    handler) do not prevent it.
    """
    global _file_handler
    app_logger = logging.getLogger(_APP_NAME)

    if _file_handler is None:
        _file_handler = _open_file_handler()
        app_logger.addHandler(_file_handler)
        app_logger.setLevel(logging.DEBUG)
        app_logger.propagate = False

    if name is None or name == _APP_NAME:
        return app_logger
    if not name.startswith(_APP_NAME + "."):
        name = f"{_APP_NAME}.{name}"
    return logging.getLogger(name)


def close_logger() -> None:
    """Flush, detach and close the log file. The next get_logger() reopens it."""
    global _file_handler
    if _file_handler is None:
        return

    logging.getLogger(_APP_NAME).removeHandler(_file_handler)
    _file_handler.close()
    _file_handler = None
