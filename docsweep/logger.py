# === FILE: docsweep/logger.py ===
"""Logging for DocSweep.

Every module logs through the one ``DocSweep`` logger exported here::

    from docsweep.logger import logger

Log lines go to **stderr**, so stdout stays free for the JSON report that
``docsweep sweep`` prints (``docsweep sweep | jq .summary`` works). A rotating
log file can be added with :func:`configure`; the CLI calls
:func:`init_logging` once its ``--log-*`` options are parsed.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "DocSweep"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _console_handler(fmt: str) -> logging.StreamHandler:
    # Bound to the stderr of the moment, so CliRunner's capture is honoured.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _rotating_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    path = Path(file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Point the DocSweep logger at stderr and, optionally, a rotating file.

    Parameters
    ----------
    level
        Level name or number, e.g. ``"DEBUG"`` for per-request detail.
    log_file
        Rotating log file (created with its parent directories); *None*
        keeps output on stderr only.
    log_format
        :class:`logging.Formatter` format shared by every handler.
    replace_handlers
        Close and drop the handlers installed by an earlier call first.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)

    if replace_handlers:
        for handler in list(lg.handlers):
            lg.removeHandler(handler)
            handler.close()

    lg.addHandler(_console_handler(log_format))
    if log_file is not None:
        lg.addHandler(_rotating_handler(log_file, log_format))

    # Sweep lines should not be printed twice by a root handler.
    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Fresh configuration for one CLI invocation."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
