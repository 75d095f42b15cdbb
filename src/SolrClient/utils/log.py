"""SolrClient logging utilities.

The package logger is silent by default (library code emits DEBUG records
only). The command line front end calls `configure_logging` to print records
as `mm-dd HH:MM:SS [LVL] message`, LVL being one of DEBG/INFO/WARN/ERRO, and
optionally mirror them to `<log_dir>/<action>/<action>_<timestamp>.log`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final

LOG_FORMAT: Final = "%(asctime)s [%(levelabbr)s] %(message)s"
DATE_FORMAT: Final = "%m-%d %H:%M:%S"

_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}

log = logging.getLogger("SolrClient")
log.addHandler(logging.NullHandler())


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


def _file_handler(action: str, log_dir: str) -> logging.FileHandler:
    action_dir = Path(log_dir or "log") / action
    action_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%m%d%H%M%S")
    handler = logging.FileHandler(action_dir / f"{action}_{stamp}.log", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    return handler


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Install console (and optional file) handlers on the package logger.

    Replaces handlers from earlier calls, so it is safe to call once per
    command.

    Args:
        level: Console level name (e.g., INFO, DEBUG); unknown names mean INFO.
        action: CLI action name; required for file logging.
        log_to_file: Whether to mirror every record, DEBUG included, to a file.
        log_dir: Base directory for log files.

    Returns:
        Path of the log file, or None when logging to console only.
    """
    console_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    formatter = _AbbrevLevelFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    handlers: list[logging.Handler] = [console]

    log_path: Path | None = None
    if log_to_file and action:
        file_handler = _file_handler(action, log_dir)
        log_path = Path(file_handler.baseFilename)
        handlers.append(file_handler)

    log.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if log_path else console_level)
    log.propagate = False
    return log_path
