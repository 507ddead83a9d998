"""
Logging setup for the Todo API.

``setup_logging`` reads ``LOG_LEVEL`` and ``LOG_FILE`` from the settings
unless told otherwise, installs a console handler and, when a log file
is configured, a file handler on the root logger.  The handlers are
tagged so repeated calls (one per ``create_app``) replace nothing and
add nothing, while handlers installed by other code, such as pytest's
capture handler, are left alone.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_TAG = "todo_api"


def parse_level(level: str) -> int:
    """Map a level name such as ``"debug"`` to its numeric value.

    Raises ``ValueError`` for names the ``logging`` module does not
    know, so a typo in ``LOG_LEVEL`` is reported at startup.
    """
    numeric_level = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level {level!r}")
    return numeric_level


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> None:
    root = logging.getLogger()
    root.setLevel(parse_level(level or settings.log_level))

    if any(handler.get_name() == _HANDLER_TAG for handler in root.handlers):
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    logfile = logfile or settings.log_file
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.set_name(_HANDLER_TAG)
        handler.setFormatter(formatter)
        root.addHandler(handler)
