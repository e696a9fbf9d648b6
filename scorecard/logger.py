"""
Logging setup for the strategy scorecard.

Everything logs under the "scorecard" namespace:
- logs/system.log  INFO and up, rotated
- logs/error.log   ERROR and up, rotated
- stderr           WARNING and up unless the caller asks for more

Modules grab their logger with ``get_logger("<component>")``
and never configure handlers themselves.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from scorecard.paths import LOGS_DIR

ROOT_LOGGER_NAME = "scorecard"

ROTATE_BYTES = 5 * 1024 * 1024
ROTATE_KEEP = 3

FILE_FORMAT = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
CONSOLE_FORMAT = logging.Formatter("[%(levelname)s] %(name)s: %(message)s")


def _rotating(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=ROTATE_BYTES, backupCount=ROTATE_KEEP, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(FILE_FORMAT)
    return handler


def setup_logging(
    log_level: int = logging.INFO,
    console_level: int = logging.WARNING,
    logs_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Attach file and console handlers to the "scorecard" logger.

    Calling it again replaces the handlers instead of adding more.
    """
    target = logs_dir or LOGS_DIR
    target.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    root.addHandler(_rotating(target / "system.log", log_level))
    root.addHandler(_rotating(target / "error.log", logging.ERROR))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(CONSOLE_FORMAT)
    root.addHandler(console)

    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a component, e.g. get_logger("registry") -> "scorecard.registry"."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME)
