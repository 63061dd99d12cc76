# === FILE: rank_spider/logger.py ===
"""Logging setup for **RankSpider**.

All modules log through children of the ``RankSpider`` logger::

    from rank_spider.logger import get_logger
    log = get_logger("crawler")     # -> "RankSpider.crawler"

The CLI calls :func:`init_logging` once per run with the level, log file
and format given on the command line.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "RankSpider"


def _handlers(fmt: str, log_file: Union[str, Path, None]) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the project logger: stdout, plus a rotating file if *log_file* is set."""
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    for handler in lg.handlers:
        handler.close()
    lg.handlers.clear()
    for handler in _handlers(log_format, log_file):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the project logger or one of its children (``RankSpider.<name>``)."""
    return logging.getLogger(_LOGGER_NAME if not name else f"{_LOGGER_NAME}.{name}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging", "get_logger"]
