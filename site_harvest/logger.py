# === FILE: site_harvest/logger.py ===
"""Logging for **SiteHarvest**.

Every component logs through a child of the ``SiteHarvest`` logger
(``SiteHarvest.crawler``, ``SiteHarvest.fetcher``, ...), so one call to
:func:`configure` (the CLI does it from ``--log-level`` / ``--log-file`` /
``--log-format``) controls the whole run::

      from site_harvest.logger import get_logger
      log = get_logger("crawler")
      log.info("Crawl started")

Chatty third-party loggers (asyncio, aiohttp access log) are held at WARNING
unless the project itself runs at DEBUG.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

# --------------------------------------------------------------------------- #
# Constants                                                                   #
# --------------------------------------------------------------------------- #

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteHarvest"
NOISY_LOGGERS: Final[tuple[str, ...]] = ("asyncio", "aiohttp.access", "aiohttp.client")

_LevelT = Union[int, str]


def _stdout_handler(fmt: str) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _file_handler(file: Path | str, fmt: str) -> RotatingFileHandler:
    Path(file).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(file),
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _quiet_libraries(project_level: int) -> None:
    level = logging.DEBUG if project_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


def get_logger(component: str | None = None) -> logging.Logger:
    """Project logger, or its child ``SiteHarvest.<component>``."""
    if not component:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{component}")


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """(Re)configure the project logger.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Path to a rotating logfile; *None* keeps output on stdout only.
    log_format
        Format string for :class:`logging.Formatter`.
    replace_handlers
        Close and drop the handlers of a previous call first.
    """
    lg = get_logger()
    lg.setLevel(level.upper() if isinstance(level, str) else level)

    if replace_handlers:
        for handler in list(lg.handlers):
            handler.close()
        lg.handlers.clear()

    lg.addHandler(_stdout_handler(log_format))
    if log_file is not None:
        lg.addHandler(_file_handler(log_file, log_format))

    lg.propagate = False
    _quiet_libraries(lg.level)
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Start-up shortcut for the CLI: always replaces earlier handlers."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "get_logger", "init_logging", "LOGGER_NAME", "NOISY_LOGGERS"]
