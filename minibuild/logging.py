"""Logging setup shared by the build and watch commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "minibuild"

_BUILD_FORMAT = "[minibuild] %(levelname)s %(message)s"
# Watch sessions run many passes; a clock prefix tells them apart.
_WATCH_FORMAT = "[minibuild %(asctime)s] %(levelname)s %(message)s"
_WATCH_DATEFMT = "%H:%M:%S"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger such as ``minibuild.scheduler``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def console_formatter(*, watch: bool = False) -> logging.Formatter:
    if watch:
        return logging.Formatter(_WATCH_FORMAT, datefmt=_WATCH_DATEFMT)
    return logging.Formatter(_BUILD_FORMAT)


def configure_logging(
    *,
    verbose: bool = False,
    watch: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Route minibuild records to the console and, optionally, a log file.

    Calling this again replaces the handlers installed by the previous call,
    so every CLI invocation starts from a clean logger.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(console_formatter(watch=watch))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "console_formatter", "get_logger"]
