"""Logging utilities for shapegen commands."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, Optional

_LOGGER_NAME = "shapegen"

_current_file: ContextVar[Optional[Path]] = ContextVar("shapegen_current_file", default=None)


class CurrentFileFilter(logging.Filter):
    """Adds `file_prefix` to records so messages name the source being processed."""

    def filter(self, record: logging.LogRecord) -> bool:
        current = _current_file.get()
        record.file_prefix = f"{current.name}: " if current is not None else ""
        return True


@contextmanager
def processing_file(path: Path) -> Iterator[None]:
    """Tag log records emitted inside the block with `path`."""
    token = _current_file.set(path)
    try:
        yield
    finally:
        _current_file.reset(token)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the shapegen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the shapegen logger with console output and optional file sink.

    While a source file is being processed, lines carry its name ahead of the
    message: `[shapegen] INFO User.ts: ...`.
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
    stream_handler.addFilter(CurrentFileFilter())
    stream_handler.setFormatter(
        logging.Formatter("[shapegen] %(levelname)s %(file_prefix)s%(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(CurrentFileFilter())
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(file_prefix)s%(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["CurrentFileFilter", "configure_logging", "get_logger", "processing_file"]
