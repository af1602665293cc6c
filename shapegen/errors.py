"""Exception types raised by shapegen."""

from __future__ import annotations

from pathlib import Path


class ShapeGenError(RuntimeError):
    """Base class for shapegen failures."""


class ConfigError(ShapeGenError):
    """Raised when the configuration file cannot be parsed."""


class MissingSourceFileError(ShapeGenError):
    """Raised when a discovered path has no parsed representation."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Source file not found: {path}")
        self.path = path


class ExtractionError(ShapeGenError):
    """Raised when processing a file fails; aborts the run."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Failed while processing {path}: {cause}")
        self.path = path
        self.cause = cause


__all__ = ["ConfigError", "ExtractionError", "MissingSourceFileError", "ShapeGenError"]
