"""Loaded set of parsed source files plus their shared symbol index."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Deque, Dict, Iterable, List, Optional

from .errors import ExtractionError
from .logging import get_logger
from .models import SourceFile
from .parsing import TypeScriptParser
from .symbols import SymbolIndex, module_candidates


def _relative_specifiers(source_file: SourceFile) -> List[str]:
    specifiers = [directive.specifier for directive in source_file.imports()]
    specifiers.extend(
        directive.source for directive in source_file.export_directives() if directive.source
    )
    return [specifier for specifier in specifiers if specifier.startswith(".")]


class Program:
    """Parsed root files plus every file they reach through relative imports.

    Only the root files are emitted; imported files exist so that parent
    classes outside the scanned folder still resolve.
    """

    def __init__(self, files: Iterable[SourceFile]) -> None:
        self._files: Dict[Path, SourceFile] = {source_file.path: source_file for source_file in files}
        self._symbol_index: Optional[SymbolIndex] = None

    @classmethod
    def load(cls, paths: Iterable[Path], parser: TypeScriptParser | None = None) -> "Program":
        parser = parser or TypeScriptParser()
        logger = get_logger("program")
        parsed: Dict[Path, SourceFile] = {}
        pending: Deque[Path] = deque(paths)
        root_count = len(pending)

        while pending:
            path = pending.popleft()
            if path in parsed:
                continue
            logger.debug("Parsing %s", path)
            try:
                source_file = parser.parse(path)
            except (OSError, UnicodeDecodeError) as exc:
                raise ExtractionError(path, exc) from exc
            parsed[path] = source_file

            for specifier in _relative_specifiers(source_file):
                target = next(
                    (candidate for candidate in module_candidates(path, specifier) if candidate.is_file()),
                    None,
                )
                if target is not None and target not in parsed:
                    pending.append(target)

        logger.debug(
            "Loaded %d source files (%d reached through imports)", len(parsed), len(parsed) - root_count
        )
        return cls(parsed.values())

    def get_source_file(self, path: Path) -> Optional[SourceFile]:
        return self._files.get(path)

    @property
    def symbol_index(self) -> SymbolIndex:
        """Program-wide index, built on first use and never mutated afterwards."""
        if self._symbol_index is None:
            self._symbol_index = SymbolIndex(self._files)
        return self._symbol_index


__all__ = ["Program"]
