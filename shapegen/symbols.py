"""Program-wide symbol index used to resolve `extends` references."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .logging import get_logger
from .models import (
    ClassDeclaration,
    Declaration,
    ImportBinding,
    ImportDirective,
    SourceFile,
    TypeReference,
)

_MODULE_SUFFIXES = (".ts", ".tsx", ".d.ts")
_INDEX_FILES = ("index.ts", "index.tsx", "index.d.ts")
_JS_SUFFIXES = {".js": ".ts", ".jsx": ".tsx", ".mjs": ".ts", ".cjs": ".ts"}

_Seen = Set[Tuple[Path, str]]


def _prefer_class(candidates: List[Declaration]) -> Optional[Declaration]:
    """Pick the value declaration among merged declarations of one name."""
    for candidate in candidates:
        if isinstance(candidate, ClassDeclaration):
            return candidate
    return candidates[0] if candidates else None


def module_candidates(importer: Path, specifier: str) -> List[Path]:
    """Normalised file paths a relative specifier may name, in lookup order.

    Package specifiers yield nothing.
    """
    if not specifier.startswith("."):
        return []
    base = Path(importer).parent / specifier
    candidates: List[Path] = []
    js_suffix = _JS_SUFFIXES.get(base.suffix)
    if js_suffix is not None:
        candidates.append(base.with_suffix(js_suffix))
    if base.suffix in _MODULE_SUFFIXES:
        candidates.append(base)
    candidates.extend(Path(f"{base}{suffix}") for suffix in _MODULE_SUFFIXES)
    candidates.extend(base / name for name in _INDEX_FILES)
    return [Path(os.path.normpath(candidate)) for candidate in candidates]


def _exports_name(declaration: Declaration, name: str) -> bool:
    if not declaration.exported or isinstance(declaration, ImportDirective):
        return False
    if name == "default":
        return declaration.default_export
    # `export default class A` binds `A` locally but only exports `default`.
    return declaration.name == name and not declaration.default_export


class SymbolIndex:
    """Resolves names to declarations across every loaded file.

    The index is built once from the full set of parsed files and is
    read-only afterwards. Lookups follow the module graph: local top-level
    declarations, relative imports (named, default and namespace), re-export
    chains in the target module and finally declarations from global script
    files. Package imports never resolve.
    """

    def __init__(self, files: Mapping[Path, SourceFile]) -> None:
        self.logger = get_logger("symbols")
        self._files: Dict[Path, SourceFile] = {
            self._normalise(path): source_file for path, source_file in files.items()
        }
        self._locals: Dict[Path, Dict[str, List[Declaration]]] = {}
        self._imports: Dict[Path, Dict[str, Tuple[ImportDirective, ImportBinding]]] = {}
        self._globals: Dict[str, List[Declaration]] = {}

        for path, source_file in self._files.items():
            local_names: Dict[str, List[Declaration]] = {}
            for declaration in source_file.declarations:
                if declaration.name and not isinstance(declaration, ImportDirective):
                    local_names.setdefault(declaration.name, []).append(declaration)
            self._locals[path] = local_names

            bindings: Dict[str, Tuple[ImportDirective, ImportBinding]] = {}
            for directive in source_file.imports():
                for binding in directive.bindings:
                    bindings[binding.local] = (directive, binding)
            self._imports[path] = bindings

            if not source_file.is_module:
                for name, declarations in local_names.items():
                    self._globals.setdefault(name, []).extend(declarations)

    @classmethod
    def build(cls, files: Iterable[SourceFile]) -> "SymbolIndex":
        return cls({source_file.path: source_file for source_file in files})

    def resolve(self, reference: TypeReference, source_file: SourceFile) -> Optional[Declaration]:
        """Return the declaration `reference` denotes from `source_file`, if any."""
        parts = reference.parts
        path = self._normalise(source_file.path)
        seen: _Seen = set()
        if len(parts) == 1:
            return self._resolve_name(path, parts[0], seen)
        if len(parts) == 2:
            entry = self._imports.get(path, {}).get(parts[0])
            if entry is None or entry[1].imported != "*":
                return None
            target = self.resolve_module(path, entry[0].specifier)
            if target is None:
                return None
            return self._resolve_export(target, parts[1], seen)
        return None

    def resolve_module(self, importer: Path, specifier: str) -> Optional[Path]:
        """Map a relative module specifier to a loaded file path."""
        for candidate in module_candidates(importer, specifier):
            if candidate in self._files:
                return candidate
        return None

    @staticmethod
    def _normalise(path: Path) -> Path:
        return Path(os.path.normpath(path))

    def _resolve_name(self, path: Path, name: str, seen: _Seen) -> Optional[Declaration]:
        local = _prefer_class(self._locals.get(path, {}).get(name, []))
        if local is not None:
            return local

        entry = self._imports.get(path, {}).get(name)
        if entry is not None:
            directive, binding = entry
            if binding.imported == "*":
                return None
            target = self.resolve_module(path, directive.specifier)
            if target is None:
                self.logger.debug(
                    "Import of %s from %s does not resolve to a loaded file", name, directive.specifier
                )
                return None
            return self._resolve_export(target, binding.imported, seen)

        return _prefer_class(self._globals.get(name, []))

    def _resolve_export(self, path: Path, name: str, seen: _Seen) -> Optional[Declaration]:
        key = (path, name)
        if key in seen:
            return None
        seen.add(key)

        source_file = self._files.get(path)
        if source_file is None:
            return None

        exported = [
            declaration
            for declaration in source_file.declarations
            if _exports_name(declaration, name)
        ]
        match = _prefer_class(exported)
        if match is not None:
            return match

        for directive in source_file.export_directives():
            for specifier in directive.specifiers:
                if specifier.exported != name:
                    continue
                if directive.source is None:
                    return self._resolve_name(path, specifier.local, seen)
                target = self.resolve_module(path, directive.source)
                return self._resolve_export(target, specifier.local, seen) if target else None

        if name == "default":
            return None
        for directive in source_file.export_directives():
            if not directive.wildcard or directive.source is None:
                continue
            target = self.resolve_module(path, directive.source)
            if target is None:
                continue
            found = self._resolve_export(target, name, seen)
            if found is not None:
                return found
        return None


__all__ = ["SymbolIndex", "module_candidates"]
