"""Source file discovery for shapegen runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    ".idea",
    ".vscode",
    ".shapegen",
}

_DEFAULT_EXTENSIONS = (".ts",)


@dataclass
class IgnoreRule:
    """Gitignore-style pattern taken from the `exclude_paths` setting."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern or pattern.startswith("#"):
        return None

    negate = pattern.startswith("!")
    if negate:
        pattern = pattern[1:]

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class SourceDiscoverer:
    """Recursively enumerates source files below a directory."""

    def __init__(
        self,
        extensions: Sequence[str] = _DEFAULT_EXTENSIONS,
        exclude_paths: Iterable[str] = (),
        skip_dirs: Iterable[Path] = (),
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.rules: List[IgnoreRule] = [
            rule for rule in (build_ignore_rule(pattern) for pattern in exclude_paths) if rule
        ]
        self.skip_dirs = {Path(path).resolve() for path in skip_dirs}

    def discover(self, directory: Path) -> List[Path]:
        """Return matching files in a stable, directory-sorted order."""
        root = Path(directory).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Source folder not found: {directory}")
        if not root.is_dir():
            raise NotADirectoryError(f"Source folder is not a directory: {directory}")
        return list(self._iter_files(root))

    def _iter_files(self, root: Path) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept_dirs = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS or (current_dir / name) in self.skip_dirs:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, self.rules):
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                if not filename.lower().endswith(self.extensions):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, self.rules):
                    continue
                yield current_dir / filename


__all__ = ["IgnoreRule", "SourceDiscoverer", "build_ignore_rule"]
