"""Configuration loading for shapegen (.shapegen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".shapegen.yml"
DEFAULT_OUTPUT_DIRNAME = "shapes"


@dataclass
class ShapeGenConfig:
    """Paths and discovery settings for an extraction run.

    `source_subfolder` is relative to `root_folder`; output files mirror
    their path relative to `root_folder` under `output_root`, which defaults
    to `<root_folder>/shapes`.
    """

    root_folder: Path
    source_subfolder: Path = Path(".")
    output_root: Optional[Path] = None
    exclude_paths: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: [".ts"])

    @property
    def source_dir(self) -> Path:
        return self.root_folder / self.source_subfolder

    @property
    def output_dir(self) -> Path:
        if self.output_root is not None:
            return self.output_root
        return self.root_folder / DEFAULT_OUTPUT_DIRNAME

    def with_overrides(
        self,
        *,
        root_folder: Path | None = None,
        source_subfolder: Path | None = None,
        output_root: Path | None = None,
    ) -> "ShapeGenConfig":
        """Return a copy with command-line values applied on top."""
        updated = self
        if root_folder is not None:
            updated = replace(updated, root_folder=Path(root_folder).expanduser().resolve())
        if source_subfolder is not None:
            updated = replace(updated, source_subfolder=Path(source_subfolder))
        if output_root is not None:
            updated = replace(updated, output_root=Path(output_root).expanduser().resolve())
        return updated


def load_config(config_path: Path) -> ShapeGenConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(Path(config_path))
    base_dir = config_file.parent

    if not config_file.exists():
        return ShapeGenConfig(root_folder=base_dir)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    root_value = _as_str(data.get("root_folder"))
    root_folder = _resolve_against(base_dir, root_value) if root_value else base_dir

    subfolder_value = _as_str(data.get("source_subfolder"))
    output_value = _as_str(data.get("output_root"))

    extensions = _as_str_list(data.get("extensions")) or [".ts"]
    extensions = [ext if ext.startswith(".") else f".{ext}" for ext in extensions]

    return ShapeGenConfig(
        root_folder=root_folder,
        source_subfolder=Path(subfolder_value) if subfolder_value else Path("."),
        output_root=_resolve_against(base_dir, output_value) if output_value else None,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        extensions=extensions,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _resolve_against(base_dir: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ShapeGenConfig", "load_config"]
