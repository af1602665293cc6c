"""Printing of output declarations and mirrored file writing."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .logging import get_logger
from .models import EmittableDeclaration, FieldMember, ShapeDeclaration

_INDENT = "    "


class Printer:
    """Canonical serializer for output declaration sets."""

    def print(self, declaration: EmittableDeclaration) -> str:
        if isinstance(declaration, ShapeDeclaration):
            return self._print_shape(declaration)
        return declaration.syntax.text

    def render(self, declarations: Iterable[EmittableDeclaration]) -> str:
        """Serialize declarations in order, each followed by a newline."""
        return "".join(self.print(declaration) + "\n" for declaration in declarations)

    def _print_shape(self, shape: ShapeDeclaration) -> str:
        header = f"export interface {shape.name}{shape.type_parameters or ''} {{"
        lines = [header]
        lines.extend(f"{_INDENT}{self._print_field(member)}" for member in shape.fields)
        lines.append("}")
        return "\n".join(lines)

    @staticmethod
    def _print_field(member: FieldMember) -> str:
        optional = "?" if member.optional else ""
        if member.type_text is None:
            return f"{member.name}{optional};"
        return f"{member.name}{optional}: {member.type_text};"


class Emitter:
    """Writes rendered declarations under an output root mirroring the input tree."""

    def __init__(self, root_folder: Path, output_root: Path, printer: Printer | None = None) -> None:
        self.root_folder = Path(root_folder)
        self.output_root = Path(output_root)
        self.printer = printer or Printer()
        self.logger = get_logger("emitter")

    def output_path(self, source_path: Path) -> Path:
        """Strip the root folder from `source_path` and re-root it under the output root."""
        relative = Path(source_path).relative_to(self.root_folder)
        return self.output_root / relative

    def write(self, source_path: Path, declarations: List[EmittableDeclaration]) -> Path:
        destination = self.output_path(source_path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(self.printer.render(declarations), encoding="utf-8", newline="\n")
        self.logger.debug("Wrote %d declarations to %s", len(declarations), destination)
        return destination


__all__ = ["Emitter", "Printer"]
