"""Tests for shapegen.emitter."""

from __future__ import annotations

from pathlib import Path

from shapegen.emitter import Emitter, Printer
from shapegen.models import FieldMember, InterfaceDeclaration, RawSyntax, ShapeDeclaration


def test_printer_renders_shape_canonically() -> None:
    shape = ShapeDeclaration(
        name="User",
        type_parameters="<T extends object>",
        fields=[
            FieldMember(name="id", optional=False, type_text="string"),
            FieldMember(name="meta", optional=True, type_text="T"),
            FieldMember(name="loose", optional=False, type_text=None),
        ],
    )

    assert Printer().print(shape) == (
        "export interface User<T extends object> {\n"
        "    id: string;\n"
        "    meta?: T;\n"
        "    loose;\n"
        "}"
    )


def test_printer_renders_empty_shape() -> None:
    assert Printer().print(ShapeDeclaration(name="Empty", type_parameters=None)) == "export interface Empty {\n}"


def test_render_appends_newline_after_each_declaration() -> None:
    declarations = [
        InterfaceDeclaration(syntax=RawSyntax("interface A {}")),
        ShapeDeclaration(name="B", type_parameters=None),
    ]

    assert Printer().render(declarations) == "interface A {}\nexport interface B {\n}\n"


def test_emitter_mirrors_relative_path_under_output_root(tmp_path: Path) -> None:
    root = tmp_path / "server"
    emitter = Emitter(root, tmp_path / "out")

    destination = emitter.output_path(root / "src" / "util" / "entities" / "User.ts")

    assert destination == tmp_path / "out" / "src" / "util" / "entities" / "User.ts"


def test_emitter_write_creates_parent_directories(tmp_path: Path) -> None:
    root = tmp_path / "server"
    emitter = Emitter(root, tmp_path / "out")
    source = root / "src" / "models" / "Role.ts"

    destination = emitter.write(source, [InterfaceDeclaration(syntax=RawSyntax("export interface Role {}"))])

    assert destination.read_text(encoding="utf-8") == "export interface Role {}\n"
