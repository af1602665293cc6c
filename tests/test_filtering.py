"""Tests for shapegen.filtering."""

from __future__ import annotations

from shapegen.emitter import Printer
from shapegen.filtering import DeclarationFilter
from shapegen.models import (
    ClassDeclaration,
    ExportDirective,
    ImportDirective,
    OtherDeclaration,
    RawSyntax,
    ShapeDeclaration,
    SourceFile,
)
from shapegen.transform import ClassShapeTransformer
from tests._fixtures.project_builder import ProjectBuilder


def _filter(project: ProjectBuilder, relative: str):
    program = project.program()
    source_file = program.get_source_file(project.path(relative))
    declaration_filter = DeclarationFilter(ClassShapeTransformer(program.symbol_index))
    return source_file, declaration_filter.filter(source_file)


def test_filter_keeps_shape_declarations_in_source_order(project: ProjectBuilder) -> None:
    project.write(
        {
            "mixed.ts": """
            import { z } from "./local";
            import { w } from "package-x";
            const answer = 42;
            export type Id = string;
            export function helper() {}
            export class Entity {
              id: Id;
            }
            export enum Kind { A, B }
            console.log(answer);
            export interface Named { name: string }
            export { z };
            """,
            "local.ts": "export const z = 1;\n",
        }
    )

    _, output = _filter(project, "mixed.ts")
    printed = [Printer().print(declaration) for declaration in output]

    assert printed == [
        'import { z } from "./local";',
        "export type Id = string;",
        "export interface Entity {\n    id: Id;\n}",
        "export enum Kind { A, B }",
        "export interface Named { name: string }",
        "export { z };",
    ]


def test_filter_keeps_only_relative_imports(project: ProjectBuilder) -> None:
    project.write(
        {
            "imports.ts": """
            import { z } from "./local";
            import { up } from "../parent";
            import { w } from "package-x";
            import type { Scoped } from "@scope/pkg";
            """
        }
    )

    _, output = _filter(project, "imports.ts")

    assert all(isinstance(declaration, ImportDirective) for declaration in output)
    assert [declaration.specifier for declaration in output] == ["./local", "../parent"]


def test_filter_drops_executable_declarations(project: ProjectBuilder) -> None:
    project.write(
        {
            "logic.ts": """
            function run() {}
            let counter = 0;
            counter++;
            export default counter;
            import fs = require("fs");
            """
        }
    )

    _, output = _filter(project, "logic.ts")

    assert output == []


def test_filter_copies_export_directives_verbatim(project: ProjectBuilder) -> None:
    project.write(
        {
            "index.ts": """
            export * from "./user";
            export { Role as UserRole } from "./roles";
            export * as enums from "./enums";
            """
        }
    )

    source_file, output = _filter(project, "index.ts")

    assert output == source_file.declarations
    assert all(isinstance(declaration, ExportDirective) for declaration in output)


def test_filter_keeps_static_class_verbatim(project: ProjectBuilder) -> None:
    project.write(
        {
            "rights.ts": """
            export class Rights {
              static FLAGS = { ADMIN: 1 };
              bits: bigint;
            }
            """
        }
    )

    source_file, output = _filter(project, "rights.ts")

    assert output == [source_file.declarations[0]]
    assert isinstance(output[0], ClassDeclaration)
    assert Printer().print(output[0]) == source_file.declarations[0].syntax.text


def test_filter_transforms_plain_classes(project: ProjectBuilder) -> None:
    project.write({"user.ts": "export class User {\n  name: string;\n}\n"})

    _, output = _filter(project, "user.ts")

    assert len(output) == 1
    assert isinstance(output[0], ShapeDeclaration)


def test_filter_rejects_unknown_declaration_types() -> None:
    class Stray:
        syntax = RawSyntax("???")

    source_file = SourceFile(path="stray.ts", declarations=[OtherDeclaration(syntax=RawSyntax("x")), Stray()])
    declaration_filter = DeclarationFilter(transformer=None)

    try:
        declaration_filter.filter(source_file)
    except TypeError as exc:
        assert "Stray" in str(exc)
    else:  # pragma: no cover - defensive guard
        raise AssertionError("Expected TypeError for an unknown declaration type")
