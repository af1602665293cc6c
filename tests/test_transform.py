"""Tests for shapegen.transform."""

from __future__ import annotations

from shapegen.models import ClassDeclaration, FieldMember, ShapeDeclaration
from shapegen.transform import ClassShapeTransformer
from tests._fixtures.project_builder import ProjectBuilder


def _transform(project: ProjectBuilder, relative: str, class_name: str):
    program = project.program()
    source_file = program.get_source_file(project.path(relative))
    declaration = next(
        decl
        for decl in source_file.declarations
        if isinstance(decl, ClassDeclaration) and decl.name == class_name
    )
    transformer = ClassShapeTransformer(program.symbol_index)
    return declaration, transformer.transform(declaration, source_file)


def test_folds_single_level_of_parent_fields(project: ProjectBuilder) -> None:
    project.write(
        {
            "model.ts": """
            export class Root {
              z: boolean;
            }
            export class A extends Root {
              x: number;
            }
            export class B extends A {
              y: string;
            }
            """
        }
    )

    _, shape = _transform(project, "model.ts", "B")

    assert isinstance(shape, ShapeDeclaration)
    assert shape.name == "B"
    assert shape.fields == [
        FieldMember(name="x", optional=False, type_text="number"),
        FieldMember(name="y", optional=False, type_text="string"),
    ]


def test_parent_fields_precede_own_fields_in_declaration_order(project: ProjectBuilder) -> None:
    project.write(
        {
            "base.ts": """
            export class Base {
              id: string;
              created?: Date;
              static registry = new Map();
              save(): void {}
            }
            """,
            "user.ts": """
            import { Base } from "./base";
            export class User<T> extends Base {
              name: string;
              meta?: T;
            }
            """,
        }
    )

    _, shape = _transform(project, "user.ts", "User")

    assert shape.type_parameters == "<T>"
    assert [(f.name, f.optional, f.type_text) for f in shape.fields] == [
        ("id", False, "string"),
        ("created", True, "Date"),
        ("name", False, "string"),
        ("meta", True, "T"),
    ]


def test_static_bearing_class_is_returned_unchanged(project: ProjectBuilder) -> None:
    project.write(
        {
            "config.ts": """
            export class Config {
              static defaults = { a: 1 };
              value: number;
            }
            """
        }
    )

    declaration, result = _transform(project, "config.ts", "Config")

    assert result is declaration


def test_unresolvable_parent_contributes_no_fields(project: ProjectBuilder) -> None:
    project.write(
        {
            "user.ts": """
            export class B extends Unknown {
              y: string;
            }
            """
        }
    )

    _, shape = _transform(project, "user.ts", "B")

    assert isinstance(shape, ShapeDeclaration)
    assert shape.fields == [FieldMember(name="y", optional=False, type_text="string")]


def test_non_class_parent_contributes_no_fields(project: ProjectBuilder) -> None:
    project.write(
        {
            "user.ts": """
            export interface Shape {
              x: number;
            }
            export class B extends Shape {
              y: string;
            }
            """
        }
    )

    _, shape = _transform(project, "user.ts", "B")

    assert [member.name for member in shape.fields] == ["y"]


def test_class_without_fields_becomes_empty_shape(project: ProjectBuilder) -> None:
    project.write(
        {
            "service.ts": """
            export class Service {
              constructor(private readonly repo: Repo) {}
              run(): void {}
            }
            """
        }
    )

    _, shape = _transform(project, "service.ts", "Service")

    assert isinstance(shape, ShapeDeclaration)
    assert shape.fields == []


def test_anonymous_default_class_is_kept(project: ProjectBuilder) -> None:
    project.write({"anon.ts": "export default class {\n  x: number;\n}\n"})
    program = project.program()
    source_file = program.get_source_file(project.path("anon.ts"))
    declaration = source_file.declarations[0]

    result = ClassShapeTransformer(program.symbol_index).transform(declaration, source_file)

    assert result is declaration
