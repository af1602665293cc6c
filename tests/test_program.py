"""Tests for shapegen.program."""

from __future__ import annotations

from shapegen.program import Program
from tests._fixtures.project_builder import ProjectBuilder


def test_load_follows_relative_imports_and_reexports(project: ProjectBuilder) -> None:
    project.write(
        {
            "lib/models/index.ts": 'export { Base } from "./Base";\n',
            "lib/models/Base.ts": "export class Base {}\n",
            "lib/enums.ts": "export enum Kind { A }\n",
            "lib/unused.ts": "export class Unused {}\n",
            "src/User.ts": (
                'import { Base } from "../lib/models";\n'
                'import { BaseEntity } from "typeorm";\n'
                'export * from "../lib/enums.js";\n'
                'import { Missing } from "./missing";\n'
            ),
        }
    )

    program = Program.load([project.path("src/User.ts")])

    assert program.get_source_file(project.path("src/User.ts")) is not None
    assert program.get_source_file(project.path("lib/models/index.ts")) is not None
    assert program.get_source_file(project.path("lib/models/Base.ts")) is not None
    assert program.get_source_file(project.path("lib/enums.ts")) is not None
    assert program.get_source_file(project.path("lib/unused.ts")) is None


def test_load_terminates_on_import_cycles(project: ProjectBuilder) -> None:
    project.write(
        {
            "a.ts": 'import { B } from "./b";\nexport class A {}\n',
            "b.ts": 'import { A } from "./a";\nexport class B {}\n',
        }
    )

    program = Program.load([project.path("a.ts")])

    assert program.get_source_file(project.path("b.ts")) is not None
