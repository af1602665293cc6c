"""Core data models shared across shapegen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class RawSyntax:
    """Captured source span, re-emitted without interpretation."""

    text: str


@dataclass(frozen=True)
class FieldMember:
    """Data-holding class member."""

    name: str
    optional: bool
    type_text: Optional[str]
    static: bool = False


@dataclass(frozen=True)
class TypeReference:
    """Reference written in an `extends` clause.

    `parts` holds the dotted name (`("Base",)` or `("models", "Base")`); it is
    empty when the expression is not a plain name, e.g. a mixin call.
    """

    text: str
    parts: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportBinding:
    """Local name introduced by an import clause.

    `imported` is the exported name, `"default"` for default imports and
    `"*"` for namespace imports.
    """

    local: str
    imported: str


@dataclass(frozen=True)
class ExportSpecifier:
    """One `local as exported` entry of an export list."""

    local: str
    exported: str


@dataclass
class DeclarationNode:
    """Fields common to every top-level declaration."""

    syntax: RawSyntax
    name: Optional[str] = None
    exported: bool = False
    default_export: bool = False


@dataclass
class EnumDeclaration(DeclarationNode):
    pass


@dataclass
class InterfaceDeclaration(DeclarationNode):
    pass


@dataclass
class TypeAliasDeclaration(DeclarationNode):
    pass


@dataclass
class ExportDirective(DeclarationNode):
    """`export { ... }`, `export { ... } from "..."` or `export * from "..."`."""

    source: Optional[str] = None
    specifiers: List[ExportSpecifier] = field(default_factory=list)
    wildcard: bool = False
    namespace: Optional[str] = None


@dataclass
class ImportDirective(DeclarationNode):
    specifier: str = ""
    bindings: List[ImportBinding] = field(default_factory=list)

    @property
    def is_relative(self) -> bool:
        return self.specifier.startswith(".")


@dataclass
class ClassDeclaration(DeclarationNode):
    """Class with its field members split into instance and static ones."""

    type_parameters: Optional[str] = None
    fields: List[FieldMember] = field(default_factory=list)
    statics: List[FieldMember] = field(default_factory=list)
    extends: List[TypeReference] = field(default_factory=list)

    @property
    def is_static_bearing(self) -> bool:
        return bool(self.statics)


@dataclass
class OtherDeclaration(DeclarationNode):
    """Statements, functions, variables and anything else with no shape."""

    kind: str = ""


Declaration = Union[
    EnumDeclaration,
    InterfaceDeclaration,
    TypeAliasDeclaration,
    ExportDirective,
    ImportDirective,
    ClassDeclaration,
    OtherDeclaration,
]


@dataclass
class ShapeDeclaration:
    """Structural `export interface` derived from a class."""

    name: str
    type_parameters: Optional[str]
    fields: List[FieldMember] = field(default_factory=list)


EmittableDeclaration = Union[Declaration, ShapeDeclaration]


@dataclass
class SourceFile:
    """Ordered top-level declarations of one parsed file."""

    path: Path
    declarations: List[Declaration] = field(default_factory=list)
    is_module: bool = False
    has_errors: bool = False

    def imports(self) -> List[ImportDirective]:
        return [decl for decl in self.declarations if isinstance(decl, ImportDirective)]

    def export_directives(self) -> List[ExportDirective]:
        return [decl for decl in self.declarations if isinstance(decl, ExportDirective)]


__all__ = [
    "ClassDeclaration",
    "Declaration",
    "DeclarationNode",
    "EmittableDeclaration",
    "EnumDeclaration",
    "ExportDirective",
    "ExportSpecifier",
    "FieldMember",
    "ImportBinding",
    "ImportDirective",
    "InterfaceDeclaration",
    "OtherDeclaration",
    "RawSyntax",
    "ShapeDeclaration",
    "SourceFile",
    "TypeAliasDeclaration",
    "TypeReference",
]
