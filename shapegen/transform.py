"""Conversion of data-bearing classes into structural shape declarations."""

from __future__ import annotations

from typing import List, Union

from .logging import get_logger
from .models import ClassDeclaration, FieldMember, ShapeDeclaration, SourceFile
from .symbols import SymbolIndex


class ClassShapeTransformer:
    """Turns a class into an `export interface` with its parent's fields folded in.

    Classes declaring any static field are returned unchanged. Otherwise the
    shape lists the direct parent's instance fields followed by the class's
    own instance fields. Folding is one level deep: fields the parent itself
    inherits are never visited.
    """

    def __init__(self, symbols: SymbolIndex) -> None:
        self.symbols = symbols
        self.logger = get_logger("transform")

    def transform(
        self, declaration: ClassDeclaration, source_file: SourceFile
    ) -> Union[ClassDeclaration, ShapeDeclaration]:
        if declaration.is_static_bearing:
            self.logger.debug("Keeping static class declaration: %s", declaration.name)
            return declaration
        if declaration.name is None:
            self.logger.debug("Keeping anonymous class declaration in %s", source_file.path)
            return declaration

        self.logger.debug("Processing class declaration: %s", declaration.name)
        fields: List[FieldMember] = []
        if len(declaration.extends) == 1:
            fields.extend(self._parent_fields(declaration, source_file))
        fields.extend(declaration.fields)

        return ShapeDeclaration(
            name=declaration.name,
            type_parameters=declaration.type_parameters,
            fields=fields,
        )

    def _parent_fields(self, declaration: ClassDeclaration, source_file: SourceFile) -> List[FieldMember]:
        reference = declaration.extends[0]
        parent = self.symbols.resolve(reference, source_file)
        if not isinstance(parent, ClassDeclaration):
            self.logger.debug(
                "Parent %s of %s is not a resolvable class; no fields inherited",
                reference.text,
                declaration.name,
            )
            return []
        return list(parent.fields)


__all__ = ["ClassShapeTransformer"]
