"""Top-level declaration filter."""

from __future__ import annotations

from typing import List

from .logging import get_logger
from .models import (
    ClassDeclaration,
    EmittableDeclaration,
    EnumDeclaration,
    ExportDirective,
    ImportDirective,
    InterfaceDeclaration,
    OtherDeclaration,
    SourceFile,
    TypeAliasDeclaration,
)
from .transform import ClassShapeTransformer

_VERBATIM = (EnumDeclaration, InterfaceDeclaration, TypeAliasDeclaration)


class DeclarationFilter:
    """Keeps shape-describing declarations of a file, in source order.

    Enums, interfaces, type aliases and export directives are copied as-is,
    imports survive only when their module specifier is relative, classes go
    through the shape transformer and everything else is dropped.
    """

    def __init__(self, transformer: ClassShapeTransformer) -> None:
        self.transformer = transformer
        self.logger = get_logger("filter")

    def filter(self, source_file: SourceFile) -> List[EmittableDeclaration]:
        output: List[EmittableDeclaration] = []
        for declaration in source_file.declarations:
            if isinstance(declaration, _VERBATIM):
                self.logger.debug("Processing enum or interface: %s", declaration.name)
                output.append(declaration)
            elif isinstance(declaration, ExportDirective):
                self.logger.debug("Processing export declaration")
                output.append(declaration)
            elif isinstance(declaration, ImportDirective):
                if declaration.is_relative:
                    self.logger.debug("Processing import declaration: %s", declaration.specifier)
                    output.append(declaration)
            elif isinstance(declaration, ClassDeclaration):
                output.append(self.transformer.transform(declaration, source_file))
            elif isinstance(declaration, OtherDeclaration):
                continue
            else:
                raise TypeError(f"Unsupported declaration type: {type(declaration).__name__}")
        return output


__all__ = ["DeclarationFilter"]
