"""Tree-sitter powered TypeScript declaration parser."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from ..models import (
    ClassDeclaration,
    Declaration,
    EnumDeclaration,
    ExportDirective,
    ExportSpecifier,
    FieldMember,
    ImportBinding,
    ImportDirective,
    InterfaceDeclaration,
    OtherDeclaration,
    RawSyntax,
    SourceFile,
    TypeAliasDeclaration,
    TypeReference,
)

_LANGUAGE_FACTORIES = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_CLASS_NODES = {"class_declaration", "abstract_class_declaration"}

_NAMED_NODES = {
    "enum_declaration": EnumDeclaration,
    "interface_declaration": InterfaceDeclaration,
    "type_alias_declaration": TypeAliasDeclaration,
}


class TypeScriptParser:
    """Parses TypeScript sources into ordered top-level declarations."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def parse(self, path: Path) -> SourceFile:
        """Read and parse a file from disk."""
        source = path.read_text(encoding="utf-8")
        return self.parse_source(source, path)

    def parse_source(self, source: str, path: Path | str = "<memory>.ts") -> SourceFile:
        path = Path(path)
        source_bytes = source.encode("utf-8")
        tree = self._get_parser(self._language_for_file(path)).parse(source_bytes)
        root = tree.root_node

        declarations: List[Declaration] = []
        is_module = False
        for child in root.named_children:
            if child.type in {"import_statement", "export_statement"}:
                is_module = True
            declarations.append(self._classify_statement(child, source_bytes))
        return SourceFile(
            path=path,
            declarations=declarations,
            is_module=is_module,
            has_errors=root.has_error,
        )

    def _get_parser(self, language_key: str) -> Parser:
        parser = self._parsers.get(language_key)
        if parser is not None:
            return parser
        language = Language(_LANGUAGE_FACTORIES[language_key]())
        parser = Parser(language)
        self._parsers[language_key] = parser
        return parser

    @staticmethod
    def _language_for_file(path: Path) -> str:
        return "tsx" if path.suffix.lower() == ".tsx" else "typescript"

    @staticmethod
    def _node_text(node: Node, source_bytes: bytes) -> str:
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _classify_statement(self, node: Node, source_bytes: bytes) -> Declaration:
        syntax = RawSyntax(self._node_text(node, source_bytes))
        if node.type == "import_statement":
            return self._import_directive(node, syntax, source_bytes)
        if node.type == "export_statement":
            return self._export_statement(node, syntax, source_bytes)
        return self._classify_declaration(node, syntax, source_bytes)

    def _classify_declaration(
        self,
        node: Node,
        syntax: RawSyntax,
        source_bytes: bytes,
        *,
        exported: bool = False,
        default_export: bool = False,
    ) -> Declaration:
        if node.type == "ambient_declaration":
            inner = node.named_children[0] if node.named_children else None
            if inner is not None and (inner.type in _CLASS_NODES or inner.type in _NAMED_NODES):
                return self._classify_declaration(
                    inner,
                    syntax,
                    source_bytes,
                    exported=exported,
                    default_export=default_export,
                )
            return OtherDeclaration(syntax=syntax, exported=exported, kind=node.type)

        if node.type in _CLASS_NODES:
            return self._class_declaration(
                node, syntax, source_bytes, exported=exported, default_export=default_export
            )

        factory = _NAMED_NODES.get(node.type)
        if factory is not None:
            name_node = node.child_by_field_name("name")
            return factory(
                syntax=syntax,
                name=self._node_text(name_node, source_bytes) if name_node else None,
                exported=exported,
                default_export=default_export,
            )

        return OtherDeclaration(
            syntax=syntax,
            name=self._declared_name(node, source_bytes),
            exported=exported,
            default_export=default_export,
            kind=node.type,
        )

    def _declared_name(self, node: Node, source_bytes: bytes) -> Optional[str]:
        if node.type not in {"function_declaration", "generator_function_declaration"}:
            return None
        name_node = node.child_by_field_name("name")
        return self._node_text(name_node, source_bytes) if name_node else None

    def _import_directive(self, node: Node, syntax: RawSyntax, source_bytes: bytes) -> Declaration:
        if any(child.type == "import_require_clause" for child in node.children):
            # `import x = require("...")` is not an import declaration.
            return OtherDeclaration(syntax=syntax, kind="import_require")

        source_node = node.child_by_field_name("source")
        specifier = self._string_value(source_node, source_bytes) if source_node else ""
        bindings: List[ImportBinding] = []
        for clause in node.children:
            if clause.type != "import_clause":
                continue
            for child in clause.named_children:
                if child.type == "identifier":
                    bindings.append(
                        ImportBinding(local=self._node_text(child, source_bytes), imported="default")
                    )
                elif child.type == "namespace_import":
                    alias = next((c for c in child.named_children if c.type == "identifier"), None)
                    if alias is not None:
                        bindings.append(
                            ImportBinding(local=self._node_text(alias, source_bytes), imported="*")
                        )
                elif child.type == "named_imports":
                    for spec in child.named_children:
                        if spec.type != "import_specifier":
                            continue
                        name_node = spec.child_by_field_name("name")
                        alias_node = spec.child_by_field_name("alias")
                        if name_node is None:
                            continue
                        imported = self._name_value(name_node, source_bytes)
                        local = self._node_text(alias_node, source_bytes) if alias_node else imported
                        bindings.append(ImportBinding(local=local, imported=imported))
        return ImportDirective(syntax=syntax, specifier=specifier, bindings=bindings)

    def _export_statement(self, node: Node, syntax: RawSyntax, source_bytes: bytes) -> Declaration:
        declaration = node.child_by_field_name("declaration")
        default_export = any(child.type == "default" for child in node.children)
        if declaration is not None:
            return self._classify_declaration(
                declaration,
                syntax,
                source_bytes,
                exported=True,
                default_export=default_export,
            )

        value = node.child_by_field_name("value")
        if value is not None and value.type == "class":
            # `export default class { ... }` parses as a class expression.
            return self._class_declaration(
                value, syntax, source_bytes, exported=True, default_export=default_export
            )

        source_node = node.child_by_field_name("source")
        source = self._string_value(source_node, source_bytes) if source_node else None
        clause = next((c for c in node.children if c.type == "export_clause"), None)
        namespace_node = next((c for c in node.children if c.type == "namespace_export"), None)
        wildcard = any(child.type == "*" for child in node.children)

        if clause is None and namespace_node is None and not wildcard:
            # `export default expr`, `export = x` and `export as namespace X`
            return OtherDeclaration(
                syntax=syntax, exported=True, default_export=default_export, kind="export_assignment"
            )

        specifiers: List[ExportSpecifier] = []
        if clause is not None:
            for spec in clause.named_children:
                if spec.type != "export_specifier":
                    continue
                name_node = spec.child_by_field_name("name")
                alias_node = spec.child_by_field_name("alias")
                if name_node is None:
                    continue
                local = self._name_value(name_node, source_bytes)
                exported = self._name_value(alias_node, source_bytes) if alias_node else local
                specifiers.append(ExportSpecifier(local=local, exported=exported))

        namespace = None
        if namespace_node is not None:
            alias = namespace_node.named_children[-1] if namespace_node.named_children else None
            namespace = self._name_value(alias, source_bytes) if alias is not None else None

        return ExportDirective(
            syntax=syntax,
            exported=True,
            source=source,
            specifiers=specifiers,
            wildcard=wildcard,
            namespace=namespace,
        )

    def _class_declaration(
        self,
        node: Node,
        syntax: RawSyntax,
        source_bytes: bytes,
        *,
        exported: bool,
        default_export: bool,
    ) -> ClassDeclaration:
        name_node = node.child_by_field_name("name")
        type_parameters = node.child_by_field_name("type_parameters")
        body = node.child_by_field_name("body")

        fields: List[FieldMember] = []
        statics: List[FieldMember] = []
        if body is not None:
            for member in body.named_children:
                if member.type != "public_field_definition":
                    continue
                field_member = self._field_member(member, source_bytes)
                if field_member is None:
                    continue
                (statics if field_member.static else fields).append(field_member)

        return ClassDeclaration(
            syntax=syntax,
            name=self._node_text(name_node, source_bytes) if name_node else None,
            exported=exported,
            default_export=default_export,
            type_parameters=self._node_text(type_parameters, source_bytes) if type_parameters else None,
            fields=fields,
            statics=statics,
            extends=self._extends_references(node, source_bytes),
        )

    def _field_member(self, member: Node, source_bytes: bytes) -> Optional[FieldMember]:
        name_node = member.child_by_field_name("name")
        if name_node is None:
            return None
        type_node = member.child_by_field_name("type")
        type_text = None
        if type_node is not None:
            annotation = self._node_text(type_node, source_bytes).strip()
            type_text = annotation[1:].strip() if annotation.startswith(":") else annotation
        return FieldMember(
            name=self._node_text(name_node, source_bytes),
            optional=any(child.type == "?" for child in member.children),
            type_text=type_text,
            static=any(child.type == "static" for child in member.children),
        )

    def _extends_references(self, node: Node, source_bytes: bytes) -> List[TypeReference]:
        references: List[TypeReference] = []
        for heritage in node.children:
            if heritage.type != "class_heritage":
                continue
            for clause in heritage.named_children:
                if clause.type != "extends_clause":
                    continue
                values = clause.children_by_field_name("value") or [
                    child for child in clause.named_children if child.type != "type_arguments"
                ]
                for value in values:
                    references.append(
                        TypeReference(
                            text=self._node_text(value, source_bytes),
                            parts=self._dotted_parts(value, source_bytes),
                        )
                    )
        return references

    def _dotted_parts(self, node: Node, source_bytes: bytes) -> Tuple[str, ...]:
        if node.type in {"identifier", "type_identifier"}:
            return (self._node_text(node, source_bytes),)
        if node.type == "member_expression":
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None:
                return ()
            head = self._dotted_parts(obj, source_bytes)
            return head + (self._node_text(prop, source_bytes),) if head else ()
        return ()

    def _string_value(self, node: Node, source_bytes: bytes) -> str:
        text = self._node_text(node, source_bytes)
        if len(text) >= 2 and text[0] == text[-1] and text[0] in {'"', "'", "`"}:
            return text[1:-1]
        return text

    def _name_value(self, node: Node, source_bytes: bytes) -> str:
        # Module export names may be string literals (`export { a as "b" }`).
        if node.type == "string":
            return self._string_value(node, source_bytes)
        return self._node_text(node, source_bytes)


__all__ = ["TypeScriptParser"]
