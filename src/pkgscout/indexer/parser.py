"""Export extraction from TypeScript/TSX sources using tree-sitter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

import tree_sitter as ts
import tree_sitter_typescript as ts_typescript
from rich.console import Console

from pkgscout.exceptions import IndexerError

console = Console(stderr=True)

ExportKind = Literal["variable", "function", "class", "interface", "type", "enum", "reexport"]

_DECLARATION_KINDS: dict[str, ExportKind] = {
    "lexical_declaration": "variable",
    "variable_declaration": "variable",
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_signature": "function",
    "class_declaration": "class",
    "abstract_class_declaration": "class",
    "interface_declaration": "interface",
    "type_alias_declaration": "type",
    "enum_declaration": "enum",
}

# `export default function Foo() {}` may surface as a named expression value
_DEFAULT_VALUE_KINDS: dict[str, ExportKind] = {
    "function_expression": "function",
    "function": "function",
    "generator_function": "function",
    "class": "class",
}

_NAMESPACE_TYPES: frozenset[str] = frozenset({"internal_module", "module"})
_WRAPPER_TYPES: frozenset[str] = frozenset(
    {"export_statement", "expression_statement", "ambient_declaration"}
)


@dataclass(frozen=True, slots=True)
class ExportRecord:
    """A single named export discovered in a source file.

    Attributes:
        name: External name of the export (post-alias for re-exports).
        file_path: Absolute path of the file holding the declaration, or the
            re-export statement for kind "reexport".
        kind: One of "variable", "function", "class", "interface", "type",
            "enum", "reexport".
        is_default: True for ``export default`` declarations.
    """

    name: str
    file_path: str
    kind: ExportKind
    is_default: bool = False


class ExportParser:
    """Parses a source file and lists its export declarations."""

    def __init__(self) -> None:
        """Load the TypeScript and TSX grammars."""
        self._typescript = ts.Language(ts_typescript.language_typescript())
        self._tsx = ts.Language(ts_typescript.language_tsx())

    def parse_exports(self, file_path: Path | str, source_text: str) -> list[ExportRecord]:
        """Extract export records from source text.

        ``export * from '...'`` and ``export { X }`` of local names yield nothing;
        the former needs cross-file resolution and the latter is already
        covered by the local declaration.

        Args:
            file_path: Path of the file; ``.tsx`` selects the TSX grammar.
            source_text: Full text of the file.

        Returns:
            Records in source order.

        Raises:
            IndexerError: If tree-sitter fails to produce a tree.
        """
        path = str(file_path)
        content = source_text.encode("utf-8")
        language = self._tsx if path.endswith(".tsx") else self._typescript

        try:
            tree = ts.Parser(language).parse(content)
        except ValueError as exc:
            raise IndexerError(f"Cannot parse {path}: {exc}") from exc

        # tree-sitter recovers from bad syntax; what survives recovery is still recorded
        if tree.root_node.has_error:
            console.print(f"[yellow]Warning[/yellow]: Syntax errors in {path}, exports may be incomplete")

        records: list[ExportRecord] = []
        for statement in self._export_statements(tree.root_node):
            records.extend(self._statement_records(statement, content, path))
        return records

    def _export_statements(self, node: Any) -> list[Any]:
        """Collect export statements in document order, entering namespace bodies."""
        found: list[Any] = []
        for child in node.named_children:
            if child.type == "export_statement":
                found.append(child)
            body = self._namespace_body(child)
            if body is not None:
                found.extend(self._export_statements(body))
        return found

    def _namespace_body(self, node: Any) -> Any | None:
        if node.type in _NAMESPACE_TYPES:
            return node.child_by_field_name("body")
        if node.type in _WRAPPER_TYPES:
            for child in node.named_children:
                body = self._namespace_body(child)
                if body is not None:
                    return body
        return None

    def _statement_records(self, node: Any, content: bytes, file_path: str) -> list[ExportRecord]:
        """Turn one export statement into zero or more records."""
        if node.child_by_field_name("source") is not None:
            return self._reexport_records(node, content, file_path)

        is_default = any(child.type == "default" for child in node.children)

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            return self._declaration_records(declaration, content, file_path, is_default)

        value = node.child_by_field_name("value")
        if value is not None and value.type in _DEFAULT_VALUE_KINDS:
            name_node = value.child_by_field_name("name")
            if name_node is not None:
                return [
                    ExportRecord(
                        name=self._node_text(name_node, content),
                        file_path=file_path,
                        kind=_DEFAULT_VALUE_KINDS[value.type],
                        is_default=is_default,
                    )
                ]
        return []

    def _declaration_records(
        self, node: Any, content: bytes, file_path: str, is_default: bool
    ) -> list[ExportRecord]:
        if node.type == "ambient_declaration":
            records: list[ExportRecord] = []
            for child in node.named_children:
                records.extend(self._declaration_records(child, content, file_path, is_default))
            return records

        kind = _DECLARATION_KINDS.get(node.type)
        if kind is None:
            return []

        if kind == "variable":
            names = [
                self._node_text(name_node, content)
                for declarator in node.named_children
                if declarator.type == "variable_declarator"
                and (name_node := declarator.child_by_field_name("name")) is not None
                and name_node.type == "identifier"
            ]
        else:
            name_node = node.child_by_field_name("name")
            names = [self._node_text(name_node, content)] if name_node is not None else []

        return [
            ExportRecord(name=name, file_path=file_path, kind=kind, is_default=is_default)
            for name in names
        ]

    def _reexport_records(self, node: Any, content: bytes, file_path: str) -> list[ExportRecord]:
        """Records for ``export { A, B as C } from '...'`` (wildcards are skipped)."""
        clause = self._child_by_type(node, "export_clause")
        if clause is None:
            return []

        records: list[ExportRecord] = []
        for specifier in clause.named_children:
            if specifier.type != "export_specifier":
                continue
            name_node = specifier.child_by_field_name("alias") or specifier.child_by_field_name(
                "name"
            )
            if name_node is None:
                continue
            name = self._node_text(name_node, content)
            if name_node.type == "string":
                name = name.strip("'\"")
            records.append(ExportRecord(name=name, file_path=file_path, kind="reexport"))
        return records

    # Tree-sitter helpers

    @staticmethod
    def _child_by_type(node: Any, type_name: str) -> Any | None:
        """Return first child of node with the given type."""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @staticmethod
    def _node_text(node: Any, content: bytes) -> str:
        """Extract source text for a tree-sitter node."""
        return content[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
