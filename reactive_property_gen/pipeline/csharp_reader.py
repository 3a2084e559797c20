"""
C# source reader.

Uses tree-sitter and tree-sitter-c-sharp to turn C# source files into
DeclaredType fragments: one per class declaration, with its namespace,
using directives, accessibility and field members.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter_c_sharp as ts_csharp
from tree_sitter import Language, Parser

from .declarations import AttributeUsage, DeclaredType, FieldMember
from .descriptors import Accessibility
from .errors import SourceReadError

logger = logging.getLogger(__name__)

# Declarations that introduce a type name into the compilation
TYPE_DECLARATIONS = {
    "class_declaration",
    "struct_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "record_struct_declaration",
    "delegate_declaration",
}

# Declarations whose bodies can contain nested classes
CONTAINER_DECLARATIONS = {
    "class_declaration",
    "struct_declaration",
    "interface_declaration",
    "record_declaration",
    "record_struct_declaration",
}

GENERATED_SUFFIX = ".g.cs"

# "using A.B;", "global using A.B;", "using X = A.B;"; static usings are skipped
_USING_PATTERN = re.compile(r"^(?:global\s+)?using\s+(?P<static>static\s+)?(?:(?P<alias>\w+)\s*=\s*)?(?P<name>[^;]+?)\s*;$", re.DOTALL)

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


@dataclass
class SourceSet:
    """Everything read from a set of C# files.

    Attributes:
        types: Class declaration fragments in file order, then document order
        type_names: Fully qualified names of every declared type (no type parameters)
        paths: Files that were read, in reading order
    """

    types: list[DeclaredType] = field(default_factory=list)
    type_names: set[str] = field(default_factory=set)
    paths: list[Path] = field(default_factory=list)


@dataclass
class _Scope:
    """Lexical context while walking a syntax tree."""

    namespace: str = ""
    containing_types: tuple[str, ...] = ()
    usings: tuple[str, ...] = ()
    aliases: dict[str, str] = field(default_factory=dict)

    def child(self, **changes: Any) -> _Scope:
        values = {
            "namespace": self.namespace,
            "containing_types": self.containing_types,
            "usings": self.usings,
            "aliases": dict(self.aliases),
        }
        values.update(changes)
        return _Scope(**values)


class CSharpSourceReader:
    """Reads class declarations out of C# sources with tree-sitter."""

    def __init__(self):
        self._parser = Parser(Language(ts_csharp.language()))

    def read_paths(self, paths: Iterable[str | Path], exclude_generated: bool = True) -> SourceSet:
        """Read every C# file under the given files and directories.

        Args:
            paths: Files or directories; directories are searched recursively for *.cs
            exclude_generated: Skip *.g.cs files

        Returns:
            SourceSet with the fragments of all files

        Raises:
            SourceReadError: If a file cannot be read or decoded
        """
        source_set = SourceSet()
        for path in self.expand_paths(paths, exclude_generated):
            try:
                data = path.read_bytes()
            except OSError as e:
                raise SourceReadError(f"Cannot read {path}: {e}") from e
            try:
                code = data.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise SourceReadError(f"{path} is not valid UTF-8: {e}") from e

            logger.debug("Reading %s", path)
            types, names = self._read(code, str(path))
            source_set.types.extend(types)
            source_set.type_names.update(names)
            source_set.paths.append(path)

        logger.info("Read %d file(s), %d class declaration(s)", len(source_set.paths), len(source_set.types))
        return source_set

    def read_source(self, code: str, path: str = "<string>") -> list[DeclaredType]:
        """Read the class declaration fragments of one source string."""
        types, _ = self._read(code, path)
        return types

    def declared_type_names(self, code: str) -> set[str]:
        """Fully qualified names of all types declared in one source string."""
        _, names = self._read(code, "<string>")
        return names

    def first_error_line(self, code: str) -> int | None:
        """Return the 1-based line of the first syntax error, or None if the code parses."""
        tree = self._parser.parse(bytes(code, "utf8"))
        if not tree.root_node.has_error:
            return None
        error = self._find_first_error(tree.root_node)
        return error.start_point[0] + 1 if error is not None else 1

    @staticmethod
    def expand_paths(paths: Iterable[str | Path], exclude_generated: bool = True) -> list[Path]:
        """Expand directories to their *.cs files, sorted and without duplicates."""
        found: set[Path] = set()
        for p in paths:
            path = Path(p)
            if path.is_dir():
                candidates = path.rglob("*.cs")
            else:
                candidates = [path]
            for candidate in candidates:
                if exclude_generated and candidate.name.endswith(GENERATED_SUFFIX):
                    continue
                found.add(candidate)
        return sorted(found)

    def _read(self, code: str, path: str) -> tuple[list[DeclaredType], set[str]]:
        tree = self._parser.parse(bytes(code, "utf8"))
        root = tree.root_node
        if root.has_error:
            error = self._find_first_error(root)
            line = error.start_point[0] + 1 if error is not None else 1
            logger.warning("%s has syntax errors (first at line %d), reading what parses", path, line)

        types: list[DeclaredType] = []
        names: set[str] = set()
        self._walk(root, _Scope(), path, types, names)
        return types, names

    def _walk(self, node: Any, scope: _Scope, path: str, types: list[DeclaredType], names: set[str]) -> None:
        """Walk declarations in order, tracking namespace, usings and containing types."""
        for child in node.children:
            if child.type == "using_directive":
                scope = self._add_using(scope, child)

            elif child.type == "namespace_declaration":
                name = self._text(child.child_by_field_name("name"))
                inner = scope.child(namespace=self._join(scope.namespace, name))
                body = child.child_by_field_name("body")
                if body is not None:
                    self._walk(body, inner, path, types, names)

            elif child.type == "file_scoped_namespace_declaration":
                # Applies to the rest of the file, whether the grammar nests
                # the following declarations or leaves them as siblings
                name = self._text(child.child_by_field_name("name"))
                scope = scope.child(namespace=self._join(scope.namespace, name))
                self._walk(child, scope, path, types, names)

            elif child.type in TYPE_DECLARATIONS:
                self._visit_type(child, scope, path, types, names)

    def _visit_type(self, node: Any, scope: _Scope, path: str, types: list[DeclaredType], names: set[str]) -> None:
        name = self._text(node.child_by_field_name("name"))
        if not name:
            return
        names.add(".".join(p for p in (scope.namespace, *scope.containing_types, name) if p))

        if node.type == "class_declaration":
            types.append(self._declared_type(node, name, scope, path))

        if node.type in CONTAINER_DECLARATIONS:
            body = node.child_by_field_name("body")
            if body is not None:
                inner = scope.child(containing_types=(*scope.containing_types, name))
                self._walk(body, inner, path, types, names)

    def _declared_type(self, node: Any, name: str, scope: _Scope, path: str) -> DeclaredType:
        modifiers = [self._text(c) for c in node.children if c.type == "modifier"]
        type_parameters = node.child_by_field_name("type_parameters")
        if type_parameters is None:
            type_parameters = next((c for c in node.children if c.type == "type_parameter_list"), None)

        fields: list[FieldMember] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.children:
                if member.type == "field_declaration":
                    fields.extend(self._field_members(member))

        return DeclaredType(
            name=name,
            namespace=scope.namespace,
            containing_types=scope.containing_types,
            type_parameters=collapse_whitespace(self._text(type_parameters)) if type_parameters is not None else "",
            accessibility=Accessibility.from_modifiers(modifiers),
            fields=tuple(fields),
            usings=scope.usings,
            using_aliases=dict(scope.aliases),
            source_path=path,
        )

    def _field_members(self, node: Any) -> list[FieldMember]:
        """One FieldMember per variable of a field declaration."""
        attributes: list[AttributeUsage] = []
        for attribute_list in (c for c in node.children if c.type == "attribute_list"):
            for attribute in (c for c in attribute_list.children if c.type == "attribute"):
                name_node = attribute.child_by_field_name("name") or self._first_named(attribute)
                attribute_name = self._text(name_node)
                if attribute_name:
                    attributes.append(AttributeUsage(collapse_whitespace(attribute_name)))

        declaration = next((c for c in node.children if c.type == "variable_declaration"), None)
        if declaration is None:
            return []

        type_node = declaration.child_by_field_name("type")
        if type_node is None:
            type_node = next((c for c in declaration.named_children if c.type != "variable_declarator"), None)
        type_name = None
        if type_node is not None and not type_node.has_error:
            type_name = collapse_whitespace(self._text(type_node)) or None

        members = []
        for declarator in (c for c in declaration.children if c.type == "variable_declarator"):
            name_node = declarator.child_by_field_name("name")
            if name_node is None:
                name_node = next((c for c in declarator.children if c.type == "identifier"), None)
            field_name = self._text(name_node)
            if field_name:
                members.append(FieldMember(name=field_name, type_name=type_name, attributes=tuple(attributes)))
        return members

    def _add_using(self, scope: _Scope, node: Any) -> _Scope:
        match = _USING_PATTERN.match(collapse_whitespace(self._text(node)))
        if match is None or match.group("static"):
            return scope
        target = match.group("name").replace(" ", "")
        if target.startswith("global::"):
            target = target[len("global::") :]
        alias = match.group("alias")
        if alias:
            aliases = dict(scope.aliases)
            aliases[alias] = target
            return scope.child(aliases=aliases)
        if target in scope.usings:
            return scope
        return scope.child(usings=(*scope.usings, target))

    def _find_first_error(self, node: Any) -> Any | None:
        """Find the first ERROR or missing node in document order."""
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                found = self._find_first_error(child)
                if found is not None:
                    return found
        return None

    @staticmethod
    def _first_named(node: Any) -> Any | None:
        return node.named_children[0] if node.named_children else None

    @staticmethod
    def _text(node: Any | None) -> str:
        """Get the source text for a node."""
        if node is None or node.text is None:
            return ""
        return node.text.decode("utf8")

    @staticmethod
    def _join(namespace: str, name: str) -> str:
        name = collapse_whitespace(name).replace(" ", "")
        if not namespace:
            return name
        if not name:
            return namespace
        return f"{namespace}.{name}"
