"""
Name-based symbol resolution over a set of C# sources.

Resolves attribute usages the way the C# compiler binds simple and qualified
names: through using aliases, enclosing namespaces and using directives,
with the `Attribute` suffix rule. Only types known to the compilation can be
bound, so an unrelated attribute that happens to share a simple name with the
marker does not resolve to it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .csharp_reader import collapse_whitespace
from .declarations import AttributeUsage, DeclaredType, FieldMember, SymbolResolver

logger = logging.getLogger(__name__)

GLOBAL_PREFIX = "global::"
ATTRIBUTE_SUFFIX = "Attribute"


class CSharpSymbolResolver(SymbolResolver):
    """Resolver backed by the set of fully qualified type names in a compilation."""

    def __init__(self, known_types: Iterable[str]):
        """
        Initialize the resolver.

        Args:
            known_types: Fully qualified names of all types in the compilation
        """
        self.known_types = set(known_types)

    def add_type(self, full_name: str) -> None:
        """Add a type to the compilation, e.g. generated marker source."""
        self.known_types.add(full_name)

    def resolve_type(self, full_name: str) -> str | None:
        return full_name if full_name in self.known_types else None

    def resolve_attribute(self, declared_type: DeclaredType, attribute: AttributeUsage) -> str | None:
        written = attribute.name.replace(" ", "")
        # Generic attributes bind by their name without type arguments
        written = written.split("<", 1)[0]
        is_global = written.startswith(GLOBAL_PREFIX)
        if is_global:
            written = written[len(GLOBAL_PREFIX) :]

        for candidate in self._attribute_candidates(written):
            resolved = self._bind(declared_type, candidate, is_global)
            if resolved is not None:
                return resolved

        logger.debug("Attribute %s on %s does not resolve", attribute.name, declared_type.fully_qualified_name)
        return None

    def resolve_field_type(self, declared_type: DeclaredType, field_member: FieldMember) -> str | None:
        if field_member.type_name is None:
            return None
        type_name = collapse_whitespace(field_member.type_name)
        return type_name or None

    @staticmethod
    def _attribute_candidates(written: str) -> list[str]:
        """`[Foo]` binds to `FooAttribute` first, then `Foo`."""
        return [written + ATTRIBUTE_SUFFIX, written]

    def _bind(self, declared_type: DeclaredType, name: str, is_global: bool) -> str | None:
        """Bind a written (possibly qualified) type name in a declaration's scope."""
        if is_global:
            return self.resolve_type(name)

        head, _, rest = name.partition(".")
        alias_target = declared_type.using_aliases.get(head)
        if alias_target is not None:
            return self.resolve_type(f"{alias_target}.{rest}" if rest else alias_target)

        # Enclosing namespaces, innermost first, then the global namespace
        namespace = declared_type.namespace
        while namespace:
            resolved = self.resolve_type(f"{namespace}.{name}")
            if resolved is not None:
                return resolved
            namespace = namespace.rpartition(".")[0]
        resolved = self.resolve_type(name)
        if resolved is not None:
            return resolved

        for using in declared_type.usings:
            resolved = self.resolve_type(f"{using}.{name}")
            if resolved is not None:
                return resolved
        return None
