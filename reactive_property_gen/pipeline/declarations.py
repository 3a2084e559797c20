"""
Input surface of the generator.

A DeclaredType is one type declaration fragment as reported by a source
reader; partial types show up as several fragments sharing a fully qualified
name. The SymbolResolver answers the semantic questions the scanner asks
about those fragments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .descriptors import Accessibility


@dataclass(frozen=True)
class AttributeUsage:
    """An attribute applied to a member, with its name as written."""

    name: str


@dataclass(frozen=True)
class FieldMember:
    """A single field variable; `int _a, _b;` is two members."""

    name: str
    type_name: str | None
    attributes: tuple[AttributeUsage, ...] = ()


@dataclass(frozen=True)
class DeclaredType:
    """One declaration fragment of a class."""

    name: str
    namespace: str = ""
    containing_types: tuple[str, ...] = ()
    type_parameters: str = ""
    accessibility: Accessibility | None = None
    fields: tuple[FieldMember, ...] = ()
    usings: tuple[str, ...] = ()
    using_aliases: dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    source_path: str = ""

    @property
    def fully_qualified_name(self) -> str:
        parts = [p for p in (self.namespace, *self.containing_types) if p]
        parts.append(self.name + self.type_parameters)
        return ".".join(parts)

    @property
    def is_nested(self) -> bool:
        return bool(self.containing_types)


class SymbolResolver(ABC):
    """Resolves written names to canonical identities."""

    @abstractmethod
    def resolve_type(self, full_name: str) -> str | None:
        """
        Look up a type by its fully qualified name.

        Args:
            full_name: Namespace-qualified type name

        Returns:
            Canonical identity of the type, or None if it is not in the compilation
        """

    @abstractmethod
    def resolve_attribute(self, declared_type: DeclaredType, attribute: AttributeUsage) -> str | None:
        """
        Resolve an attribute usage to the attribute class it binds to.

        Args:
            declared_type: Fragment the attribute appears in (provides scope)
            attribute: The attribute usage

        Returns:
            Canonical identity of the attribute class, or None if unresolved
        """

    @abstractmethod
    def resolve_field_type(self, declared_type: DeclaredType, field_member: FieldMember) -> str | None:
        """
        Resolve a field's declared type to a display string.

        Args:
            declared_type: Fragment declaring the field
            field_member: The field

        Returns:
            Type display string, or None if the type cannot be resolved
        """
