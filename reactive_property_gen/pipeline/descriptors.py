"""
Descriptor definitions.

Descriptors are the normalized, immutable records the scanner produces and
the renderer consumes. They hold plain strings only, so nothing from the
source reader or the symbol resolver leaks into rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Accessibility(str, Enum):
    """Declared accessibility of a type, rendered verbatim as C# modifiers."""

    PUBLIC = "public"
    INTERNAL = "internal"
    PROTECTED = "protected"
    PRIVATE = "private"
    PROTECTED_INTERNAL = "protected internal"
    PRIVATE_PROTECTED = "private protected"

    @staticmethod
    def from_modifiers(modifiers: list[str] | tuple[str, ...]) -> Accessibility | None:
        """Pick the accessibility out of a declaration's modifier keywords.

        Returns None when no accessibility keyword is present.
        """
        present = {m for m in modifiers if m in ("public", "internal", "protected", "private")}
        if not present:
            return None
        if "public" in present:
            return Accessibility.PUBLIC
        if present == {"protected", "internal"}:
            return Accessibility.PROTECTED_INTERNAL
        if present == {"private", "protected"}:
            return Accessibility.PRIVATE_PROTECTED
        if "internal" in present:
            return Accessibility.INTERNAL
        if "protected" in present:
            return Accessibility.PROTECTED
        return Accessibility.PRIVATE


@dataclass(frozen=True)
class PropertyDescriptor:
    """One marked field and the public property generated for it."""

    field_name: str
    property_name: str
    accessibility: Accessibility
    type: str

    def __post_init__(self):
        if not self.field_name or not self.property_name:
            raise ValueError(f"Property descriptor needs a field and a property name, got {self.field_name!r} -> {self.property_name!r}")
        if self.property_name == self.field_name and len(self.field_name) > 1:
            raise ValueError(f"Property {self.property_name!r} would have the same name as its backing field")


@dataclass(frozen=True)
class ClassDescriptor:
    """A type with at least one marked field."""

    name: str
    namespace: str
    fully_qualified_name: str
    accessibility: Accessibility
    properties: tuple[PropertyDescriptor, ...]

    # Type parameter list as written, e.g. "<T>" ("" for non-generic types)
    type_parameters: str = ""

    # Names of enclosing types for nested declarations, outermost first
    containing_types: tuple[str, ...] = ()

    # Using directives the generated file needs, e.g. "System" or "Json = Newtonsoft.Json"
    usings: tuple[str, ...] = ()

    def __post_init__(self):
        if not self.properties:
            raise ValueError(f"Class descriptor for {self.fully_qualified_name} has no properties")
