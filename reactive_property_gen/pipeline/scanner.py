"""
Candidate scanner.

Finds the fields tagged with the marker attribute and turns each type that
has any into a ClassDescriptor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..utils import derive_property_name
from .cancellation import CancellationToken
from .config import GeneratorConfig
from .declarations import DeclaredType, FieldMember, SymbolResolver
from .descriptors import Accessibility, ClassDescriptor, PropertyDescriptor

logger = logging.getLogger(__name__)


class CandidateScanner:
    """Builds class descriptors for types with marked fields."""

    def __init__(self, resolver: SymbolResolver, config: GeneratorConfig | None = None):
        self.resolver = resolver
        self.config = config or GeneratorConfig()

    def scan(self, declared_types: Iterable[DeclaredType], cancellation: CancellationToken | None = None) -> list[ClassDescriptor]:
        """
        Scan declaration fragments for marked fields.

        Args:
            declared_types: Declaration fragments; partial types may appear several times
            cancellation: Checked before each distinct type

        Returns:
            One descriptor per distinct type with at least one marked field,
            in order of first appearance

        Raises:
            GenerationCancelledError: If cancellation is requested
        """
        marker = self.resolver.resolve_type(self.config.marker_full_name)
        if marker is None:
            logger.warning("Marker type %s is not available, nothing to generate", self.config.marker_full_name)
            return []

        descriptors = []
        for fragments in self.group_fragments(declared_types).values():
            if cancellation is not None:
                cancellation.raise_if_cancellation_requested()
            descriptor = self._describe(fragments, marker)
            if descriptor is not None:
                descriptors.append(descriptor)
        return descriptors

    @staticmethod
    def group_fragments(declared_types: Iterable[DeclaredType]) -> dict[str, list[DeclaredType]]:
        """Group fragments by type, dropping repeated reports of the same fragment."""
        groups: dict[str, list[DeclaredType]] = {}
        for declared_type in declared_types:
            fragments = groups.setdefault(declared_type.fully_qualified_name, [])
            if declared_type not in fragments:
                fragments.append(declared_type)
        return groups

    def _describe(self, fragments: list[DeclaredType], marker: str) -> ClassDescriptor | None:
        first = fragments[0]
        accessibility = self._accessibility(fragments)

        properties: list[PropertyDescriptor] = []
        seen_fields: set[str] = set()
        for fragment in fragments:
            for field_member in fragment.fields:
                if field_member.name in seen_fields:
                    continue
                if not self._is_marked(fragment, field_member, marker):
                    continue

                type_name = self.resolver.resolve_field_type(fragment, field_member)
                if type_name is None:
                    logger.debug("Skipping %s.%s: field type does not resolve", first.fully_qualified_name, field_member.name)
                    continue

                property_name = derive_property_name(field_member.name)
                if property_name == field_member.name and len(property_name) > 1:
                    logger.warning(
                        "Skipping %s.%s: the generated property would have the same name as the field",
                        first.fully_qualified_name,
                        field_member.name,
                    )
                    continue

                seen_fields.add(field_member.name)
                properties.append(
                    PropertyDescriptor(
                        field_name=field_member.name,
                        property_name=property_name,
                        accessibility=accessibility,
                        type=type_name,
                    )
                )

        if not properties:
            return None

        logger.debug("%s: %d reactive propert%s", first.fully_qualified_name, len(properties), "y" if len(properties) == 1 else "ies")
        return ClassDescriptor(
            name=first.name,
            namespace=first.namespace,
            fully_qualified_name=first.fully_qualified_name,
            accessibility=accessibility,
            properties=tuple(properties),
            type_parameters=first.type_parameters,
            containing_types=first.containing_types,
            usings=self._usings(fragments),
        )

    def _is_marked(self, fragment: DeclaredType, field_member: FieldMember, marker: str) -> bool:
        """A field is marked when exactly one of its attributes binds to the marker."""
        matches = sum(1 for a in field_member.attributes if self.resolver.resolve_attribute(fragment, a) == marker)
        if matches > 1:
            logger.warning(
                "%s.%s carries the marker %d times, skipping it",
                fragment.fully_qualified_name,
                field_member.name,
                matches,
            )
            return False
        return matches == 1

    @staticmethod
    def _usings(fragments: list[DeclaredType]) -> tuple[str, ...]:
        """Using directives of all fragments, aliases last, without repeats."""
        usings: dict[str, None] = {}
        for fragment in fragments:
            usings.update(dict.fromkeys(fragment.usings))
        for fragment in fragments:
            usings.update(dict.fromkeys(f"{alias} = {target}" for alias, target in fragment.using_aliases.items()))
        return tuple(usings)

    @staticmethod
    def _accessibility(fragments: list[DeclaredType]) -> Accessibility:
        """First declared accessibility; C# defaults when no fragment declares one."""
        for fragment in fragments:
            if fragment.accessibility is not None:
                return fragment.accessibility
        return Accessibility.PRIVATE if fragments[0].is_nested else Accessibility.INTERNAL
