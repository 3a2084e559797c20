"""
Generation driver.

Runs one batch: marker artifact first, then scan, then one rendered
artifact per class descriptor.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .cancellation import CancellationToken
from .config import GeneratorConfig
from .declarations import DeclaredType, SymbolResolver
from .descriptors import ClassDescriptor
from .errors import DuplicateArtifactError, GenerationCancelledError
from .renderer import TemplateRenderer
from .scanner import CandidateScanner

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"\w+")


@dataclass(frozen=True)
class Artifact:
    """A named unit of generated source text."""

    name: str
    text: str

    def encode(self) -> bytes:
        return self.text.encode("utf-8")


class ReactivePropertyGenerator:
    """Generates reactive property partial classes for a set of declarations."""

    def __init__(self, resolver: SymbolResolver, config: GeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            resolver: Symbol resolution for the compilation being generated for
            config: Generation configuration
        """
        self.config = config or GeneratorConfig()
        self.scanner = CandidateScanner(resolver, self.config)
        self.renderer = TemplateRenderer(self.config)

    def generate(self, declared_types: Iterable[DeclaredType], cancellation: CancellationToken | None = None) -> list[Artifact]:
        """
        Generate all artifacts for one batch.

        Args:
            declared_types: Declaration fragments visible in the compilation
            cancellation: Cooperative cancellation, checked between types

        Returns:
            The marker artifact followed by one artifact per type with marked fields

        Raises:
            GenerationCancelledError: If cancelled; no artifacts are returned
            DuplicateArtifactError: If two types map to the same artifact name
        """
        cancellation = cancellation or CancellationToken()
        try:
            cancellation.raise_if_cancellation_requested()
            artifacts = [Artifact(self.config.marker_artifact_name, self.renderer.render_marker())]

            descriptors = self.scanner.scan(declared_types, cancellation)
            seen = {self.config.marker_artifact_name: self.config.marker_full_name}
            for descriptor in descriptors:
                cancellation.raise_if_cancellation_requested()
                name = self.artifact_name(descriptor)
                if name in seen:
                    raise DuplicateArtifactError(f"{descriptor.fully_qualified_name} and {seen[name]} both generate {name}")
                seen[name] = descriptor.fully_qualified_name
                artifacts.append(Artifact(name, self.renderer.render(descriptor)))
                logger.info("Generated %s (%d properties)", name, len(descriptor.properties))
        except GenerationCancelledError:
            logger.warning("Generation cancelled, discarding the batch")
            raise

        return artifacts

    def artifact_name(self, descriptor: ClassDescriptor) -> str:
        """File name for a descriptor's artifact.

        Generic type parameters are appended with underscores, so
        `Ns.Box<T>` becomes `Ns.Box_TReactiveProperty.g.cs`.
        """
        name = descriptor.name + "".join(f"_{p}" for p in _IDENTIFIER.findall(descriptor.type_parameters))
        if self.config.qualify_artifact_names:
            name = ".".join(p for p in (descriptor.namespace, *descriptor.containing_types, name) if p)
        return f"{name}{self.config.artifact_suffix}"


def generate(
    declared_types: Iterable[DeclaredType],
    resolver: SymbolResolver,
    config: GeneratorConfig | None = None,
    cancellation: CancellationToken | None = None,
) -> list[Artifact]:
    """Generate all artifacts for one batch with a one-off generator."""
    return ReactivePropertyGenerator(resolver, config).generate(declared_types, cancellation)
