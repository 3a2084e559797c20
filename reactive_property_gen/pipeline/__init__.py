"""
Pipeline - reactive property generation for C# sources.

Phases of a batch:

1. Reader: parse C# sources into declaration fragments (tree-sitter)
2. Scanner: resolve attributes and build class descriptors
3. Renderer: render each descriptor to a partial class (Jinja2)
4. Generator: name the artifacts and assemble the batch
5. Writer: optional atomic write of the artifacts to disk
"""

from __future__ import annotations

from .cancellation import CancellationToken
from .config import GeneratorConfig, OutputConfig, OutputMode
from .csharp_reader import CSharpSourceReader, SourceSet
from .declarations import AttributeUsage, DeclaredType, FieldMember, SymbolResolver
from .descriptors import Accessibility, ClassDescriptor, PropertyDescriptor
from .errors import (
    ArtifactValidationError,
    DuplicateArtifactError,
    GenerationCancelledError,
    ReactiveGeneratorError,
    SourceReadError,
)
from .generator import Artifact, ReactivePropertyGenerator, generate
from .renderer import TemplateRenderer
from .resolver import CSharpSymbolResolver
from .scanner import CandidateScanner
from .writer import AtomicWriter

__all__ = [
    "Accessibility",
    "Artifact",
    "ArtifactValidationError",
    "AtomicWriter",
    "AttributeUsage",
    "CSharpSourceReader",
    "CSharpSymbolResolver",
    "CancellationToken",
    "CandidateScanner",
    "ClassDescriptor",
    "DeclaredType",
    "DuplicateArtifactError",
    "FieldMember",
    "GenerationCancelledError",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "PropertyDescriptor",
    "ReactiveGeneratorError",
    "ReactivePropertyGenerator",
    "SourceReadError",
    "SourceSet",
    "SymbolResolver",
    "TemplateRenderer",
    "generate",
]
