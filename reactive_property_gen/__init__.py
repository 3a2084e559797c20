"""Reactive Property Generator

Generates C# partial classes exposing a change-notifying property for
every field tagged with [ReactiveProperty].
"""

__version__ = "1.0.0"

from .pipeline import (
    Artifact,
    AtomicWriter,
    CancellationToken,
    CSharpSourceReader,
    CSharpSymbolResolver,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    ReactiveGeneratorError,
    ReactivePropertyGenerator,
    generate,
)
from .utils import derive_property_name

__all__ = [
    "ReactivePropertyGenerator",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "Artifact",
    "AtomicWriter",
    "CancellationToken",
    "CSharpSourceReader",
    "CSharpSymbolResolver",
    "ReactiveGeneratorError",
    "derive_property_name",
    "generate",
]
