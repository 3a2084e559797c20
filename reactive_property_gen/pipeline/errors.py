"""
Exceptions raised by the generator pipeline.

Missing prerequisites (no marker type, unresolvable field types) are not
errors: they degrade to fewer artifacts. Everything here aborts a batch.
"""

from __future__ import annotations


class ReactiveGeneratorError(Exception):
    """Base class for generator failures."""

    pass


class SourceReadError(ReactiveGeneratorError):
    """Raised when a C# source file cannot be read or decoded."""

    pass


class GenerationCancelledError(ReactiveGeneratorError):
    """Raised when a batch is cancelled before it completes.

    No artifacts are returned for a cancelled batch.
    """

    pass


class DuplicateArtifactError(ReactiveGeneratorError):
    """Raised when two types in one batch map to the same artifact name."""

    pass


class ArtifactValidationError(ReactiveGeneratorError):
    """Raised when a rendered artifact does not parse as C#."""

    pass
