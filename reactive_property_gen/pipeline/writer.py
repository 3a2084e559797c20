"""
Atomic file writer for generated artifacts.

Ensures that file writes are atomic to prevent half-written artifacts
from interrupted operations.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import OutputConfig, OutputMode
from .csharp_reader import CSharpSourceReader
from .errors import ArtifactValidationError
from .generator import Artifact

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Writes artifacts to an output directory.

    Uses a two-phase approach:
    1. Validate every artifact and check for existing files
    2. Write each artifact to a temporary file in the target directory
       and atomically replace the target

    A batch that fails validation or the existence check writes nothing.
    """

    def __init__(self, validate_csharp: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_csharp: Optional validation function for C# code
        """
        self._reader: CSharpSourceReader | None = None
        self._validate_csharp = validate_csharp or self._default_validate_csharp

    def write_artifacts(self, output_dir: Path, artifacts: Sequence[Artifact], output_config: OutputConfig | None = None) -> list[Path]:
        """Write a batch of artifacts.

        Args:
            output_dir: Directory the artifacts are written to
            artifacts: Artifacts to write
            output_config: Output mode and validation settings

        Returns:
            Paths written, in artifact order

        Raises:
            FileExistsError: If a target exists in ERROR_IF_EXISTS mode
            ArtifactValidationError: If an artifact does not parse
            OSError: If file operations fail
        """
        output_config = output_config or OutputConfig()
        output_dir = Path(output_dir)

        if output_config.validate_before_write:
            for artifact in artifacts:
                self._validate_content(artifact)

        targets = [output_dir / artifact.name for artifact in artifacts]
        if output_config.mode == OutputMode.ERROR_IF_EXISTS:
            for target in targets:
                if target.exists():
                    raise FileExistsError(f"Output file already exists: {target}. Use force mode to overwrite.")

        for target, artifact in zip(targets, artifacts):
            if output_config.atomic_write:
                self.write(target, artifact.text)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(artifact.text, encoding="utf-8")
            logger.info("Wrote %s", target)

        return targets

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            temp_path.replace(path)

        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def _validate_content(self, artifact: Artifact) -> None:
        try:
            self._validate_csharp(artifact.text)
        except ArtifactValidationError as e:
            raise ArtifactValidationError(f"{artifact.name}: {e}") from e

    def _default_validate_csharp(self, content: str) -> None:
        """Default C# validation.

        Args:
            content: C# code to validate

        Raises:
            ArtifactValidationError: If the code does not parse or declares no type
        """
        if self._reader is None:
            self._reader = CSharpSourceReader()

        line = self._reader.first_error_line(content)
        if line is not None:
            raise ArtifactValidationError(f"generated C# code has a syntax error at line {line}")

        if "class " not in content:
            raise ArtifactValidationError("generated C# code has no type definitions")
