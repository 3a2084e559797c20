"""
Configuration for the reactive property generator.

Loaded from a JSON file with GeneratorConfig.from_dict; keys that do not
match a setting are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for artifact files.

    Controls behavior when an artifact file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to parse artifacts before writing
        atomic_write: Whether to write through a temporary file
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for generation."""

    # Namespace and class name of the marker attribute
    marker_namespace: str = "ReactiveObject.Generators"
    marker_name: str = "ReactivePropertyAttribute"

    # Change-notification method the generated setters call on `this`
    notify_method: str = "RaiseAndSetIfChanged"

    # Artifact naming
    artifact_suffix: str = "ReactiveProperty.g.cs"
    marker_artifact_name: str = "ReactivePropertyAttribute.g.cs"

    # Prefix artifact names with namespace and containing types
    qualify_artifact_names: bool = True

    # Re-emit the marker declaration inside every per-type artifact; only for
    # hosts that keep one copy per artifact name
    embed_marker_source: bool = False

    # Add the auto-generated banner at the top of each artifact
    add_generation_comment: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def marker_full_name(self) -> str:
        if not self.marker_namespace:
            return self.marker_name
        return f"{self.marker_namespace}.{self.marker_name}"

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k) and k != "marker_full_name":
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "marker_namespace": self.marker_namespace,
            "marker_name": self.marker_name,
            "notify_method": self.notify_method,
            "artifact_suffix": self.artifact_suffix,
            "marker_artifact_name": self.marker_artifact_name,
            "qualify_artifact_names": self.qualify_artifact_names,
            "embed_marker_source": self.embed_marker_source,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
