"""
Template renderer for generated C# partial classes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorConfig
from .descriptors import ClassDescriptor

TOOL_NAME = "reactive_property_gen"


class TemplateRenderer:
    """Renders class descriptors to C# source with Jinja2 templates."""

    # Template directory name
    TEMPLATE_LANG: str = "cs"

    # File extension
    FILE_EXTENSION: str = "cs"

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize the renderer.

        Args:
            config: Generation configuration
        """
        self.config = config or GeneratorConfig()
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )

        self.header_template = self.jinja_env.get_template(f"header.{self.FILE_EXTENSION}.jinja2")
        self.usings_template = self.jinja_env.get_template(f"usings.{self.FILE_EXTENSION}.jinja2")
        self.block_template = self.jinja_env.get_template(f"block.{self.FILE_EXTENSION}.jinja2")
        self.marker_template = self.jinja_env.get_template(f"marker.{self.FILE_EXTENSION}.jinja2")
        self.class_template = self.jinja_env.get_template(f"class.{self.FILE_EXTENSION}.jinja2")

    def render(self, descriptor: ClassDescriptor) -> str:
        """
        Render the partial class for a descriptor.

        Sections, in order: header, using directives, marker source (when embedded),
        namespace, containing types, the partial class with its properties.

        Args:
            descriptor: The class to render

        Returns:
            Complete C# source text
        """
        body = self._render(
            self.class_template,
            properties=descriptor.properties,
            notify_method=self.config.notify_method,
        )
        body = self._block(f"{descriptor.accessibility.value} partial class {descriptor.name}{descriptor.type_parameters}", body)
        for containing_type in reversed(descriptor.containing_types):
            body = self._block(f"partial class {containing_type}", body)
        if descriptor.namespace:
            body = self._block(f"namespace {descriptor.namespace}", body)

        sections = []
        if self.config.add_generation_comment:
            sections.append(self.header())
        if descriptor.usings:
            sections.append(self._render(self.usings_template, usings=descriptor.usings))
        if self.config.embed_marker_source:
            sections.append(self.marker_source())
        sections.append(body)
        return self._join(sections)

    def render_marker(self) -> str:
        """Render the standalone marker artifact."""
        sections = []
        if self.config.add_generation_comment:
            sections.append(self.header())
        sections.append(self.marker_source())
        return self._join(sections)

    def header(self) -> str:
        return self._render(self.header_template, tool_name=TOOL_NAME)

    def marker_source(self) -> str:
        """Source of the marker attribute, inside its namespace."""
        source = self._render(self.marker_template, marker_name=self.config.marker_name)
        if self.config.marker_namespace:
            source = self._block(f"namespace {self.config.marker_namespace}", source)
        return source

    def _block(self, declaration: str, body: str) -> str:
        return self._render(self.block_template, declaration=declaration, body=body)

    @staticmethod
    def _render(template: jinja2.Template, **context: Any) -> str:
        return template.render(**context).rstrip()

    @staticmethod
    def _join(sections: list[str]) -> str:
        return "\n\n".join(sections) + "\n"
