"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for TypeScript model generation.
"""

import re
from typing import Dict, Any, Optional
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    ChoiceLoader,
    DictLoader,
    StrictUndefined,
    TemplateNotFound,
    select_autoescape,
)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._memory_templates: Dict[str, str] = {}
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        # In-memory templates are looked up before shipped ones
        loaders = [DictLoader(self._memory_templates)]
        if self.template_dir and self.template_dir.exists():
            loaders.append(FileSystemLoader(str(self.template_dir)))
        loader = ChoiceLoader(loaders)

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        # Add custom filters for code generation
        self._env.filters["doc"] = self._doc_filter
        self._env.filters["string_literal"] = self._string_literal_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {str(e)}") from e

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._memory_templates[name] = content

    # Template filters for code generation

    def _doc_filter(self, value: Any) -> str:
        """Make text safe for a single line of a /** */ block."""
        single_line = re.sub(r"\r\n|\r|\n", " ", str(value))
        return single_line.replace("*/", "*\\/")

    def _string_literal_filter(self, value: Any, quote: str = "'") -> str:
        """Render a quoted TypeScript string literal."""
        escaped = str(value).replace("\\", "\\\\").replace(quote, "\\" + quote)
        return f"{quote}{escaped}{quote}"


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally bound to a template directory."""
    return TemplateEngine(template_dir)
