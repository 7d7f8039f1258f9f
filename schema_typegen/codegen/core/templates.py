"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from typing import Dict, Any
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    select_autoescape,
)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Path):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            lstrip_blocks=True,
        )

        # Add custom filters for code generation
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter
        self._env.filters["doc_comment"] = self._doc_comment_filter
        self._env.filters["quote"] = self._quote_filter

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
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}")

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
            raise TemplateError(f"Failed to render template string: {str(e)}")

    # Template filters for code generation

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Indent all lines in a string."""
        indent = " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}".rstrip() for line in lines)

    def _doc_comment_filter(self, value: str, spaces: int = 0) -> str:
        """Render a documentation block, single-line when possible."""
        indent = " " * spaces
        text = str(value)
        if "\n" not in text:
            return f"{indent}/** {text} */"

        lines = [f"{indent}/**"]
        lines.extend(f"{indent} * {line}".rstrip() for line in text.split("\n"))
        lines.append(f"{indent} */")
        return "\n".join(lines)

    def _quote_filter(self, value: str) -> str:
        """Wrap a value in double quotes, escaping embedded ones."""
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


def create_template_engine(template_dir: Path) -> TemplateEngine:
    """Create a template engine backed by a template directory."""
    return TemplateEngine(template_dir)
