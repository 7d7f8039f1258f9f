"""
Error taxonomy for code generation.

Every failure aborts the whole run: generators never return partial output.
"""

from typing import Iterable


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SchemaMismatchError(GeneratorError):
    """The input datamodel uses something the generators do not know.

    Raised for unregistered scalar tags, unknown field kinds, and relation or
    enum references that do not resolve to a declared name.
    """

    pass


class NameCollisionError(GeneratorError):
    """Two raw names render to the same identifier after affixing."""

    def __init__(self, rendered_name: str, raw_names: Iterable[str]):
        self.rendered_name = rendered_name
        self.raw_names = sorted(raw_names)
        super().__init__(
            f"Names {', '.join(self.raw_names)} all render to '{rendered_name}'"
        )
