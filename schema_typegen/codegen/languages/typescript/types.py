"""
TypeScript type system for code generation.

Maps datamodel scalar tags and inline documentation annotations to
TypeScript type expressions, and tracks the zero-dependency helper types
the generated file has to declare.
"""

import json
import re
from typing import Callable, Dict, List, Optional, Set

from ...core.config import GeneratorConfig
from ...core.errors import SchemaMismatchError
from ...core.schema import ScalarType

# `[Type]` or `![Type]` at the start of a documentation line, up to the
# last `]` on that line so nested brackets stay intact
JSON_REGEX = re.compile(r"^\s*!?\[(.*)\]", re.MULTILINE)
# `@type {Type}` anywhere in the documentation
JSDOC_REGEX = re.compile(r"@type\s*\{\s*(.*?)\s*\}(?=\s|$)", re.MULTILINE)
# A leading `!` makes the bracketed type literal
LITERAL_REGEX = re.compile(r"^\s*!", re.MULTILINE)

# Helper declarations compatible with the ORM client's runtime types, so
# the generated file needs no imports. Order is the emission order.
CUSTOM_TYPES: Dict[str, str] = {
    "BufferObject": 'type BufferObject = { type: "Buffer"; data: number[] };',
    "Decimal": "type Decimal = { valueOf(): string };",
    "JsonValue": (
        "type JsonValue = string | number | boolean | "
        "{ [key in string]?: JsonValue } | Array<JsonValue> | null;"
    ),
}


def group_union(type_expression: str) -> str:
    """Parenthesize a union so array and nullable suffixes bind to all of it."""
    if "|" in type_expression:
        return f"({type_expression})"
    return type_expression


def has_type_annotation(documentation: Optional[str]) -> bool:
    """Check whether documentation carries an inline type annotation."""
    if not documentation:
        return False
    return bool(JSON_REGEX.search(documentation) or JSDOC_REGEX.search(documentation))


class CustomTypeRegistry:
    """Records which helper types a generation run referenced."""

    def __init__(self, used: Optional[Set[str]] = None):
        """
        Initialize registry.

        Args:
            used: Usage set to record into, typically owned by the run's context
        """
        self.used = used if used is not None else set()

    def record(self, type_name: str) -> bool:
        """Record a type if it is a helper type; return whether it was one."""
        if type_name in CUSTOM_TYPES:
            self.used.add(type_name)
            return True
        return False

    def declarations(self) -> List[str]:
        """Declarations for every recorded helper type, in registry order."""
        return [decl for name, decl in CUSTOM_TYPES.items() if name in self.used]


class TypeScriptTypeMapper:
    """Maps scalar fields and type annotations to TypeScript types."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize with configuration."""
        self.config = config or GeneratorConfig()
        self._scalar_getters = self._build_scalar_getters()

    def _build_scalar_getters(self) -> Dict[ScalarType, Callable[[], str]]:
        """Build mapping of scalar types to type getters."""
        config = self.config
        return {
            ScalarType.STRING: lambda: "string",
            ScalarType.BOOLEAN: lambda: "boolean",
            ScalarType.INT: lambda: "number",
            ScalarType.FLOAT: lambda: "number",
            ScalarType.JSON: lambda: "JsonValue",
            ScalarType.DATETIME: lambda: group_union(config.date_type),
            ScalarType.BIGINT: lambda: group_union(config.big_int_type),
            ScalarType.DECIMAL: lambda: group_union(config.decimal_type),
            ScalarType.BYTES: lambda: group_union(config.bytes_type),
        }

    def map_scalar(self, tag: str, registry: Optional[CustomTypeRegistry] = None) -> str:
        """
        Map a scalar tag to a TypeScript type.

        Args:
            tag: Scalar type tag from the datamodel
            registry: Where to record helper type usage

        Returns:
            TypeScript type expression

        Raises:
            SchemaMismatchError: If the tag has no registered mapping
        """
        scalar = ScalarType.from_tag(tag)
        if scalar is None or scalar not in self._scalar_getters:
            raise SchemaMismatchError(f"Unknown scalar type: {tag}")

        resolved = self._scalar_getters[scalar]()
        if registry is not None:
            registry.record(resolved)
        return resolved

    def map_annotation(self, documentation: str) -> str:
        """
        Resolve an inline type annotation from field documentation.

        `@type {X}` wins over a bracketed `[X]`. A bracketed type is used
        verbatim when marked literal or when no namespace type is configured,
        otherwise it is qualified through the configured namespace.

        Args:
            documentation: Field documentation containing an annotation

        Returns:
            TypeScript type expression
        """
        jsdoc = JSDOC_REGEX.search(documentation)
        if jsdoc and jsdoc.group(1):
            return f"({jsdoc.group(1)})"

        bracketed = JSON_REGEX.search(documentation)
        type_name = bracketed.group(1) if bracketed else None
        if not type_name:
            return "unknown"

        is_literal = bool(LITERAL_REGEX.search(documentation))
        if is_literal or not self.config.namespace_type:
            return f"({type_name})"

        if self.config.use_type:
            return f"{self.config.namespace}.{self.config.use_type}[{json.dumps(type_name)}]"

        return f"{self.config.namespace_type}.{type_name}"
