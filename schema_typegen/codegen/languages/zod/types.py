"""
Zod schema vocabulary for code generation.

Maps datamodel fields to zod schema expressions and applies the
list / nullable / optional modifiers in their fixed order.
"""

from typing import Callable, Dict, Optional

from ...core.config import GeneratorConfig
from ...core.errors import SchemaMismatchError
from ...core.schema import Field, FieldKind, ScalarType

ANY_SCHEMA = "z.any()"


def _json_schema(config: GeneratorConfig, field: Field) -> str:
    """Json columns defaulting to an array validate as arrays."""
    if field.default == "[]":
        return "z.array(z.any())"
    return ANY_SCHEMA


def _datetime_schema(config: GeneratorConfig, field: Field) -> str:
    if config.date_type == "string":
        return "z.string().datetime()"
    return "z.date()"


SCALAR_TYPE_TO_ZOD: Dict[ScalarType, Callable[[GeneratorConfig, Field], str]] = {
    ScalarType.STRING: lambda config, field: "z.string()",
    ScalarType.BOOLEAN: lambda config, field: "z.boolean()",
    ScalarType.INT: lambda config, field: "z.number().int()",
    ScalarType.FLOAT: lambda config, field: "z.number()",
    ScalarType.JSON: _json_schema,
    ScalarType.DATETIME: _datetime_schema,
    ScalarType.BIGINT: lambda config, field: "z.bigint()",
    ScalarType.DECIMAL: lambda config, field: "z.number()",
    ScalarType.BYTES: lambda config, field: "z.instanceof(Buffer)",
}


class ZodSchemaMapper:
    """Maps fields to zod schema expressions."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize with configuration."""
        self.config = config or GeneratorConfig()

    def map_base_schema(self, field: Field, enum_name: Optional[str] = None) -> str:
        """
        Map a field to its schema without modifiers.

        Args:
            field: Scalar, enum, or unsupported field
            enum_name: Rendered schema name of the field's enum

        Returns:
            Zod schema expression

        Raises:
            SchemaMismatchError: For unmapped scalars when strict_validation_scalars is on
        """
        if field.kind == FieldKind.ENUM:
            return enum_name or field.type

        if field.kind == FieldKind.SCALAR:
            scalar = ScalarType.from_tag(field.type)
            if scalar is not None:
                return SCALAR_TYPE_TO_ZOD[scalar](self.config, field)
            if self.config.strict_validation_scalars:
                raise SchemaMismatchError(f"Unknown scalar type: {field.type}")

        # Unsupported fields and unmapped scalars are unconstrained
        return ANY_SCHEMA

    def map_field(self, field: Field, enum_name: Optional[str] = None) -> str:
        """Map a field to its full schema, modifiers included."""
        schema = self.map_base_schema(field, enum_name)

        if field.is_list:
            schema = f"z.array({schema})"

        if not field.is_required:
            schema += ".nullable()"

        if self.config.optional_nullables and not field.is_required:
            schema += ".optional()"

        return schema
