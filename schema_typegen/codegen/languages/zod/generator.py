"""
Zod code generator implementation.

Generates runtime-validation schemas parallel to the TypeScript
declarations. Relation fields are not validated and are skipped.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.errors import SchemaMismatchError
from ...core.generator import CodeGenerator
from ...core.naming import GenerationContext
from ...core.schema import Datamodel, DatamodelEnum, FieldKind, Model
from .types import ZodSchemaMapper

logger = get_logger(__name__)

ZOD_IMPORT = 'import { z } from "zod";'


@dataclass(frozen=True)
class ZodFieldDeclaration:
    """One property of a z.object schema."""

    name: str
    schema: str


@dataclass(frozen=True)
class ZodObjectDeclaration:
    """A z.object schema for a model."""

    name: str
    fields: List[ZodFieldDeclaration] = field(default_factory=list)


@dataclass(frozen=True)
class ZodEnumDeclaration:
    """A z.enum schema."""

    name: str
    values: List[str] = field(default_factory=list)


class ZodGenerator(CodeGenerator):
    """Code generator for zod validation schemas."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize zod generator with configuration."""
        super().__init__(config)
        self.schema_mapper = ZodSchemaMapper(self.config)

    def get_template_directory(self) -> Path:
        """Return the zod templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        """Return the target name."""
        return "zod"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def render(self, datamodel: Datamodel, context: GenerationContext) -> str:
        """Render the complete schema file."""
        parts = [ZOD_IMPORT]
        parts.extend(self.render_enum(enum, context) for enum in datamodel.enums)
        parts.extend(self.render_model(model, context) for model in datamodel.models)
        return "\n\n".join(parts) + "\n"

    def build_enum(self, enum: DatamodelEnum, context: GenerationContext) -> ZodEnumDeclaration:
        """Build the declaration node for an enum schema."""
        name = context.enum_names.get(enum.name)
        if not name:
            raise SchemaMismatchError(f"Unknown enum name: {enum.name}")
        return ZodEnumDeclaration(name=name, values=list(enum.values))

    def render_enum(self, enum: DatamodelEnum, context: GenerationContext) -> str:
        """Render a z.enum schema over the enum's ordered values."""
        declaration = self.build_enum(enum, context)
        return self.render_template("enum.ts.j2", {"enum": declaration}).strip()

    def build_model(self, model: Model, context: GenerationContext) -> ZodObjectDeclaration:
        """Build the declaration node for a model schema."""
        name = context.declaration_name(model.name)

        fields = []
        for model_field in model.fields:
            if model_field.kind == FieldKind.OBJECT:
                continue

            enum_name = None
            if model_field.kind == FieldKind.ENUM:
                enum_name = context.enum_names.get(model_field.type)
                if not enum_name:
                    raise SchemaMismatchError(f"Unknown enum name: {model_field.type}")

            fields.append(
                ZodFieldDeclaration(
                    name=model_field.name,
                    schema=self.schema_mapper.map_field(model_field, enum_name),
                )
            )

        return ZodObjectDeclaration(name=name, fields=fields)

    def render_model(self, model: Model, context: GenerationContext) -> str:
        """Render a z.object schema for a model."""
        declaration = self.build_model(model, context)
        logger.debug("Rendered schema %s with %d fields", declaration.name, len(declaration.fields))
        return self.render_template("object.ts.j2", {"schema": declaration}).strip()

    def validate_datamodel(self, datamodel: Datamodel) -> List[str]:
        """Validate datamodel for zod generation."""
        warnings = super().validate_datamodel(datamodel)

        if not self.config.strict_validation_scalars:
            for model in datamodel.models:
                for model_field in model.fields:
                    if (
                        model_field.kind == FieldKind.SCALAR
                        and model_field.scalar_type is None
                    ):
                        warnings.append(
                            f"Unknown scalar type {model_field.type} in "
                            f"{model.name}.{model_field.name} validates as z.any()"
                        )

        return warnings


def create_zod_generator(config: Optional[GeneratorConfig] = None) -> ZodGenerator:
    """Create a zod generator with default configuration."""
    return ZodGenerator(config or GeneratorConfig())
