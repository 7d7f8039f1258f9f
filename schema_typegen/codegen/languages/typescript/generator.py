"""
TypeScript code generator implementation.

Generates zero-dependency TypeScript interfaces, type aliases, and enums
from a datamodel.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, UnknownOptionError, MODEL_TYPES, ENUM_TYPES
from ...core.errors import SchemaMismatchError
from ...core.generator import CodeGenerator
from ...core.naming import GenerationContext
from ...core.schema import Datamodel, DatamodelEnum, Field, FieldKind, Model
from .types import CustomTypeRegistry, TypeScriptTypeMapper, has_type_annotation

logger = get_logger(__name__)


@dataclass(frozen=True)
class FieldDeclaration:
    """One rendered property of an interface or type literal."""

    name: str
    type: str
    is_list: bool = False
    nullable: bool = False
    is_optional: bool = False
    comment: Optional[str] = None

    @property
    def type_expression(self) -> str:
        """Type with array suffix first, then the nullable union."""
        expression = self.type
        if self.is_list:
            expression += "[]"
        if self.nullable:
            expression += " | null"
        return expression


@dataclass(frozen=True)
class ModelDeclaration:
    """An interface or type-alias declaration."""

    name: str
    shape: str
    fields: List[FieldDeclaration] = field(default_factory=list)


@dataclass(frozen=True)
class EnumDeclaration:
    """An enumeration declaration."""

    name: str
    shape: str
    values: List[str] = field(default_factory=list)


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript interfaces and enums."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)
        self.type_mapper = TypeScriptTypeMapper(self.config)

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def render(self, datamodel: Datamodel, context: GenerationContext) -> str:
        """Render the complete TypeScript file."""
        # Declarations first, so helper type usage is known for the header
        enums = [self.render_enum(enum, context) for enum in datamodel.enums]
        models = [self.render_model(model, context) for model in datamodel.models]
        types = [self.render_model(model, context) for model in datamodel.types]

        registry = CustomTypeRegistry(context.used_custom_types)

        parts = []
        if self.config.header_comment:
            parts.append(
                self.template_engine.render_string(
                    "{{ text | comment }}", {"text": self.config.header_comment}
                )
            )
        if self.config.prefix_code:
            parts.append(self.config.prefix_code.strip("\n"))
        custom_types = registry.declarations()
        if custom_types:
            parts.append("\n".join(custom_types))
        parts.extend(enums)
        parts.extend(models)
        parts.extend(types)
        if self.config.suffix_code:
            parts.append(self.config.suffix_code.strip("\n"))

        return "\n\n".join(parts) + "\n"

    # Enum emitter

    def build_enum(self, enum: DatamodelEnum, context: GenerationContext) -> EnumDeclaration:
        """Build the declaration node for an enum."""
        shape = self.config.enum_type
        if shape not in ENUM_TYPES:
            raise UnknownOptionError("enumType", shape)

        name = context.enum_names.get(enum.name)
        if name is None:
            raise SchemaMismatchError(f"Unknown enum name: {enum.name}")

        return EnumDeclaration(name=name, shape=shape, values=list(enum.values))

    def render_enum(self, enum: DatamodelEnum, context: GenerationContext) -> str:
        """Render an enum in the configured shape."""
        declaration = self.build_enum(enum, context)
        return self.render_template("enum.ts.j2", {"enum": declaration}).strip()

    # Model emitter

    def build_model(self, model: Model, context: GenerationContext) -> ModelDeclaration:
        """Build the declaration node for a model or composite type."""
        shape = self.config.model_type
        if shape not in MODEL_TYPES:
            raise UnknownOptionError("modelType", shape)

        registry = CustomTypeRegistry(context.used_custom_types)
        fields = []
        for model_field in model.fields:
            declaration = self.build_field(model, model_field, context, registry)
            if declaration is not None:
                fields.append(declaration)

        return ModelDeclaration(
            name=context.declaration_name(model.name), shape=shape, fields=fields
        )

    def render_model(self, model: Model, context: GenerationContext) -> str:
        """Render a model as an interface or type alias."""
        declaration = self.build_model(model, context)
        logger.debug("Rendered %s with %d fields", declaration.name, len(declaration.fields))
        return self.render_template("model.ts.j2", {"model": declaration}).strip()

    def build_field(
        self,
        model: Model,
        model_field: Field,
        context: GenerationContext,
        registry: CustomTypeRegistry,
    ) -> Optional[FieldDeclaration]:
        """
        Build the declaration node for a single field.

        Returns:
            The field declaration, or None when the field is omitted
        """

        def declare(resolved_type: str, optional: bool = False, is_list: bool = model_field.is_list):
            return FieldDeclaration(
                name=model_field.name,
                type=resolved_type,
                is_list=is_list,
                nullable=not model_field.is_required,
                is_optional=optional
                or (not model_field.is_required and self.config.optional_nullables),
                comment=model_field.documentation or None,
            )

        if model_field.kind == FieldKind.SCALAR:
            resolved_type = self.type_mapper.map_scalar(model_field.type, registry)

            # Foreign keys take the type of the key they reference
            relation = model.find_relation_for(model_field.name)
            if relation is not None:
                type_name = context.type_names.get(relation.type)
                model_name = context.model_names.get(relation.type)
                if type_name:
                    return declare(type_name)
                if model_name:
                    if not relation.relation_to_fields:
                        raise SchemaMismatchError(
                            f"Relation {model.name}.{relation.name} has no referenced fields"
                        )
                    return declare(f"{model_name}['{relation.relation_to_fields[0]}']")
                raise SchemaMismatchError(f"Unknown model name: {relation.type}")

            if has_type_annotation(model_field.documentation):
                annotated = self.type_mapper.map_annotation(model_field.documentation)
                return declare(annotated, is_list=False)

            return declare(resolved_type)

        if model_field.kind == FieldKind.OBJECT:
            type_name = context.type_names.get(model_field.type)
            model_name = context.model_names.get(model_field.type)
            if type_name:
                # Composite types are never optional or omitted
                return declare(type_name)
            if model_name:
                if self.config.omit_relations:
                    return None
                return declare(model_name, self.config.optional_relations)
            raise SchemaMismatchError(f"Unknown model name: {model_field.type}")

        if model_field.kind == FieldKind.ENUM:
            enum_name = context.enum_names.get(model_field.type)
            if not enum_name:
                raise SchemaMismatchError(f"Unknown enum name: {model_field.type}")
            return declare(enum_name)

        # FieldKind.UNSUPPORTED
        return declare("any")


# Convenience functions for rendering single declarations
def model_to_typescript(
    model: Model, datamodel: Datamodel, config: Optional[GeneratorConfig] = None
) -> str:
    """Render one model of a datamodel as TypeScript."""
    generator = TypeScriptGenerator(config)
    context = GenerationContext.build(generator.config, datamodel)
    return generator.render_model(model, context)


def enum_to_typescript(
    enum: DatamodelEnum, datamodel: Datamodel, config: Optional[GeneratorConfig] = None
) -> str:
    """Render one enum of a datamodel as TypeScript."""
    generator = TypeScriptGenerator(config)
    context = GenerationContext.build(generator.config, datamodel)
    return generator.render_enum(enum, context)


def create_typescript_generator(config: Optional[GeneratorConfig] = None) -> TypeScriptGenerator:
    """Create a TypeScript generator with default configuration."""
    return TypeScriptGenerator(config or GeneratorConfig())
