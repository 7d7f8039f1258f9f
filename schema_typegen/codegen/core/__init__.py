"""
Core code generation components.

Provides base classes and utilities used by all target generators.
"""

from .errors import GeneratorError, SchemaMismatchError, NameCollisionError
from .generator import CodeGenerator, GenerationResult, generate_code
from .schema import (
    Datamodel,
    DatamodelEnum,
    Field,
    FieldKind,
    Model,
    ScalarType,
    convert_dmmf,
)
from .naming import GenerationContext, NameResolver, apply_affixes
from .config import (
    GeneratorConfig,
    ConfigManager,
    ConfigError,
    UnknownOptionError,
    load_config,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Errors
    "GeneratorError",
    "SchemaMismatchError",
    "NameCollisionError",
    # Datamodel - core data structures
    "Datamodel",
    "DatamodelEnum",
    "Field",
    "FieldKind",
    "Model",
    "ScalarType",
    "convert_dmmf",
    # Naming
    "GenerationContext",
    "NameResolver",
    "apply_affixes",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "UnknownOptionError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
