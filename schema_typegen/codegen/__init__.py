"""
Schema Typegen Code Generation Module

Generates TypeScript declarations, zod schemas, and raw-SQL helpers
from a Prisma DMMF datamodel.
"""

from typing import Any, Dict, List, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    list_supported_targets,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.errors import GeneratorError, SchemaMismatchError, NameCollisionError
from .core.schema import Datamodel, DatamodelEnum, Field, FieldKind, Model, convert_dmmf
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config


# Convenience functions
def generate_from_dmmf(
    dmmf: Dict[str, Any],
    target: str = "typescript",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str]] = None,
) -> GenerationResult:
    """
    Generate code from a DMMF document.

    Args:
        dmmf: DMMF document, or its datamodel object
        target: Target name or alias
        config: Generator configuration object, dict, or path

    Returns:
        GenerationResult with generated code
    """
    try:
        datamodel = convert_dmmf(dmmf)
    except SchemaMismatchError as e:
        return GenerationResult.error(f"Invalid datamodel: {e}", e)

    generator = get_generator(target, config)
    return generate_code(generator, datamodel)


def generate_all(
    dmmf: Dict[str, Any],
    targets: List[str],
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str]] = None,
) -> Dict[str, GenerationResult]:
    """Generate several targets from the same DMMF document."""
    registry = get_registry()
    return {
        registry.resolve(target): generate_from_dmmf(dmmf, target, config)
        for target in targets
    }


def quick_generate(dmmf, target="typescript", **options):
    """
    Quick code generation from DMMF data.

    Args:
        dmmf: DMMF data (dict or JSON string)
        target: Target name
        **options: Generator options

    Returns:
        Generated code string
    """
    if isinstance(dmmf, str):
        import json

        dmmf = json.loads(dmmf)

    result = generate_from_dmmf(dmmf, target, options)

    if result.success:
        return result.code
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "SchemaMismatchError",
    "NameCollisionError",
    "Datamodel",
    "DatamodelEnum",
    "Field",
    "FieldKind",
    "Model",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "convert_dmmf",
    "generate_code",
    "generate_from_dmmf",
    "generate_all",
    "quick_generate",
    "get_generator",
    "get_registry",
    "list_supported_targets",
    "load_config",
]
