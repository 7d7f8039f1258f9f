"""
TypeScript code generator module.

Generates dependency-free TypeScript declarations from a datamodel.
"""

from .generator import (
    TypeScriptGenerator,
    FieldDeclaration,
    ModelDeclaration,
    EnumDeclaration,
    create_typescript_generator,
    enum_to_typescript,
    model_to_typescript,
)
from .types import (
    CUSTOM_TYPES,
    CustomTypeRegistry,
    TypeScriptTypeMapper,
    group_union,
    has_type_annotation,
)

__all__ = [
    "TypeScriptGenerator",
    "FieldDeclaration",
    "ModelDeclaration",
    "EnumDeclaration",
    "TypeScriptTypeMapper",
    "CustomTypeRegistry",
    "CUSTOM_TYPES",
    "group_union",
    "has_type_annotation",
    # Factory functions
    "create_typescript_generator",
    "enum_to_typescript",
    "model_to_typescript",
]
