"""
Zod code generator module.

Generates zod runtime-validation schemas from a datamodel.
"""

from .generator import (
    ZodGenerator,
    ZodEnumDeclaration,
    ZodFieldDeclaration,
    ZodObjectDeclaration,
    create_zod_generator,
)
from .types import SCALAR_TYPE_TO_ZOD, ZodSchemaMapper

__all__ = [
    "ZodGenerator",
    "ZodEnumDeclaration",
    "ZodFieldDeclaration",
    "ZodObjectDeclaration",
    "ZodSchemaMapper",
    "SCALAR_TYPE_TO_ZOD",
    "create_zod_generator",
]
