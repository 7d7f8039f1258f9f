"""
Target-specific code generators.

This module contains generators for TypeScript declarations, zod
validation schemas, and node-postgres data-access namespaces.
"""

from .typescript import TypeScriptGenerator, create_typescript_generator
from .zod import ZodGenerator, create_zod_generator
from .pg import PgGenerator, create_pg_generator

__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
    "ZodGenerator",
    "create_zod_generator",
    "PgGenerator",
    "create_pg_generator",
]
