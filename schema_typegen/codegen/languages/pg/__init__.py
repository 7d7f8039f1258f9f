"""
Raw-SQL (node-postgres) code generator module.
"""

from .generator import PgGenerator, TableDeclaration, create_pg_generator, union_of_keys

__all__ = [
    "PgGenerator",
    "TableDeclaration",
    "create_pg_generator",
    "union_of_keys",
]
