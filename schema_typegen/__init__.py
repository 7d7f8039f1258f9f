"""
schema-typegen: TypeScript, zod and raw-SQL code generation from Prisma DMMF.
"""

__version__ = "0.1.0"
