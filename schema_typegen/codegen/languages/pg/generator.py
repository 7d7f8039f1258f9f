"""
Raw-SQL data-access generator for the node-postgres client.

Emits a Pool client, a PG namespace with a small query toolkit, and one
namespace per model with findUnique / findMany / create / update /
deleteUnique functions. Queries use positional $n parameters.
"""

import os
from dataclasses import dataclass
from typing import List, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.naming import GenerationContext
from ...core.schema import Datamodel, FieldKind, Model

logger = get_logger(__name__)

DEFAULT_TYPES_MODULE = "./types"


def union_of_keys(names: List[str]) -> str:
    """String-literal union of property names, or never when empty."""
    if not names:
        return "never"
    return " | ".join(f'"{name}"' for name in names)


@dataclass(frozen=True)
class TableDeclaration:
    """Data-access namespace for one model."""

    name: str
    table_name: str
    primary_key: List[str]
    columns: List[str]

    @property
    def primary_key_type(self) -> str:
        if not self.primary_key:
            return "never"
        return f"Pick<{self.name}, {union_of_keys(self.primary_key)}>"

    @property
    def columns_type(self) -> str:
        return f"Pick<{self.name}, {union_of_keys(self.columns)}>"


class PgGenerator(CodeGenerator):
    """Code generator for node-postgres data-access namespaces."""

    def get_template_directory(self) -> Path:
        """Return the pg templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        return "pg"

    @property
    def file_extension(self) -> str:
        return ".ts"

    def types_module(self) -> str:
        """
        Module specifier the model types are imported from.

        Resolved relative to the pg output file when both output paths
        are configured.
        """
        if not self.config.output:
            return DEFAULT_TYPES_MODULE

        target = Path(self.config.output).with_suffix("")
        if not self.config.pg_output:
            return f"./{target.name}"

        relative = os.path.relpath(target, Path(self.config.pg_output).parent)
        relative = relative.replace(os.sep, "/")
        if not relative.startswith("."):
            relative = f"./{relative}"
        return relative

    def render(self, datamodel: Datamodel, context: GenerationContext) -> str:
        """Render the complete data-access file."""
        tables = [self.build_table(model, context) for model in datamodel.models]

        parts = []
        if self.config.header_comment:
            parts.append(
                self.template_engine.render_string(
                    "{{ text | comment }}", {"text": self.config.header_comment}
                )
            )
        parts.append(
            self.render_template(
                "client.ts.j2",
                {
                    "imports": [table.name for table in tables],
                    "types_module": self.types_module(),
                    "env_var": self.config.pg_env_var,
                },
            ).strip()
        )
        parts.append(
            self.render_template(
                "namespace.ts.j2",
                {"tables": [self.render_table(table) for table in tables]},
            ).strip()
        )

        return "\n\n".join(parts) + "\n"

    def build_table(self, model: Model, context: GenerationContext) -> TableDeclaration:
        """Build the data-access declaration for a model."""
        # Relations to other models are not columns; composite types are
        columns = [
            model_field.name
            for model_field in model.fields
            if model_field.kind != FieldKind.OBJECT
            or model_field.type in context.type_names
        ]
        return TableDeclaration(
            name=context.declaration_name(model.name),
            table_name=model.table_name,
            primary_key=[model_field.name for model_field in model.id_fields],
            columns=columns,
        )

    def render_table(self, table: TableDeclaration) -> str:
        logger.debug("Rendered data-access namespace for %s", table.name)
        return self.render_template("table.ts.j2", {"table": table}).strip()

    def validate_datamodel(self, datamodel: Datamodel) -> List[str]:
        """Validate datamodel for data-access generation."""
        warnings = super().validate_datamodel(datamodel)

        for model in datamodel.models:
            if not model.id_fields:
                warnings.append(
                    f"Model {model.name} has no id field; its unique lookups are unusable"
                )

        return warnings


def create_pg_generator(config: Optional[GeneratorConfig] = None) -> PgGenerator:
    """Create a pg generator with default configuration."""
    return PgGenerator(config or GeneratorConfig())
