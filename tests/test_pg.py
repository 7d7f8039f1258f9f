"""Tests for the pg data-access generator."""

from __future__ import annotations

import pytest

from schema_typegen.codegen.core.config import GeneratorConfig
from schema_typegen.codegen.core.generator import generate_code
from schema_typegen.codegen.languages.pg import PgGenerator, union_of_keys


class TestPgFile:
    """Tests for whole-file generation."""

    def test_client_header(self, options_datamodel) -> None:
        """The file opens with the pool client reading its connection string."""
        code = PgGenerator(GeneratorConfig(header_comment="")).generate(options_datamodel)

        assert code.startswith('import "dotenv/config";\nimport { Pool } from "pg";\n')
        assert 'import type { Person, Address, Data } from "./types";' in code
        assert "connectionString: process.env.DATABASE_URL!," in code
        assert "export async function connect() {" in code
        assert code.endswith("}\n")

    def test_env_var_and_header(self, options_datamodel) -> None:
        """The environment variable and header comment are configurable."""
        config = GeneratorConfig(pg_env_var="PG_URL", header_comment="Generated")
        code = PgGenerator(config).generate(options_datamodel)

        assert code.startswith("// Generated\n\n")
        assert "process.env.PG_URL!" in code

    def test_raw_query_namespace(self, options_datamodel) -> None:
        """Every model namespace lives inside the PG namespace."""
        code = PgGenerator().generate(options_datamodel)

        assert "export namespace PG {" in code
        assert "  export function $rawQuery(query: string, values: unknown[] = []) {" in code
        assert "  export namespace Person {" in code
        assert "  export namespace Data {" in code

    def test_model_functions(self, options_datamodel) -> None:
        """Each model namespace exposes the CRUD functions."""
        code = PgGenerator().generate(options_datamodel)

        for function in ("findUnique", "findMany", "create", "update", "deleteUnique"):
            assert f"    export function {function}(" in code
        assert "export function delete(" not in code

    def test_numbered_placeholders(self, options_datamodel) -> None:
        """Queries use $n parameters, offset after SET assignments."""
        code = PgGenerator().generate(options_datamodel)

        assert "`${$ident(key)} = $${i + 1 + offset}`" in code
        assert "keys.map((_, i) => `$${i + 1}`)" in code
        assert "PG.$conditions(args.where, keys.length)" in code


class TestTableDeclarations:
    """Tests for per-model helper types."""

    def test_primary_key_and_columns(self, options_datamodel) -> None:
        """Keys pick the id fields and columns exclude relations."""
        code = PgGenerator().generate(options_datamodel)

        assert '  export type PersonPK = Pick<Person, "id">;' in code
        assert (
            '  export type PersonColumns = Pick<Person, "id" | "name" | "age" | "email" | "gender" | "addressId">;'
            in code
        )
        assert '    const table = "Person";' in code

    def test_model_without_id(self, build_datamodel, scalar) -> None:
        """Models without an id field get a never key."""
        datamodel = build_datamodel(models=[{"name": "Log", "fields": [scalar("message")]}])
        result = generate_code(PgGenerator(), datamodel)

        assert result.success
        assert "  export type LogPK = never;" in result.code
        assert any("no id field" in warning for warning in result.warnings)

    def test_table_name_from_db_name(self, build_datamodel, scalar) -> None:
        """Mapped table names are used in queries."""
        datamodel = build_datamodel(
            models=[{"name": "User", "dbName": "users", "fields": [scalar("id", "Int", isId=True)]}]
        )
        code = PgGenerator().generate(datamodel)
        assert '    const table = "users";' in code
        assert "  export namespace User {" in code

    def test_union_of_keys(self) -> None:
        """Key unions quote each name and fall back to never."""
        assert union_of_keys(["id", "slug"]) == '"id" | "slug"'
        assert union_of_keys([]) == "never"


class TestTypesModule:
    """Tests for the model types import path."""

    @pytest.mark.parametrize(
        ("output", "pg_output", "expected"),
        [
            (None, None, "./types"),
            ("gen/models.ts", None, "./models"),
            ("out/types.ts", "out/pg.ts", "./types"),
            ("src/types.ts", "src/db/pg.ts", "../types"),
            ("src/generated/types.ts", "src/pg.ts", "./generated/types"),
        ],
    )
    def test_relative_import(self, output, pg_output, expected) -> None:
        """The import path is relative to the pg output file."""
        generator = PgGenerator(GeneratorConfig(output=output, pg_output=pg_output))
        assert generator.types_module() == expected
