"""Tests for the command-line interface."""

from __future__ import annotations

import io
import json

import pytest

from schema_typegen.cli import create_parser, main, select_targets
from schema_typegen.codegen.core.config import GeneratorConfig
from schema_typegen.utils import write_outputs


@pytest.fixture(autouse=True)
def plain_console(monkeypatch) -> None:
    """Keep rich from treating captured output as a terminal."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)


@pytest.fixture
def schema_path(fixtures_dir):
    return fixtures_dir / "options-behavior" / "schema.json"


@pytest.fixture
def expected_zod(fixtures_dir) -> str:
    return (fixtures_dir / "options-behavior" / "expected" / "zod.ts").read_text(encoding="utf-8")


class TestGeneration:
    """Tests for generating files from the command line."""

    def test_writes_typescript_and_zod(self, schema_path, expected_zod, tmp_path) -> None:
        """Configured outputs are written, zod follows its output option."""
        types_path = tmp_path / "types.ts"
        zod_path = tmp_path / "schemas" / "zod.ts"

        exit_code = main([str(schema_path), "-o", str(types_path), "--zod-output", str(zod_path)])

        assert exit_code == 0
        assert types_path.read_text(encoding="utf-8").startswith(
            "// This file was auto-generated by schema-typegen\n"
        )
        assert zod_path.read_text(encoding="utf-8") == expected_zod
        assert not (tmp_path / "pg.ts").exists()

    def test_explicit_targets(self, schema_path, tmp_path) -> None:
        """Only the requested targets are generated."""
        pg_path = tmp_path / "pg.ts"

        exit_code = main(
            [str(schema_path), "--target", "postgres", "--pg-output", str(pg_path), "-o", str(tmp_path / "t.ts")]
        )

        assert exit_code == 0
        assert "export namespace PG {" in pg_path.read_text(encoding="utf-8")
        assert not (tmp_path / "t.ts").exists()

    def test_prints_to_stdout(self, schema_path, expected_zod, capsys) -> None:
        """Without an output file the code goes to stdout."""
        assert main([str(schema_path), "--target", "zod"]) == 0
        assert capsys.readouterr().out == expected_zod

    def test_reads_stdin(self, schema_path, expected_zod, capsys, monkeypatch) -> None:
        """The document can be piped in."""
        monkeypatch.setattr("sys.stdin", io.StringIO(schema_path.read_text(encoding="utf-8")))
        assert main(["--stdin", "-t", "zod"]) == 0
        assert capsys.readouterr().out == expected_zod

    def test_config_file_and_overrides(self, schema_path, tmp_path) -> None:
        """Config file options apply and flags override them."""
        types_path = tmp_path / "types.ts"
        config_path = tmp_path / "typegen.json"
        config_path.write_text(
            json.dumps({"modelType": "type", "output": str(types_path), "optionalRelations": "false"}),
            encoding="utf-8",
        )

        assert main([str(schema_path), "--config", str(config_path), "--omit-relations"]) == 0

        code = types_path.read_text(encoding="utf-8")
        assert "export type Person = {" in code
        assert "address:" not in code

    def test_generation_failure_writes_nothing(self, tmp_path, capsys) -> None:
        """A failing target leaves every output untouched."""
        schema = tmp_path / "broken.json"
        schema.write_text(
            json.dumps(
                {"datamodel": {"models": [{"name": "User", "fields": [{"name": "role", "kind": "enum", "type": "Role"}]}]}}
            ),
            encoding="utf-8",
        )
        types_path = tmp_path / "types.ts"
        zod_path = tmp_path / "zod.ts"

        exit_code = main([str(schema), "-o", str(types_path), "--zod-output", str(zod_path)])

        assert exit_code == 1
        assert not types_path.exists()
        assert not zod_path.exists()
        assert "Unknown enum name: Role" in capsys.readouterr().err

    def test_write_failure_writes_nothing(self, schema_path, tmp_path, capsys) -> None:
        """A file that cannot be written keeps every other output unwritten."""
        types_path = tmp_path / "types.ts"
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        exit_code = main(
            [str(schema_path), "-o", str(types_path), "--zod-output", str(blocker / "zod.ts")]
        )

        assert exit_code == 1
        assert not types_path.exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["blocker"]
        assert "Failed to write output" in capsys.readouterr().err


class TestErrors:
    """Tests for command-line errors."""

    def test_requires_input(self, capsys) -> None:
        """An input source is required."""
        assert main([]) == 1
        assert "Input source required" in capsys.readouterr().err

    def test_unknown_target(self, schema_path, capsys) -> None:
        """Unknown targets are reported."""
        assert main([str(schema_path), "--target", "go"]) == 1
        assert "No generator registered for target: go" in capsys.readouterr().err

    def test_missing_file(self, tmp_path) -> None:
        """Missing input files fail cleanly."""
        assert main([str(tmp_path / "nope.json")]) == 1

    def test_not_a_dmmf_document(self, tmp_path, capsys) -> None:
        """Documents without a datamodel are rejected."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Expected a JSON object" in capsys.readouterr().err


class TestInformation:
    """Tests for informational options."""

    def test_list_targets(self, capsys) -> None:
        """Supported targets are listed."""
        assert main(["--list-targets"]) == 0
        out = capsys.readouterr().out
        assert "typescript" in out
        assert "zod" in out
        assert "postgres" in out


class TestSelectTargets:
    """Tests for default target selection."""

    def test_defaults_follow_outputs(self) -> None:
        """zod and pg join when their outputs are configured."""
        args = create_parser().parse_args(["schema.json"])
        assert select_targets(args, GeneratorConfig()) == ["typescript"]
        assert select_targets(args, GeneratorConfig(zod_output="z.ts", pg_output="p.ts")) == [
            "typescript",
            "zod",
            "pg",
        ]

    def test_deduplicates_aliases(self) -> None:
        """Aliases of the same target collapse."""
        args = create_parser().parse_args(["schema.json", "-t", "ts", "-t", "typescript", "-t", "zod"])
        assert select_targets(args, GeneratorConfig()) == ["typescript", "zod"]


class TestWriteOutputs:
    """Tests for writing several generated files together."""

    def test_replaces_existing_files(self, tmp_path) -> None:
        """Existing outputs are replaced and parents are created."""
        first = tmp_path / "first.ts"
        first.write_text("old", encoding="utf-8")
        second = tmp_path / "nested" / "second.ts"

        written = write_outputs({str(first): "one", str(second): "two"})

        assert written == {str(first): first, str(second): second}
        assert first.read_text(encoding="utf-8") == "one"
        assert second.read_text(encoding="utf-8") == "two"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["first.ts", "nested"]

    def test_failure_keeps_existing_files(self, tmp_path) -> None:
        """A failing write leaves earlier outputs as they were."""
        first = tmp_path / "first.ts"
        first.write_text("old", encoding="utf-8")
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(OSError):
            write_outputs({str(first): "new", str(blocker / "second.ts"): "two"})

        assert first.read_text(encoding="utf-8") == "old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["blocker", "first.ts"]
