"""Shared fixtures for schema-typegen tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from schema_typegen.codegen.core.config import GeneratorConfig
from schema_typegen.codegen.core.schema import Datamodel, convert_dmmf

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding DMMF documents and expected outputs."""
    return FIXTURES_DIR


@pytest.fixture
def options_dmmf() -> dict[str, Any]:
    """DMMF document with Person, Address and Data models."""
    path = FIXTURES_DIR / "options-behavior" / "schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def options_datamodel(options_dmmf: dict[str, Any]) -> Datamodel:
    """The options-behavior document converted to a Datamodel."""
    return convert_dmmf(options_dmmf)


@pytest.fixture
def config() -> GeneratorConfig:
    """Default configuration."""
    return GeneratorConfig()


@pytest.fixture
def scalar() -> Callable[..., dict[str, Any]]:
    """Factory for DMMF scalar field objects."""

    def make(name: str, type_: str = "String", **extra: Any) -> dict[str, Any]:
        data = {"name": name, "kind": "scalar", "type": type_, "isList": False, "isRequired": True}
        data.update(extra)
        return data

    return make


@pytest.fixture
def build_datamodel() -> Callable[..., Datamodel]:
    """Factory converting lists of DMMF models, enums and types."""

    def build(
        models: list[dict[str, Any]] | None = None,
        enums: list[dict[str, Any]] | None = None,
        types: list[dict[str, Any]] | None = None,
    ) -> Datamodel:
        return convert_dmmf(
            {
                "datamodel": {
                    "models": models or [],
                    "enums": enums or [],
                    "types": types or [],
                }
            }
        )

    return build
