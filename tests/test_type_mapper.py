"""Tests for TypeScript scalar and annotation mapping."""

from __future__ import annotations

import pytest

from schema_typegen.codegen.core.config import GeneratorConfig
from schema_typegen.codegen.core.errors import SchemaMismatchError
from schema_typegen.codegen.languages.typescript.types import (
    CustomTypeRegistry,
    TypeScriptTypeMapper,
    group_union,
    has_type_annotation,
)


class TestScalarMapping:
    """Tests for scalar tag mapping."""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("String", "string"),
            ("Boolean", "boolean"),
            ("Int", "number"),
            ("Float", "number"),
            ("Json", "JsonValue"),
            ("DateTime", "Date"),
            ("BigInt", "bigint"),
            ("Decimal", "Decimal"),
            ("Bytes", "Buffer"),
        ],
    )
    def test_default_mapping(self, tag: str, expected: str) -> None:
        """Every registered tag maps with default options."""
        assert TypeScriptTypeMapper().map_scalar(tag) == expected

    def test_configured_representations(self) -> None:
        """Representation options replace the defaults."""
        mapper = TypeScriptTypeMapper(
            GeneratorConfig(date_type="string", big_int_type="number", bytes_type="BufferObject")
        )
        assert mapper.map_scalar("DateTime") == "string"
        assert mapper.map_scalar("BigInt") == "number"
        assert mapper.map_scalar("Bytes") == "BufferObject"

    def test_union_representation_is_grouped(self) -> None:
        """Union representations are parenthesized."""
        mapper = TypeScriptTypeMapper(GeneratorConfig(date_type="Date | string"))
        assert mapper.map_scalar("DateTime") == "(Date | string)"

    def test_unknown_scalar_raises(self) -> None:
        """Unregistered tags are a schema mismatch."""
        with pytest.raises(SchemaMismatchError, match="Unknown scalar type: Geometry"):
            TypeScriptTypeMapper().map_scalar("Geometry")

    def test_records_custom_types(self) -> None:
        """Helper types are recorded as they are used."""
        registry = CustomTypeRegistry()
        mapper = TypeScriptTypeMapper()

        mapper.map_scalar("Json", registry)
        mapper.map_scalar("String", registry)
        mapper.map_scalar("Decimal", registry)

        assert registry.used == {"JsonValue", "Decimal"}
        declarations = registry.declarations()
        assert declarations[0].startswith("type Decimal")
        assert declarations[1].startswith("type JsonValue")

    def test_group_union(self) -> None:
        """Only unions are wrapped."""
        assert group_union("string") == "string"
        assert group_union("A | B") == "(A | B)"


class TestAnnotations:
    """Tests for inline documentation type annotations."""

    def test_detects_annotations(self) -> None:
        """Bracketed and JSDoc annotations are both detected."""
        assert has_type_annotation("[UserMeta]")
        assert has_type_annotation("  ![string[]]")
        assert has_type_annotation("Metadata @type {Record<string, number>}")
        assert not has_type_annotation("Plain documentation")
        assert not has_type_annotation(None)

    def test_jsdoc_annotation(self) -> None:
        """JSDoc annotations are used verbatim."""
        mapper = TypeScriptTypeMapper(GeneratorConfig(namespace_type="PrismaJson"))
        assert mapper.map_annotation("@type {Record<string, number>}") == "(Record<string, number>)"

    def test_bracket_without_namespace(self) -> None:
        """Without a namespace type the bracketed type is verbatim."""
        assert TypeScriptTypeMapper().map_annotation("[UserMeta]") == "(UserMeta)"

    def test_bracket_with_namespace_type(self) -> None:
        """Bracketed types are qualified through the namespace type."""
        mapper = TypeScriptTypeMapper(GeneratorConfig(namespace_type="PrismaJson"))
        assert mapper.map_annotation("[UserMeta]") == "PrismaJson.UserMeta"

    def test_bracket_with_use_type(self) -> None:
        """use_type indexes a single namespace type."""
        mapper = TypeScriptTypeMapper(
            GeneratorConfig(namespace="PrismaJson", namespace_type="PrismaJson", use_type="Types")
        )
        assert mapper.map_annotation("[UserMeta]") == 'PrismaJson.Types["UserMeta"]'

    def test_literal_bracket(self) -> None:
        """A leading bang keeps the bracketed type literal."""
        mapper = TypeScriptTypeMapper(GeneratorConfig(namespace_type="PrismaJson"))
        assert mapper.map_annotation('!["a" | "b"]') == '("a" | "b")'

    def test_empty_bracket_is_unknown(self) -> None:
        """An empty bracket gives an unknown type."""
        assert TypeScriptTypeMapper().map_annotation("[]") == "unknown"

    @pytest.mark.parametrize(
        ("documentation", "expected"),
        [
            ("[Tag[]]", "(Tag[])"),
            ("![Record<string, number[]>]", "(Record<string, number[]>)"),
            ("[string[]]\nsecond line [x]", "(string[])"),
        ],
    )
    def test_nested_brackets_kept(self, documentation, expected) -> None:
        """Brackets inside the annotation are part of the type."""
        assert TypeScriptTypeMapper().map_annotation(documentation) == expected

    def test_nested_brackets_with_namespace_type(self) -> None:
        """Qualified annotations keep their own brackets."""
        mapper = TypeScriptTypeMapper(GeneratorConfig(namespace_type="PrismaJson"))
        assert mapper.map_annotation("[Tag[]]") == "PrismaJson.Tag[]"
