"""
Core schema representation for code generation.

Converts the ORM schema compiler's datamodel document (DMMF) into a
normalized internal format that generators can work with consistently.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Any
from enum import Enum

from .errors import SchemaMismatchError


class FieldKind(Enum):
    """Kinds of fields a datamodel can declare."""

    SCALAR = "scalar"
    OBJECT = "object"  # Relation to a model or composite type
    ENUM = "enum"
    UNSUPPORTED = "unsupported"


class ScalarType(Enum):
    """Scalar type tags emitted by the schema compiler."""

    STRING = "String"
    BOOLEAN = "Boolean"
    INT = "Int"
    FLOAT = "Float"
    JSON = "Json"
    DATETIME = "DateTime"
    BIGINT = "BigInt"
    DECIMAL = "Decimal"
    BYTES = "Bytes"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["ScalarType"]:
        """Return the scalar type for a tag, or None if it is not registered."""
        try:
            return cls(tag)
        except ValueError:
            return None


@dataclass(frozen=True)
class Field:
    """Represents a single field of a model or composite type."""

    name: str
    kind: FieldKind
    type: str  # Scalar tag, or the referenced model/enum/type name
    is_required: bool = True
    is_list: bool = False
    documentation: Optional[str] = None

    # Relation linkage
    relation_from_fields: Tuple[str, ...] = field(default_factory=tuple)
    relation_to_fields: Tuple[str, ...] = field(default_factory=tuple)

    default: Any = None
    has_default_value: bool = False
    is_id: bool = False
    is_unique: bool = False

    @property
    def scalar_type(self) -> Optional[ScalarType]:
        """Scalar type of this field, None for non-scalars and unknown tags."""
        if self.kind != FieldKind.SCALAR:
            return None
        return ScalarType.from_tag(self.type)


@dataclass(frozen=True)
class Model:
    """Represents a model (or composite type) with ordered fields."""

    name: str
    fields: Tuple[Field, ...] = field(default_factory=tuple)
    db_name: Optional[str] = None
    documentation: Optional[str] = None

    @property
    def table_name(self) -> str:
        """Database table name, falling back to the model name."""
        return self.db_name or self.name

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name."""
        for model_field in self.fields:
            if model_field.name == name:
                return model_field
        return None

    def find_relation_for(self, field_name: str) -> Optional[Field]:
        """Find the relation field whose first foreign-key source is field_name."""
        for model_field in self.fields:
            if (
                model_field.relation_from_fields
                and model_field.relation_from_fields[0] == field_name
            ):
                return model_field
        return None

    @property
    def id_fields(self) -> List[Field]:
        """Fields that make up the primary key."""
        return [f for f in self.fields if f.is_id]


@dataclass(frozen=True)
class DatamodelEnum:
    """Represents an enumeration with ordered value names."""

    name: str
    values: Tuple[str, ...] = field(default_factory=tuple)
    documentation: Optional[str] = None


@dataclass(frozen=True)
class Datamodel:
    """All models, enums, and composite types of one schema."""

    models: Tuple[Model, ...] = field(default_factory=tuple)
    enums: Tuple[DatamodelEnum, ...] = field(default_factory=tuple)
    types: Tuple[Model, ...] = field(default_factory=tuple)

    def get_model(self, name: str) -> Optional[Model]:
        """Get model by name."""
        for model in self.models:
            if model.name == name:
                return model
        return None

    def get_enum(self, name: str) -> Optional[DatamodelEnum]:
        """Get enum by name."""
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    def get_summary(self) -> Dict[str, int]:
        """Get counts describing this datamodel."""
        return {
            "models": len(self.models),
            "enums": len(self.enums),
            "types": len(self.types),
            "fields": sum(len(m.fields) for m in self.models + self.types),
        }


def convert_dmmf(document: Dict[str, Any]) -> Datamodel:
    """
    Convert a DMMF document to internal Datamodel representation.

    Args:
        document: Either the whole DMMF document (with a ``datamodel`` key)
            or the datamodel object itself

    Returns:
        Datamodel: Normalized, immutable datamodel

    Raises:
        SchemaMismatchError: If the document does not have the expected shape
    """
    if not isinstance(document, dict):
        raise SchemaMismatchError(
            f"Expected a JSON object, got {type(document).__name__}"
        )

    datamodel = document.get("datamodel", document)
    if not isinstance(datamodel, dict):
        raise SchemaMismatchError(
            f"Expected datamodel to be an object, got {type(datamodel).__name__}"
        )

    def require_object(data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SchemaMismatchError(f"Expected {what} to be an object, got {data!r}")
        return data

    def convert_field(data: Dict[str, Any], owner: str) -> Field:
        """Convert a single DMMF field."""
        data = require_object(data, f"field in {owner}")
        try:
            kind = FieldKind(data["kind"])
        except KeyError:
            raise SchemaMismatchError(f"Field in {owner} has no kind: {data!r}")
        except ValueError:
            raise SchemaMismatchError(
                f"Unknown field kind: {data['kind']} ({owner}.{data.get('name')})"
            )

        if "name" not in data or "type" not in data:
            raise SchemaMismatchError(f"Field in {owner} needs a name and a type")

        return Field(
            name=data["name"],
            kind=kind,
            type=data["type"],
            is_required=data.get("isRequired", True),
            is_list=data.get("isList", False),
            documentation=data.get("documentation"),
            relation_from_fields=tuple(data.get("relationFromFields") or ()),
            relation_to_fields=tuple(data.get("relationToFields") or ()),
            default=data.get("default"),
            has_default_value=data.get("hasDefaultValue", "default" in data),
            is_id=data.get("isId", False),
            is_unique=data.get("isUnique", False),
        )

    def convert_model(data: Dict[str, Any]) -> Model:
        """Convert a DMMF model or composite type."""
        data = require_object(data, "model")
        name = data["name"]
        return Model(
            name=name,
            fields=tuple(convert_field(f, name) for f in data.get("fields", [])),
            db_name=data.get("dbName"),
            documentation=data.get("documentation"),
        )

    def convert_enum(data: Dict[str, Any]) -> DatamodelEnum:
        """Convert a DMMF enum; values may be objects or plain strings."""
        data = require_object(data, "enum")
        values = tuple(
            value["name"] if isinstance(value, dict) else str(value)
            for value in data.get("values", [])
        )
        return DatamodelEnum(
            name=data["name"],
            values=values,
            documentation=data.get("documentation"),
        )

    try:
        return Datamodel(
            models=tuple(convert_model(m) for m in datamodel.get("models", [])),
            enums=tuple(convert_enum(e) for e in datamodel.get("enums", [])),
            types=tuple(convert_model(t) for t in datamodel.get("types", [])),
        )
    except KeyError as e:
        raise SchemaMismatchError(f"Missing required key in datamodel: {e}") from e
