"""Render typed attributes as single rows of generated code."""

from enum import Enum

from schmiede.casing import to_snake_case
from schmiede.schema.models import Attribute
from schmiede.types import DataType, DataTypeKind

__all__ = [
    "DataTypeTransformer",
    "StructTransformer",
    "SqlTransformer",
    "TransformerKind",
    "get_transformer",
    "render_rows",
]


class DataTypeTransformer:
    """Base policy mapping a DataType to text in one output format."""

    def render_type(self, data_type: DataType) -> str:
        raise NotImplementedError

    def render_required_row(self, data_type: DataType, name: str) -> str:
        raise NotImplementedError

    def render_optional_row(self, data_type: DataType, name: str) -> str:
        raise NotImplementedError

    def render_row(self, attribute: Attribute) -> str:
        if attribute.optional:
            return self.render_optional_row(attribute.data_type, attribute.name)
        return self.render_required_row(attribute.data_type, attribute.name)


class StructTransformer(DataTypeTransformer):
    """Rust struct fields, e.g. ``is_active: bool``."""

    TYPE_NAMES: dict[DataTypeKind, str] = {
        DataTypeKind.BOOLEAN: "bool",
        DataTypeKind.SMALL_INT: "i16",
        DataTypeKind.INTEGER: "i32",
        DataTypeKind.BIG_INT: "i64",
        DataTypeKind.REAL: "f32",
        DataTypeKind.DOUBLE_PRECISION: "f64",
        DataTypeKind.NUMERIC: "f64",
        DataTypeKind.CHAR: "char",
        DataTypeKind.VAR_CHAR: "String",
        DataTypeKind.TEXT: "String",
        DataTypeKind.BYTEA: "Vec<u8>",
        DataTypeKind.TIMESTAMP: "chrono::NaiveDateTime",
        DataTypeKind.TIMESTAMP_TZ: "chrono::DateTime<chrono::Utc>",
        DataTypeKind.DATE: "chrono::NaiveDate",
        DataTypeKind.TIME: "chrono::NaiveTime",
        DataTypeKind.TIME_TZ: "chrono::NaiveTime",
        DataTypeKind.INTERVAL: "chrono::Duration",
        DataTypeKind.JSONB: "serde_json::Value",
        DataTypeKind.UUID: "uuid::Uuid",
    }

    def render_type(self, data_type: DataType) -> str:
        return self.TYPE_NAMES[data_type.kind]

    def render_required_row(self, data_type: DataType, name: str) -> str:
        return f"{to_snake_case(name)}: {self.render_type(data_type)}"

    def render_optional_row(self, data_type: DataType, name: str) -> str:
        return f"{to_snake_case(name)}: Option<{self.render_type(data_type)}>"


class SqlTransformer(DataTypeTransformer):
    """PostgreSQL column definitions, e.g. ``title VARCHAR(255) NOT NULL``."""

    TYPE_NAMES: dict[DataTypeKind, str] = {
        DataTypeKind.BOOLEAN: "BOOLEAN",
        DataTypeKind.SMALL_INT: "SMALLINT",
        DataTypeKind.INTEGER: "INTEGER",
        DataTypeKind.BIG_INT: "BIGINT",
        DataTypeKind.REAL: "REAL",
        DataTypeKind.DOUBLE_PRECISION: "DOUBLE PRECISION",
        DataTypeKind.TEXT: "TEXT",
        DataTypeKind.BYTEA: "BYTEA",
        DataTypeKind.TIMESTAMP: "TIMESTAMP",
        DataTypeKind.TIMESTAMP_TZ: "TIMESTAMPTZ",
        DataTypeKind.DATE: "DATE",
        DataTypeKind.TIME: "TIME",
        DataTypeKind.TIME_TZ: "TIMETZ",
        DataTypeKind.INTERVAL: "INTERVAL",
        DataTypeKind.JSONB: "JSONB",
        DataTypeKind.UUID: "UUID",
    }

    def render_type(self, data_type: DataType) -> str:
        if data_type.kind == DataTypeKind.NUMERIC:
            return f"NUMERIC({data_type.precision}, {data_type.scale})"
        if data_type.kind == DataTypeKind.CHAR:
            return f"CHAR({data_type.length})"
        if data_type.kind == DataTypeKind.VAR_CHAR:
            return f"VARCHAR({data_type.length})"
        return self.TYPE_NAMES[data_type.kind]

    def render_required_row(self, data_type: DataType, name: str) -> str:
        return f"{to_snake_case(name)} {self.render_type(data_type)} NOT NULL"

    def render_optional_row(self, data_type: DataType, name: str) -> str:
        return f"{to_snake_case(name)} {self.render_type(data_type)}"


class TransformerKind(Enum):
    """The closed set of row formats."""

    SQL = "sql"
    STRUCT = "struct"


_TRANSFORMERS: dict[TransformerKind, DataTypeTransformer] = {
    TransformerKind.SQL: SqlTransformer(),
    TransformerKind.STRUCT: StructTransformer(),
}


def get_transformer(kind: TransformerKind) -> DataTypeTransformer:
    return _TRANSFORMERS[kind]


def render_rows(attributes: list[Attribute], kind: TransformerKind) -> list[str]:
    """Render every attribute in order."""
    transformer = get_transformer(kind)
    return [transformer.render_row(attribute) for attribute in attributes]
