"""Core type definitions for schmiede."""

import re
from dataclasses import dataclass
from enum import Enum

from schmiede.casing import split_words
from schmiede.exceptions import (
    DuplicateOperationError,
    InvalidDataTypeError,
    InvalidOperationError,
    ParseError,
)

__all__ = [
    "DataTypeKind",
    "DataType",
    "IDType",
    "CrudOperation",
    "CrudOperations",
]


class DataTypeKind(Enum):
    """Column types that can be generated. Values are the canonical names."""

    BOOLEAN = "bool"
    SMALL_INT = "smallInt"
    INTEGER = "int"
    BIG_INT = "bigInt"
    REAL = "real"
    DOUBLE_PRECISION = "doublePrecision"
    NUMERIC = "numeric"
    CHAR = "char"
    VAR_CHAR = "varChar"
    TEXT = "text"
    BYTEA = "bytea"
    TIMESTAMP = "timestamp"
    TIMESTAMP_TZ = "timestampTZ"
    DATE = "date"
    TIME = "time"
    TIME_TZ = "timeTZ"
    INTERVAL = "interval"
    JSONB = "jsonb"
    UUID = "uuid"

    @property
    def is_parameterized(self) -> bool:
        return self in _PARAMETERIZED


_PARAMETERIZED = {DataTypeKind.NUMERIC, DataTypeKind.CHAR, DataTypeKind.VAR_CHAR}

# "timestampTZ" -> ("timestamp", "tz"); lookups fold case, so "VARCHAR" and
# "varChar" name the same kind.
_WORDS_BY_KIND = {k: tuple(w.lower() for w in split_words(k.value)) for k in DataTypeKind}
_KINDS_BY_KEY = {"".join(words): k for k, words in _WORDS_BY_KIND.items()}

_TYPE_NAME = re.compile(r"[A-Za-z0-9 _-]+")


@dataclass(frozen=True)
class DataType:
    """A column type with its parameters.

    ``precision``/``scale`` only matter for NUMERIC and ``length`` only for
    CHAR and VARCHAR; they stay zero everywhere else.
    """

    kind: DataTypeKind
    precision: int = 0
    scale: int = 0
    length: int = 0

    def __str__(self) -> str:
        return self.kind.value

    @classmethod
    def parse(cls, text: str) -> "DataType":
        """Parse a canonical type name, ignoring case.

        Words may be split by case changes or separators (``double_precision``,
        ``Var Char``) but only at the canonical word boundaries. Parameterized
        types come back zero-valued.

        Raises:
            InvalidDataTypeError: If the name is not a known type.
        """
        kind = None
        if _TYPE_NAME.fullmatch(text.strip()):
            words = tuple(w.lower() for w in split_words(text))
            kind = _KINDS_BY_KEY.get("".join(words))
            if kind is not None and len(words) > 1 and words != _WORDS_BY_KIND[kind]:
                kind = None
        if kind is None:
            raise InvalidDataTypeError(
                f"Invalid data type '{text}'. "
                f"Expected one of: {', '.join(cls.values())}"
            )
        return cls(kind)

    @staticmethod
    def values() -> list[str]:
        return [k.value for k in DataTypeKind]

    @classmethod
    def numeric(cls, precision: int, scale: int) -> "DataType":
        return cls(DataTypeKind.NUMERIC, precision=precision, scale=scale)

    @classmethod
    def char(cls, length: int) -> "DataType":
        return cls(DataTypeKind.CHAR, length=length)

    @classmethod
    def varchar(cls, length: int) -> "DataType":
        return cls(DataTypeKind.VAR_CHAR, length=length)

    def with_parameters(self, params: list[int]) -> "DataType":
        """Return a copy carrying explicit parameters.

        Raises:
            ParseError: If the parameter count does not fit the type.
        """
        if self.kind == DataTypeKind.NUMERIC and len(params) == 2:
            return DataType.numeric(params[0], params[1])
        if self.kind in (DataTypeKind.CHAR, DataTypeKind.VAR_CHAR) and len(params) == 1:
            return DataType(self.kind, length=params[0])
        if not self.kind.is_parameterized:
            raise ParseError(f"Data type '{self}' does not take parameters")
        expected = 2 if self.kind == DataTypeKind.NUMERIC else 1
        raise ParseError(
            f"Data type '{self}' takes {expected} parameter(s), got {len(params)}"
        )


class IDType(Enum):
    """Primary key strategy for generated tables and structs."""

    UUID = "uuid"
    INTEGER = "int"
    NONE = "none"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "IDType":
        normalized = text.strip().lower()
        for id_type in cls:
            if id_type.value == normalized:
                return id_type
        raise ParseError(
            f"Invalid id type '{text}'. Expected one of: uuid, int, none"
        )


class CrudOperation(Enum):
    """A single API operation."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"

    @property
    def code(self) -> str:
        return self.value[0]

    @classmethod
    def parse(cls, text: str) -> "CrudOperation":
        """Parse a full operation name or its single-letter code."""
        for operation in cls:
            if text in (operation.value, operation.code):
                return operation
        raise InvalidOperationError(f"Invalid operation '{text}'")


@dataclass(frozen=True)
class CrudOperations:
    """Set of operations to generate routes for.

    Order is preserved for a specific selection. A selection covering every
    operation is always stored in declaration order, so it compares equal to
    ``CrudOperations.all()``.
    """

    operations: tuple[CrudOperation, ...]

    def __post_init__(self) -> None:
        if not self.operations:
            raise InvalidOperationError("No crud operations given")
        seen = set()
        for operation in self.operations:
            if operation in seen:
                raise DuplicateOperationError(
                    f"Duplicate crud operation '{operation.value}'"
                )
            seen.add(operation)
        if len(seen) == len(CrudOperation):
            object.__setattr__(self, "operations", tuple(CrudOperation))

    @classmethod
    def all(cls) -> "CrudOperations":
        return cls(tuple(CrudOperation))

    @property
    def is_all(self) -> bool:
        return len(self.operations) == len(CrudOperation)

    def includes(self, operation: CrudOperation) -> bool:
        return operation in self.operations

    def __str__(self) -> str:
        if self.is_all:
            return "all"
        return ",".join(op.value for op in self.operations)

    @classmethod
    def parse(cls, text: str) -> "CrudOperations":
        """Parse ``all``/``a``, a comma separated list, or a letter string.

        Raises:
            InvalidOperationError: If an operation is unknown or none is given.
            DuplicateOperationError: If an operation appears twice.
        """
        if text in ("all", "a"):
            return cls.all()

        if "," in text:
            operations = [CrudOperation.parse(part) for part in text.split(",")]
        else:
            try:
                operations = [CrudOperation.parse(text)]
            except InvalidOperationError:
                operations = [CrudOperation.parse(char) for char in text]

        return cls(tuple(operations))
