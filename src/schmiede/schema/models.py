"""Entity representation classes."""

import re
from dataclasses import dataclass, field
from typing import Optional

from schmiede.casing import to_pascal_case
from schmiede.exceptions import InvalidAttributeError, ParseError
from schmiede.types import CrudOperations, DataType, IDType

# type token with an optional "(p)" or "(p, s)" parameter list
_TYPE_TOKEN = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_ -]*?)\s*(?:\(([^()]*)\))?\s*$")

# commas that are not inside a parameter list
_LIST_SEPARATOR = re.compile(r",(?![^()]*\))")


@dataclass(frozen=True)
class Attribute:
    """A named, typed field of the generated entity."""

    name: str
    data_type: DataType
    optional: bool = False

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise InvalidAttributeError("Attribute name cannot be empty")

    @classmethod
    def parse(cls, text: str) -> "Attribute":
        """Parse ``name:type``, ``name:type?`` or ``name:type(params)[?]``.

        Raises:
            ParseError: If the separator is missing, the name is empty or the
                type is unknown.
        """
        name, sep, type_definition = text.partition(":")
        if not sep:
            raise InvalidAttributeError(
                f"Invalid attribute '{text}'. Expected format: name:type[?]"
            )
        name = name.strip()
        if not name:
            raise InvalidAttributeError(
                f"Invalid attribute '{text}'. Attribute name cannot be empty."
            )

        type_definition = type_definition.strip()
        optional = type_definition.endswith("?")
        if optional:
            type_definition = type_definition[:-1]

        return cls(name=name, data_type=parse_type_token(type_definition), optional=optional)

    def __str__(self) -> str:
        suffix = "?" if self.optional else ""
        return f"{self.name}:{format_type_token(self.data_type)}{suffix}"


def parse_type_token(token: str) -> DataType:
    """Parse a type name with an optional parameter list, e.g. ``numeric(10,2)``."""
    match = _TYPE_TOKEN.match(token)
    if not match:
        return DataType.parse(token)

    type_name, params = match.groups()
    data_type = DataType.parse(type_name)
    if params is None:
        return data_type

    try:
        values = [int(p) for p in params.split(",")]
    except ValueError as exc:
        raise ParseError(
            f"Invalid parameters '{params}' for data type '{type_name}'"
        ) from exc
    if any(v < 0 for v in values):
        raise ParseError(f"Parameters for data type '{type_name}' must be positive")
    return data_type.with_parameters(values)


def format_type_token(data_type: DataType) -> str:
    """Inverse of ``parse_type_token``; zero parameters are left out."""
    if data_type.precision or data_type.scale:
        return f"{data_type}({data_type.precision},{data_type.scale})"
    if data_type.length:
        return f"{data_type}({data_type.length})"
    return str(data_type)


def parse_attribute_list(text: str) -> list[Attribute]:
    """Parse a comma separated attribute list, keeping parameter lists intact."""
    parts = [p.strip() for p in _LIST_SEPARATOR.split(text)]
    return [Attribute.parse(p) for p in parts if p]


@dataclass
class Entity:
    """Everything a generation run needs to know about its target."""

    name: str
    id_type: Optional[IDType] = None
    attributes: list[Attribute] = field(default_factory=list)
    operations: Optional[CrudOperations] = None
    description: Optional[str] = None

    @property
    def struct_name(self) -> str:
        return to_pascal_case(self.name)

    def get_attribute(self, name: str) -> Optional[Attribute]:
        """Get an attribute by name."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None
