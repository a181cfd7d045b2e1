"""Load entity definitions from YAML files."""

from pathlib import Path

import yaml

from schmiede.exceptions import ParseError, SchemaLoadError
from schmiede.fileio import read_text
from schmiede.schema.models import Attribute, Entity, parse_type_token
from schmiede.types import CrudOperations, IDType

VALID_ENTITY_FIELDS = {
    "entity",
    "description",
    "id",
    "attributes",
    "operations",
}

VALID_ATTRIBUTE_FIELDS = {
    "name",
    "type",
    "optional",
    "precision",
    "scale",
    "length",
}


def load_entity(path: Path) -> Entity:
    """Load an entity definition from a YAML file."""
    if not path.is_file():
        raise SchemaLoadError(f"Entity file does not exist: {path}")

    try:
        data = yaml.safe_load(read_text(path))
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        raise SchemaLoadError(f"Empty YAML file: {path}")
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected a mapping at the top of {path}")
    return parse_entity_dict(data)


def parse_entity_dict(data: dict) -> Entity:
    """Parse an entity definition from a dictionary."""
    unknown_fields = set(data.keys()) - VALID_ENTITY_FIELDS
    if unknown_fields:
        fields = ", ".join(sorted(map(str, unknown_fields)))
        raise SchemaLoadError(f"Unknown field(s) in entity definition: {fields}")

    name = data.get("entity")
    if not name:
        raise SchemaLoadError("Entity definition missing 'entity' field")

    attribute_items = data.get("attributes") or []
    if not isinstance(attribute_items, list):
        raise SchemaLoadError(
            f"Entity '{name}': 'attributes' must be a list, got {attribute_items!r}"
        )

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        raise SchemaLoadError(f"Entity '{name}': 'description' must be a string")

    try:
        id_type = IDType.parse(str(data["id"])) if "id" in data else None
        operations = (
            CrudOperations.parse(str(data["operations"]))
            if data.get("operations")
            else None
        )
        attributes = [_parse_attribute(item) for item in attribute_items]
    except ParseError as exc:
        raise SchemaLoadError(f"Entity '{name}': {exc}") from exc

    seen = set()
    for attribute in attributes:
        if attribute.name in seen:
            raise SchemaLoadError(
                f"Duplicate attribute name '{attribute.name}' in entity '{name}'"
            )
        seen.add(attribute.name)

    return Entity(
        name=str(name),
        description=description,
        id_type=id_type,
        attributes=attributes,
        operations=operations,
    )


def _parse_attribute(data) -> Attribute:
    """Parse an attribute from compact notation or a mapping."""
    if isinstance(data, str):
        return Attribute.parse(data)
    if not isinstance(data, dict):
        raise SchemaLoadError(f"Invalid attribute definition: {data!r}")

    unknown_fields = set(data.keys()) - VALID_ATTRIBUTE_FIELDS
    if unknown_fields:
        fields = ", ".join(sorted(map(str, unknown_fields)))
        raise SchemaLoadError(f"Unknown field(s) in attribute definition: {fields}")

    name = data.get("name")
    if not name:
        raise SchemaLoadError("Attribute definition missing 'name' field")

    type_name = data.get("type")
    if not type_name:
        raise SchemaLoadError(f"Attribute '{name}' missing 'type' field")

    data_type = parse_type_token(str(type_name))
    try:
        if "precision" in data or "scale" in data:
            data_type = data_type.with_parameters(
                [int(data.get("precision", 0)), int(data.get("scale", 0))]
            )
        elif "length" in data:
            data_type = data_type.with_parameters([int(data["length"])])
    except (TypeError, ValueError) as exc:
        raise SchemaLoadError(
            f"Attribute '{name}' has a non-integer type parameter"
        ) from exc

    return Attribute(
        name=str(name),
        data_type=data_type,
        optional=bool(data.get("optional", False)),
    )
