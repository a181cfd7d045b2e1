"""Export entity definitions to YAML files."""

from pathlib import Path
from typing import Any

import yaml

from schmiede.fileio import write_atomic
from schmiede.schema.models import Attribute, Entity
from schmiede.types import DataTypeKind


def entity_to_dict(entity: Entity) -> dict[str, Any]:
    """Convert an Entity to a dictionary suitable for YAML export."""
    data: dict[str, Any] = {"entity": entity.name}

    if entity.description:
        data["description"] = entity.description

    if entity.id_type is not None:
        data["id"] = entity.id_type.value

    if entity.operations is not None:
        data["operations"] = str(entity.operations)

    data["attributes"] = [_attribute_to_dict(a) for a in entity.attributes]
    return data


def _attribute_to_dict(attribute: Attribute) -> dict[str, Any]:
    """Convert an Attribute to a dictionary."""
    data_type = attribute.data_type
    data: dict[str, Any] = {"name": attribute.name, "type": str(data_type)}

    if data_type.kind == DataTypeKind.NUMERIC:
        data["precision"] = data_type.precision
        data["scale"] = data_type.scale
    elif data_type.kind in (DataTypeKind.CHAR, DataTypeKind.VAR_CHAR):
        data["length"] = data_type.length

    if attribute.optional:
        data["optional"] = True

    return data


def export_entity_yaml(entity: Entity) -> str:
    """Export a single entity to a YAML string."""
    data = entity_to_dict(entity)
    return yaml.dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True
    )


def export_entity_file(entity: Entity, path: Path) -> Path:
    """Write an entity definition file, replacing any previous content."""
    write_atomic(path, export_entity_yaml(entity))
    return path
