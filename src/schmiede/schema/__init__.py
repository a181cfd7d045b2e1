"""Entity definition, loading and export."""

from schmiede.schema.models import (
    Attribute,
    Entity,
    parse_attribute_list,
)
from schmiede.schema.loader import load_entity
from schmiede.schema.exporter import export_entity_file, export_entity_yaml

__all__ = [
    "Attribute",
    "Entity",
    "export_entity_file",
    "export_entity_yaml",
    "load_entity",
    "parse_attribute_list",
]
