"""Tests for entity YAML export."""

import yaml

from schmiede.schema.exporter import (
    entity_to_dict,
    export_entity_file,
    export_entity_yaml,
)
from schmiede.schema.loader import load_entity
from schmiede.schema.models import Entity, parse_attribute_list
from schmiede.types import CrudOperations, IDType


def make_entity() -> Entity:
    return Entity(
        name="Post",
        id_type=IDType.UUID,
        attributes=parse_attribute_list("title:varChar(255),price:numeric(10,2),body:text?"),
        operations=CrudOperations.parse("cr"),
    )


class TestEntityToDict:
    """Tests for entity_to_dict."""

    def test_top_level_fields(self):
        data = entity_to_dict(make_entity())
        assert data["entity"] == "Post"
        assert data["id"] == "uuid"
        assert data["operations"] == "create,read"

    def test_parameters_are_explicit(self):
        attributes = entity_to_dict(make_entity())["attributes"]
        assert attributes[0] == {"name": "title", "type": "varChar", "length": 255}
        assert attributes[1] == {
            "name": "price",
            "type": "numeric",
            "precision": 10,
            "scale": 2,
        }
        assert attributes[2] == {"name": "body", "type": "text", "optional": True}

    def test_unset_fields_are_omitted(self):
        data = entity_to_dict(Entity(name="Tag"))
        assert data == {"entity": "Tag", "attributes": []}

    def test_description_follows_entity_name(self):
        data = entity_to_dict(Entity(name="Tag", description="Labels for posts"))
        assert list(data) == ["entity", "description", "attributes"]
        assert data["description"] == "Labels for posts"


class TestExportEntity:
    """Tests for YAML output."""

    def test_yaml_keeps_key_order(self):
        content = export_entity_yaml(make_entity())
        assert content.startswith("entity: Post\nid: uuid\n")
        assert yaml.safe_load(content)["attributes"][0]["name"] == "title"

    def test_exported_file_loads_back(self, tmp_path):
        entity = make_entity()
        path = export_entity_file(entity, tmp_path / "schema" / "post.yaml")

        assert path.exists()
        assert load_entity(path) == entity
