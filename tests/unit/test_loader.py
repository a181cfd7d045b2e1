"""Tests for entity file loader."""

import pytest

from schmiede.exceptions import FileReadError, SchemaLoadError
from schmiede.schema.loader import load_entity, parse_entity_dict
from schmiede.types import CrudOperations, DataType, IDType


def test_loader_full_entity(tmp_path):
    """Compact and mapping attributes load into one entity."""
    yaml_file = tmp_path / "post.yaml"
    yaml_file.write_text(
        """
entity: Post
id: uuid
operations: crud
attributes:
  - title:varChar(255)
  - name: body
    type: text
    optional: true
  - name: price
    type: numeric
    precision: 10
    scale: 2
"""
    )
    entity = load_entity(yaml_file)

    assert entity.name == "Post"
    assert entity.id_type == IDType.UUID
    assert entity.operations == CrudOperations.all()
    assert [a.name for a in entity.attributes] == ["title", "body", "price"]
    assert entity.get_attribute("title").data_type == DataType.varchar(255)
    assert entity.get_attribute("body").optional is True
    assert entity.get_attribute("price").data_type == DataType.numeric(10, 2)


def test_loader_minimal_entity(tmp_path):
    """Only the entity name is required."""
    yaml_file = tmp_path / "tag.yaml"
    yaml_file.write_text("entity: Tag\n")
    entity = load_entity(yaml_file)

    assert entity.name == "Tag"
    assert entity.id_type is None
    assert entity.operations is None
    assert entity.attributes == []


def test_loader_length_field(tmp_path):
    yaml_file = tmp_path / "country.yaml"
    yaml_file.write_text(
        """
entity: Country
attributes:
  - name: code
    type: char
    length: 2
"""
    )
    entity = load_entity(yaml_file)
    assert entity.attributes[0].data_type == DataType.char(2)


def test_loader_missing_file_raises_SchemaLoadError(tmp_path):
    with pytest.raises(SchemaLoadError, match="does not exist"):
        load_entity(tmp_path / "missing.yaml")


def test_loader_empty_file_raises_SchemaLoadError(tmp_path):
    yaml_file = tmp_path / "empty.yaml"
    yaml_file.write_text("")
    with pytest.raises(SchemaLoadError, match="Empty YAML file"):
        load_entity(yaml_file)


def test_loader_invalid_yaml_raises_SchemaLoadError(tmp_path):
    yaml_file = tmp_path / "bad.yaml"
    yaml_file.write_text("entity: [unclosed\n")
    with pytest.raises(SchemaLoadError, match="Invalid YAML"):
        load_entity(yaml_file)


def test_loader_non_mapping_raises_SchemaLoadError(tmp_path):
    yaml_file = tmp_path / "list.yaml"
    yaml_file.write_text("- a\n- b\n")
    with pytest.raises(SchemaLoadError, match="Expected a mapping"):
        load_entity(yaml_file)


class TestParseEntityDict:
    """Validation of entity dictionaries."""

    def test_missing_entity_field(self):
        with pytest.raises(SchemaLoadError, match="missing 'entity' field"):
            parse_entity_dict({"id": "uuid"})

    def test_unknown_entity_field(self):
        with pytest.raises(SchemaLoadError, match="Unknown field\\(s\\).*table"):
            parse_entity_dict({"entity": "Post", "table": "posts"})

    def test_unknown_attribute_field(self):
        with pytest.raises(SchemaLoadError, match="nullable"):
            parse_entity_dict(
                {
                    "entity": "Post",
                    "attributes": [{"name": "a", "type": "text", "nullable": True}],
                }
            )

    def test_attribute_missing_type(self):
        with pytest.raises(SchemaLoadError, match="missing 'type' field"):
            parse_entity_dict({"entity": "Post", "attributes": [{"name": "a"}]})

    def test_attribute_missing_name(self):
        with pytest.raises(SchemaLoadError, match="missing 'name' field"):
            parse_entity_dict({"entity": "Post", "attributes": [{"type": "text"}]})

    def test_duplicate_attribute_names(self):
        with pytest.raises(SchemaLoadError, match="Duplicate attribute name 'title'"):
            parse_entity_dict(
                {"entity": "Post", "attributes": ["title:text", "title:varChar(10)"]}
            )

    def test_parse_errors_are_wrapped(self):
        with pytest.raises(SchemaLoadError, match="Entity 'Post'"):
            parse_entity_dict({"entity": "Post", "attributes": ["title:string"]})

    def test_invalid_operations_are_wrapped(self):
        with pytest.raises(SchemaLoadError):
            parse_entity_dict({"entity": "Post", "operations": "c,c"})

    def test_invalid_id_is_wrapped(self):
        with pytest.raises(SchemaLoadError, match="Invalid id type"):
            parse_entity_dict({"entity": "Post", "id": "serial"})

    def test_non_integer_precision(self):
        with pytest.raises(SchemaLoadError, match="non-integer"):
            parse_entity_dict(
                {
                    "entity": "Post",
                    "attributes": [
                        {"name": "p", "type": "numeric", "precision": "ten", "scale": 2}
                    ],
                }
            )

    def test_invalid_attribute_entry(self):
        with pytest.raises(SchemaLoadError, match="Invalid attribute definition"):
            parse_entity_dict({"entity": "Post", "attributes": [42]})

    @pytest.mark.parametrize("precision", [None, [10]])
    def test_null_or_list_precision(self, precision):
        with pytest.raises(SchemaLoadError, match="non-integer"):
            parse_entity_dict(
                {
                    "entity": "Post",
                    "attributes": [
                        {"name": "p", "type": "numeric", "precision": precision}
                    ],
                }
            )

    def test_null_length(self):
        with pytest.raises(SchemaLoadError, match="non-integer"):
            parse_entity_dict(
                {
                    "entity": "Post",
                    "attributes": [{"name": "c", "type": "char", "length": None}],
                }
            )

    def test_attributes_must_be_a_list(self):
        with pytest.raises(SchemaLoadError, match="'attributes' must be a list"):
            parse_entity_dict({"entity": "Post", "attributes": 5})

    def test_non_string_unknown_field(self):
        with pytest.raises(SchemaLoadError, match="Unknown field\\(s\\).*1"):
            parse_entity_dict({"entity": "Post", 1: "x"})

    def test_description_is_kept(self):
        entity = parse_entity_dict({"entity": "Post", "description": "A blog post"})
        assert entity.description == "A blog post"

    def test_description_must_be_text(self):
        with pytest.raises(SchemaLoadError, match="'description' must be a string"):
            parse_entity_dict({"entity": "Post", "description": ["a", "b"]})


def test_loader_non_utf8_file_raises_FileReadError(tmp_path):
    yaml_file = tmp_path / "latin1.yaml"
    yaml_file.write_bytes(b"entity: Caf\xe9\n")
    with pytest.raises(FileReadError, match="not valid UTF-8"):
        load_entity(yaml_file)
