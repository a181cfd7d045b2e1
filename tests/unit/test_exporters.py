"""Tests for writing generated artifacts into the project tree."""

from datetime import datetime

import pytest

from schmiede.exceptions import DuplicateDefinitionError
from schmiede.generate.exporters import (
    MODELS_PATH,
    MigrationLayout,
    export_migration,
    export_model,
    export_page,
    export_route,
    migration_path,
)

TIMESTAMP = datetime(2024, 1, 31, 12, 5, 9)

STRUCT = "pub struct Post {\n    pub title: String,\n}"


class TestMigrationPath:
    """Migration file naming."""

    def test_directory_layout(self, tmp_path):
        path = migration_path(tmp_path, "BlogPost", "up", TIMESTAMP)
        assert path == tmp_path / "migrations" / "2024-01-31-120509_blogpost" / "up.sql"

    def test_flat_layout(self, tmp_path):
        path = migration_path(tmp_path, "post", "down", TIMESTAMP, MigrationLayout.FLAT)
        assert path == tmp_path / "migrations" / "20240131120509_post.down.sql"

    def test_invalid_direction(self, tmp_path):
        with pytest.raises(ValueError, match="direction"):
            migration_path(tmp_path, "post", "sideways", TIMESTAMP)


class TestExportMigration:
    """Appending migrations."""

    def test_creates_directory_and_file(self, tmp_path):
        path = export_migration(
            tmp_path, "post", "up", "CREATE TABLE post ();", timestamp=TIMESTAMP
        )
        assert path.read_text() == "CREATE TABLE post ();\n"

    def test_same_timestamp_appends(self, tmp_path):
        export_migration(tmp_path, "post", "down", "A;", timestamp=TIMESTAMP)
        path = export_migration(tmp_path, "post", "down", "B;", timestamp=TIMESTAMP)
        assert path.read_text() == "A;\nB;\n"


class TestExportModel:
    """Appending structs to the models file."""

    def test_creates_models_file(self, tmp_path):
        path = export_model(tmp_path, "Post", STRUCT)
        assert path == tmp_path / MODELS_PATH
        assert "pub struct Post {" in path.read_text()

    def test_appends_to_existing_file(self, tmp_path):
        path = tmp_path / MODELS_PATH
        path.parent.mkdir(parents=True)
        path.write_text("use serde::Serialize;\n")

        export_model(tmp_path, "Post", STRUCT)

        content = path.read_text()
        assert content.startswith("use serde::Serialize;\n")
        assert content.endswith(STRUCT + "\n")

    def test_duplicate_struct_raises_and_leaves_file_untouched(self, tmp_path):
        export_model(tmp_path, "Post", STRUCT)
        before = (tmp_path / MODELS_PATH).read_text()

        with pytest.raises(DuplicateDefinitionError) as exc_info:
            export_model(tmp_path, "Post", STRUCT)

        assert exc_info.value.name == "Post"
        assert (tmp_path / MODELS_PATH).read_text() == before

    def test_prefix_name_is_not_a_duplicate(self, tmp_path):
        export_model(tmp_path, "PostTag", "pub struct PostTag {\n}")
        export_model(tmp_path, "Post", STRUCT)
        assert "pub struct Post {" in (tmp_path / MODELS_PATH).read_text()


class TestExportRouteAndPage:
    """Route and admin page files."""

    def test_route_file_name_is_snake_case(self, tmp_path):
        path = export_route(tmp_path, "BlogPost", "pub fn router() {}\n")
        assert path == tmp_path / "src" / "api" / "blog_post.rs"
        assert path.read_text() == "pub fn router() {}\n"

    def test_route_appends_on_rerun(self, tmp_path):
        export_route(tmp_path, "post", "a\n")
        path = export_route(tmp_path, "post", "b\n")
        assert path.read_text() == "a\nb\n"

    def test_page_file(self, tmp_path):
        path = export_page(tmp_path, "BlogPost", "page\n")
        assert path == tmp_path / "src" / "admin" / "blog_post.rs"
