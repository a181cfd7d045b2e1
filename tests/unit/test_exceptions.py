"""Tests for schmiede.exceptions module."""

import pytest

from schmiede.exceptions import (
    ConfigError,
    DuplicateDefinitionError,
    DuplicateOperationError,
    FileReadError,
    FileWriteError,
    GenerationError,
    InvalidAttributeError,
    InvalidDataTypeError,
    InvalidOperationError,
    ManifestError,
    ManifestParseError,
    ManifestStructureError,
    ParseError,
    RenderError,
    SchemaLoadError,
    SchmiedeError,
    StarterError,
)


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    def test_parse_errors(self):
        for exc in (
            InvalidDataTypeError,
            InvalidAttributeError,
            InvalidOperationError,
            DuplicateOperationError,
        ):
            assert issubclass(exc, ParseError)

    def test_manifest_errors(self):
        assert issubclass(ManifestParseError, ManifestError)
        assert issubclass(ManifestStructureError, ManifestError)

    def test_everything_is_a_schmiede_error(self):
        for exc in (
            ParseError,
            SchemaLoadError,
            FileReadError,
            FileWriteError,
            DuplicateDefinitionError,
            ConfigError,
            ManifestError,
            RenderError,
            GenerationError,
            StarterError,
        ):
            assert issubclass(exc, SchmiedeError)

    def test_schmiede_error_is_exception(self):
        assert issubclass(SchmiedeError, Exception)


class TestExceptionAttributes:
    """Errors carrying context."""

    def test_file_errors_keep_path(self):
        error = FileReadError("src/main.rs", "Failed to read 'src/main.rs'")
        assert error.path == "src/main.rs"
        assert str(error) == "Failed to read 'src/main.rs'"
        assert FileWriteError("x", "nope").path == "x"

    def test_duplicate_definition_keeps_name(self):
        with pytest.raises(SchmiedeError) as exc_info:
            raise DuplicateDefinitionError("Post", "Struct 'Post' already exists")
        assert exc_info.value.name == "Post"
