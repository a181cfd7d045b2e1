"""Exception classes for schmiede."""

__all__ = [
    "SchmiedeError",
    "ParseError",
    "InvalidDataTypeError",
    "InvalidAttributeError",
    "InvalidOperationError",
    "DuplicateOperationError",
    "SchemaLoadError",
    "FileReadError",
    "FileWriteError",
    "DuplicateDefinitionError",
    "ConfigError",
    "ManifestError",
    "ManifestParseError",
    "ManifestStructureError",
    "RenderError",
    "GenerationError",
    "StarterError",
]


class SchmiedeError(Exception):
    """Base exception for schmiede."""


class ParseError(SchmiedeError):
    """Malformed compact notation supplied by the user."""


class InvalidDataTypeError(ParseError):
    """Unknown data type tag."""


class InvalidAttributeError(ParseError):
    """Attribute notation is not of the form name:type[?]."""


class InvalidOperationError(ParseError):
    """Unknown CRUD operation."""


class DuplicateOperationError(ParseError):
    """The same CRUD operation was given more than once."""


class SchemaLoadError(SchmiedeError):
    """Error loading an entity definition file."""


class FileReadError(SchmiedeError):
    """A file could not be read."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(message)


class FileWriteError(SchmiedeError):
    """A file or directory could not be written."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(message)


class DuplicateDefinitionError(SchmiedeError):
    """A generated definition already exists in the target file."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class ConfigError(SchmiedeError):
    """Error in configuration."""


class ManifestError(SchmiedeError):
    """Base error while patching a dependency manifest."""


class ManifestParseError(ManifestError):
    """Manifest text is not valid TOML."""


class ManifestStructureError(ManifestError):
    """Manifest lacks the expected dependencies table."""


class RenderError(SchmiedeError):
    """Error rendering a template."""


class GenerationError(SchmiedeError):
    """A generation request is missing inputs for a selected option."""


class StarterError(SchmiedeError):
    """Error creating a project from a starter template."""
