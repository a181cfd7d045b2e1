"""Configuration management for schmiede."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from schmiede.exceptions import ConfigError
from schmiede.fileio import read_text, write_atomic

CONFIG_FILE_NAME = "schmiede.toml"

VALID_CONFIG_FIELDS = {"api_framework", "database", "database_driver"}


class ApiFramework(Enum):
    AXUM = "axum"


class Database(Enum):
    POSTGRES = "postgres"


class DatabaseDriver(Enum):
    SQLX = "sqlx"
    DIESEL = "diesel"


def _parse_choice(enum_cls, value: str, field_name: str):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(e.value for e in enum_cls)
        raise ConfigError(
            f"Invalid {field_name} '{value}'. Expected one of: {choices}"
        ) from None


@dataclass
class Config:
    """Project configuration stored in schmiede.toml."""

    api_framework: ApiFramework = ApiFramework.AXUM
    database: Optional[Database] = None
    database_driver: Optional[DatabaseDriver] = None

    @classmethod
    def from_file(cls, project_root: Path) -> "Config":
        """Load schmiede.toml from the project root.

        Raises:
            ConfigError: If the file is missing, unparseable or has unknown keys.
        """
        path = project_root / CONFIG_FILE_NAME
        if not path.is_file():
            raise ConfigError(
                f"No {CONFIG_FILE_NAME} found in {project_root}. "
                "Run 'schmiede add database' or create the file first."
            )
        try:
            data = tomlkit.parse(read_text(path)).unwrap()
        except TOMLKitError as exc:
            raise ConfigError(f"Failed to parse {path}: {exc}") from exc

        unknown_fields = set(data.keys()) - VALID_CONFIG_FIELDS
        if unknown_fields:
            raise ConfigError(
                f"Unknown field(s) in {CONFIG_FILE_NAME}: {', '.join(sorted(unknown_fields))}"
            )

        config = cls()
        if "api_framework" in data:
            config.api_framework = _parse_choice(
                ApiFramework, data["api_framework"], "api_framework"
            )
        if "database" in data:
            config.database = _parse_choice(Database, data["database"], "database")
        if "database_driver" in data:
            config.database_driver = _parse_choice(
                DatabaseDriver, data["database_driver"], "database_driver"
            )
        return config

    @classmethod
    def load_or_default(cls, project_root: Path) -> "Config":
        if (project_root / CONFIG_FILE_NAME).is_file():
            return cls.from_file(project_root)
        return cls()

    @classmethod
    def from_env(
        cls,
        project_root: Path,
        *,
        api_framework: Optional[str] = None,
        database: Optional[str] = None,
        database_driver: Optional[str] = None,
    ) -> "Config":
        """Load configuration from schmiede.toml and env vars, with CLI overrides.

        Priority (highest to lowest):
        1. Explicit parameters (CLI args)
        2. Environment variables
        3. schmiede.toml
        """
        config = cls.load_or_default(project_root)

        def resolve(explicit, env_key):
            if explicit is not None:
                return explicit
            return os.environ.get(env_key)

        value = resolve(api_framework, "SCHMIEDE_API_FRAMEWORK")
        if value is not None:
            config.api_framework = _parse_choice(ApiFramework, value, "api_framework")
        value = resolve(database, "SCHMIEDE_DATABASE")
        if value is not None:
            config.database = _parse_choice(Database, value, "database")
        value = resolve(database_driver, "SCHMIEDE_DATABASE_DRIVER")
        if value is not None:
            config.database_driver = _parse_choice(
                DatabaseDriver, value, "database_driver"
            )
        return config

    def require_database(self) -> DatabaseDriver:
        """Return the configured driver.

        Raises:
            ConfigError: If no database or driver is recorded.
        """
        missing = []
        if self.database is None:
            missing.append("database (set in schmiede.toml or SCHMIEDE_DATABASE)")
        if self.database_driver is None:
            missing.append(
                "database_driver (run 'schmiede add database' or set SCHMIEDE_DATABASE_DRIVER)"
            )
        if missing:
            raise ConfigError(
                "Missing required configuration:\n  - " + "\n  - ".join(missing)
            )
        return self.database_driver

    def write_to_file(self, project_root: Path) -> Path:
        """Save to schmiede.toml, keeping comments of an existing file."""
        path = project_root / CONFIG_FILE_NAME
        if path.is_file():
            try:
                document = tomlkit.parse(read_text(path))
            except TOMLKitError as exc:
                raise ConfigError(f"Failed to parse {path}: {exc}") from exc
        else:
            document = tomlkit.document()

        document["api_framework"] = self.api_framework.value
        for key, value in (
            ("database", self.database),
            ("database_driver", self.database_driver),
        ):
            if value is not None:
                document[key] = value.value
            elif key in document:
                del document[key]

        write_atomic(path, tomlkit.dumps(document))
        return path
