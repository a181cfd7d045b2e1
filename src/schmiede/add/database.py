"""Wire a database driver into a starter project."""

import logging
from pathlib import Path
from typing import Optional

from schmiede.add.editor import EditRule, FileEdit, edit_file, insert_after
from schmiede.add.manifest import Dependency, patch_manifest
from schmiede.config import Config, Database, DatabaseDriver
from schmiede.exceptions import ConfigError
from schmiede.fileio import append_text, read_text, write_atomic
from schmiede.generate.templates import DatabaseConfigContext, TemplateRenderer

logger = logging.getLogger(__name__)

CONFIG_MODULE = Path("src/config/mod.rs")
DATABASE_MODULE = Path("src/config/database.rs")
STARTUP_MODULE = Path("src/startup.rs")
ROUTES_MODULE = Path("src/routes/mod.rs")
BASE_CONFIGURATION = Path("configuration/base.yaml")
ENV_FILE = Path(".env")

SETTINGS_ANCHOR = "pub struct Settings {"
CONTEXT_ANCHOR = "pub struct ApiContext {"
CONTEXT_INIT_ANCHOR = "let api_context = ApiContext {"
BUILD_ANCHOR = "pub async fn build"
API_ROUTER_ANCHOR = 'nest("/api", api_routes())'
ROUTES_ANCHOR = "pub fn routes() -> Router {"

DATABASE_SETTINGS_FIELD = "    pub database: DatabaseSettings,"
CONTEXT_IMPORT = "use crate::config::ApiContext;"

BASE_DATABASE_SETTINGS = [
    "database:",
    "  username: postgres",
    "  password: postgres",
    "  port: 5432",
    "  host: localhost",
    "  database_name: postgres",
    "  require_ssl: false",
]


class DatabaseFeature:
    """Add-on wiring sqlx or diesel into the axum starter."""

    def __init__(
        self,
        driver: DatabaseDriver,
        database: Database = Database.POSTGRES,
        renderer: Optional[TemplateRenderer] = None,
    ):
        self.driver = driver
        self.database = database
        self.renderer = renderer or TemplateRenderer()

    def dependencies(self) -> list[Dependency]:
        db = self.database.value
        if self.driver == DatabaseDriver.SQLX:
            driver_dependencies = [
                Dependency(
                    "sqlx", "0.7.4", ["runtime-tokio-rustls", "macros", "migrate", db]
                ),
            ]
        else:
            driver_dependencies = [
                Dependency("diesel", "2.1.0", [db]),
                Dependency("diesel-async", "0.4.1", [db, "deadpool"]),
            ]
        return driver_dependencies + [
            Dependency("secrecy", "0.8.0", ["serde"]),
            Dependency("serde-aux", "4.1.2"),
        ]

    @property
    def use_lines(self) -> list[str]:
        if self.driver == DatabaseDriver.SQLX:
            return ["use database::DatabaseSettings;", "use sqlx::PgPool;"]
        return ["use database::{DatabaseSettings, PgPool};"]

    @property
    def pool_expression(self) -> str:
        if self.driver == DatabaseDriver.SQLX:
            return "settings.database.get_connection_pool()"
        return (
            "settings.database.get_connection_pool()"
            '.context("Failed to connect to database")?'
        )

    def config_edit(self, project_root: Path) -> FileEdit:
        """Register the database module and settings in src/config/mod.rs."""
        use_lines = self.use_lines

        def add_module(lines: list[str]) -> None:
            last_use = max(
                (i for i, line in enumerate(lines) if line.startswith("use ")),
                default=-1,
            )
            lines[last_use + 1 : last_use + 1] = use_lines
            lines.insert(0, "mod database;")

        def add_context(lines: list[str], fired: list[bool]) -> None:
            if fired[1]:
                return
            lines.extend(
                [
                    "",
                    "#[derive(Clone)]",
                    CONTEXT_ANCHOR,
                    "    pub db: PgPool,",
                    "}",
                ]
            )

        return FileEdit(
            path=project_root / CONFIG_MODULE,
            rules=[
                EditRule((SETTINGS_ANCHOR,), insert_after(DATABASE_SETTINGS_FIELD)),
                EditRule((CONTEXT_ANCHOR,), insert_after("    pub db: PgPool,")),
            ],
            before=add_module,
            after=add_context,
            guard=DATABASE_SETTINGS_FIELD.strip(),
        )

    def startup_edit(self, project_root: Path) -> FileEdit:
        """Put the pool into the api context built in src/startup.rs."""
        pool_field = f"        db: {self.pool_expression},"

        def build_context(lines: list[str], fired: list[bool]) -> None:
            if fired[0]:
                return
            lines.insert(0, CONTEXT_IMPORT)
            build = next(
                (i for i, line in enumerate(lines) if BUILD_ANCHOR in line), None
            )
            if build is not None:
                lines[build + 1 : build + 1] = [
                    "    let api_context = ApiContext {",
                    pool_field,
                    "    };",
                    "",
                ]
            router = next(
                (i for i, line in enumerate(lines) if API_ROUTER_ANCHOR in line), None
            )
            if router is not None:
                lines.insert(router + 1, "        .with_state(api_context.clone())")

        return FileEdit(
            path=project_root / STARTUP_MODULE,
            rules=[EditRule((CONTEXT_INIT_ANCHOR,), insert_after(pool_field))],
            after=build_context,
            guard="settings.database.get_connection_pool()",
        )

    def routes_edit(self, project_root: Path) -> FileEdit:
        """Make the api router carry the ApiContext state."""

        def add_state(lines: list[str], index: int) -> None:
            lines[index] = "pub fn routes() -> Router<ApiContext> {"
            lines.insert(0, CONTEXT_IMPORT)

        return FileEdit(
            path=project_root / ROUTES_MODULE,
            rules=[EditRule((ROUTES_ANCHOR,), add_state)],
            guard="Router<ApiContext>",
        )

    def base_configuration_edit(self, project_root: Path) -> FileEdit:
        """Append default connection settings unless a database block exists."""

        def add_settings(lines: list[str], fired: list[bool]) -> None:
            if not fired[0]:
                lines.extend(BASE_DATABASE_SETTINGS)

        return FileEdit(
            path=project_root / BASE_CONFIGURATION,
            rules=[EditRule(("database:",), lambda lines, index: None)],
            after=add_settings,
        )

    def write_database_module(self, project_root: Path) -> Path:
        path = project_root / DATABASE_MODULE
        content = self.renderer.render_context(
            DatabaseConfigContext(database=self.database.value), self.driver
        )
        write_atomic(path, content)
        logger.info(f"Wrote {path}")
        return path

    def write_env(self, project_root: Path) -> Path:
        path = project_root / ENV_FILE
        url = (
            f"DATABASE_URL={self.database.value}://"
            "postgres:postgres@localhost:5432/postgres"
        )
        if not path.exists():
            write_atomic(path, url + "\n")
        else:
            content = read_text(path)
            if "DATABASE_URL" not in content:
                separator = "" if not content or content.endswith("\n") else "\n"
                append_text(path, f"{separator}{url}\n")
        return path

    def add_feature(self, project_root: Path, config: Config) -> list[Path]:
        """Apply every change and record the driver in schmiede.toml.

        Raises:
            ConfigError: If a database driver is already configured.
            FileReadError: If a starter file the wiring relies on is missing.
        """
        if config.database_driver is not None:
            raise ConfigError(
                f"A database driver ({config.database_driver.value}) is already "
                "configured for this project"
            )

        touched = [
            patch_manifest(project_root, self.dependencies()),
            self.write_database_module(project_root),
        ]
        for edit in (
            self.config_edit(project_root),
            self.startup_edit(project_root),
            self.routes_edit(project_root),
        ):
            touched.append(edit_file(edit).path)

        if (project_root / BASE_CONFIGURATION).is_file():
            touched.append(edit_file(self.base_configuration_edit(project_root)).path)
        else:
            logger.warning(
                f"{BASE_CONFIGURATION} not found; add the database settings manually"
            )
        touched.append(self.write_env(project_root))

        config.database = self.database
        config.database_driver = self.driver
        touched.append(config.write_to_file(project_root))
        return touched
