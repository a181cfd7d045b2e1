"""Run one generation request end to end."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from schmiede.casing import to_kebab_case, to_snake_case
from schmiede.config import Config, DatabaseDriver
from schmiede.exceptions import GenerationError
from schmiede.generate.exporters import (
    MigrationLayout,
    export_migration,
    export_model,
    export_page,
    export_route,
)
from schmiede.generate.options import GenerateOption
from schmiede.generate.templates import (
    MigrationDownContext,
    MigrationUpContext,
    ModelContext,
    PageContext,
    RouteContext,
    TemplateRenderer,
)
from schmiede.generate.transformers import TransformerKind, render_rows
from schmiede.schema.models import Entity

logger = logging.getLogger(__name__)

MIGRATION_LAYOUTS = {
    DatabaseDriver.DIESEL: MigrationLayout.DIRECTORY,
    DatabaseDriver.SQLX: MigrationLayout.FLAT,
}


def validate_request(
    entity: Entity, options: list[GenerateOption], config: Config
) -> None:
    """Check that every selected option has what it needs before writing.

    Raises:
        ConfigError: If an option needs a database configuration that is absent.
        GenerationError: If the entity lacks an id type, attributes or operations.
    """
    if not options:
        raise GenerationError("Nothing to generate")
    if not entity.name.strip():
        raise GenerationError("Entity name cannot be empty")
    if any(o.requires_driver for o in options):
        config.require_database()

    missing = []
    if any(o.requires_id for o in options) and entity.id_type is None:
        missing.append("id type (--id)")
    if any(o.requires_attributes for o in options) and not entity.attributes:
        missing.append("attributes (--attributes)")
    if any(o.requires_operations for o in options) and entity.operations is None:
        missing.append("crud operations (--operations)")
    if missing:
        raise GenerationError(
            "Missing generation input:\n  - " + "\n  - ".join(missing)
        )


class Generator:
    """Render and export the artifacts selected for one entity."""

    def __init__(
        self,
        project_root: Path,
        config: Config,
        renderer: Optional[TemplateRenderer] = None,
    ):
        self.project_root = project_root
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    def generate(
        self,
        entity: Entity,
        options: list[GenerateOption],
        now: Optional[datetime] = None,
    ) -> list[Path]:
        """Generate every selected artifact, in option order.

        Files written before a failure stay on disk.
        """
        validate_request(entity, options, self.config)
        if now is None:
            now = datetime.now(timezone.utc)

        generators = {
            GenerateOption.SQL: self._gen_sql,
            GenerateOption.STRUCT: self._gen_struct,
            GenerateOption.ROUTES: self._gen_routes,
            GenerateOption.ADMIN: self._gen_admin,
        }
        written: list[Path] = []
        for option in options:
            logger.debug(f"Generating {option.value} for {entity.name}")
            written.extend(generators[option](entity, now))
        return written

    def _gen_sql(self, entity: Entity, now: datetime) -> list[Path]:
        driver = self.config.database_driver
        layout = MIGRATION_LAYOUTS[driver]
        rows = render_rows(entity.attributes, TransformerKind.SQL)

        up = self.renderer.render_context(
            MigrationUpContext(name=entity.name, rows=rows, id_type=entity.id_type),
            driver,
        )
        down = self.renderer.render_context(MigrationDownContext(name=entity.name), driver)
        return [
            export_migration(
                self.project_root, entity.name, "up", up, timestamp=now, layout=layout
            ),
            export_migration(
                self.project_root, entity.name, "down", down, timestamp=now, layout=layout
            ),
        ]

    def _gen_struct(self, entity: Entity, now: datetime) -> list[Path]:
        rows = render_rows(entity.attributes, TransformerKind.STRUCT)
        content = self.renderer.render_context(
            ModelContext(
                name=entity.name,
                struct_name=entity.struct_name,
                id_type=entity.id_type,
                rows=rows,
            ),
            self.config.database_driver,
        )
        return [export_model(self.project_root, entity.struct_name, content)]

    def _gen_routes(self, entity: Entity, now: datetime) -> list[Path]:
        content = self.renderer.render_context(
            RouteContext(
                name=entity.name,
                struct_name=entity.struct_name,
                crud_operations=entity.operations,
            ),
            self.config.database_driver,
        )
        return [export_route(self.project_root, entity.name, content)]

    def _gen_admin(self, entity: Entity, now: datetime) -> list[Path]:
        content = self.renderer.render_context(
            PageContext(
                function_name=to_snake_case(entity.name),
                model_name=entity.struct_name,
                route=to_kebab_case(entity.name),
            )
        )
        return [export_page(self.project_root, entity.name, content)]
