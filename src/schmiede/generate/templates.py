"""Jinja2 template rendering for generated files.

The renderer loads ``.j2`` templates from the package's ``templates/``
directory. Each generated artifact has a small typed context; the templates
only ever see the fields of that context.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from schmiede.casing import to_camel_case, to_kebab_case, to_pascal_case, to_snake_case
from schmiede.config import DatabaseDriver
from schmiede.exceptions import RenderError
from schmiede.types import CrudOperations, IDType

_DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateRenderer:
    """Renders the bundled Jinja2 templates."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["snake_case"] = to_snake_case
        self.env.filters["pascal_case"] = to_pascal_case
        self.env.filters["camel_case"] = to_camel_case
        self.env.filters["kebab_case"] = to_kebab_case

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render one template.

        Raises:
            RenderError: If the template is missing or fails to render.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except TemplateError as exc:
            raise RenderError(f"Failed to render {template_path}: {exc}") from exc

    def render_context(
        self, context: "TemplateContext", driver: Optional[DatabaseDriver] = None
    ) -> str:
        return self.render(context.template_path(driver), context.as_dict())


class TemplateContext:
    """Mixin for the dataclass contexts below."""

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def template_path(self, driver: Optional[DatabaseDriver]) -> str:
        raise NotImplementedError


@dataclass
class MigrationUpContext(TemplateContext):
    name: str
    rows: list[str]
    id_type: IDType

    def template_path(self, driver: Optional[DatabaseDriver]) -> str:
        return f"generate/db/{driver.value}/up.sql.j2"


@dataclass
class MigrationDownContext(TemplateContext):
    name: str

    def template_path(self, driver: Optional[DatabaseDriver]) -> str:
        return f"generate/db/{driver.value}/down.sql.j2"


@dataclass
class ModelContext(TemplateContext):
    name: str
    struct_name: str
    id_type: IDType
    rows: list[str]

    def template_path(self, driver: Optional[DatabaseDriver]) -> str:
        return f"generate/models/{driver.value}.rs.j2"


@dataclass
class RouteContext(TemplateContext):
    name: str
    struct_name: str
    crud_operations: CrudOperations

    def as_dict(self) -> dict[str, Any]:
        context = super().as_dict()
        context["operations"] = [op.value for op in self.crud_operations.operations]
        return context

    def template_path(self, driver: Optional[DatabaseDriver]) -> str:
        return f"generate/api/axum_{driver.value}.rs.j2"


@dataclass
class PageContext(TemplateContext):
    function_name: str
    model_name: str
    route: str

    def template_path(self, driver: Optional[DatabaseDriver]) -> str:
        return "generate/admin/page.rs.j2"


@dataclass
class DatabaseConfigContext(TemplateContext):
    database: str

    def template_path(self, driver: Optional[DatabaseDriver]) -> str:
        return f"add/database/{driver.value}.rs.j2"
