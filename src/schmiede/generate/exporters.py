"""Write rendered artifacts into the project tree."""

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from schmiede.casing import to_snake_case
from schmiede.exceptions import DuplicateDefinitionError
from schmiede.fileio import append_text, read_text, write_atomic

logger = logging.getLogger(__name__)

__all__ = [
    "MigrationLayout",
    "MODELS_PATH",
    "migration_path",
    "export_migration",
    "export_model",
    "export_route",
    "export_page",
]

MIGRATIONS_DIR = "migrations"
MODELS_PATH = Path("src/common/models.rs")
ROUTES_DIR = Path("src/api")
ADMIN_DIR = Path("src/admin")


class MigrationLayout(Enum):
    """How migration files are named on disk.

    DIRECTORY: ``migrations/2024-01-31-120000_post/up.sql`` (diesel)
    FLAT: ``migrations/20240131120000_post.up.sql`` (sqlx)
    """

    DIRECTORY = "%Y-%m-%d-%H%M%S"
    FLAT = "%Y%m%d%H%M%S"


def migration_path(
    project_root: Path,
    name: str,
    direction: str,
    timestamp: datetime,
    layout: MigrationLayout = MigrationLayout.DIRECTORY,
) -> Path:
    """Compute the path of an up or down migration file."""
    if direction not in ("up", "down"):
        raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")
    version = timestamp.strftime(layout.value)
    stem = f"{version}_{name.lower()}"
    if layout == MigrationLayout.DIRECTORY:
        return project_root / MIGRATIONS_DIR / stem / f"{direction}.sql"
    return project_root / MIGRATIONS_DIR / f"{stem}.{direction}.sql"


def export_migration(
    project_root: Path,
    name: str,
    direction: str,
    content: str,
    *,
    timestamp: Optional[datetime] = None,
    layout: MigrationLayout = MigrationLayout.DIRECTORY,
) -> Path:
    """Append a migration, creating its file and directory as needed.

    There is no duplicate detection: every run gets a new timestamped path.
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    path = migration_path(project_root, name, direction, timestamp, layout)
    append_text(path, content + "\n")
    logger.info(f"Wrote {direction} migration {path}")
    return path


def _declares_struct(contents: str, struct_name: str) -> bool:
    pattern = re.compile(rf"^\s*pub struct {re.escape(struct_name)}\b")
    return any(pattern.match(line) for line in contents.splitlines())


def export_model(
    project_root: Path,
    struct_name: str,
    content: str,
    models_path: Path = MODELS_PATH,
) -> Path:
    """Append a struct to the shared models file.

    Raises:
        DuplicateDefinitionError: If the struct is already declared. The file
            is left untouched.
    """
    path = project_root / models_path
    existing = read_text(path) if path.exists() else ""

    if _declares_struct(existing, struct_name):
        raise DuplicateDefinitionError(
            struct_name, f"Struct '{struct_name}' already exists in {path}"
        )

    write_atomic(path, f"{existing}\n{content}\n")
    logger.info(f"Added struct {struct_name} to {path}")
    return path


def export_route(
    project_root: Path,
    name: str,
    content: str,
    routes_dir: Path = ROUTES_DIR,
) -> Path:
    """Append route handlers to ``src/api/<name>.rs``.

    Repeated exports append further blocks; callers must not re-run blindly.
    """
    path = project_root / routes_dir / f"{to_snake_case(name)}.rs"
    append_text(path, content)
    logger.info(f"Wrote routes {path}")
    return path


def export_page(
    project_root: Path,
    name: str,
    content: str,
    admin_dir: Path = ADMIN_DIR,
) -> Path:
    """Append an admin page stub to ``src/admin/<name>.rs``."""
    path = project_root / admin_dir / f"{to_snake_case(name)}.rs"
    append_text(path, content)
    logger.info(f"Wrote admin page {path}")
    return path
