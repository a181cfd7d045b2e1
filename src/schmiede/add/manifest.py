"""Merge dependency declarations into a Cargo.toml manifest."""

import logging
from pathlib import Path
from typing import NamedTuple, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import InlineTable, Table

from schmiede.exceptions import ManifestParseError, ManifestStructureError
from schmiede.fileio import read_text, write_atomic

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "Cargo.toml"


class Dependency(NamedTuple):
    name: str
    version: str
    features: Optional[list[str]] = None


def apply_dependencies(manifest_text: str, dependencies: list[Dependency]) -> str:
    """Return ``manifest_text`` with ``dependencies`` set in ``[dependencies]``.

    Entries are overwritten, never merged: a dependency with features becomes
    ``name = { version = "...", features = [...] }``, one without becomes
    ``name = "version"``. Formatting of the rest of the document is kept.

    Raises:
        ManifestParseError: If the text is not valid TOML.
        ManifestStructureError: If there is no top-level dependencies table.
    """
    try:
        document = tomlkit.parse(manifest_text)
    except TOMLKitError as exc:
        raise ManifestParseError(f"Failed to parse manifest: {exc}") from exc

    table = document.get("dependencies")
    if not isinstance(table, (Table, InlineTable)):
        raise ManifestStructureError("Manifest has no [dependencies] table")

    for dependency in dependencies:
        if dependency.features is not None:
            entry = tomlkit.inline_table()
            entry["version"] = dependency.version
            features = tomlkit.array()
            features.extend(dependency.features)
            entry["features"] = features
            table[dependency.name] = entry
        else:
            table[dependency.name] = dependency.version
        logger.debug(f"Set dependency {dependency.name} = {dependency.version}")

    return tomlkit.dumps(document)


def patch_manifest(project_root: Path, dependencies: list[Dependency]) -> Path:
    """Apply ``dependencies`` to the project's Cargo.toml in place."""
    path = project_root / MANIFEST_FILE_NAME
    updated = apply_dependencies(read_text(path), dependencies)
    write_atomic(path, updated)
    logger.info(
        f"Added {', '.join(d.name for d in dependencies)} to {path}"
    )
    return path
