"""Add-ons that patch an existing starter project."""

from schmiede.add.database import DatabaseFeature
from schmiede.add.editor import EditRule, FileEdit, apply_edits, edit_file
from schmiede.add.manifest import Dependency, apply_dependencies, patch_manifest

__all__ = [
    "DatabaseFeature",
    "Dependency",
    "EditRule",
    "FileEdit",
    "apply_dependencies",
    "apply_edits",
    "edit_file",
    "patch_manifest",
]
