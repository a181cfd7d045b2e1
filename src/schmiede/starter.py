"""Create a new project from a starter template repository."""

import logging
import shutil
import subprocess
import tempfile
from enum import Enum
from pathlib import Path
from typing import Optional

from schmiede.config import ApiFramework, Config
from schmiede.exceptions import StarterError

logger = logging.getLogger(__name__)

DEFAULT_REPO_URL = "https://github.com/LeNei/schmiede"
STARTERS_DIR = "starters"


class Starter(Enum):
    AXUM = "axum"

    @property
    def api_framework(self) -> ApiFramework:
        return ApiFramework(self.value)


def clone_repository(repo_url: str, destination: Path) -> None:
    """Shallow-clone ``repo_url`` into ``destination``.

    Raises:
        StarterError: If git is missing or the clone fails.
    """
    try:
        result = subprocess.run(
            ["git", "clone", "--depth", "1", repo_url, str(destination)],
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise StarterError("git executable not found") from exc
    if result.returncode != 0:
        raise StarterError(
            f"Failed to clone {repo_url}: {result.stderr.strip() or 'unknown error'}"
        )


def create_project(
    project_name: str,
    starter: Starter = Starter.AXUM,
    repo_url: str = DEFAULT_REPO_URL,
    workdir: Optional[Path] = None,
) -> Path:
    """Copy ``starters/<starter>`` from the repository into ``workdir/project_name``.

    A default schmiede.toml is written into the new project.

    Raises:
        StarterError: If the target exists, the clone fails or the starter is
            not part of the repository.
    """
    if not project_name.strip():
        raise StarterError("Project name cannot be empty")
    workdir = workdir or Path.cwd()
    target = workdir / project_name
    if target.exists():
        raise StarterError(f"{target} already exists")

    with tempfile.TemporaryDirectory(prefix="schmiede-") as tmp:
        clone_dir = Path(tmp) / "repo"
        logger.info(f"Cloning {repo_url}")
        clone_repository(repo_url, clone_dir)

        source = clone_dir / STARTERS_DIR / starter.value
        if not source.is_dir():
            raise StarterError(
                f"Starter '{starter.value}' not found in {repo_url}"
            )
        shutil.move(str(source), str(target))

    config = Config(api_framework=starter.api_framework)
    config.write_to_file(target)
    logger.info(f"Created {target} from the {starter.value} starter")
    return target
