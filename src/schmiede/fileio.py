"""File access helpers shared by the exporters and the editors."""

import os
import tempfile
from pathlib import Path

from schmiede.exceptions import FileReadError, FileWriteError

__all__ = ["read_text", "write_atomic", "append_text"]


def read_text(path: Path) -> str:
    """Read a whole text file.

    Raises:
        FileReadError: If the file is missing, cannot be read or is not UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileReadError(path, f"Failed to read '{path}': {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FileReadError(path, f"'{path}' is not valid UTF-8: {exc}") from exc


def write_atomic(path: Path, content: str) -> None:
    """Replace the content of ``path`` without ever leaving a partial file.

    The content goes to a temporary file in the same directory which is then
    renamed over the target.

    Raises:
        FileWriteError: If the directory or the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            if path.exists():
                os.chmod(tmp_name, path.stat().st_mode & 0o777)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as exc:
        raise FileWriteError(path, f"Failed to write '{path}': {exc}") from exc


def append_text(path: Path, content: str) -> None:
    """Append to ``path``, creating it and its parent directories if needed.

    Raises:
        FileWriteError: If the directory or the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(content)
    except OSError as exc:
        raise FileWriteError(path, f"Failed to append to '{path}': {exc}") from exc
