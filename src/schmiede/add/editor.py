"""Line-anchored editing of existing source files.

An edit is a set of rules. Each rule names trigger substrings and a
transform; during one forward scan over the file the first unfired rule whose
triggers all occur in a line fires once, and its transform mutates the working
list of lines (usually by inserting next to the matched line). Optional
callbacks run before the scan and after it; the latter sees which rules fired
so it can add fallback content for anchors that were never found.

Editing is not idempotent: the triggers are still present after an edit, so a
second run inserts everything again. Set ``FileEdit.guard`` to a substring the
edit itself introduces to make a rerun a no-op.
"""

import difflib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from schmiede.fileio import read_text, write_atomic

logger = logging.getLogger(__name__)

__all__ = [
    "LineTransform",
    "BeforeTransform",
    "AfterTransform",
    "EditRule",
    "FileEdit",
    "EditResult",
    "apply_edits",
    "edit_file",
    "insert_after",
    "insert_before",
    "replace_line",
]

# (lines, index of the matched line in ``lines``)
LineTransform = Callable[[list[str], int], None]
BeforeTransform = Callable[[list[str]], None]
# (lines, fired flag per rule in declaration order)
AfterTransform = Callable[[list[str], list[bool]], None]


@dataclass(frozen=True)
class EditRule:
    """Fire ``transform`` on the first line containing every trigger."""

    triggers: tuple[str, ...]
    transform: LineTransform

    def __post_init__(self) -> None:
        if isinstance(self.triggers, str):
            object.__setattr__(self, "triggers", (self.triggers,))
        else:
            object.__setattr__(self, "triggers", tuple(self.triggers))
        if not self.triggers:
            raise ValueError("EditRule needs at least one trigger")

    def matches(self, line: str) -> bool:
        return all(trigger in line for trigger in self.triggers)


@dataclass
class FileEdit:
    """One editing session for one file."""

    path: Path
    rules: list[EditRule] = field(default_factory=list)
    before: Optional[BeforeTransform] = None
    after: Optional[AfterTransform] = None
    guard: Optional[str] = None


@dataclass
class EditResult:
    path: Path
    fired: list[bool]
    skipped: bool = False


def apply_edits(
    lines: list[str],
    rules: list[EditRule],
    before: Optional[BeforeTransform] = None,
    after: Optional[AfterTransform] = None,
) -> list[bool]:
    """Run the edit algorithm on ``lines`` in place and return the fired flags.

    The scan walks a snapshot of the lines taken after ``before`` ran, so
    insertions made by transforms are never scanned themselves. A transform
    gets the matched line's position in the working list; positions are
    remapped after every transform, wherever it inserted or removed lines.
    """
    if before is not None:
        before(lines)

    fired = [False] * len(rules)
    snapshot = list(lines)
    positions = list(range(len(snapshot)))

    for index, line in enumerate(snapshot):
        for rule_index, rule in enumerate(rules):
            if fired[rule_index] or not rule.matches(line):
                continue
            previous = list(lines)
            rule.transform(lines, positions[index])
            _remap_positions(positions, previous, lines)
            fired[rule_index] = True
            break

    if after is not None:
        after(lines, list(fired))
    return fired


def _remap_positions(positions: list[int], old: list[str], new: list[str]) -> None:
    """Follow each tracked line from ``old`` to where it ended up in ``new``.

    A line that was replaced or removed maps to the slot that took its place.
    """
    moved = {}
    matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        for k in range(i2 - i1):
            if tag == "equal":
                moved[i1 + k] = j1 + k
            else:
                moved[i1 + k] = j1 + min(k, max(j2 - j1 - 1, 0))
    for i, position in enumerate(positions):
        positions[i] = moved.get(position, len(new))


def edit_file(edit: FileEdit) -> EditResult:
    """Read, edit and atomically rewrite ``edit.path``.

    Raises:
        FileReadError: If the file cannot be read. Nothing is written.
        FileWriteError: If the result cannot be written back.
    """
    content = read_text(edit.path)

    if edit.guard is not None and edit.guard in content:
        logger.info(f"Skipping {edit.path}: already contains {edit.guard!r}")
        return EditResult(
            path=edit.path, fired=[False] * len(edit.rules), skipped=True
        )

    lines = content.splitlines()
    fired = apply_edits(lines, edit.rules, edit.before, edit.after)

    for rule, has_fired in zip(edit.rules, fired):
        if not has_fired:
            logger.debug(f"No anchor {list(rule.triggers)} in {edit.path}")

    new_content = "\n".join(lines)
    if content.endswith("\n"):
        new_content += "\n"
    write_atomic(edit.path, new_content)
    logger.info(f"Updated {edit.path}")
    return EditResult(path=edit.path, fired=fired)


def insert_after(*new_lines: str) -> LineTransform:
    """Transform inserting ``new_lines`` right below the matched line."""

    def transform(lines: list[str], index: int) -> None:
        lines[index + 1 : index + 1] = new_lines

    return transform


def insert_before(*new_lines: str) -> LineTransform:
    """Transform inserting ``new_lines`` right above the matched line."""

    def transform(lines: list[str], index: int) -> None:
        lines[index:index] = new_lines

    return transform


def replace_line(new_line: str) -> LineTransform:
    def transform(lines: list[str], index: int) -> None:
        lines[index] = new_line

    return transform
