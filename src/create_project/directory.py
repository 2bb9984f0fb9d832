"""Target-directory inspection and clearing.

Ignorable entries (version-control metadata and the editor config) never
block reuse of a directory and are never removed when it is emptied.
"""

from __future__ import annotations

import shutil
from enum import Enum
from pathlib import Path

from .services.errors import IoFailedError

IGNORABLE_ENTRIES: tuple[str, ...] = (".git", ".editorconfig")


class DirectoryState(str, Enum):
    """Classification of a target path."""

    ABSENT = "absent"
    PRESENT_EMPTY = "present_empty"
    PRESENT_IGNORABLE_ONLY = "present_ignorable_only"
    PRESENT_WITH_CONTENT = "present_with_content"


def classify(path: Path) -> DirectoryState:
    """Classify ``path`` by existence and contents.

    A path that exists but is not a directory counts as having content, so
    it always requires confirmation.

    Args:
        path: Target directory path.

    Returns:
        The matching ``DirectoryState``.
    """
    path = Path(path)
    if not path.exists():
        return DirectoryState.ABSENT
    if not path.is_dir():
        return DirectoryState.PRESENT_WITH_CONTENT
    names = [entry.name for entry in path.iterdir()]
    if not names:
        return DirectoryState.PRESENT_EMPTY
    if all(name in IGNORABLE_ENTRIES for name in names):
        return DirectoryState.PRESENT_IGNORABLE_ONLY
    return DirectoryState.PRESENT_WITH_CONTENT


def can_skip_emptying(path: Path) -> bool:
    """Return whether ``path`` can be reused without an overwrite confirmation."""
    return classify(path) is not DirectoryState.PRESENT_WITH_CONTENT


def _remove_entry(entry: Path) -> None:
    if entry.is_dir() and not entry.is_symlink():
        shutil.rmtree(entry)
    else:
        entry.unlink()


def empty_dir(path: Path) -> None:
    """Remove everything under ``path`` except ignorable entries.

    Missing paths are left alone; creating the directory is the caller's job.
    Errors are not rolled back, so a failure can leave the directory
    partially emptied.

    Args:
        path: Directory to clear.

    Raises:
        IoFailedError: When an entry cannot be removed.
    """
    path = Path(path)
    if not path.exists():
        return
    try:
        for entry in list(path.iterdir()):
            if entry.name in IGNORABLE_ENTRIES:
                continue
            _remove_entry(entry)
    except OSError as exc:
        raise IoFailedError(
            f"failed to empty {path}: {exc.strerror or exc}",
            recovery_hint="Check permissions on the target directory.",
        ) from exc


def prepare_target_dir(path: Path, should_overwrite: bool) -> DirectoryState:
    """Empty or create the target directory before materialization.

    Existing directories are emptied only when ``should_overwrite`` is set
    and they hold something besides ignorable entries; missing directories
    are created with their parents.

    Args:
        path: Absolute target directory.
        should_overwrite: Resolved overwrite decision.

    Returns:
        The state observed before any mutation.

    Raises:
        IoFailedError: When the directory cannot be emptied or created.
    """
    state = classify(path)
    if state is DirectoryState.ABSENT:
        try:
            Path(path).mkdir(parents=True)
        except OSError as exc:
            raise IoFailedError(
                f"failed to create {path}: {exc.strerror or exc}",
                recovery_hint="Check that the parent directory is writable.",
            ) from exc
        return state
    if should_overwrite and state is DirectoryState.PRESENT_WITH_CONTENT:
        if not Path(path).is_dir():
            raise IoFailedError(f"path exists and is not a directory: {path}")
        empty_dir(path)
    return state
