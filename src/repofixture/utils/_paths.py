"""Path helpers for fixture directories and command-output matching."""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from repofixture.exceptions import FixtureIOError


def normalize_path(path: str | PurePath) -> str:
    """Convert a path into a canonical, host-independent string.

    Backslash separators become forward slashes and every space is escaped
    with a preceding backslash, so the result can be matched against paths
    echoed in shell command output.

    Args:
        path: A path string or path object.

    Returns:
        The normalized path string.

    Example:
        >>> normalize_path("a b/c")
        'a\\\\ b/c'
        >>> normalize_path("C:\\\\tmp\\\\repo")
        'C:/tmp/repo'
    """
    return str(path).replace("\\", "/").replace(" ", "\\ ")


def ensure_directory(path: Path) -> Path:
    """Create a directory and its parents if it does not exist.

    Args:
        path: Directory to create.

    Returns:
        The same path.

    Raises:
        FixtureIOError: If the directory cannot be created, or path exists
            and is not a directory.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Failed to create directory {path}: {e}"
        raise FixtureIOError(msg, path=path) from e
    return path


def make_absolute(path: Path) -> Path:
    """Return path unchanged if absolute, otherwise anchored at the current directory.

    Symlinks are not resolved; use ``Path.resolve()`` for that.

    Args:
        path: Path to make absolute.

    Returns:
        An absolute path.
    """
    if path.is_absolute():
        return path
    return Path(os.path.abspath(path))  # noqa: PTH100
