"""Working-tree file inspection and writing.

Reads go straight to the filesystem; nothing here consults the repository
index or history.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from repofixture.config import load_config
from repofixture.exceptions import FixtureIOError, FixturePathError
from repofixture.harness._models import fixture_root

if TYPE_CHECKING:
    from pathlib import Path

    from repofixture.config import HarnessConfig
    from repofixture.harness._models import FixtureLike


def resolve_in_tree(root: Path, file_name: str | Path) -> Path:
    """Join file_name onto root and verify it stays inside the working tree.

    Args:
        root: Working tree root.
        file_name: Path relative to the root.

    Returns:
        The joined path (not resolved, so symlinked roots keep their spelling).

    Raises:
        FixturePathError: If the name is absolute, escapes the root, or
            points into the ``.git`` directory.
    """
    target = root / file_name
    resolved_root = root.resolve()
    resolved = target.resolve()
    if not resolved.is_relative_to(resolved_root) or resolved == resolved_root:
        msg = f"Path is outside the fixture working tree: {file_name}"
        raise FixturePathError(msg, path=target, fixture_root=root)
    if ".git" in resolved.relative_to(resolved_root).parts[:1]:
        msg = f"Path points into repository metadata: {file_name}"
        raise FixturePathError(msg, path=target, fixture_root=root)
    return target


def write_working_file(
    root: Path, file_name: str | Path, content: bytes | str, *, mode: int
) -> Path:
    """Create or overwrite a file in the working tree.

    Parent directories are created as needed. ``mode`` is applied only when
    the file is created; overwriting keeps the existing permissions.

    Args:
        root: Working tree root.
        file_name: Path relative to the root.
        content: Bytes, or text encoded as UTF-8.
        mode: Permission bits for newly created files.

    Returns:
        Path of the written file.

    Raises:
        FixturePathError: If file_name escapes the working tree.
        FixtureIOError: If the file cannot be written.
    """
    target = resolve_in_tree(root, file_name)
    data = content.encode() if isinstance(content, str) else content
    try:
        created = not target.exists()
        target.parent.mkdir(parents=True, exist_ok=True)
        _ = target.write_bytes(data)
        if created:
            target.chmod(mode)
    except OSError as e:
        msg = f"Failed to write {target}: {e}"
        raise FixtureIOError(msg, path=target) from e
    return target


def read_file(fixture: FixtureLike, file_name: str | Path) -> bytes:
    """Read a file from a fixture's working tree.

    Args:
        fixture: Fixture descriptor or working tree path.
        file_name: Path relative to the working tree root.

    Returns:
        The file contents.

    Raises:
        FixtureIOError: If the file is absent or unreadable. Use
            file_exists() first when absence is an expected outcome.
    """
    target = fixture_root(fixture) / file_name
    try:
        return target.read_bytes()
    except OSError as e:
        msg = f"Failed to read {target}: {e}"
        raise FixtureIOError(msg, path=target) from e


def read_test_file(fixture: FixtureLike, *, config: HarnessConfig | None = None) -> str:
    """Read the default fixture file as UTF-8 text.

    Args:
        fixture: Fixture descriptor or working tree path.
        config: Harness configuration naming the default file.

    Returns:
        The decoded file contents.
    """
    if config is None:
        config = load_config()
    return read_file(fixture, config.default_file_name).decode()


def file_exists(fixture: FixtureLike, file_name: str | Path) -> bool:
    """Check whether a path exists in a fixture's working tree.

    Only "not found" is reported as False. Any other stat failure
    (permission denied, a parent that is a regular file) is raised, so a
    missing file is never confused with one that could not be checked.

    Args:
        fixture: Fixture descriptor or working tree path.
        file_name: Path relative to the working tree root.

    Returns:
        True if the path exists, False if it does not.

    Raises:
        FixtureIOError: If existence cannot be determined.
    """
    target = fixture_root(fixture) / file_name
    try:
        _ = target.stat()
    except FileNotFoundError:
        return False
    except OSError as e:
        msg = f"Failed to stat {target}: {e}"
        raise FixtureIOError(msg, path=target) from e
    return True
