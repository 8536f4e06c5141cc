"""Commit writing and history inspection for fixture repositories.

Every write is staged and committed immediately, so fixtures never carry
staged-but-uncommitted changes between harness calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from repofixture.exceptions import ReferenceNotFoundError
from repofixture.harness._context import resolve_backend, resolve_context
from repofixture.harness._files import write_working_file
from repofixture.harness._models import fixture_root

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from repofixture.backend import CommitInfo, VcsBackend
    from repofixture.config import HarnessConfig
    from repofixture.harness._models import FixtureLike
    from repofixture.utils import Clock


def write_and_commit(
    fixture: FixtureLike,
    file_name: str | Path,
    content: bytes | str,
    commit_message: str,
    *,
    timestamp: datetime | None = None,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> CommitInfo:
    """Write a file into the working tree and commit the whole tree.

    The repository is opened before anything is written, so calling this on
    a directory that is not a repository leaves the filesystem untouched.

    Args:
        fixture: Fixture descriptor or working tree path.
        file_name: Path relative to the working tree root. Parent directories
            are created as needed.
        content: New file content. Text is encoded as UTF-8.
        commit_message: Commit message. Must not be empty.
        timestamp: Explicit author and committer time. Defaults to clock().
        config: Harness configuration.
        backend: VCS backend.
        clock: Timestamp source used when timestamp is not given.
        logger: Logger for debug events.

    Returns:
        CommitInfo for the new commit.

    Raises:
        ValueError: If commit_message is empty.
        FixturePathError: If file_name escapes the working tree.
        FixtureIOError: If the file cannot be written.
        VcsOperationError: If the path is not a repository, or staging or
            committing fails. An empty diff surfaces whatever the backend
            does for it.
    """
    if not commit_message:
        msg = "Commit message must not be empty"
        raise ValueError(msg)

    ctx = resolve_context(config=config, backend=backend, clock=clock, logger=logger)
    root = fixture_root(fixture)

    with ctx.backend.open(root) as worktree:
        _ = write_working_file(
            worktree.root, file_name, content, mode=ctx.config.file_mode
        )
        worktree.stage_all()
        commit = worktree.commit(commit_message, ctx.signature(timestamp))
        branch = worktree.current_branch()

    ctx.logger.debug(
        "commit_created",
        path=str(root),
        file_name=str(file_name),
        branch=branch,
        sha=commit.sha,
    )
    return commit


def change_test_file(
    fixture: FixtureLike,
    content: bytes | str,
    commit_message: str,
    *,
    timestamp: datetime | None = None,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> CommitInfo:
    """Overwrite the default fixture file and commit it."""
    ctx = resolve_context(config=config, backend=backend, clock=clock, logger=logger)
    return write_and_commit(
        fixture,
        ctx.config.default_file_name,
        content,
        commit_message,
        timestamp=timestamp,
        config=ctx.config,
        backend=ctx.backend,
        clock=ctx.clock,
        logger=ctx.logger,
    )


def add_file(
    fixture: FixtureLike,
    file_name: str | Path,
    content: bytes | str,
    commit_message: str,
    *,
    timestamp: datetime | None = None,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> CommitInfo:
    """Create a new file in the working tree and commit it.

    Identical to write_and_commit(); the separate name reads better in tests
    that build up a tree file by file.
    """
    return write_and_commit(
        fixture,
        file_name,
        content,
        commit_message,
        timestamp=timestamp,
        config=config,
        backend=backend,
        clock=clock,
        logger=logger,
    )


def get_commits(
    fixture: FixtureLike,
    max_count: int | None = None,
    *,
    backend: VcsBackend | None = None,
) -> list[CommitInfo]:
    """List commits reachable from HEAD, newest first.

    Args:
        fixture: Fixture descriptor or working tree path.
        max_count: Maximum number of commits to return. None returns all.
        backend: VCS backend.

    Returns:
        Commits in history order. Empty if HEAD has no commits yet.

    Raises:
        VcsOperationError: If the path is not a repository.
    """
    vcs = resolve_backend(backend)
    with vcs.open(fixture_root(fixture)) as worktree:
        return list(worktree.iter_commits(max_count))


def head_sha(fixture: FixtureLike, *, backend: VcsBackend | None = None) -> str:
    """Get the commit identifier HEAD points at.

    Raises:
        ReferenceNotFoundError: If HEAD has no commits.
        VcsOperationError: If the path is not a repository.
    """
    commits = get_commits(fixture, max_count=1, backend=backend)
    if not commits:
        root = fixture_root(fixture)
        msg = f"HEAD has no commits in {root}"
        raise ReferenceNotFoundError(msg, ref_name="HEAD", path=root)
    return commits[0].sha
