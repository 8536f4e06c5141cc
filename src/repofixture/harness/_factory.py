"""Fixture repository creation.

Every fixture lives in a fresh, uniquely named directory, is a non-bare
repository, and starts with exactly one commit containing the default file.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from repofixture.exceptions import FixtureIOError
from repofixture.harness._context import resolve_context
from repofixture.harness._files import write_working_file
from repofixture.harness._models import RepositoryFixture, TemporaryFixture
from repofixture.utils import ensure_directory, make_absolute

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.typing import FilteringBoundLogger

    from repofixture.backend import VcsBackend
    from repofixture.config import HarnessConfig
    from repofixture.utils import Clock


def create_repository(
    initial_content: bytes | str,
    parent_dir: Path | str,
    *,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> Path:
    """Create a fixture repository in a new directory under parent_dir.

    The directory name carries the configured prefix and suffix
    (``multi-git-test-*.git`` by default). The repository is initialized,
    initial_content is written to the default file, and everything is
    committed as the fixed author with the initial commit message.

    No rollback is attempted: a failure after the directory is created leaves
    it behind for inspection.

    Args:
        initial_content: Content of the default file.
        parent_dir: Existing directory to create the fixture in.
        config: Harness configuration. Defaults to load_config().
        backend: VCS backend. Defaults to GitBackend.
        clock: Timestamp source for the initial commit.
        logger: Logger for debug events.

    Returns:
        Absolute, resolved path of the new repository.

    Raises:
        FixtureIOError: If the directory or file cannot be created.
        VcsInitError: If the repository cannot be initialized.
        VcsOperationError: If staging or committing fails.
    """
    ctx = resolve_context(config=config, backend=backend, clock=clock, logger=logger)
    cfg = ctx.config

    try:
        repo_dir = Path(
            tempfile.mkdtemp(
                prefix=cfg.directory_prefix,
                suffix=cfg.directory_suffix,
                dir=parent_dir,
            )
        ).resolve()
    except OSError as e:
        msg = f"Failed to create fixture directory under {parent_dir}: {e}"
        raise FixtureIOError(msg, path=Path(parent_dir)) from e

    log = ctx.logger.bind(path=str(repo_dir))

    ctx.backend.init(repo_dir, initial_branch=cfg.initial_branch)
    _ = write_working_file(
        repo_dir, cfg.default_file_name, initial_content, mode=cfg.file_mode
    )

    with ctx.backend.open(repo_dir) as worktree:
        worktree.stage_all()
        commit = worktree.commit(cfg.initial_commit_message, ctx.signature())

    log.debug(
        "repository_created",
        branch=cfg.initial_branch,
        sha=commit.sha,
    )
    return repo_dir


def create_repository_in(
    initial_content: bytes | str,
    requested_dir: Path | str,
    *,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> Path:
    """Create a fixture repository under requested_dir, creating it if needed.

    Args:
        initial_content: Content of the default file.
        requested_dir: Directory to create the fixture in. Relative paths are
            resolved against the current directory.
        config: Harness configuration.
        backend: VCS backend.
        clock: Timestamp source for the initial commit.
        logger: Logger for debug events.

    Returns:
        Absolute path of the new repository.

    Raises:
        FixtureIOError: If requested_dir cannot be created.
    """
    parent = ensure_directory(make_absolute(Path(requested_dir)))
    return create_repository(
        initial_content,
        parent,
        config=config,
        backend=backend,
        clock=clock,
        logger=logger,
    )


def create_repo(
    owner_name: str,
    repo_name: str,
    data_in_file: bytes | str,
    *,
    parent_dir: Path | str | None = None,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> RepositoryFixture:
    """Create a fixture repository and describe it for a mock hosting service.

    Args:
        owner_name: Owner the repository is listed under.
        repo_name: Repository name.
        data_in_file: Content of the default file.
        parent_dir: Directory to create the fixture in. Defaults to the
            system temporary directory.
        config: Harness configuration.
        backend: VCS backend.
        clock: Timestamp source for the initial commit.
        logger: Logger for debug events.

    Returns:
        RepositoryFixture for the new repository.
    """
    path = create_repository(
        data_in_file,
        parent_dir if parent_dir is not None else tempfile.gettempdir(),
        config=config,
        backend=backend,
        clock=clock,
        logger=logger,
    )
    return RepositoryFixture(owner_name=owner_name, repo_name=repo_name, path=path)


def create_repo_with_clone_dir(
    owner_name: str,
    repo_name: str,
    data_in_file: bytes | str,
    directory: Path | str,
    *,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> RepositoryFixture:
    """Create a fixture repository under a caller-chosen directory.

    The directory is created if it does not exist.
    """
    path = create_repository_in(
        data_in_file,
        directory,
        config=config,
        backend=backend,
        clock=clock,
        logger=logger,
    )
    return RepositoryFixture(owner_name=owner_name, repo_name=repo_name, path=path)


@contextmanager
def temporary_repository(
    owner_name: str,
    repo_name: str,
    data_in_file: bytes | str,
    *,
    parent_dir: Path | str | None = None,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    clock: Clock | None = None,
    logger: FilteringBoundLogger | None = None,
) -> Iterator[TemporaryFixture]:
    """Create a fixture repository that is removed when the block exits.

    Example:
        >>> with temporary_repository("acme", "widgets", "hello") as tmp:
        ...     file_exists(tmp.fixture, "test.txt")
        True
    """
    fixture = create_repo(
        owner_name,
        repo_name,
        data_in_file,
        parent_dir=parent_dir,
        config=config,
        backend=backend,
        clock=clock,
        logger=logger,
    )
    with TemporaryFixture(fixture) as tmp:
        yield tmp
