"""Branch creation, switching and inspection for fixture repositories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repofixture.exceptions import ReferenceNotFoundError
from repofixture.harness._context import resolve_backend, resolve_context
from repofixture.harness._models import fixture_root

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from repofixture.backend import VcsBackend
    from repofixture.config import HarnessConfig
    from repofixture.harness._models import FixtureLike


def checkout(
    fixture: FixtureLike,
    branch_name: str,
    *,
    create: bool,
    config: HarnessConfig | None = None,
    backend: VcsBackend | None = None,
    logger: FilteringBoundLogger | None = None,
) -> None:
    """Switch a fixture's working tree to a branch.

    Args:
        fixture: Fixture descriptor or working tree path.
        branch_name: Short branch name.
        create: Create the branch at HEAD before switching. When False the
            branch must already exist.
        config: Harness configuration (for logging).
        backend: VCS backend.
        logger: Logger for debug events.

    Raises:
        ReferenceNotFoundError: If create is False and the branch does not
            exist. HEAD and the working tree are left unchanged.
        VcsOperationError: If the checkout fails, including when create is
            True and the branch already exists, or when the branch exists but
            cannot be resolved to a commit.
    """
    ctx = resolve_context(config=config, backend=backend, logger=logger)
    root = fixture_root(fixture)

    with ctx.backend.open(root) as worktree:
        worktree.checkout(branch_name, create=create)

    ctx.logger.debug(
        "branch_checked_out",
        path=str(root),
        branch=branch_name,
        created=create,
    )


def branch_exists(
    fixture: FixtureLike, branch_name: str, *, backend: VcsBackend | None = None
) -> bool:
    """Check whether ``refs/heads/<branch_name>`` exists and resolves.

    Only a missing reference is reported as False. A branch that exists but
    is unreadable or points at a missing commit raises, as does every other
    backend failure.

    Raises:
        VcsOperationError: If the path is not a repository, or the branch
            exists but cannot be resolved.
    """
    vcs = resolve_backend(backend)
    with vcs.open(fixture_root(fixture)) as worktree:
        try:
            _ = worktree.resolve_reference(f"refs/heads/{branch_name}")
        except ReferenceNotFoundError:
            return False
    return True


def current_branch(
    fixture: FixtureLike, *, backend: VcsBackend | None = None
) -> str | None:
    """Get the branch HEAD points at, or None when HEAD is detached."""
    vcs = resolve_backend(backend)
    with vcs.open(fixture_root(fixture)) as worktree:
        return worktree.current_branch()


def list_branches(
    fixture: FixtureLike, *, backend: VcsBackend | None = None
) -> list[str]:
    vcs = resolve_backend(backend)
    with vcs.open(fixture_root(fixture)) as worktree:
        return worktree.list_branches()
