# ruff: noqa: TC003  # Path needed at runtime for Protocol method bodies
"""VCS backend protocols for type-safe dependency injection.

This module defines the narrow capability interface the fixture harness uses
to talk to a version-control engine. Both GitBackend and FakeBackend satisfy
it, so harness logic can be exercised against a real repository or an
in-memory substitute.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from repofixture.backend._models import CommitInfo, Signature


@runtime_checkable
class VcsWorktree(Protocol):
    """Protocol for operations on an opened repository working tree.

    Worktrees are context managers; leaving the ``with`` block releases any
    handles held by the backend.

    Example:
        >>> with backend.open(path) as worktree:
        ...     worktree.stage_all()
        ...     worktree.commit("Update", author)
    """

    @property
    def root(self) -> Path:
        """Absolute path to the working tree root."""
        ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    def close(self) -> None:
        """Release resources held by the worktree handle."""
        ...

    def stage_all(self) -> None:
        """Stage every addition, modification, and deletion in the working tree.

        Raises:
            VcsOperationError: If staging fails.
        """
        ...

    def commit(self, message: str, author: Signature) -> CommitInfo:
        """Record the staged tree as a new commit on the current branch.

        The author identity is also used as the committer.

        Args:
            message: Commit message. Must not be empty.
            author: Identity and timestamp to record.

        Returns:
            CommitInfo describing the new commit.

        Raises:
            VcsOperationError: If the commit cannot be written.
        """
        ...

    def checkout(self, branch_name: str, *, create: bool) -> None:
        """Switch HEAD and the working tree to a branch.

        Args:
            branch_name: Short branch name (without ``refs/heads/``).
            create: Create the branch at HEAD before switching.

        Raises:
            ReferenceNotFoundError: If create is False and the branch is missing.
            VcsOperationError: If the branch already exists when creating,
                or the checkout fails for any other reason.
        """
        ...

    def resolve_reference(self, ref_name: str) -> str:
        """Resolve a fully qualified reference to a commit identifier.

        Args:
            ref_name: Reference name, e.g. ``refs/heads/main``.

        Returns:
            The commit identifier the reference points at.

        Raises:
            ReferenceNotFoundError: If the reference does not exist.
            VcsOperationError: If resolution fails for any other reason.
        """
        ...

    def current_branch(self) -> str | None:
        """Get the checked-out branch name, or None when HEAD is detached."""
        ...

    def list_branches(self) -> list[str]:
        """Get all local branch names, sorted."""
        ...

    def iter_commits(self, max_count: int | None = None) -> Iterator[CommitInfo]:
        """Iterate commits reachable from HEAD, newest first.

        Args:
            max_count: Maximum number of commits to yield. None yields all.
        """
        ...


@runtime_checkable
class VcsBackend(Protocol):
    """Protocol for creating and opening repositories."""

    def init(self, path: Path, *, bare: bool = False, initial_branch: str) -> None:
        """Initialize a new repository at path.

        Args:
            path: Directory to initialize. Created if missing.
            bare: Create a repository without a working tree.
            initial_branch: Name of the branch HEAD points at initially.

        Raises:
            VcsInitError: If the repository cannot be created.
        """
        ...

    def open(self, path: Path) -> VcsWorktree:
        """Open the working tree of an existing repository.

        Args:
            path: Root directory of the repository.

        Returns:
            A worktree handle for the repository.

        Raises:
            VcsOperationError: If path is not an initialized repository.
        """
        ...
