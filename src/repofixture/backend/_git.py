# ruff: noqa: TC003  # Path needed at runtime for method bodies
"""Git backend built on GitPython.

This module provides GitBackend and GitWorktree, the production
implementations of the VCS backend protocols. Object writes (commits) go
through GitPython's object model; porcelain operations that have well-defined
native semantics (``add -A``, ``checkout -b``, ``rev-parse --verify``) are
delegated to the git binary through ``Repo.git``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final, Self

from git import Actor, Repo
from git.exc import (
    GitCommandError,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from repofixture.exceptions import (
    ReferenceNotFoundError,
    VcsInitError,
    VcsOperationError,
)
from repofixture.backend._models import CommitInfo, Signature

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from git.objects import Commit


class GitBackend:
    """Creates and opens real git repositories on disk."""

    __slots__: Final = ()

    def init(
        self, path: Path, *, bare: bool = False, initial_branch: str = "master"
    ) -> None:
        """Initialize a new repository at path.

        Args:
            path: Directory to initialize. Created if missing.
            bare: Create a repository without a working tree.
            initial_branch: Name of the branch HEAD points at initially.

        Raises:
            VcsInitError: If git init fails.
        """
        try:
            repo = Repo.init(str(path), bare=bare, initial_branch=initial_branch)
        except (GitCommandError, OSError) as e:
            msg = f"Failed to initialize repository at {path}: {e}"
            raise VcsInitError(msg, path=path) from e
        repo.close()

    def open(self, path: Path) -> GitWorktree:
        """Open the working tree of an existing repository.

        Args:
            path: Root directory of the repository.

        Returns:
            GitWorktree wrapping the opened repository.

        Raises:
            VcsOperationError: If path is missing or is not a git repository.
        """
        try:
            repo = Repo(str(path))
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            msg = f"Not a git repository: {path}"
            raise VcsOperationError(msg, path=path, operation="open") from e
        if repo.bare:
            repo.close()
            msg = f"Repository has no working tree: {path}"
            raise VcsOperationError(msg, path=path, operation="open")
        return GitWorktree(repo)


class GitWorktree:
    """Working tree of a git repository opened through GitPython.

    The class implements the context manager protocol. When used as a
    context manager, the underlying GitPython Repo is closed on exit.

    Attributes:
        root: The absolute path to the working tree.
    """

    __slots__: Final = ("_repo", "_root")
    _repo: Repo
    _root: Path

    def __init__(self, repo: Repo) -> None:
        self._repo = repo
        self._root = Path(str(repo.working_tree_dir)).resolve()

    # =========================================================================
    # Context Manager Protocol
    # =========================================================================

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying GitPython Repo and its git subprocesses."""
        self._repo.close()

    @property
    def root(self) -> Path:
        return self._root

    # =========================================================================
    # Staging and Commits
    # =========================================================================

    def stage_all(self) -> None:
        """Stage all changes, equivalent to ``git add -A``.

        Raises:
            VcsOperationError: If git add fails.
        """
        try:
            _ = self._repo.git.add(A=True)
        except GitCommandError as e:
            msg = f"Failed to stage changes in {self._root}: {e.stderr.strip()}"
            raise VcsOperationError(
                msg, path=self._root, operation="stage_all"
            ) from e

    def commit(self, message: str, author: Signature) -> CommitInfo:
        """Commit the index with an explicit author and committer.

        Args:
            message: Commit message.
            author: Identity and timestamp used for author and committer.

        Returns:
            CommitInfo for the new commit.

        Raises:
            VcsOperationError: If the commit cannot be written.
        """
        actor = Actor(author.name, author.email)
        try:
            commit = self._repo.index.commit(
                message,
                author=actor,
                committer=actor,
                author_date=author.timestamp,
                commit_date=author.timestamp,
                skip_hooks=True,
            )
        except (GitCommandError, OSError, ValueError) as e:
            msg = f"Failed to commit in {self._root}: {e}"
            raise VcsOperationError(msg, path=self._root, operation="commit") from e
        return _to_commit_info(commit)

    # =========================================================================
    # References
    # =========================================================================

    def checkout(self, branch_name: str, *, create: bool) -> None:
        """Switch to a branch, optionally creating it at HEAD first.

        Args:
            branch_name: Short branch name.
            create: Create the branch before switching (``checkout -b``).

        Raises:
            ReferenceNotFoundError: If create is False and the branch is missing.
            VcsOperationError: If git checkout fails, including when creating
                a branch that already exists.
        """
        if create:
            args = ["-b", branch_name]
        else:
            # Missing branches must not fall through to pathspec checkout
            _ = self.resolve_reference(f"refs/heads/{branch_name}")
            args = [branch_name, "--"]

        try:
            _ = self._repo.git.checkout(*args)
        except GitCommandError as e:
            stderr = e.stderr.strip()
            msg = f"Failed to check out {branch_name!r} in {self._root}: {stderr}"
            raise VcsOperationError(msg, path=self._root, operation="checkout") from e

    def resolve_reference(self, ref_name: str) -> str:
        """Resolve a reference to the commit it points at.

        Presence is decided from the loose and packed reference listing
        without reading the target, so a ref that exists but holds garbage
        or names a missing object is reported as a failure, never as absent.

        Args:
            ref_name: Fully qualified reference name (``refs/...``).

        Returns:
            The 40-character commit SHA.

        Raises:
            ReferenceNotFoundError: If no reference with that name exists.
            VcsOperationError: If the reference exists but cannot be resolved
                to a commit.
        """
        if not self._has_reference(ref_name):
            msg = f"Reference not found: {ref_name}"
            raise ReferenceNotFoundError(msg, ref_name=ref_name, path=self._root)

        try:
            sha: str = self._repo.git.rev_parse("--verify", f"{ref_name}^{{commit}}")
        except GitCommandError as e:
            msg = f"Failed to resolve {ref_name} in {self._root}: {e.stderr.strip()}"
            raise VcsOperationError(
                msg, path=self._root, operation="resolve_reference"
            ) from e
        return sha.strip()

    def _has_reference(self, ref_name: str) -> bool:
        # Listing reads ref names only; targets are not parsed or resolved
        try:
            return any(ref.path == ref_name for ref in self._repo.references)
        except (OSError, ValueError) as e:
            msg = f"Failed to list references in {self._root}: {e}"
            raise VcsOperationError(
                msg, path=self._root, operation="resolve_reference"
            ) from e

    def current_branch(self) -> str | None:
        head = self._repo.head
        if head.is_detached:
            return None
        return head.reference.name

    def list_branches(self) -> list[str]:
        return sorted(head.name for head in self._repo.heads)

    # =========================================================================
    # History
    # =========================================================================

    def iter_commits(self, max_count: int | None = None) -> Iterator[CommitInfo]:
        """Walk history from HEAD, newest first.

        Args:
            max_count: Maximum number of commits to yield. None yields all.

        Yields:
            CommitInfo for each reachable commit. Nothing for an unborn HEAD.
        """
        if not self._repo.head.is_valid():
            return
        kwargs: dict[str, int] = {}
        if max_count is not None:
            kwargs["max_count"] = max_count
        for commit in self._repo.iter_commits("HEAD", **kwargs):
            yield _to_commit_info(commit)


def _to_commit_info(commit: Commit) -> CommitInfo:
    """Convert a GitPython Commit to CommitInfo.

    Args:
        commit: The GitPython commit object.

    Returns:
        CommitInfo populated from the commit data.
    """
    message = commit.message
    if isinstance(message, bytes):
        message = message.decode("utf-8", errors="replace")
    return CommitInfo(
        sha=commit.hexsha,
        message=message,
        author_name=commit.author.name or "",
        author_email=commit.author.email or "",
        timestamp=commit.authored_datetime,
        parent_shas=tuple(parent.hexsha for parent in commit.parents),
    )
