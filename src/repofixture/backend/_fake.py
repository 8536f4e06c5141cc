# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fake VCS backend for testing.

This module provides a FakeBackend class that implements VcsBackend without
a git binary. Repository state (commits, refs, HEAD) lives in memory, keyed
by repository root; the working tree is the real directory on disk, so files
written by the harness are snapshotted when staged and restored on checkout.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from types import TracebackType
from typing import Self

from repofixture.backend._models import CommitInfo, Signature
from repofixture.exceptions import (
    ReferenceNotFoundError,
    VcsInitError,
    VcsOperationError,
)

_HEADS_PREFIX = "refs/heads/"


@dataclass(slots=True)
class FakeRepoState:
    """In-memory state of one fake repository.

    Attributes:
        bare: Whether the repository was initialized without a working tree.
        refs: Fully qualified reference names mapped to commit identifiers.
        head: Symbolic target of HEAD (``refs/heads/...``) or a detached commit id.
        commits: Commit metadata by identifier.
        trees: Snapshot of tracked file contents by commit identifier.
        index: Currently staged file contents (relative POSIX path -> bytes).
    """

    bare: bool
    refs: dict[str, str] = field(default_factory=dict)
    head: str = "refs/heads/master"
    commits: dict[str, CommitInfo] = field(default_factory=dict)
    trees: dict[str, dict[str, bytes]] = field(default_factory=dict)
    index: dict[str, bytes] = field(default_factory=dict)

    def head_sha(self) -> str | None:
        if self.head.startswith(_HEADS_PREFIX):
            return self.refs.get(self.head)
        return self.head


@dataclass(slots=True)
class FakeBackend:
    """Fake VCS backend for testing.

    Implements VcsBackend without touching git. Useful for unit testing
    harness code and for injecting backend failures.

    The fake maintains internal state that can be inspected for testing:
    - repos maps resolved repository roots to FakeRepoState
    - fail_on names operations that raise VcsOperationError when invoked

    Example:
        >>> backend = FakeBackend()
        >>> backend.init(Path("/tmp/repo"), initial_branch="main")
        >>> with backend.open(Path("/tmp/repo")) as worktree:
        ...     worktree.stage_all()
    """

    repos: dict[Path, FakeRepoState] = field(default_factory=dict)
    fail_on: set[str] = field(default_factory=set)

    def init(
        self, path: Path, *, bare: bool = False, initial_branch: str = "master"
    ) -> None:
        """Record a new fake repository and create its directory.

        Raises:
            VcsInitError: If the directory cannot be created or "init" is in fail_on.
        """
        if "init" in self.fail_on:
            msg = f"Injected init failure at {path}"
            raise VcsInitError(msg, path=path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Failed to initialize repository at {path}: {e}"
            raise VcsInitError(msg, path=path) from e
        self.repos[path.resolve()] = FakeRepoState(
            bare=bare, head=f"{_HEADS_PREFIX}{initial_branch}"
        )

    def open(self, path: Path) -> FakeWorktree:
        """Open a previously initialized fake repository.

        Raises:
            VcsOperationError: If path was never initialized or is bare.
        """
        self._maybe_fail("open", path)
        root = path.resolve()
        state = self.repos.get(root)
        if state is None:
            msg = f"Not a git repository: {path}"
            raise VcsOperationError(msg, path=path, operation="open")
        if state.bare:
            msg = f"Repository has no working tree: {path}"
            raise VcsOperationError(msg, path=path, operation="open")
        return FakeWorktree(root=root, state=state, backend=self)

    def _maybe_fail(self, operation: str, path: Path) -> None:
        if operation in self.fail_on:
            msg = f"Injected {operation} failure at {path}"
            raise VcsOperationError(msg, path=path, operation=operation)


@dataclass(slots=True)
class FakeWorktree:
    """Working tree handle for a fake repository."""

    root: Path
    state: FakeRepoState
    backend: FakeBackend
    closed: bool = False

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
        """Mark the handle closed (no resources to release)."""
        self.closed = True

    # =========================================================================
    # Staging and Commits
    # =========================================================================

    def stage_all(self) -> None:
        """Snapshot every file under the working tree into the index."""
        self.backend._maybe_fail("stage_all", self.root)  # noqa: SLF001
        self.state.index = self._read_working_tree()

    def commit(self, message: str, author: Signature) -> CommitInfo:
        """Record the index as a new commit and advance the current ref."""
        self.backend._maybe_fail("commit", self.root)  # noqa: SLF001
        if not message:
            msg = "Commit message must not be empty"
            raise VcsOperationError(msg, path=self.root, operation="commit")

        parent = self.state.head_sha()
        parents = (parent,) if parent is not None else ()
        sha = self._hash_commit(message, author, parents)

        info = CommitInfo(
            sha=sha,
            message=message,
            author_name=author.name,
            author_email=author.email,
            timestamp=author.timestamp,
            parent_shas=parents,
        )
        self.state.commits[sha] = info
        self.state.trees[sha] = dict(self.state.index)

        if self.state.head.startswith(_HEADS_PREFIX):
            self.state.refs[self.state.head] = sha
        else:
            self.state.head = sha
        return info

    # =========================================================================
    # References
    # =========================================================================

    def checkout(self, branch_name: str, *, create: bool) -> None:
        """Switch branches, restoring the target tree into the working directory."""
        self.backend._maybe_fail("checkout", self.root)  # noqa: SLF001
        ref_name = f"{_HEADS_PREFIX}{branch_name}"

        if create:
            if ref_name in self.state.refs:
                msg = f"A branch named {branch_name!r} already exists"
                raise VcsOperationError(msg, path=self.root, operation="checkout")
            head = self.state.head_sha()
            if head is None:
                msg = f"Cannot create {branch_name!r}: HEAD has no commits"
                raise VcsOperationError(msg, path=self.root, operation="checkout")
            self.state.refs[ref_name] = head
            self.state.head = ref_name
            return

        target = self.resolve_reference(ref_name)
        current = self.state.head_sha()
        if current is not None and current != target:
            self._restore_tree(self.state.trees[current], self.state.trees[target])
        self.state.index = dict(self.state.trees[target])
        self.state.head = ref_name

    def resolve_reference(self, ref_name: str) -> str:
        self.backend._maybe_fail("resolve_reference", self.root)  # noqa: SLF001
        sha = self.state.refs.get(ref_name)
        if sha is None:
            msg = f"Reference not found: {ref_name}"
            raise ReferenceNotFoundError(msg, ref_name=ref_name, path=self.root)
        if sha not in self.state.commits:
            msg = f"Reference {ref_name} points at missing commit {sha}"
            raise VcsOperationError(
                msg, path=self.root, operation="resolve_reference"
            )
        return sha

    def current_branch(self) -> str | None:
        if self.state.head.startswith(_HEADS_PREFIX):
            return self.state.head.removeprefix(_HEADS_PREFIX)
        return None

    def list_branches(self) -> list[str]:
        return sorted(
            ref.removeprefix(_HEADS_PREFIX)
            for ref in self.state.refs
            if ref.startswith(_HEADS_PREFIX)
        )

    # =========================================================================
    # History
    # =========================================================================

    def iter_commits(self, max_count: int | None = None) -> Iterator[CommitInfo]:
        """Follow first parents from HEAD, newest first."""
        sha = self.state.head_sha()
        count = 0
        while sha is not None and (max_count is None or count < max_count):
            info = self.state.commits[sha]
            yield info
            count += 1
            sha = info.parent_shas[0] if info.parent_shas else None

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _read_working_tree(self) -> dict[str, bytes]:
        return {
            path.relative_to(self.root).as_posix(): path.read_bytes()
            for path in sorted(self.root.rglob("*"))
            if path.is_file()
        }

    def _restore_tree(
        self, current_tree: dict[str, bytes], target_tree: dict[str, bytes]
    ) -> None:
        for rel_path in current_tree.keys() - target_tree.keys():
            (self.root / rel_path).unlink(missing_ok=True)
        for rel_path, content in target_tree.items():
            target = self.root / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_bytes(content)

    def _hash_commit(
        self, message: str, author: Signature, parents: tuple[str, ...]
    ) -> str:
        digest = hashlib.sha1(usedforsecurity=False)
        digest.update(repr(sorted(self.state.index.items())).encode())
        digest.update(message.encode())
        digest.update(author.format().encode())
        digest.update(author.timestamp.isoformat().encode())
        digest.update(",".join(parents).encode())
        digest.update(str(len(self.state.commits)).encode())
        return digest.hexdigest()
