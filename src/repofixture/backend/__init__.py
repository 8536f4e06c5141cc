"""VCS backends for the fixture harness.

This package defines the narrow capability interface the harness uses to
create and manipulate repositories, along with two implementations.

Classes:
    VcsBackend: Runtime-checkable protocol for creating and opening repositories.
    VcsWorktree: Runtime-checkable protocol for operations on an opened worktree.
    GitBackend: Real repositories on disk, driven through GitPython.
    FakeBackend: In-memory substitute for unit tests and failure injection.

Models:
    Signature: Author/committer identity with timestamp.
    CommitInfo: Metadata about a single commit.
"""

from repofixture.backend._fake import FakeBackend, FakeRepoState, FakeWorktree
from repofixture.backend._git import GitBackend, GitWorktree
from repofixture.backend._models import CommitInfo, Signature
from repofixture.backend._protocol import VcsBackend, VcsWorktree

__all__ = [
    "CommitInfo",
    "FakeBackend",
    "FakeRepoState",
    "FakeWorktree",
    "GitBackend",
    "GitWorktree",
    "Signature",
    "VcsBackend",
    "VcsWorktree",
]
