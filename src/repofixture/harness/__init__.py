"""Fixture harness operations.

Functions here create throwaway git repositories and drive them through
scripted histories for tests of tools that operate on many repositories.

Repository creation:
    create_repository: New fixture directory under an existing parent.
    create_repository_in: Same, creating the parent first.
    create_repo: Fixture descriptor for a mock hosting service.
    create_repo_with_clone_dir: Descriptor under a caller-chosen directory.
    temporary_repository: Context manager that removes the fixture on exit.

Commits:
    write_and_commit, change_test_file, add_file, get_commits, head_sha

Branches:
    checkout, branch_exists, current_branch, list_branches

Files:
    read_file, read_test_file, file_exists

Example:
    >>> from repofixture.harness import checkout, create_repo, write_and_commit
    >>> fixture = create_repo("acme", "widgets", "hello")
    >>> checkout(fixture, "feature", create=True)
    >>> _ = write_and_commit(fixture, "t.txt", "v1", "Add t.txt")
"""

from repofixture.harness._branches import (
    branch_exists,
    checkout,
    current_branch,
    list_branches,
)
from repofixture.harness._commits import (
    add_file,
    change_test_file,
    get_commits,
    head_sha,
    write_and_commit,
)
from repofixture.harness._context import (
    HarnessContext,
    resolve_backend,
    resolve_context,
)
from repofixture.harness._factory import (
    create_repo,
    create_repo_with_clone_dir,
    create_repository,
    create_repository_in,
    temporary_repository,
)
from repofixture.harness._files import file_exists, read_file, read_test_file
from repofixture.harness._models import (
    FixtureLike,
    RepositoryFixture,
    TemporaryFixture,
    fixture_root,
)

__all__ = [
    "FixtureLike",
    "HarnessContext",
    "RepositoryFixture",
    "TemporaryFixture",
    "add_file",
    "branch_exists",
    "change_test_file",
    "checkout",
    "create_repo",
    "create_repo_with_clone_dir",
    "create_repository",
    "create_repository_in",
    "current_branch",
    "file_exists",
    "fixture_root",
    "get_commits",
    "head_sha",
    "list_branches",
    "read_file",
    "read_test_file",
    "resolve_backend",
    "resolve_context",
    "temporary_repository",
    "write_and_commit",
]
