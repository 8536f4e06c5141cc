"""Throwaway git repositories for testing multi-repository tools.

Example:
    >>> from repofixture import create_repo, read_test_file
    >>> fixture = create_repo("acme", "widgets", "hello")
    >>> read_test_file(fixture)
    'hello'
"""

from repofixture.backend import CommitInfo, FakeBackend, GitBackend, Signature
from repofixture.config import HarnessConfig, load_config
from repofixture.exceptions import (
    ConfigError,
    ConfigValidationError,
    FixtureIOError,
    FixturePathError,
    ReferenceNotFoundError,
    RepoFixtureError,
    VcsError,
    VcsInitError,
    VcsOperationError,
)
from repofixture.harness import (
    RepositoryFixture,
    TemporaryFixture,
    add_file,
    branch_exists,
    change_test_file,
    checkout,
    create_repo,
    create_repo_with_clone_dir,
    create_repository,
    create_repository_in,
    current_branch,
    file_exists,
    get_commits,
    head_sha,
    list_branches,
    read_file,
    read_test_file,
    temporary_repository,
    write_and_commit,
)
from repofixture.utils import (
    StepClock,
    ensure_directory,
    index_of,
    make_absolute,
    normalize_path,
    utc_now,
)

__all__ = [
    "CommitInfo",
    "ConfigError",
    "ConfigValidationError",
    "FakeBackend",
    "FixtureIOError",
    "FixturePathError",
    "GitBackend",
    "HarnessConfig",
    "ReferenceNotFoundError",
    "RepoFixtureError",
    "RepositoryFixture",
    "Signature",
    "StepClock",
    "TemporaryFixture",
    "VcsError",
    "VcsInitError",
    "VcsOperationError",
    "add_file",
    "branch_exists",
    "change_test_file",
    "checkout",
    "create_repo",
    "create_repo_with_clone_dir",
    "create_repository",
    "create_repository_in",
    "current_branch",
    "ensure_directory",
    "file_exists",
    "get_commits",
    "head_sha",
    "index_of",
    "list_branches",
    "load_config",
    "make_absolute",
    "normalize_path",
    "read_file",
    "read_test_file",
    "temporary_repository",
    "utc_now",
    "write_and_commit",
]
