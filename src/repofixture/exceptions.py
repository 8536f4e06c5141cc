"""repofixture exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class RepoFixtureError(Exception):
    """Base exception for repofixture errors."""


class FixtureIOError(RepoFixtureError, OSError):
    """Raised when a fixture directory or file cannot be created, read, or written.

    Attributes:
        path: The filesystem path involved in the failed operation.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The filesystem path involved in the failed operation.
        """
        super().__init__(message)
        self.path: Path | None = path


class FixturePathError(RepoFixtureError, ValueError):
    """Raised when a file name resolves outside the fixture's working tree.

    Attributes:
        path: The offending path.
        fixture_root: The working tree root the path was checked against.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        fixture_root: Path,
    ) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The offending path.
            fixture_root: The working tree root the path was checked against.
        """
        super().__init__(message)
        self.path: Path = path
        self.fixture_root: Path = fixture_root


# =============================================================================
# VCS Exceptions
# =============================================================================


class VcsError(RepoFixtureError):
    """Base exception for version-control failures.

    Attributes:
        path: Path to the repository the operation targeted.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and repository context.

        Args:
            message: Human-readable error message.
            path: Path to the repository the operation targeted.
        """
        super().__init__(message)
        self.path: Path | None = path


class VcsInitError(VcsError):
    """Raised when a repository cannot be initialized at the target path."""


class VcsOperationError(VcsError):
    """Raised when opening, staging, committing, or checking out fails.

    Attributes:
        operation: Name of the backend operation that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize with error message and operation context.

        Args:
            message: Human-readable error message.
            path: Path to the repository the operation targeted.
            operation: Name of the backend operation that failed.
        """
        super().__init__(message, path=path)
        self.operation: str | None = operation


class ReferenceNotFoundError(VcsError, KeyError):
    """Raised when a named reference does not resolve to a commit.

    Attributes:
        ref_name: The fully qualified reference name (e.g. ``refs/heads/main``).
    """

    def __init__(
        self,
        message: str,
        *,
        ref_name: str,
        path: Path | None = None,
    ) -> None:
        """Initialize with error message and reference context.

        Args:
            message: Human-readable error message.
            ref_name: The reference that could not be resolved.
            path: Path to the repository that was searched.
        """
        super().__init__(message, path=path)
        self.ref_name: str = ref_name

    def __str__(self) -> str:
        # KeyError quotes its argument by default
        return str(self.args[0]) if self.args else ""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(RepoFixtureError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
