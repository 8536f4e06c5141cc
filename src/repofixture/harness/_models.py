# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fixture descriptor models."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Self, TypeAlias

from repofixture.exceptions import FixtureIOError

if TYPE_CHECKING:
    from types import TracebackType


@dataclass(frozen=True, slots=True)
class RepositoryFixture:
    """One on-disk fixture repository as seen by a simulated hosting service.

    Attributes:
        owner_name: Owner (user or organization) the repository is listed under.
        repo_name: Repository name.
        path: Absolute path to the repository working tree.
    """

    owner_name: str
    repo_name: str
    path: Path

    def __post_init__(self) -> None:
        if not self.path.is_absolute():
            msg = f"Fixture path must be absolute: {self.path}"
            raise ValueError(msg)

    @property
    def full_name(self) -> str:
        """``owner/repo`` identifier."""
        return f"{self.owner_name}/{self.repo_name}"

    def serialize(self) -> dict[str, str]:
        """Serialize to a JSON-compatible dict for mock hosting services."""
        return {
            "owner_name": self.owner_name,
            "repo_name": self.repo_name,
            "path": str(self.path),
        }


# Anything harness operations accept as "the fixture"
FixtureLike: TypeAlias = RepositoryFixture | Path | str


def fixture_root(fixture: FixtureLike) -> Path:
    """Get the working tree path of a fixture descriptor or path."""
    if isinstance(fixture, RepositoryFixture):
        return fixture.path
    return Path(fixture)


@dataclass(slots=True)
class TemporaryFixture:
    """A fixture paired with an explicit cleanup handle.

    Cleanup removes the fixture directory. It is idempotent and is invoked
    automatically when the instance is used as a context manager.

    Example:
        >>> with temporary_repository("acme", "widgets", "hello") as tmp:
        ...     read_test_file(tmp.fixture)
        'hello'
    """

    fixture: RepositoryFixture
    cleaned_up: bool = field(default=False, init=False)

    @property
    def path(self) -> Path:
        return self.fixture.path

    def cleanup(self) -> None:
        """Remove the fixture directory tree if it still exists.

        Raises:
            FixtureIOError: If the directory exists but cannot be removed.
        """
        if self.cleaned_up:
            return
        try:
            shutil.rmtree(self.fixture.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            msg = f"Failed to remove fixture directory {self.fixture.path}: {e}"
            raise FixtureIOError(msg, path=self.fixture.path) from e
        self.cleaned_up = True

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.cleanup()
