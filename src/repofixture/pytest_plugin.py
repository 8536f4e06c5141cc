"""pytest fixtures exposing the fixture harness.

Registered through the ``pytest11`` entry point, so installing repofixture
makes these fixtures available to every test suite in the environment.

Fixtures:
    fixture_config: HarnessConfig built from defaults and the environment.
    step_clock: Deterministic StepClock for ordered commit timestamps.
    fixture_factory: Callable that creates fixture repositories under
        ``tmp_path`` and removes them at teardown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from repofixture.backend import GitBackend
from repofixture.config import HarnessConfig, load_config
from repofixture.exceptions import FixtureIOError
from repofixture.harness import RepositoryFixture, TemporaryFixture, create_repo
from repofixture.utils import StepClock

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from repofixture.backend import VcsBackend
    from repofixture.utils import Clock


@dataclass(slots=True)
class FixtureFactory:
    """Creates fixture repositories and tracks them for teardown.

    Attributes:
        parent_dir: Directory new fixtures are created under.
        config: Harness configuration passed to every creation.
        backend: VCS backend passed to every creation.
        clock: Timestamp source passed to every creation.
        created: Fixtures created so far, in creation order.
    """

    parent_dir: Path
    config: HarnessConfig
    backend: VcsBackend = field(default_factory=GitBackend)
    clock: Clock | None = None
    created: list[TemporaryFixture] = field(default_factory=list)

    def __call__(
        self, owner_name: str, repo_name: str, data_in_file: bytes | str = ""
    ) -> RepositoryFixture:
        fixture = create_repo(
            owner_name,
            repo_name,
            data_in_file,
            parent_dir=self.parent_dir,
            config=self.config,
            backend=self.backend,
            clock=self.clock,
        )
        self.created.append(TemporaryFixture(fixture))
        return fixture

    def cleanup(self) -> None:
        """Remove every fixture created by this factory.

        Every fixture is attempted even when an earlier removal fails.

        Raises:
            FixtureIOError: If exactly one fixture could not be removed.
            ExceptionGroup: If several fixtures could not be removed.
        """
        errors: list[FixtureIOError] = []
        for tmp in reversed(self.created):
            try:
                tmp.cleanup()
            except FixtureIOError as e:
                errors.append(e)
        self.created.clear()

        if len(errors) == 1:
            raise errors[0]
        if errors:
            msg = "Failed to remove fixture directories"
            raise ExceptionGroup(msg, errors)


@pytest.fixture
def fixture_config() -> HarnessConfig:
    """Harness configuration from defaults and ``REPOFIXTURE_*`` variables."""
    return load_config()


@pytest.fixture
def step_clock() -> StepClock:
    return StepClock()


@pytest.fixture
def fixture_factory(
    tmp_path: Path, fixture_config: HarnessConfig, step_clock: StepClock
) -> Iterator[FixtureFactory]:
    """Factory for fixture repositories, cleaned up at teardown.

    Example:
        >>> def test_reads_content(fixture_factory):
        ...     fixture = fixture_factory("acme", "widgets", "hello")
        ...     assert read_test_file(fixture) == "hello"
    """
    factory = FixtureFactory(
        parent_dir=tmp_path, config=fixture_config, clock=step_clock
    )
    yield factory
    factory.cleanup()
