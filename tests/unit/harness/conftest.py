from pathlib import Path

import pytest

from repofixture.backend import FakeBackend
from repofixture.config import HarnessConfig
from repofixture.harness import RepositoryFixture, create_repo
from repofixture.utils import StepClock


@pytest.fixture
def fake_fixture(
    parent_dir: Path,
    harness_config: HarnessConfig,
    fake_backend: FakeBackend,
    clock: StepClock,
) -> RepositoryFixture:
    """Fixture repository "acme/widgets" backed by the fake backend."""
    return create_repo(
        "acme",
        "widgets",
        "hello",
        parent_dir=parent_dir,
        config=harness_config,
        backend=fake_backend,
        clock=clock,
    )
