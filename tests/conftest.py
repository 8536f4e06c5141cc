"""Shared test fixtures for repofixture tests."""

import os
from pathlib import Path

import pytest

from repofixture.backend import FakeBackend
from repofixture.config import HarnessConfig, load_config
from repofixture.utils import StepClock


@pytest.fixture(autouse=True)
def clean_repofixture_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove REPOFIXTURE_* variables so configuration defaults are stable."""
    for key in list(os.environ):
        if key.startswith("REPOFIXTURE_"):
            monkeypatch.delenv(key)


@pytest.fixture
def harness_config() -> HarnessConfig:
    return load_config(include_env=False)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def parent_dir(tmp_path: Path) -> Path:
    """Existing directory fixtures are created under."""
    parent = tmp_path / "fixtures"
    parent.mkdir()
    return parent
