"""Unit tests for working-tree file inspection."""

import os
from pathlib import Path

import pytest

from repofixture.config import HarnessConfig
from repofixture.exceptions import FixtureIOError, FixturePathError
from repofixture.harness import (
    RepositoryFixture,
    file_exists,
    read_file,
    read_test_file,
)
from repofixture.harness._files import resolve_in_tree, write_working_file


class TestReadFile:
    def test_reads_bytes(self, fake_fixture: RepositoryFixture) -> None:
        assert read_file(fake_fixture, "test.txt") == b"hello"

    def test_accepts_path(self, fake_fixture: RepositoryFixture) -> None:
        assert read_file(fake_fixture.path, Path("test.txt")) == b"hello"

    def test_missing_file_raises(self, fake_fixture: RepositoryFixture) -> None:
        with pytest.raises(FixtureIOError) as exc_info:
            _ = read_file(fake_fixture, "missing.txt")

        assert exc_info.value.path == fake_fixture.path / "missing.txt"


class TestReadTestFile:
    def test_reads_default_file(
        self, fake_fixture: RepositoryFixture, harness_config: HarnessConfig
    ) -> None:
        assert read_test_file(fake_fixture, config=harness_config) == "hello"

    def test_loads_config_when_omitted(self, fake_fixture: RepositoryFixture) -> None:
        assert read_test_file(fake_fixture) == "hello"


class TestFileExists:
    def test_existing_file(self, fake_fixture: RepositoryFixture) -> None:
        assert file_exists(fake_fixture, "test.txt") is True

    def test_missing_file(self, fake_fixture: RepositoryFixture) -> None:
        assert file_exists(fake_fixture, "missing.txt") is False

    def test_missing_parent_directory(self, fake_fixture: RepositoryFixture) -> None:
        assert file_exists(fake_fixture, "no/such/file.txt") is False

    def test_not_a_directory_parent_raises(
        self, fake_fixture: RepositoryFixture
    ) -> None:
        with pytest.raises(FixtureIOError):
            _ = file_exists(fake_fixture, "test.txt/child")

    @pytest.mark.skipif(
        os.name != "posix" or os.geteuid() == 0,
        reason="permission bits are not enforced",
    )
    def test_permission_denied_raises(self, fake_fixture: RepositoryFixture) -> None:
        locked = fake_fixture.path / "locked"
        locked.mkdir()
        _ = (locked / "inner.txt").write_text("x")
        locked.chmod(0)
        try:
            with pytest.raises(FixtureIOError):
                _ = file_exists(fake_fixture, "locked/inner.txt")
        finally:
            locked.chmod(0o700)


class TestResolveInTree:
    def test_returns_joined_path(self, tmp_path: Path) -> None:
        assert resolve_in_tree(tmp_path, "a/b.txt") == tmp_path / "a" / "b.txt"

    @pytest.mark.parametrize("name", ["../x", "/etc/passwd", ".git/HEAD", "a/../.."])
    def test_rejects_escapes(self, tmp_path: Path, name: str) -> None:
        with pytest.raises(FixturePathError) as exc_info:
            _ = resolve_in_tree(tmp_path, name)

        assert exc_info.value.fixture_root == tmp_path


class TestWriteWorkingFile:
    def test_text_is_utf8(self, tmp_path: Path) -> None:
        target = write_working_file(tmp_path, "u.txt", "hé", mode=0o600)

        assert target.read_bytes() == "hé".encode()

    def test_write_failure_raises(self, tmp_path: Path) -> None:
        _ = (tmp_path / "file").write_text("x")

        with pytest.raises(FixtureIOError):
            _ = write_working_file(tmp_path, "file/child.txt", "x", mode=0o600)
