"""Consumer tests for FakeBackend."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from repofixture.backend import (
    FakeBackend,
    FakeWorktree,
    Signature,
    VcsWorktree,
)
from repofixture.exceptions import (
    ReferenceNotFoundError,
    VcsInitError,
    VcsOperationError,
)

AUTHOR = Signature(
    name="test", email="test@example.com", timestamp=datetime(2020, 1, 1, tzinfo=UTC)
)


@pytest.fixture
def repo_dir(tmp_path: Path, fake_backend: FakeBackend) -> Path:
    path = tmp_path / "repo"
    fake_backend.init(path)
    return path


def commit_file(
    backend: FakeBackend, repo_dir: Path, name: str, content: str, message: str
) -> str:
    _ = (repo_dir / name).write_text(content)
    with backend.open(repo_dir) as worktree:
        worktree.stage_all()
        return worktree.commit(message, AUTHOR).sha


# =============================================================================
# Protocol Conformance Tests
# =============================================================================


class TestFakeBackendProtocolConformance:
    def test_worktree_isinstance_protocol(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        with fake_backend.open(repo_dir) as worktree:
            assert isinstance(worktree, VcsWorktree) is True


# =============================================================================
# init / open Tests
# =============================================================================


class TestFakeBackendInit:
    def test_creates_directory_and_state(
        self, tmp_path: Path, fake_backend: FakeBackend
    ) -> None:
        path = tmp_path / "new"

        fake_backend.init(path, initial_branch="main")

        assert path.is_dir()
        state = fake_backend.repos[path.resolve()]
        assert state.head == "refs/heads/main"
        assert state.refs == {}

    def test_injected_failure(self, tmp_path: Path) -> None:
        backend = FakeBackend(fail_on={"init"})

        with pytest.raises(VcsInitError):
            backend.init(tmp_path / "new")


class TestFakeBackendOpen:
    def test_unknown_path_raises(
        self, tmp_path: Path, fake_backend: FakeBackend
    ) -> None:
        with pytest.raises(VcsOperationError) as exc_info:
            _ = fake_backend.open(tmp_path)

        assert exc_info.value.operation == "open"

    def test_bare_repository_raises(
        self, tmp_path: Path, fake_backend: FakeBackend
    ) -> None:
        fake_backend.init(tmp_path / "bare", bare=True)

        with pytest.raises(VcsOperationError, match="no working tree"):
            _ = fake_backend.open(tmp_path / "bare")

    def test_context_manager_closes(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        with fake_backend.open(repo_dir) as worktree:
            assert isinstance(worktree, FakeWorktree)
            assert worktree.closed is False

        assert worktree.closed is True


# =============================================================================
# commit Tests
# =============================================================================


class TestFakeWorktreeCommit:
    def test_first_commit_has_no_parents(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        sha = commit_file(fake_backend, repo_dir, "test.txt", "hello", "First commit")

        state = fake_backend.repos[repo_dir.resolve()]
        assert state.refs["refs/heads/master"] == sha
        assert state.commits[sha].parent_shas == ()
        assert state.trees[sha] == {"test.txt": b"hello"}

    def test_second_commit_links_parent(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        first = commit_file(fake_backend, repo_dir, "test.txt", "v1", "one")
        second = commit_file(fake_backend, repo_dir, "test.txt", "v2", "two")

        state = fake_backend.repos[repo_dir.resolve()]
        assert first != second
        assert state.commits[second].parent_shas == (first,)

    def test_records_author(self, fake_backend: FakeBackend, repo_dir: Path) -> None:
        _ = (repo_dir / "a.txt").write_text("a")
        with fake_backend.open(repo_dir) as worktree:
            worktree.stage_all()
            info = worktree.commit("msg", AUTHOR)

        assert info.author_name == "test"
        assert info.author_email == "test@example.com"
        assert info.timestamp == AUTHOR.timestamp
        assert info.message == "msg"

    def test_injected_commit_failure(self, tmp_path: Path) -> None:
        backend = FakeBackend(fail_on={"commit"})
        backend.init(tmp_path / "repo")

        with backend.open(tmp_path / "repo") as worktree:
            worktree.stage_all()
            with pytest.raises(VcsOperationError) as exc_info:
                _ = worktree.commit("msg", AUTHOR)

        assert exc_info.value.operation == "commit"


# =============================================================================
# checkout / reference Tests
# =============================================================================


class TestFakeWorktreeCheckout:
    def test_create_branch_points_at_head(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        sha = commit_file(fake_backend, repo_dir, "test.txt", "hello", "First commit")

        with fake_backend.open(repo_dir) as worktree:
            worktree.checkout("feature", create=True)

            assert worktree.current_branch() == "feature"
            assert worktree.resolve_reference("refs/heads/feature") == sha
            assert worktree.list_branches() == ["feature", "master"]

    def test_create_existing_branch_raises(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        _ = commit_file(fake_backend, repo_dir, "test.txt", "hello", "First commit")

        with (
            fake_backend.open(repo_dir) as worktree,
            pytest.raises(VcsOperationError, match="already exists"),
        ):
            worktree.checkout("master", create=True)

    def test_create_on_unborn_head_raises(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        with (
            fake_backend.open(repo_dir) as worktree,
            pytest.raises(VcsOperationError, match="no commits"),
        ):
            worktree.checkout("feature", create=True)

    def test_missing_branch_raises_reference_not_found(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        _ = commit_file(fake_backend, repo_dir, "test.txt", "hello", "First commit")

        with fake_backend.open(repo_dir) as worktree:
            with pytest.raises(ReferenceNotFoundError) as exc_info:
                worktree.checkout("nonexistent", create=False)

            assert exc_info.value.ref_name == "refs/heads/nonexistent"
            assert worktree.current_branch() == "master"

    def test_switch_restores_working_tree(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        _ = commit_file(fake_backend, repo_dir, "test.txt", "hello", "First commit")
        with fake_backend.open(repo_dir) as worktree:
            worktree.checkout("feature", create=True)
        _ = commit_file(fake_backend, repo_dir, "extra.txt", "x", "Add extra")

        with fake_backend.open(repo_dir) as worktree:
            worktree.checkout("master", create=False)

        assert not (repo_dir / "extra.txt").exists()
        assert (repo_dir / "test.txt").read_text() == "hello"

    def test_dangling_reference_raises_operation_error(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        _ = commit_file(fake_backend, repo_dir, "test.txt", "hello", "First commit")
        fake_backend.repos[repo_dir.resolve()].refs["refs/heads/dangling"] = "1" * 40

        with fake_backend.open(repo_dir) as worktree:
            with pytest.raises(VcsOperationError) as exc_info:
                _ = worktree.resolve_reference("refs/heads/dangling")

            assert exc_info.value.operation == "resolve_reference"
            assert not isinstance(exc_info.value, ReferenceNotFoundError)


class TestFakeWorktreeHistory:
    def test_iter_commits_newest_first(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        first = commit_file(fake_backend, repo_dir, "t.txt", "v1", "one")
        second = commit_file(fake_backend, repo_dir, "t.txt", "v2", "two")

        with fake_backend.open(repo_dir) as worktree:
            shas = [info.sha for info in worktree.iter_commits()]
            limited = list(worktree.iter_commits(max_count=1))

        assert shas == [second, first]
        assert [info.sha for info in limited] == [second]

    def test_unborn_head_yields_nothing(
        self, fake_backend: FakeBackend, repo_dir: Path
    ) -> None:
        with fake_backend.open(repo_dir) as worktree:
            assert list(worktree.iter_commits()) == []
