from datetime import datetime, timezone

import pytest

from gitdomain.aggregate import (
    Branch,
    ChangeType,
    Commit,
    FileChange,
    GitOperationError,
    Repository,
)
from gitdomain.events import (
    BranchCreated,
    CommitAnalyzed,
    RepositoryAnalyzed,
    RepositoryCloned,
)
from gitdomain.identifiers import RepositoryId


def test_repository_creation():
    repo = Repository("test-repo")
    assert repo.metadata.name == "test-repo"
    assert repo.remote_url is None
    assert repo.local_path is None
    assert repo.version == 0
    assert repo.branches == {}


def test_repository_ids_differ():
    assert Repository("a").id != Repository("b").id


def test_repository_clone():
    repo = Repository("test-repo")
    events = repo.clone_repository("https://github.com/test/repo.git", "/tmp/test-repo")
    assert len(events) == 1
    assert isinstance(events[0], RepositoryCloned)
    assert events[0].repository_id == repo.id
    assert repo.remote_url == "https://github.com/test/repo.git"
    assert repo.local_path == "/tmp/test-repo"
    assert repo.version == 1


def test_clone_twice_fails():
    repo = Repository("test-repo")
    repo.clone_repository("https://github.com/test/repo.git", "/tmp/a")
    with pytest.raises(GitOperationError, match="Repository already cloned"):
        repo.clone_repository("https://github.com/test/repo.git", "/tmp/b")
    assert repo.local_path == "/tmp/a"
    assert repo.version == 1


def test_apply_cloned_event():
    repo = Repository("test-repo")
    event = RepositoryCloned(
        repository_id=repo.id,
        remote_url="https://github.com/test/repo.git",
        local_path="/tmp/test",
    )
    repo.apply_event(event)
    assert repo.version == 1
    assert repo.metadata.updated_at == event.timestamp


def test_aggregate_event_application():
    repo = Repository("test-repo")
    repo_id = RepositoryId.new()
    repo.id = repo_id

    repo.apply_event(
        RepositoryCloned(
            repository_id=repo_id,
            remote_url="https://github.com/test/repo.git",
            local_path="/home/user/repo",
        )
    )
    assert repo.local_path == "/home/user/repo"
    assert repo.remote_url == "https://github.com/test/repo.git"

    repo.apply_event(
        BranchCreated(
            repository_id=repo_id,
            branch_name="feature/new",
            commit_hash="abc123def456789",
        )
    )
    assert repo.branches == {"feature/new": "abc123def456789"}

    repo.apply_event(
        CommitAnalyzed(
            repository_id=repo_id,
            commit_hash="abc123def456789",
            parents=[],
            author={"name": "Test Author", "email": "test@example.com"},
            message="Test commit",
            files_changed=[],
            commit_timestamp=datetime.now(timezone.utc),
        )
    )
    assert repo.metadata.commit_count == 1
    assert repo.version == 3


def test_unhandled_event_only_bumps_version():
    repo = Repository("test-repo")
    repo.apply_event(
        RepositoryAnalyzed(
            repository_id=repo.id, path="/x", name="x", branch_count=1, commit_count=1
        )
    )
    assert repo.version == 1
    assert repo.metadata.commit_count is None
    assert repo.local_path is None


def test_commit_and_branch_records():
    repo_id = RepositoryId.new()
    commit = Commit(
        repository_id=repo_id,
        hash="abc123def456789",
        parents=[],
        author={"name": "Test Author", "email": "test@example.com"},
        timestamp=datetime.now(timezone.utc),
        message="Initial",
        files_changed=[FileChange("README.md", ChangeType.ADDED, 3, 0)],
    )
    branch = Branch(repository_id=repo_id, name="main", head=commit.hash, is_default=True)
    assert commit.files_changed[0].change_type is ChangeType.ADDED
    assert branch.head == "abc123def456789"
    assert branch.metadata.ahead_count is None