import json
from datetime import datetime, timezone

import pytest

from gitdomain.events import (
    BranchCreated,
    CommitAnalyzed,
    CommitGraphExtracted,
    DependencyGraphExtracted,
    FileAnalyzed,
    FileChangeInfo,
    FileChangeType,
    FileMetrics,
    MergeDetected,
    MetadataUpdates,
    RepositoryAnalyzed,
    RepositoryCloned,
    RepositoryMetadataUpdated,
    TagCreated,
    event_from_dict,
    event_from_json,
    event_to_dict,
    event_to_json,
)
from gitdomain.identifiers import GraphId, RepositoryId


def roundtrip(event):
    return event_from_json(event_to_json(event))


def test_event_serialization_repository_cloned():
    event = RepositoryCloned(
        repository_id=RepositoryId.new(),
        remote_url="https://github.com/test/repo.git",
        local_path="/tmp/repo",
    )
    restored = roundtrip(event)
    assert isinstance(restored, RepositoryCloned)
    assert restored.local_path == "/tmp/repo"
    assert restored == event


def test_repository_analyzed_event():
    event = RepositoryAnalyzed(
        repository_id=RepositoryId.new(),
        path="/home/user/repo",
        name="test-repo",
        branch_count=5,
        commit_count=100,
    )
    restored = roundtrip(event)
    assert restored.repository_id == event.repository_id
    assert restored.path == "/home/user/repo"
    assert restored.name == "test-repo"
    assert restored.branch_count == 5
    assert restored.commit_count == 100
    assert restored.timestamp == event.timestamp


def test_branch_created_event():
    event = BranchCreated(
        repository_id=RepositoryId.new(),
        branch_name="feature/test",
        commit_hash="abc123def456",
        source_branch="main",
    )
    restored = roundtrip(event)
    assert restored.branch_name == "feature/test"
    assert restored.commit_hash == "abc123def456"
    assert restored.source_branch == "main"
    assert restored == event


def test_commit_analyzed_event():
    event = CommitAnalyzed(
        repository_id=RepositoryId.new(),
        commit_hash="abc123def456",
        parents=["def456abc789"],
        author={"name": "John Doe", "email": "john@example.com"},
        message="Test commit",
        files_changed=[
            FileChangeInfo(
                path="src/main.rs",
                change_type=FileChangeType.MODIFIED,
                additions=10,
                deletions=5,
            )
        ],
        commit_timestamp=datetime.now(timezone.utc),
    )
    restored = roundtrip(event)
    assert restored.parents == ["def456abc789"]
    assert restored.author == {"name": "John Doe", "email": "john@example.com"}
    assert restored.message == "Test commit"
    assert len(restored.files_changed) == 1
    change = restored.files_changed[0]
    assert change.path == "src/main.rs"
    assert change.change_type is FileChangeType.MODIFIED
    assert (change.additions, change.deletions) == (10, 5)


def test_commit_graph_extracted_event():
    event = CommitGraphExtracted(
        repository_id=RepositoryId.new(),
        graph_id=GraphId.new(),
        commit_count=100,
        edge_count=99,
        root_commits=["abc123def456789"],
        head_commits=["def456abc789012"],
    )
    restored = roundtrip(event)
    assert restored.graph_id == event.graph_id
    assert restored.commit_count == 100
    assert restored.edge_count == 99
    assert restored.root_commits == ["abc123def456789"]
    assert restored.head_commits == ["def456abc789012"]


def test_dependency_graph_extracted_event():
    event = DependencyGraphExtracted(
        repository_id=RepositoryId.new(),
        graph_id=GraphId.new(),
        commit_hash="abc123def456789",
        file_count=50,
        dependency_count=120,
        language="rust",
    )
    restored = roundtrip(event)
    assert restored == event
    assert restored.language == "rust"


def test_tag_created_event():
    event = TagCreated(
        repository_id=RepositoryId.new(),
        tag_name="v1.0.0",
        commit_hash="abc123def456789",
        message="Release version 1.0.0",
        tagger={"name": "Jane Doe", "email": "jane@example.com"},
    )
    restored = roundtrip(event)
    assert restored.tag_name == "v1.0.0"
    assert restored.message == "Release version 1.0.0"
    assert restored.tagger == {"name": "Jane Doe", "email": "jane@example.com"}


def test_nested_events_roundtrip():
    repo_id = RepositoryId.new()
    updated = RepositoryMetadataUpdated(
        repository_id=repo_id,
        updates=MetadataUpdates(description="demo", commit_count=3, custom={"k": [1, 2]}),
    )
    analyzed = FileAnalyzed(
        repository_id=repo_id,
        file_path="src/lib.rs",
        commit_hash="abc123def456789",
        metrics=FileMetrics(
            lines_of_code=42, function_count=3, complexity=None, language="rust", size_bytes=900
        ),
        dependencies=["src/utils.rs"],
    )
    merge = MergeDetected(
        repository_id=repo_id,
        merge_commit="abc123def456789",
        parents=["aaa111", "bbb222"],
        conflicts=["README.md"],
    )
    assert roundtrip(updated) == updated
    assert roundtrip(analyzed) == analyzed
    assert roundtrip(merge) == merge
    assert roundtrip(updated).updates.custom == {"k": [1, 2]}


def test_event_dict_is_tagged():
    event = RepositoryAnalyzed(
        repository_id=RepositoryId.new(), path="/test", name="test", branch_count=1, commit_count=1
    )
    data = event_to_dict(event)
    assert data["event_type"] == "RepositoryAnalyzed"
    assert data["repository_id"] == str(event.repository_id)
    assert json.loads(event_to_json(event))["name"] == "test"


def test_event_enum_deserializes_to_right_type():
    event = RepositoryAnalyzed(
        repository_id=RepositoryId.new(), path="/test", name="test", branch_count=1, commit_count=1
    )
    restored = event_from_dict(event_to_dict(event))
    assert isinstance(restored, RepositoryAnalyzed)
    assert restored.name == "test"


def test_unknown_event_type_rejected():
    with pytest.raises(ValueError):
        event_from_dict({"event_type": "Nonsense"})


def test_missing_event_type_rejected():
    with pytest.raises(ValueError):
        event_from_dict({"path": "/test"})


def test_non_event_rejected():
    with pytest.raises(TypeError):
        event_to_dict(FileChangeInfo("a", FileChangeType.ADDED, 1, 0))