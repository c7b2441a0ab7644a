# gitdomain

A domain model for describing Git repositories in an event-sourced style.
It has no dependencies beyond the standard library.

## Modules

- `gitdomain.identifiers`: `RepositoryId` and `GraphId` are frozen wrappers
  around a UUID. Create them with `new()` or `from_uuid(uuid)`, which also
  accepts the UUID's string form. Each has a `uuid` property, and `str()`
  gives the UUID's string form.
- `gitdomain.aggregate`: the `Repository` aggregate root, with
  `RepositoryMetadata`, `Commit`, `FileChange`, `ChangeType`, `Branch` and
  `BranchMetadata`. A `Repository` changes state only through
  `apply_event(event)`, and each call raises `version` by one:
  - `RepositoryCloned` sets `remote_url`, `local_path` and `metadata.updated_at`.
  - `CommitAnalyzed` adds one to `metadata.commit_count`.
  - `BranchCreated` records the branch in `branches`, keyed by branch name with
    the commit hash as value.
  - Any other event only raises the version.

  `clone_repository(remote_url, local_path)` applies a `RepositoryCloned` event
  and returns it in a list. If the repository already has a local path, it
  raises `GitOperationError`.
- `gitdomain.commands`: frozen, keyword-only dataclasses that describe an
  intended change. They are `CloneRepository`, `AnalyzeCommit`,
  `ExtractCommitGraph`, `ExtractDependencyGraph`, `CreateBranch`,
  `DeleteBranch`, `CreateTag`, `AnalyzeRepository`, `FetchRemote`,
  `AnalyzeFileHistory`, `CompareBranches`, `SearchRepository` and
  `GitHubIntegration`, with the `GitHubOperation` enum. `aggregate_id()`
  returns the targeted `RepositoryId`. For a `CloneRepository` without a
  `repository_id` it returns `None`.
- `gitdomain.events`: frozen event dataclasses. They are `RepositoryCloned`,
  `CommitAnalyzed`, `BranchCreated`, `BranchDeleted`, `TagCreated`,
  `CommitGraphExtracted`, `DependencyGraphExtracted`,
  `RepositoryMetadataUpdated`, `MergeDetected`, `FileAnalyzed` and
  `RepositoryAnalyzed`, with the supporting types `FileChangeInfo`,
  `FileChangeType`, `MetadataUpdates` and `FileMetrics`. To round-trip events:
  - `event_to_dict` and `event_from_dict` convert to and from plain data.
  - `event_to_json` and `event_from_json` convert to and from JSON.

  The encoded form carries an `"event_type"` key that holds the class name.
  Decoding raises `ValueError` when that key is missing or names an unknown
  type.
- `gitdomain.dependency_analysis`: `DependencyAnalyzer` finds dependencies.
  - `analyze_file(content, language)` reads source code in Rust, Python,
    JavaScript, TypeScript, Java, Go, C or C++. It skips lines that start with
    `//`, `#` or `/*` once trimmed.
  - `analyze_manifest(content, filename)` reads the manifests `Cargo.toml`,
    `package.json`, `requirements.txt` and `go.mod`.

  Both methods return a `set` of `Dependency` objects. Each has a `name`, a
  `dependency_type` and an optional `version`. Unsupported languages and file
  names give an empty set. `Language.from_extension("rs")` detects a language
  from a file extension. An extension it does not know gives an
  `OtherLanguage` object.
- `gitdomain.cache`: `GitCache(ttl)` stores commit-graph ids and
  `DependencyInfo` results. The `ttl` is in seconds or a `timedelta`, and the
  default is five minutes. It is thread-safe.
  - Expired entries read as `None`.
  - `evict_expired()` removes expired entries, and `clear()` removes all entries.
  - `stats()` returns a `CacheStats` that counts the entries held.

## Example

```python
from datetime import timedelta

from gitdomain.aggregate import Repository
from gitdomain.cache import GitCache
from gitdomain.dependency_analysis import DependencyAnalyzer, Language
from gitdomain.events import event_from_json, event_to_json
from gitdomain.identifiers import GraphId

repo = Repository("awesome-project")
events = repo.clone_repository("https://git.example.com/team/repo.git", "/workspace/repo")
assert repo.version == 1
assert event_from_json(event_to_json(events[0])).local_path == "/workspace/repo"

analyzer = DependencyAnalyzer()
deps = analyzer.analyze_file("import os\nfrom typing import List\n", Language.PYTHON)
print(sorted(d.name for d in deps))   # ['os', 'typing']

manifest = analyzer.analyze_manifest('[dependencies]\nserde = "1.0"\n', "Cargo.toml")
print([(d.name, d.version) for d in manifest])   # [('serde', '1.0')]

cache = GitCache(ttl=timedelta(minutes=5))
graph_id = GraphId.new()
cache.cache_commit_graph(repo.id, None, graph_id)
assert cache.get_commit_graph(repo.id, None) == graph_id
print(cache.stats().commit_graph_entries)   # 1
```

## What it does not do

The package models repositories, commands and events, but it does not touch
Git itself:

- It does not open or clone repositories on disk.
- It does not walk commit history.
- It has no handlers that carry out the commands.
- It does not build graphs.

To record analysis results, create the event objects yourself and apply them
to a `Repository`.

## Running the tests

```
pip install .[test]
pytest
```