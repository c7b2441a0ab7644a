"""Commands: requests to change the state of a repository aggregate."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from gitdomain.identifiers import RepositoryId


@dataclass(frozen=True, kw_only=True)
class Command:
    """Base for commands addressed to a repository aggregate."""

    def aggregate_id(self) -> Optional[RepositoryId]:
        """Id of the repository aggregate the command targets."""
        return getattr(self, "repository_id", None)


@dataclass(frozen=True, kw_only=True)
class CloneRepository(Command):
    """Clone a repository from a remote URL to a local path.

    Without ``repository_id`` a new repository is created. ``branch`` selects
    the branch to check out (the remote's default when None) and ``depth``
    makes the clone shallow.
    """

    repository_id: Optional[RepositoryId] = None
    remote_url: str
    local_path: str
    branch: Optional[str] = None
    depth: Optional[int] = None

    def aggregate_id(self) -> Optional[RepositoryId]:
        """The given repository id, or None when a new repository is created."""
        return self.repository_id


@dataclass(frozen=True, kw_only=True)
class AnalyzeCommit(Command):
    """Analyze a commit, optionally its files and their dependencies."""

    repository_id: RepositoryId
    commit_hash: str
    analyze_files: bool
    extract_dependencies: bool


@dataclass(frozen=True, kw_only=True)
class ExtractCommitGraph(Command):
    """Extract the graph of commits, starting at ``start_commit`` or HEAD."""

    repository_id: RepositoryId
    start_commit: Optional[str] = None
    max_depth: Optional[int] = None
    include_all_branches: bool
    include_tags: bool


@dataclass(frozen=True, kw_only=True)
class ExtractDependencyGraph(Command):
    """Extract the file dependency graph at ``commit_hash`` or HEAD."""

    repository_id: RepositoryId
    commit_hash: Optional[str] = None
    include_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)
    language: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class CreateBranch(Command):
    """Create a branch from a commit or another branch."""

    repository_id: RepositoryId
    branch_name: str
    start_point: str
    checkout: bool


@dataclass(frozen=True, kw_only=True)
class DeleteBranch(Command):
    """Delete a branch, forcing it when it is not merged if ``force`` is set."""

    repository_id: RepositoryId
    branch_name: str
    force: bool


@dataclass(frozen=True, kw_only=True)
class CreateTag(Command):
    """Tag a commit (HEAD when ``commit_hash`` is None)."""

    repository_id: RepositoryId
    tag_name: str
    commit_hash: Optional[str] = None
    message: Optional[str] = None
    annotated: bool


@dataclass(frozen=True, kw_only=True)
class AnalyzeRepository(Command):
    """Analyze the structure of a repository."""

    repository_id: RepositoryId
    update_metadata: bool
    analyze_languages: bool
    calculate_statistics: bool


@dataclass(frozen=True, kw_only=True)
class FetchRemote(Command):
    """Fetch updates from a remote (``origin`` when ``remote`` is None)."""

    repository_id: RepositoryId
    remote: Optional[str] = None
    all_remotes: bool
    prune: bool


@dataclass(frozen=True, kw_only=True)
class AnalyzeFileHistory(Command):
    """Analyze the history of one file between two commits."""

    repository_id: RepositoryId
    file_path: str
    start_commit: Optional[str] = None
    end_commit: Optional[str] = None
    follow_renames: bool


@dataclass(frozen=True, kw_only=True)
class CompareBranches(Command):
    """Compare one branch against a base branch."""

    repository_id: RepositoryId
    base_branch: str
    compare_branch: str
    include_diffs: bool


@dataclass(frozen=True, kw_only=True)
class SearchRepository(Command):
    """Search repository content with a regular expression."""

    repository_id: RepositoryId
    pattern: str
    include_patterns: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(default_factory=list)
    case_sensitive: bool
    max_results: Optional[int] = None


class GitHubOperation(enum.Enum):
    """Synchronisation operations available through the GitHub integration."""

    SYNC_ISSUES = "SyncIssues"
    SYNC_PULL_REQUESTS = "SyncPullRequests"
    SYNC_RELEASES = "SyncReleases"
    SYNC_WORKFLOWS = "SyncWorkflows"


@dataclass(frozen=True, kw_only=True)
class GitHubIntegration(Command):
    """Run GitHub operations for an ``owner/name`` repository."""

    repository_id: RepositoryId
    github_repo: str
    operations: list[GitHubOperation] = field(default_factory=list)