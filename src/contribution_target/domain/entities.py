"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from contribution_target.domain.exceptions import InvalidRepositoryMetadataError


class ForkContributionTarget(str, Enum):
    """Where the owner of a fork wants contributions to go."""

    SELF = "self"
    PARENT = "parent"


class BranchType(str, Enum):
    """Whether a branch lives under ``refs/heads`` or ``refs/remotes``."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class GitHubRepository:
    """Hosting metadata associated with a local repository.

    ``parent`` is present if and only if ``fork`` is true.
    """

    owner: str
    name: str
    fork: bool = False
    parent: GitHubRepository | None = None
    fork_contribution_target: ForkContributionTarget = ForkContributionTarget.PARENT

    def __post_init__(self) -> None:
        if self.fork and self.parent is None:
            raise InvalidRepositoryMetadataError(
                f"{self.owner}/{self.name} is marked as a fork but has no parent."
            )
        if not self.fork and self.parent is not None:
            raise InvalidRepositoryMetadataError(
                f"{self.owner}/{self.name} has a parent but is not marked as a fork."
            )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def with_fork_contribution_target(
        self, target: ForkContributionTarget
    ) -> GitHubRepository:
        """Return a copy carrying a different contribution-target preference."""
        return replace(self, fork_contribution_target=target)


@dataclass(frozen=True, slots=True)
class Repository:
    """A local working copy, optionally associated with a GitHub repository."""

    path: str
    github_repository: GitHubRepository | None = None

    @property
    def has_github_repository(self) -> bool:
        return self.github_repository is not None


@dataclass(frozen=True, slots=True)
class Branch:
    """A local or remote-tracking branch.

    Remote-tracking branches are named ``<remote>/<branch>``.
    """

    name: str
    type: BranchType
    upstream: str | None = None  # tracking branch of a local branch
    tip: str | None = None
    ref: str = ""


@dataclass(frozen=True, slots=True)
class BranchesState:
    """Snapshot of every known branch plus the repository's default branch."""

    all_branches: tuple[Branch, ...] = field(default_factory=tuple)
    default_branch: Branch | None = None
