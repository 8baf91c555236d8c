"""Value objects — self-validating domain primitives and tagged results."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from contribution_target.domain.entities import Branch, GitHubRepository
from contribution_target.domain.exceptions import InvalidGitHubUrlError

UPSTREAM_REMOTE_NAME = "upstream"
"""Conventional name of the remote that tracks a fork's parent repository."""

_GITHUB_URL_RE = re.compile(
    r"^(?:https?://(?:[^@/]+@)?github\.com/|ssh://git@github\.com/|git@github\.com:)"
    r"(?P<owner>[A-Za-z0-9\-_.]+)/(?P<repo>[A-Za-z0-9\-_.]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Validated GitHub repository URL.

    Extracts *owner* and *repo* from remote URLs such as
    ``https://github.com/psf/requests`` or ``git@github.com:psf/requests.git``.
    Rejects anything that does not match the expected pattern.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse and validate a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.match(url)
        if not match:
            raise InvalidGitHubUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected https://github.com/<owner>/<repo> or git@github.com:<owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=match["repo"], raw=url)

    @classmethod
    def try_parse(cls, url: str | None) -> GitHubUrl | None:
        """Like :meth:`from_string`, but ``None`` for non-GitHub remotes."""
        if not url:
            return None
        try:
            return cls.from_string(url)
        except InvalidGitHubUrlError:
            return None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


# ── Contribution target ─────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SelfTarget:
    """Contributions go to the repository itself."""


@dataclass(frozen=True, slots=True)
class UpstreamTarget:
    """Contributions go to a distinct upstream repository."""

    github_repository: GitHubRepository


ContributionTarget = Union[SelfTarget, UpstreamTarget]


# ── Upstream branch lookup ──────────────────────────────────────────────────


class NotFoundReason(str, Enum):
    REMOTE_HEAD_UNKNOWN = "remote_head_unknown"
    BRANCH_NOT_FETCHED = "branch_not_fetched"


@dataclass(frozen=True, slots=True)
class Resolved:
    """The upstream's default branch exists locally as a remote-tracking branch."""

    branch: Branch


@dataclass(frozen=True, slots=True)
class NotApplicable:
    """The repository does not contribute to a distinct upstream."""


@dataclass(frozen=True, slots=True)
class NotFound:
    """The upstream applies but its default branch could not be determined."""

    reason: NotFoundReason
    branch_name: str | None = None


UpstreamBranchLookup = Union[Resolved, NotApplicable, NotFound]


class ResolutionSource(str, Enum):
    """Which path produced the contribution-target default branch."""

    UPSTREAM = "upstream"
    LOCAL_DEFAULT = "local_default"


@dataclass(frozen=True, slots=True)
class ContributionTargetResolution:
    """The answer plus how it was reached."""

    branch: Branch | None
    source: ResolutionSource
    lookup: UpstreamBranchLookup | None = None
