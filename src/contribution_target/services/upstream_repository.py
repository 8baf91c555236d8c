"""Decide which GitHub repository a fork contributes to."""

from __future__ import annotations

from contribution_target.domain.entities import ForkContributionTarget, GitHubRepository
from contribution_target.domain.value_objects import (
    ContributionTarget,
    SelfTarget,
    UpstreamTarget,
)


def resolve_contribution_target(github_repository: GitHubRepository) -> ContributionTarget:
    """Return where contributions to ``github_repository`` should be routed.

    Non-forks and forks configured with ``ForkContributionTarget.SELF``
    contribute to themselves; every other fork contributes to its parent.
    """
    if (
        not github_repository.fork
        or github_repository.parent is None
        or github_repository.fork_contribution_target is ForkContributionTarget.SELF
    ):
        return SelfTarget()
    return UpstreamTarget(github_repository=github_repository.parent)


def get_non_fork_github_repository(github_repository: GitHubRepository) -> GitHubRepository:
    target = resolve_contribution_target(github_repository)
    if isinstance(target, UpstreamTarget):
        return target.github_repository
    return github_repository
