"""Entry point: the default branch of the user's contribution target."""

from __future__ import annotations

import logging

from contribution_target.domain.entities import Branch, BranchesState, Repository
from contribution_target.domain.ports.remote_head_reader import RemoteHeadReader
from contribution_target.domain.value_objects import (
    UPSTREAM_REMOTE_NAME,
    ContributionTargetResolution,
    Resolved,
    ResolutionSource,
)
from contribution_target.services.upstream_branch import UpstreamDefaultBranchFinder

logger = logging.getLogger(__name__)


class ContributionTargetResolver:
    """Combines the upstream lookup with a fallback to the local default branch."""

    def __init__(self, finder: UpstreamDefaultBranchFinder) -> None:
        self._finder = finder

    async def resolve(
        self, repository: Repository, branches_state: BranchesState
    ) -> ContributionTargetResolution:
        """Like :meth:`find_contribution_target_default_branch`, but report the path taken."""
        if not repository.has_github_repository:
            return ContributionTargetResolution(
                branch=branches_state.default_branch,
                source=ResolutionSource.LOCAL_DEFAULT,
            )

        lookup = await self._finder.lookup(repository, branches_state.all_branches)
        if isinstance(lookup, Resolved):
            return ContributionTargetResolution(
                branch=lookup.branch, source=ResolutionSource.UPSTREAM, lookup=lookup
            )

        logger.debug("Falling back to the local default branch of %s (%r)", repository.path, lookup)
        return ContributionTargetResolution(
            branch=branches_state.default_branch,
            source=ResolutionSource.LOCAL_DEFAULT,
            lookup=lookup,
        )

    async def find_contribution_target_default_branch(
        self, repository: Repository, branches_state: BranchesState
    ) -> Branch | None:
        """Return the default branch of the repository the user contributes to.

        For a fork contributing to its parent this is the upstream's default
        branch, when it is known locally. Otherwise it is
        ``branches_state.default_branch``, which may itself be ``None``.
        """
        resolution = await self.resolve(repository, branches_state)
        return resolution.branch


async def find_contribution_target_default_branch(
    repository: Repository,
    branches_state: BranchesState,
    remote_head_reader: RemoteHeadReader,
    *,
    upstream_remote_name: str = UPSTREAM_REMOTE_NAME,
) -> Branch | None:
    resolver = ContributionTargetResolver(
        UpstreamDefaultBranchFinder(remote_head_reader, upstream_remote_name)
    )
    return await resolver.find_contribution_target_default_branch(repository, branches_state)
