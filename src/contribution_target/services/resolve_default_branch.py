"""Resolve-default-branch use case — from a local path to an answer.

Loads the collaborators' snapshots (branch list, origin URL, hosting
metadata) through the ports and hands them to
:class:`ContributionTargetResolver`. The interface layer injects concrete
adapters at runtime.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable

from contribution_target.domain.entities import (
    BranchesState,
    ForkContributionTarget,
    GitHubRepository,
    Repository,
)
from contribution_target.domain.exceptions import (
    GitHubRateLimitError,
    HostingApiError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)
from contribution_target.domain.ports.branch_reader import BranchReader
from contribution_target.domain.ports.remote_head_reader import RemoteHeadReader
from contribution_target.domain.ports.repository_metadata import RepositoryMetadataFetcher
from contribution_target.domain.value_objects import (
    UPSTREAM_REMOTE_NAME,
    ContributionTarget,
    ContributionTargetResolution,
    GitHubUrl,
)
from contribution_target.services.contribution_target import ContributionTargetResolver
from contribution_target.services.default_branch import build_branches_state
from contribution_target.services.upstream_branch import UpstreamDefaultBranchFinder
from contribution_target.services.upstream_repository import resolve_contribution_target

logger = logging.getLogger(__name__)

_METADATA_ERRORS = (
    RepositoryNotFoundError,
    RepositoryAccessDeniedError,
    GitHubRateLimitError,
    HostingApiError,
)


async def _gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Like ``asyncio.gather``, but cancel the remaining awaitables when one fails."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


@dataclass(frozen=True, slots=True)
class DefaultBranchReport:
    """Everything the interface layer needs to render a response."""

    repository: Repository
    branches_state: BranchesState
    resolution: ContributionTargetResolution
    contribution_target: ContributionTarget | None


class ResolveDefaultBranchUseCase:
    """Orchestrates path → repository snapshot → contribution-target branch.

    Parameters
    ----------
    branch_reader:
        Adapter that lists branches and reads remote configuration.
    remote_head_reader:
        Adapter that reports a remote's symbolic HEAD.
    metadata_fetcher:
        Adapter that loads GitHub hosting metadata.
    upstream_remote_name:
        Remote tracking a fork's parent.
    origin_remote_name:
        Remote tracking the repository itself.
    """

    def __init__(
        self,
        branch_reader: BranchReader,
        remote_head_reader: RemoteHeadReader,
        metadata_fetcher: RepositoryMetadataFetcher,
        upstream_remote_name: str = UPSTREAM_REMOTE_NAME,
        origin_remote_name: str = "origin",
    ) -> None:
        self._branches = branch_reader
        self._remote_heads = remote_head_reader
        self._metadata = metadata_fetcher
        self._origin = origin_remote_name
        self._resolver = ContributionTargetResolver(
            UpstreamDefaultBranchFinder(remote_head_reader, upstream_remote_name)
        )

    async def execute(
        self,
        path: str,
        fork_contribution_target: ForkContributionTarget | None = None,
    ) -> DefaultBranchReport:
        """Resolve the contribution-target default branch of the repository at ``path``."""
        local = Repository(path=path)
        github_repository, branches_state = await _gather_or_cancel(
            self._load_github_repository(local, fork_contribution_target),
            self._load_branches_state(local),
        )
        repository = Repository(path=path, github_repository=github_repository)

        resolution = await self._resolver.resolve(repository, branches_state)
        logger.info(
            "Contribution target default branch for %s: %s (%s)",
            path,
            resolution.branch.name if resolution.branch else None,
            resolution.source.value,
        )
        return DefaultBranchReport(
            repository=repository,
            branches_state=branches_state,
            resolution=resolution,
            contribution_target=(
                resolve_contribution_target(github_repository) if github_repository else None
            ),
        )

    async def _load_github_repository(
        self,
        repository: Repository,
        fork_contribution_target: ForkContributionTarget | None,
    ) -> GitHubRepository | None:
        remote_url = await self._branches.get_remote_url(repository, self._origin)
        url = GitHubUrl.try_parse(remote_url)
        if url is None:
            logger.debug("Remote '%s' of %s is not a GitHub URL", self._origin, repository.path)
            return None

        try:
            github_repository = await self._metadata.fetch_github_repository(url)
        except _METADATA_ERRORS as exc:
            logger.warning(
                "Could not load GitHub metadata for %s, treating it as unhosted: %s",
                url.full_name,
                exc,
            )
            return None
        if fork_contribution_target is not None:
            github_repository = github_repository.with_fork_contribution_target(
                fork_contribution_target
            )
        return github_repository

    async def _load_branches_state(self, repository: Repository) -> BranchesState:
        branches, origin_head = await _gather_or_cancel(
            self._branches.list_branches(repository),
            self._remote_heads.get_remote_head(repository, self._origin),
        )
        default_name = origin_head or await self._branches.get_configured_default_branch(
            repository
        )
        return build_branches_state(branches, default_name, self._origin)
