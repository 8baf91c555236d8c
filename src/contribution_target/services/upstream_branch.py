"""Find the default branch of a fork's upstream repository.

The upstream's default branch is whatever the ``upstream`` remote advertises
as its HEAD, matched against the remote-tracking branches already present in
the local repository. Nothing is fetched or created here.
"""

from __future__ import annotations

import logging
from typing import Sequence

from contribution_target.domain.entities import Branch, BranchType, Repository
from contribution_target.domain.exceptions import InvalidRepositoryMetadataError
from contribution_target.domain.ports.remote_head_reader import RemoteHeadReader
from contribution_target.domain.value_objects import (
    UPSTREAM_REMOTE_NAME,
    NotApplicable,
    NotFound,
    NotFoundReason,
    Resolved,
    SelfTarget,
    UpstreamBranchLookup,
)
from contribution_target.services.upstream_repository import resolve_contribution_target

logger = logging.getLogger(__name__)


def find_remote_branch(
    branches: Sequence[Branch], remote_name: str, branch_name: str
) -> Branch | None:
    """Return the first remote-tracking branch named ``<remote_name>/<branch_name>``."""
    full_name = f"{remote_name}/{branch_name}"
    return next(
        (b for b in branches if b.type is BranchType.REMOTE and b.name == full_name),
        None,
    )


class UpstreamDefaultBranchFinder:
    """Looks up the upstream default branch of forks that contribute to their parent.

    Parameters
    ----------
    remote_head_reader:
        Adapter that reports the symbolic HEAD of a remote.
    upstream_remote_name:
        Name of the remote tracking the parent repository.
    """

    def __init__(
        self,
        remote_head_reader: RemoteHeadReader,
        upstream_remote_name: str = UPSTREAM_REMOTE_NAME,
    ) -> None:
        self._reader = remote_head_reader
        self._remote_name = upstream_remote_name

    async def lookup(
        self, repository: Repository, branches: Sequence[Branch]
    ) -> UpstreamBranchLookup:
        """Return the detailed outcome of the upstream default-branch lookup.

        A repository that contributes to itself yields :class:`NotApplicable`;
        its own default branch is left to the caller's fallback. Errors raised
        by the remote HEAD reader propagate unchanged.
        """
        if repository.github_repository is None:
            raise InvalidRepositoryMetadataError(
                f"Repository at {repository.path} has no associated GitHub repository."
            )

        target = resolve_contribution_target(repository.github_repository)
        if isinstance(target, SelfTarget):
            logger.debug("%s contributes to itself", repository.github_repository.full_name)
            return NotApplicable()

        remote_head = await self._reader.get_remote_head(repository, self._remote_name)
        if not remote_head:
            logger.debug("Remote '%s' of %s has no known HEAD", self._remote_name, repository.path)
            return NotFound(reason=NotFoundReason.REMOTE_HEAD_UNKNOWN)

        branch = find_remote_branch(branches, self._remote_name, remote_head)
        if branch is None:
            logger.debug(
                "%s/%s is not fetched in %s", self._remote_name, remote_head, repository.path
            )
            return NotFound(
                reason=NotFoundReason.BRANCH_NOT_FETCHED,
                branch_name=f"{self._remote_name}/{remote_head}",
            )
        return Resolved(branch=branch)

    async def find_default_upstream_branch(
        self, repository: Repository, branches: Sequence[Branch]
    ) -> Branch | None:
        """Return the upstream's default branch, or ``None`` when it does not apply."""
        result = await self.lookup(repository, branches)
        return result.branch if isinstance(result, Resolved) else None


async def find_default_upstream_branch(
    repository: Repository,
    branches: Sequence[Branch],
    remote_head_reader: RemoteHeadReader,
    *,
    upstream_remote_name: str = UPSTREAM_REMOTE_NAME,
) -> Branch | None:
    """Finds the default branch of the upstream repository of ``repository``.

    Returns ``None`` when the repository is not a fork, when the fork
    contributes to itself, when the upstream HEAD is unknown, or when the
    matching remote-tracking branch has not been fetched.
    """
    finder = UpstreamDefaultBranchFinder(remote_head_reader, upstream_remote_name)
    return await finder.find_default_upstream_branch(repository, branches)
