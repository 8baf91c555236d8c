"""Port: hosting metadata fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from contribution_target.domain.entities import GitHubRepository
from contribution_target.domain.value_objects import GitHubUrl


class RepositoryMetadataFetcher(Protocol):
    """Abstract contract for loading hosting metadata of a GitHub repository."""

    async def fetch_github_repository(self, url: GitHubUrl) -> GitHubRepository:
        """Return metadata for ``url``, including its parent when it is a fork."""
        ...
