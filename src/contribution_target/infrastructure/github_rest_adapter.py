"""GitHub REST API adapter — implements the RepositoryMetadataFetcher port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from contribution_target.domain.entities import ForkContributionTarget, GitHubRepository
from contribution_target.domain.exceptions import (
    GitHubRateLimitError,
    HostingApiError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)
from contribution_target.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubRestAdapter:
    """Concrete RepositoryMetadataFetcher backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_url: str = _GITHUB_API,
        fork_contribution_target: ForkContributionTarget = ForkContributionTarget.PARENT,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._fork_contribution_target = fork_contribution_target
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "contribution-target/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_github_repository(self, url: GitHubUrl) -> GitHubRepository:
        """GET /repos/{owner}/{repo} → GitHubRepository (with its parent, if any)."""
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}")
        return self._to_github_repository(resp.json())

    def _to_github_repository(self, data: dict[str, Any]) -> GitHubRepository:
        parent_data = data.get("parent")
        parent = self._to_github_repository(parent_data) if parent_data else None
        owner = data.get("owner") or {}
        return GitHubRepository(
            owner=owner.get("login", ""),
            name=data.get("name", ""),
            # GitHub only embeds ``parent`` in the top-level repository
            fork=parent is not None,
            parent=parent,
            fork_contribution_target=self._fork_contribution_target,
        )

    async def _api_get(self, endpoint: str) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(url, headers=self._api_headers)
        except httpx.HTTPError as exc:
            raise HostingApiError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise RepositoryNotFoundError(
                f"Repository not found: {endpoint.removeprefix('/repos/')}."
            )

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit."
                )
            raise RepositoryAccessDeniedError(
                "Access denied. The repository may be private."
            )

        if resp.status_code == 429:
            raise GitHubRateLimitError("GitHub API rate limit exceeded (HTTP 429).")

        logger.debug("GitHub API returned HTTP %d for %s", resp.status_code, url)
        raise HostingApiError(f"GitHub API returned HTTP {resp.status_code} for {url}")
