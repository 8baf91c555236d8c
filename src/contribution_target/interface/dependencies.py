"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from contribution_target.infrastructure.config import Settings, get_settings
from contribution_target.infrastructure.git_cli_adapter import GitCliAdapter
from contribution_target.infrastructure.github_rest_adapter import GitHubRestAdapter
from contribution_target.infrastructure.remote_head_cache import CachingRemoteHeadReader
from contribution_target.services.resolve_default_branch import ResolveDefaultBranchUseCase

_http_client: httpx.AsyncClient | None = None
_remote_heads: CachingRemoteHeadReader | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _remote_heads  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))
    _remote_heads = CachingRemoteHeadReader(
        _git_adapter(),
        ttl_seconds=settings.remote_head_cache_ttl_seconds,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _remote_heads  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _remote_heads = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def _git_adapter() -> GitCliAdapter:
    settings = _settings()
    return GitCliAdapter(
        git_executable=settings.git_executable,
        timeout=settings.git_timeout_seconds,
    )


def get_use_case() -> ResolveDefaultBranchUseCase:
    """Build the use case with injected adapters."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"
    assert _remote_heads is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=_http_client, token=token, api_url=settings.github_api_url
    )

    return ResolveDefaultBranchUseCase(
        branch_reader=_git_adapter(),
        remote_head_reader=_remote_heads,
        metadata_fetcher=github_adapter,
        upstream_remote_name=settings.upstream_remote_name,
        origin_remote_name=settings.origin_remote_name,
    )
