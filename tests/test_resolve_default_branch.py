"""Tests for the path → contribution-target use case, with fake adapters."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from contribution_target.domain.entities import ForkContributionTarget
from contribution_target.domain.exceptions import (
    GitCommandError,
    GitHubRateLimitError,
    HostingApiError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)
from contribution_target.domain.value_objects import (
    ResolutionSource,
    SelfTarget,
    UpstreamTarget,
)
from contribution_target.services.resolve_default_branch import ResolveDefaultBranchUseCase


@pytest.fixture
def branch_reader(local_main, origin_main, upstream_main):
    reader = AsyncMock()
    reader.list_branches.return_value = [local_main, origin_main, upstream_main]
    reader.get_remote_url.return_value = "git@github.com:octocat/widgets.git"
    reader.get_configured_default_branch.return_value = None
    return reader


@pytest.fixture
def metadata_fetcher(make_fork):
    fetcher = AsyncMock()
    fetcher.fetch_github_repository.return_value = make_fork()
    return fetcher


def _use_case(branch_reader, remote_heads, metadata_fetcher):
    return ResolveDefaultBranchUseCase(
        branch_reader=branch_reader,
        remote_head_reader=remote_heads,
        metadata_fetcher=metadata_fetcher,
    )


@pytest.mark.asyncio
async def test_fork_resolves_to_upstream(
    branch_reader, metadata_fetcher, fake_reader, upstream_main, local_main
):
    report = await _use_case(branch_reader, fake_reader, metadata_fetcher).execute("/work/widgets")

    assert report.resolution.branch is upstream_main
    assert report.resolution.source is ResolutionSource.UPSTREAM
    assert report.branches_state.default_branch is local_main
    assert isinstance(report.contribution_target, UpstreamTarget)

    url = metadata_fetcher.fetch_github_repository.await_args.args[0]
    assert url.full_name == "octocat/widgets"
    branch_reader.get_remote_url.assert_awaited_once()


@pytest.mark.asyncio
async def test_caller_preference_overrides_metadata(
    branch_reader, metadata_fetcher, fake_reader, local_main
):
    report = await _use_case(branch_reader, fake_reader, metadata_fetcher).execute(
        "/work/widgets", ForkContributionTarget.SELF
    )

    assert report.resolution.branch is local_main
    assert report.contribution_target == SelfTarget()
    assert ("/work/widgets", "upstream") not in fake_reader.calls


@pytest.mark.asyncio
async def test_non_github_origin_skips_metadata(
    branch_reader, metadata_fetcher, fake_reader, local_main
):
    branch_reader.get_remote_url.return_value = "https://gitlab.com/octocat/widgets.git"

    report = await _use_case(branch_reader, fake_reader, metadata_fetcher).execute("/work/widgets")

    metadata_fetcher.fetch_github_repository.assert_not_awaited()
    assert report.repository.github_repository is None
    assert report.contribution_target is None
    assert report.resolution.branch is local_main


@pytest.mark.asyncio
async def test_default_branch_from_git_config(
    branch_reader, metadata_fetcher, reader_factory, origin_main
):
    branch_reader.list_branches.return_value = [origin_main]
    branch_reader.get_remote_url.return_value = None
    branch_reader.get_configured_default_branch.return_value = "main"

    report = await _use_case(branch_reader, reader_factory(), metadata_fetcher).execute(
        "/work/widgets"
    )

    assert report.branches_state.default_branch is origin_main
    branch_reader.get_configured_default_branch.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        RepositoryNotFoundError("gone"),
        RepositoryAccessDeniedError("private"),
        GitHubRateLimitError("rate limited"),
        HostingApiError("network down"),
    ],
)
async def test_metadata_errors_fall_back_to_local_default(
    branch_reader, metadata_fetcher, fake_reader, local_main, error
):
    metadata_fetcher.fetch_github_repository.side_effect = error

    report = await _use_case(branch_reader, fake_reader, metadata_fetcher).execute("/work/widgets")

    assert report.repository.github_repository is None
    assert report.contribution_target is None
    assert report.resolution.branch is local_main
    assert report.resolution.source is ResolutionSource.LOCAL_DEFAULT


@pytest.mark.asyncio
async def test_git_failure_cancels_pending_metadata_load(
    branch_reader, metadata_fetcher, fake_reader
):
    cancelled = asyncio.Event()

    async def never_returns(url):
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.set()
            raise

    metadata_fetcher.fetch_github_repository.side_effect = never_returns
    branch_reader.list_branches.side_effect = GitCommandError("for-each-ref failed")

    with pytest.raises(GitCommandError):
        await _use_case(branch_reader, fake_reader, metadata_fetcher).execute("/work/widgets")

    assert cancelled.is_set()
