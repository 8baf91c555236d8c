"""Shared fixtures: branch snapshots, hosting metadata and a fake remote HEAD reader."""

import pytest

from contribution_target.domain.entities import (
    Branch,
    BranchesState,
    BranchType,
    ForkContributionTarget,
    GitHubRepository,
    Repository,
)


class FakeRemoteHeadReader:
    """Returns canned remote HEADs and records every call."""

    def __init__(self, heads=None, error=None):
        self.heads = dict(heads or {})
        self.error = error
        self.calls = []

    async def get_remote_head(self, repository, remote_name):
        self.calls.append((repository.path, remote_name))
        if self.error is not None:
            raise self.error
        return self.heads.get(remote_name)


@pytest.fixture
def local_main():
    return Branch(name="main", type=BranchType.LOCAL, upstream="origin/main", ref="refs/heads/main")


@pytest.fixture
def origin_main():
    return Branch(name="origin/main", type=BranchType.REMOTE, ref="refs/remotes/origin/main")


@pytest.fixture
def upstream_main():
    return Branch(name="upstream/main", type=BranchType.REMOTE, ref="refs/remotes/upstream/main")


@pytest.fixture
def branches_state(local_main, origin_main, upstream_main):
    return BranchesState(
        all_branches=(local_main, origin_main, upstream_main),
        default_branch=local_main,
    )


@pytest.fixture
def parent_repo():
    return GitHubRepository(owner="octo-org", name="widgets")


@pytest.fixture
def make_fork(parent_repo):
    def _make(target=ForkContributionTarget.PARENT):
        return GitHubRepository(
            owner="octocat",
            name="widgets",
            fork=True,
            parent=parent_repo,
            fork_contribution_target=target,
        )

    return _make


@pytest.fixture
def fork_repository(make_fork):
    return Repository(path="/work/widgets", github_repository=make_fork())


@pytest.fixture
def fake_reader():
    return FakeRemoteHeadReader(heads={"upstream": "main", "origin": "main"})


@pytest.fixture
def reader_factory():
    return FakeRemoteHeadReader
