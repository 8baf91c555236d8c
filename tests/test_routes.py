"""Tests for the HTTP surface, with the use case replaced through dependency overrides."""

import pytest
from fastapi.testclient import TestClient

from contribution_target.domain.entities import (
    BranchesState,
    ForkContributionTarget,
    Repository,
)
from contribution_target.domain.exceptions import GitCommandError, NotAGitRepositoryError
from contribution_target.domain.value_objects import (
    ContributionTargetResolution,
    ResolutionSource,
    UpstreamTarget,
)
from contribution_target.interface.app import create_app
from contribution_target.interface.dependencies import get_use_case
from contribution_target.services.resolve_default_branch import DefaultBranchReport


class _FakeUseCase:
    def __init__(self, report=None, error=None):
        self.report = report
        self.error = error
        self.calls = []

    async def execute(self, path, fork_contribution_target=None):
        self.calls.append((path, fork_contribution_target))
        if self.error is not None:
            raise self.error
        return self.report


@pytest.fixture
def upstream_report(fork_repository, branches_state, upstream_main, parent_repo):
    return DefaultBranchReport(
        repository=fork_repository,
        branches_state=branches_state,
        resolution=ContributionTargetResolution(
            branch=upstream_main, source=ResolutionSource.UPSTREAM
        ),
        contribution_target=UpstreamTarget(github_repository=parent_repo),
    )


def _client(use_case):
    app = create_app()
    app.dependency_overrides[get_use_case] = lambda: use_case
    return TestClient(app, raise_server_exceptions=False)


def test_returns_upstream_branch(upstream_report):
    use_case = _FakeUseCase(report=upstream_report)
    resp = _client(use_case).post(
        "/contribution-target",
        json={"repository_path": " /work/widgets ", "fork_contribution_target": "parent"},
    )

    assert resp.status_code == 200
    assert resp.json() == {
        "branch": {
            "name": "upstream/main",
            "type": "remote",
            "upstream": None,
            "tip": None,
            "ref": "refs/remotes/upstream/main",
        },
        "source": "upstream",
        "contribution_target": "parent",
        "github_repository": "octocat/widgets",
    }
    assert use_case.calls == [("/work/widgets", ForkContributionTarget.PARENT)]


def test_repository_without_branches():
    report = DefaultBranchReport(
        repository=Repository(path="/work/empty"),
        branches_state=BranchesState(),
        resolution=ContributionTargetResolution(
            branch=None, source=ResolutionSource.LOCAL_DEFAULT
        ),
        contribution_target=None,
    )
    resp = _client(_FakeUseCase(report=report)).post(
        "/contribution-target", json={"repository_path": "/work/empty"}
    )

    assert resp.status_code == 200
    assert resp.json() == {
        "branch": None,
        "source": "local_default",
        "contribution_target": None,
        "github_repository": None,
    }


def test_empty_path_is_rejected():
    resp = _client(_FakeUseCase()).post("/contribution-target", json={"repository_path": "  "})
    assert resp.status_code == 422
    assert resp.json()["status"] == "error"
    assert "repository_path" in resp.json()["message"]


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (NotAGitRepositoryError("/tmp is not a git repository."), 422),
        (GitCommandError("git for-each-ref failed"), 502),
    ],
)
def test_domain_errors_use_error_envelope(error, status):
    resp = _client(_FakeUseCase(error=error)).post(
        "/contribution-target", json={"repository_path": "/tmp"}
    )
    assert resp.status_code == status
    assert resp.json() == {"status": "error", "message": str(error)}


def test_unexpected_errors_are_hidden():
    resp = _client(_FakeUseCase(error=RuntimeError("secret detail"))).post(
        "/contribution-target", json={"repository_path": "/tmp"}
    )
    assert resp.status_code == 500
    assert "secret detail" not in resp.json()["message"]


def test_health():
    assert _client(_FakeUseCase()).get("/health").json() == {"status": "ok"}


def test_error_responses_are_documented():
    responses = create_app().openapi()["paths"]["/contribution-target"]["post"]["responses"]
    for status in ("422", "502"):
        schema = responses[status]["content"]["application/json"]["schema"]
        assert schema["$ref"].endswith("/ErrorResponse")
