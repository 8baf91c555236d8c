"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from contribution_target.domain.entities import ForkContributionTarget
from contribution_target.domain.value_objects import UpstreamTarget
from contribution_target.interface.dependencies import get_use_case
from contribution_target.interface.schemas import (
    BranchModel,
    ContributionTargetRequest,
    ContributionTargetResponse,
    ErrorResponse,
)
from contribution_target.services.resolve_default_branch import ResolveDefaultBranchUseCase

router = APIRouter()


@router.post(
    "/contribution-target",
    response_model=ContributionTargetResponse,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Path is not a git repository or the request is invalid",
        },
        502: {"model": ErrorResponse, "description": "A git command failed or timed out"},
    },
)
async def contribution_target(
    body: ContributionTargetRequest,
    use_case: ResolveDefaultBranchUseCase = Depends(get_use_case),
) -> ContributionTargetResponse:
    """Return the default branch of the repository the user contributes to."""
    report = await use_case.execute(body.repository_path, body.fork_contribution_target)

    target: ForkContributionTarget | None = None
    if report.contribution_target is not None:
        target = (
            ForkContributionTarget.PARENT
            if isinstance(report.contribution_target, UpstreamTarget)
            else ForkContributionTarget.SELF
        )

    branch = report.resolution.branch
    github_repository = report.repository.github_repository
    return ContributionTargetResponse(
        branch=BranchModel.from_branch(branch) if branch else None,
        source=report.resolution.source.value,
        contribution_target=target,
        github_repository=github_repository.full_name if github_repository else None,
    )
