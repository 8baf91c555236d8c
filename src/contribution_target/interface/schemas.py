"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from contribution_target.domain.entities import Branch, BranchType, ForkContributionTarget


class ContributionTargetRequest(BaseModel):
    """Request body for ``POST /contribution-target``."""

    repository_path: str
    fork_contribution_target: ForkContributionTarget | None = None

    @field_validator("repository_path")
    @classmethod
    def _must_not_be_empty(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "repository_path must not be empty."
            raise ValueError(msg)
        return stripped


class BranchModel(BaseModel):
    name: str
    type: BranchType
    upstream: str | None = None
    tip: str | None = None
    ref: str = ""

    @classmethod
    def from_branch(cls, branch: Branch) -> BranchModel:
        return cls(
            name=branch.name,
            type=branch.type,
            upstream=branch.upstream,
            tip=branch.tip,
            ref=branch.ref,
        )


class ContributionTargetResponse(BaseModel):
    """Successful response from ``POST /contribution-target``."""

    branch: BranchModel | None
    source: str
    contribution_target: ForkContributionTarget | None = None
    github_repository: str | None = None


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
