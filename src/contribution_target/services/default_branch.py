"""Pick a repository's own default branch from its branch list."""

from __future__ import annotations

from typing import Sequence

from contribution_target.domain.entities import Branch, BranchesState, BranchType
from contribution_target.services.upstream_branch import find_remote_branch

FALLBACK_DEFAULT_BRANCH_NAME = "main"


def find_default_branch(
    branches: Sequence[Branch],
    default_branch_name: str,
    remote_name: str = "origin",
) -> Branch | None:
    """Prefer the local branch, then ``<remote_name>/<default_branch_name>``."""
    local = next(
        (b for b in branches if b.type is BranchType.LOCAL and b.name == default_branch_name),
        None,
    )
    if local is not None:
        return local
    return find_remote_branch(branches, remote_name, default_branch_name)


def build_branches_state(
    branches: Sequence[Branch],
    default_branch_name: str | None,
    remote_name: str = "origin",
) -> BranchesState:
    name = default_branch_name or FALLBACK_DEFAULT_BRANCH_NAME
    return BranchesState(
        all_branches=tuple(branches),
        default_branch=find_default_branch(branches, name, remote_name),
    )
