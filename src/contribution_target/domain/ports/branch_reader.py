"""Port: branch reader — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from contribution_target.domain.entities import Branch, Repository


class BranchReader(Protocol):
    """Abstract contract for reading branches and remotes of a local repository."""

    async def list_branches(self, repository: Repository) -> list[Branch]:
        """Return every local and remote-tracking branch, in ref order."""
        ...

    async def get_remote_url(self, repository: Repository, remote_name: str) -> str | None:
        """Return the fetch URL of ``remote_name``, or ``None`` if not configured."""
        ...

    async def get_configured_default_branch(self, repository: Repository) -> str | None:
        """Return ``init.defaultBranch`` from git config, if set."""
        ...
