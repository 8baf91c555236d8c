"""Port: remote HEAD reader — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from contribution_target.domain.entities import Repository


class RemoteHeadReader(Protocol):
    """Abstract contract for inspecting the symbolic HEAD of a remote."""

    async def get_remote_head(self, repository: Repository, remote_name: str) -> str | None:
        """Return the branch name ``remote_name`` advertises as its default.

        ``None`` means unknown: the remote has no HEAD recorded locally or is
        unreachable. Faults (e.g. the git process cannot be started) raise.
        """
        ...
