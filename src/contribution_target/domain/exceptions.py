"""Domain exception hierarchy.

Inner layers raise these. Hosting-API errors are absorbed by the use case,
which then treats the repository as unhosted; git errors reach the
interface layer and are translated to HTTP responses there.

"No upstream branch" is never an exception: the resolvers represent it as
``None`` and fall back to the repository's own default branch.
"""

from __future__ import annotations


class ContributionTargetError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidGitHubUrlError(ContributionTargetError):
    """The supplied URL does not point to a GitHub repository."""


class InvalidRepositoryMetadataError(ContributionTargetError):
    """Hosting metadata is inconsistent (e.g. a fork without a parent)."""


# ── Local git errors ────────────────────────────────────────────────────────


class NotAGitRepositoryError(ContributionTargetError):
    """The supplied path is not inside a git working tree."""


class GitCommandError(ContributionTargetError):
    """A git process failed, timed out or could not be started."""

    def __init__(self, message: str, *, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryNotFoundError(ContributionTargetError):
    """The repository does not exist or is not accessible (404)."""


class RepositoryAccessDeniedError(ContributionTargetError):
    """Access to the repository was denied (403)."""


class GitHubRateLimitError(ContributionTargetError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class HostingApiError(ContributionTargetError):
    """Any other failure talking to the hosting API."""
