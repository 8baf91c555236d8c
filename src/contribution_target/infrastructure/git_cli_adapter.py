"""Git CLI adapter — implements the RemoteHeadReader and BranchReader ports."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

from contribution_target.domain.entities import Branch, BranchType, Repository
from contribution_target.domain.exceptions import GitCommandError, NotAGitRepositoryError

logger = logging.getLogger(__name__)

_HEADS = "refs/heads/"
_REMOTES = "refs/remotes/"

# full ref, short name, upstream short name, tip sha; NUL separated
_FOR_EACH_REF_FORMAT = "%(refname)%00%(refname:short)%00%(upstream:short)%00%(objectname)"


@dataclass(frozen=True, slots=True)
class GitResult:
    exit_code: int
    stdout: str
    stderr: str


class GitCliAdapter:
    """Concrete adapter that shells out to the ``git`` executable."""

    def __init__(self, git_executable: str = "git", timeout: float | None = 30.0) -> None:
        self._git = git_executable
        self._timeout = timeout

    # ── RemoteHeadReader ────────────────────────────────────────────────

    async def get_remote_head(self, repository: Repository, remote_name: str) -> str | None:
        """Read ``refs/remotes/<remote>/HEAD`` without touching the network.

        Exit code 1 (not a symbolic ref) and 128 (no such ref) mean the HEAD
        is unknown, not that git failed.
        """
        namespace = f"{_REMOTES}{remote_name}/"
        result = await self._run(
            repository,
            ["symbolic-ref", "-q", f"{namespace}HEAD"],
            success_exit_codes={0, 1, 128},
        )
        stdout = result.stdout.strip()
        if result.exit_code == 0 and len(stdout) > len(namespace):
            return stdout[len(namespace):]
        return None

    # ── BranchReader ────────────────────────────────────────────────────

    async def list_branches(self, repository: Repository) -> list[Branch]:
        """``git for-each-ref`` over local heads and remote-tracking refs."""
        result = await self._run(
            repository,
            ["for-each-ref", f"--format={_FOR_EACH_REF_FORMAT}", "refs/heads", "refs/remotes"],
        )
        return parse_for_each_ref(result.stdout)

    async def get_remote_url(self, repository: Repository, remote_name: str) -> str | None:
        # exit code 2 from ``git remote get-url`` means no such remote
        result = await self._run(
            repository, ["remote", "get-url", remote_name], success_exit_codes={0, 2}
        )
        url = result.stdout.strip()
        return url if result.exit_code == 0 and url else None

    async def get_configured_default_branch(self, repository: Repository) -> str | None:
        result = await self._run(
            repository, ["config", "--get", "init.defaultBranch"], success_exit_codes={0, 1}
        )
        name = result.stdout.strip()
        return name if result.exit_code == 0 and name else None

    # ── Process plumbing ────────────────────────────────────────────────

    async def _run(
        self,
        repository: Repository,
        args: list[str],
        success_exit_codes: set[int] | None = None,
    ) -> GitResult:
        """Run git in ``repository.path`` and translate failures to domain errors."""
        if not os.path.isdir(repository.path):
            raise NotAGitRepositoryError(f"{repository.path} is not a directory.")

        success_exit_codes = success_exit_codes or {0}
        command = [self._git, *args]
        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                cwd=repository.path,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise GitCommandError(
                f"Could not run '{self._git}' in {repository.path}: {exc}"
            ) from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise GitCommandError(
                f"git {' '.join(args)} timed out after {self._timeout}s in {repository.path}"
            ) from exc

        result = GitResult(
            exit_code=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
        if result.exit_code in success_exit_codes:
            return result

        logger.debug(
            "git %s exited with %d in %s: %s",
            " ".join(args),
            result.exit_code,
            repository.path,
            result.stderr.strip(),
        )
        if "not a git repository" in result.stderr.lower():
            raise NotAGitRepositoryError(f"{repository.path} is not a git repository.")
        raise GitCommandError(
            f"git {' '.join(args)} failed with exit code {result.exit_code}",
            exit_code=result.exit_code,
            stderr=result.stderr,
        )


def parse_for_each_ref(output: str) -> list[Branch]:
    """Parse :data:`_FOR_EACH_REF_FORMAT` lines into branches.

    Symbolic ``refs/remotes/<remote>/HEAD`` entries are skipped.
    """
    branches: list[Branch] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\0")
        if len(parts) < 4:
            logger.debug("Skipping malformed for-each-ref line: %r", line)
            continue
        ref, short_name, upstream, tip = parts[:4]

        if ref.startswith(_HEADS):
            branch_type = BranchType.LOCAL
            name = ref[len(_HEADS):]
        elif ref.startswith(_REMOTES):
            if ref.endswith("/HEAD"):
                continue
            branch_type = BranchType.REMOTE
            name = ref[len(_REMOTES):]
        else:
            continue

        branches.append(
            Branch(
                name=name or short_name,
                type=branch_type,
                upstream=upstream or None,
                tip=tip or None,
                ref=ref,
            )
        )
    return branches
