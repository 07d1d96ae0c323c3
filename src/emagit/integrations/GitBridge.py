# emagit/integrations/GitBridge.py
"""GitBridge.py
========================
Module for running git on behalf of emagit.
This module is the backend for all git process work: it spawns git as an
asyncio subprocess in the repository root, captures its output, and raises
`GitProcessError` when git exits non-zero. It contains no UI-specific code.
Higher-level queries (config listing, refs, staged diff, recent commits)
are thin wrappers that return raw text or lightly parsed values for the
repository model and the terminal host.
"""

import asyncio
import logging
import os
import subprocess
import sys
from typing import TYPE_CHECKING, Optional

from emagit.errors import GitProcessError
from emagit.utils.logging_config import GIT_TRACE_LOGGER


if TYPE_CHECKING:
    from emagit.core.Repository import MagitRepository

logger = logging.getLogger("emagit")

GIT_EXECUTABLE = "git"
DEFAULT_EDITOR_ENV_VAR = "GIT_EDITOR"


def editor_command() -> str:
    """Command line git should use as its editor: emagit itself in wait mode."""
    return f'"{sys.executable}" -m emagit edit --wait'


async def git_run(
    repository: "MagitRepository",
    args: list[str],
    env: Optional[dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """Runs ``git <args>`` in the repository root and returns the completed process.

    ``env`` entries are layered over the current environment. The returned
    object carries decoded ``stdout``/``stderr``.

    Raises:
        GitProcessError: git exited non-zero or could not be started.
    """
    cmd = [GIT_EXECUTABLE, *args]
    process_env = {**os.environ, **env} if env else None
    GIT_TRACE_LOGGER.debug("run %s (cwd=%s, env=%s)", cmd, repository.root, env)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(repository.root),
            env=process_env,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        logger.error(f"Command not found: {cmd[0]!r}", exc_info=True)
        raise GitProcessError(cmd, 127, stderr=str(e)) from e

    stdout_bytes, stderr_bytes = await process.communicate()
    stdout = stdout_bytes.decode("utf-8", errors="replace")
    stderr = stderr_bytes.decode("utf-8", errors="replace")
    returncode = process.returncode if process.returncode is not None else -1

    GIT_TRACE_LOGGER.debug("exit %s for %s", returncode, cmd)
    if returncode != 0:
        logger.debug(f"git {' '.join(args)} failed ({returncode}): {stderr.strip()}")
        raise GitProcessError(cmd, returncode, stdout, stderr)

    return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)


async def read_config(repository: "MagitRepository") -> dict[str, str]:
    """Returns ``git config --list`` as a dict; later entries win, keys as git prints them."""
    result = await git_run(repository, ["config", "--list"])
    values: dict[str, str] = {}
    for line in result.stdout.splitlines():
        key, sep, value = line.partition("=")
        if sep:
            values[key] = value
        elif key:
            # A bare key is a boolean set to true.
            values[key] = "true"
    return values


async def list_refs(repository: "MagitRepository") -> list[tuple[str, str]]:
    """Returns ``(full refname, object id)`` pairs for branches, remotes and tags."""
    result = await git_run(
        repository,
        [
            "for-each-ref",
            "--format=%(refname)%00%(objectname)",
            "refs/heads",
            "refs/remotes",
            "refs/tags",
        ],
    )
    refs = []
    for line in result.stdout.splitlines():
        refname, _, commit = line.partition("\x00")
        if refname:
            refs.append((refname, commit))
    return refs


async def current_branch(repository: "MagitRepository") -> Optional[str]:
    """Name of the checked out branch, or None when HEAD is detached."""
    try:
        result = await git_run(repository, ["symbolic-ref", "--short", "-q", "HEAD"])
    except GitProcessError:
        return None
    return result.stdout.strip() or None


async def head_commit(repository: "MagitRepository") -> Optional[str]:
    """Object id of HEAD, or None in a repository without commits."""
    try:
        result = await git_run(repository, ["rev-parse", "--verify", "-q", "HEAD"])
    except GitProcessError:
        return None
    return result.stdout.strip() or None


async def staged_diff(repository: "MagitRepository") -> str:
    """Text of ``git diff --cached``."""
    result = await git_run(repository, ["diff", "--cached", "--no-color"])
    return result.stdout


async def recent_commits(
    repository: "MagitRepository", count: int = 50
) -> list[tuple[str, str]]:
    """Returns ``(sha, subject)`` for the last ``count`` commits reachable from HEAD."""
    try:
        result = await git_run(
            repository, ["log", f"-n{count}", "--format=%H%x00%s"]
        )
    except GitProcessError:
        return []
    commits = []
    for line in result.stdout.splitlines():
        sha, _, subject = line.partition("\x00")
        if sha:
            commits.append((sha, subject))
    return commits
