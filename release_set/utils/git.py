"""Remote tag listing through the git command line."""

import asyncio
import logging
import os
from typing import List, Tuple

logger = logging.getLogger(__name__)


class GitError(Exception):
    """git could not be run or exited with an error."""


async def ls_remote_tags(repository_url: str, timeout: float = 60.0) -> List[Tuple[str, str]]:
    """
    List the tags of a remote repository.

    Returns (object hash, ref name) pairs exactly as `git ls-remote --tags`
    prints them, peeled `^{}` entries included.

    Raises:
        GitError: If git is missing, fails, or runs past the timeout.
    """
    logger.debug("git ls-remote --tags %s", repository_url)

    try:
        proc = await asyncio.create_subprocess_exec(
            "git", "ls-remote", "--tags", repository_url,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        )
    except OSError as e:
        raise GitError(f"cannot run git: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise GitError(f"git ls-remote timed out after {timeout:g}s")

    if proc.returncode != 0:
        message = stderr.decode(errors="replace").strip() or f"exit code {proc.returncode}"
        raise GitError(message)

    refs = []
    for line in stdout.decode(errors="replace").splitlines():
        if not line.strip():
            continue
        object_hash, _, ref = line.partition("\t")
        refs.append((object_hash.strip(), ref.strip()))
    return refs
