"""Forwarding of raw tokens to the git executable."""

import subprocess
from typing import List, Optional, Sequence

from loguru import logger
from rich.console import Console

from git_home.config import GitHomeConfig
from git_home.core.session import resolve_store_dir
from git_home.exceptions import BackendError

GIT_EXECUTABLE = "git"


def build_invocation(config: GitHomeConfig, tokens: Sequence[str]) -> List[str]:
    """The git command line that runs `tokens` against the home store."""
    return [
        GIT_EXECUTABLE,
        "--no-pager",
        f"--git-dir={resolve_store_dir(config)}",
        f"--work-tree={config.home_dir}",
        "-c",
        "status.showUntrackedFiles=no",
        *tokens,
    ]


def forward(
    config: GitHomeConfig, tokens: Sequence[str], console: Optional[Console] = None
) -> int:
    """Run git with `tokens` and return its exit status.

    A child killed by a signal counts as success after a notice is printed.
    """
    cmd = build_invocation(config, tokens)
    logger.debug(f"Forwarding to git: {cmd}")

    try:
        result = subprocess.run(cmd, cwd=str(config.home_dir), check=False)  # noqa: S603
    except OSError as e:
        raise BackendError(f"Could not run {GIT_EXECUTABLE}: {e}") from e

    if result.returncode < 0:
        message = f"{GIT_EXECUTABLE} terminated by signal {-result.returncode}"
        (console or Console()).print(message)
        return 0
    return result.returncode
