"""Canonicalization of user-supplied paths."""

from pathlib import Path

from loguru import logger

from git_home.config import GitHomeConfig
from git_home.exceptions import EncodingError, NotInHomeDirectory, ResolutionError


def canonicalize_path(path: str, config: GitHomeConfig) -> Path:
    """Resolve `path` and make sure it lives in the invoking user's home.

    The owner segment is the one at the position of the home directory's
    last component, so for a home of /home/alice the third segment of the
    resolved path must be "alice".

    Returns:
        The absolute, symlink-free path.
    """
    try:
        resolved = Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ResolutionError(f"Couldn't canonicalize path: {e}") from e

    try:
        str(resolved).encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError("could not convert path to string") from e

    home_parts = config.home_dir.resolve().parts
    owner_index = len(home_parts) - 1
    parts = resolved.parts

    if len(parts) <= owner_index or owner_index < 1:
        raise NotInHomeDirectory("Cannot use git home at top level of file system.")

    owner = parts[owner_index]
    if owner != config.username or parts[:owner_index] != home_parts[:owner_index]:
        raise NotInHomeDirectory(
            "git home should only be used on files in the users own home directory"
        )

    logger.debug(f"Canonicalized {path!r} to {resolved}")
    return resolved
