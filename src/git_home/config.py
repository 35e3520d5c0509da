"""Environment-derived configuration for git-home."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel

from git_home.exceptions import MissingEnvironmentError

DEFAULT_STORE_DIR = Path(".config") / "git_home"
COLOR_TERMS = ("truecolor", "24bit")


class GitHomeConfig(BaseModel):
    """Settings read once per invocation from the process environment."""

    home: Optional[Path] = None
    user: Optional[str] = None
    store_override: Optional[Path] = None
    colorterm: Optional[str] = None
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GitHomeConfig":
        env = os.environ if environ is None else environ
        return cls(
            home=env.get("HOME") or None,
            user=env.get("USER") or None,
            store_override=env.get("GIT_HOME_DIR") or None,
            colorterm=env.get("COLORTERM") or None,
            log_level=env.get("GIT_HOME_LOG_LEVEL", "WARNING").upper(),
            log_file=env.get("GIT_HOME_LOG_FILE") or None,
        )

    @property
    def home_dir(self) -> Path:
        """The work-tree every store is bound to."""
        if self.home is None:
            raise MissingEnvironmentError("Could not get value of $HOME.")
        return self.home

    @property
    def username(self) -> str:
        if self.user is None:
            raise MissingEnvironmentError("$USER not set.")
        return self.user

    @property
    def store_dir(self) -> Path:
        """Location of the bare store: $GIT_HOME_DIR, else ~/.config/git_home."""
        if self.store_override is not None:
            return self.store_override
        return self.home_dir / DEFAULT_STORE_DIR

    @property
    def color_enabled(self) -> bool:
        return self.colorterm in COLOR_TERMS
