"""Bare git store bound to the user's home directory."""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import click
import git
from git import Actor, Repo
from loguru import logger

from git_home.config import GitHomeConfig
from git_home.exceptions import (
    EX_FAILURE,
    AbortedByUser,
    BackendError,
    NoIdentityConfigured,
    StoreExistsError,
)
from git_home.models import LogEntry

Confirm = Callable[[str], bool]


class StatusScope(str, Enum):
    """Which pair of trees `status` compares."""

    WORKTREE = "worktree"  # working tree vs. index
    INDEX = "index"  # index vs. HEAD


def resolve_store_dir(config: GitHomeConfig) -> Path:
    return config.store_dir.expanduser().absolute()


def default_confirm(prompt: str) -> bool:
    return click.confirm(prompt, default=False)


class RepositorySession:
    """An opened store plus the git command wrapper bound to $HOME.

    The store is bare, so GitPython's `Repo` is used for objects, refs and
    configuration while everything that touches the work-tree goes through
    a `git.Git` wrapper carrying GIT_DIR and GIT_WORK_TREE.
    """

    def __init__(self, repo: Repo, store_dir: Path, work_tree: Path):
        self.repo = repo
        self.store_dir = store_dir
        self.work_tree = work_tree
        self.git = git.Git(str(work_tree))
        self.git.update_environment(
            GIT_DIR=str(store_dir), GIT_WORK_TREE=str(work_tree)
        )

    @classmethod
    def open(
        cls, config: GitHomeConfig, confirm: Optional[Confirm] = None
    ) -> "RepositorySession":
        """Open the store, offering to create it when it does not exist yet."""
        confirm = confirm or default_confirm
        store_dir = resolve_store_dir(config)
        work_tree = config.home_dir.resolve()

        try:
            repo = Repo(store_dir)
        except (git.exc.NoSuchPathError, git.exc.InvalidGitRepositoryError):
            logger.debug(f"No store at {store_dir}")
            if not confirm(f"Git home repo doesn't exist, create one now at {store_dir}?"):
                raise AbortedByUser(
                    "You can create a new repository at any time by running "
                    "'git home init'.",
                    exit_code=EX_FAILURE,
                )
            click.echo(f"Creating git home repo: {store_dir}.")
            repo = cls._create_store(store_dir, work_tree)

        logger.debug(f"Opened store {store_dir} with work-tree {work_tree}")
        return cls(repo, store_dir, work_tree)

    @classmethod
    def init_store(cls, config: GitHomeConfig) -> Repo:
        """Create a new bare store, refusing to touch an existing one."""
        store_dir = resolve_store_dir(config)
        if store_exists(store_dir):
            raise StoreExistsError(f"Git home repo already exists at {store_dir}.")
        if store_dir.exists() and any(store_dir.iterdir()):
            raise StoreExistsError(
                f"Directory {store_dir} already exists and is not empty."
            )
        return cls._create_store(store_dir, config.home_dir.resolve())

    @staticmethod
    def _create_store(store_dir: Path, work_tree: Path) -> Repo:
        try:
            repo = Repo.init(store_dir, mkdir=True, bare=True)
            _exclude_store(store_dir, work_tree)
        except (OSError, git.exc.GitCommandError) as e:
            raise BackendError(
                f"Could not initialize git_home directory at {store_dir}: {e}"
            ) from e
        logger.info(f"Created bare store at {store_dir}")
        return repo

    def _relative(self, path: Path) -> str:
        try:
            return str(Path(path).relative_to(self.work_tree))
        except ValueError as e:
            raise BackendError(f"{path} is outside of {self.work_tree}") from e

    def _check_stageable(self, path: Path) -> None:
        """Only regular files outside the store itself may enter the index."""
        resolved = Path(path).resolve()
        store = self.store_dir.resolve()
        if resolved == store or store in resolved.parents or resolved in store.parents:
            raise BackendError(f"index error: {path} overlaps the git home store")
        if resolved.is_dir():
            raise BackendError(f"index error: {path} is a directory, add files instead")

    def stage(self, paths: Iterable[Path]) -> None:
        """Add `paths` to the index in one write.

        Each path must be a file; directories would pull in untracked files
        and, for the default location, the store's own contents.
        """
        paths = list(paths)
        for path in paths:
            self._check_stageable(path)
        relative = [self._relative(path) for path in paths]
        if not relative:
            return
        try:
            self.git.add("--", *relative)
        except git.exc.GitCommandError as e:
            raise BackendError(f"index error: {e}") from e
        logger.debug(f"Staged {len(relative)} path(s)")

    def stage_all_modified(self) -> List[str]:
        """Stage every tracked file that differs from the index."""
        modified = self.status(StatusScope.WORKTREE)
        if modified:
            try:
                self.git.add("--", *modified)
            except git.exc.GitCommandError as e:
                raise BackendError(f"index error: {e}") from e
        logger.debug(f"Staged {len(modified)} modified path(s)")
        return modified

    def status(self, scope: StatusScope) -> List[str]:
        """Changed tracked paths for `scope`; untracked files never appear."""
        args = ["--name-only", "-z", "--no-renames"]
        if scope == StatusScope.INDEX:
            args.insert(0, "--cached")
        try:
            output = self.git.diff(*args)
        except git.exc.GitCommandError as e:
            raise BackendError(f"Could not get repo status: {e}") from e
        return sorted(path for path in output.split("\0") if path)

    def has_history(self) -> bool:
        return self.repo.head.is_valid()

    def identity(self) -> Actor:
        """The signature configured for the store (repository, global or system)."""
        reader = self.repo.config_reader()
        name = reader.get_value("user", "name", default="")
        email = reader.get_value("user", "email", default="")
        if not name or not email:
            raise NoIdentityConfigured(
                "Unable to create a commit signature.\n"
                "Perhaps 'user.name' and 'user.email' are not set"
            )
        return Actor(str(name), str(email))

    def commit(self, message: str, allow_empty_parents: bool) -> LogEntry:
        """Turn the current index into a new commit and move HEAD to it."""
        actor = self.identity()
        parents = [] if allow_empty_parents else [self._head_commit()]

        try:
            tree_sha = self.git.write_tree()
            commit = git.Commit.create_from_tree(
                self.repo,
                self.repo.tree(tree_sha),
                message,
                parent_commits=parents,
                head=True,
                author=actor,
                committer=actor,
            )
        except (git.exc.GitCommandError, ValueError, OSError) as e:
            raise BackendError(f"Could not create commit: {e}") from e

        logger.debug(f"Created commit {commit.hexsha} with {len(parents)} parent(s)")
        return self._entry(commit)

    def last_entry(self) -> LogEntry:
        return self._entry(self._head_commit())

    def _head_commit(self) -> git.Commit:
        try:
            return self.repo.head.commit
        except (ValueError, git.exc.BadName) as e:
            raise BackendError(f"Unable to get HEAD: {e}") from e

    @staticmethod
    def _entry(commit: git.Commit) -> LogEntry:
        return LogEntry(
            id=commit.hexsha,
            author_name=commit.author.name or "",
            author_email=commit.author.email or "",
            timestamp=datetime.fromtimestamp(commit.authored_date).astimezone(),
            message=commit.message,
        )


def _exclude_store(store_dir: Path, work_tree: Path) -> None:
    """Hide a store that lives inside its own work-tree from git."""
    try:
        relative = store_dir.resolve().relative_to(work_tree)
    except ValueError:
        return
    exclude = store_dir / "info" / "exclude"
    exclude.parent.mkdir(parents=True, exist_ok=True)
    with exclude.open("a", encoding="utf-8") as f:
        f.write(f"/{relative.as_posix()}/\n")


def store_exists(store_dir: Path) -> bool:
    try:
        Repo(store_dir)
    except (git.exc.NoSuchPathError, git.exc.InvalidGitRepositoryError):
        return False
    return True

