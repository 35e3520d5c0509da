"""Command dispatch for git-home."""

from enum import Enum
from typing import Callable, List, Optional

import click
from loguru import logger
from rich.console import Console

from git_home.cli.usage import print_usage
from git_home.config import GitHomeConfig
from git_home.core import passthrough
from git_home.core.session import (
    Confirm,
    RepositorySession,
    StatusScope,
    default_confirm,
    resolve_store_dir,
    store_exists,
)
from git_home.core.template import gen_commit_template, strip_commit_template
from git_home.exceptions import (
    EX_FAILURE,
    EX_OK,
    EX_USAGE,
    AbortedByUser,
    EditorError,
    StoreExistsError,
)
from git_home.models import (
    AddCommand,
    AddMode,
    Command,
    CommitCommand,
    HelpCommand,
    InitCommand,
    LogCommand,
    LogEntry,
    NoneCommand,
    PassthroughCommand,
    StatusCommand,
)

Editor = Callable[[str], Optional[str]]
Forwarder = Callable[..., int]


class WorkflowState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    ACTING = "acting"
    DONE = "done"


def _default_editor(template: str) -> Optional[str]:
    return click.edit(template, extension=".gitmessage")


class Workflow:
    """Runs one parsed command against the home store.

    Each `run` starts from IDLE; nothing carries over between invocations.
    """

    def __init__(
        self,
        config: GitHomeConfig,
        console: Optional[Console] = None,
        confirm: Optional[Confirm] = None,
        editor: Optional[Editor] = None,
        forwarder: Optional[Forwarder] = None,
    ):
        self.config = config
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.confirm = confirm or default_confirm
        self.editor = editor or _default_editor
        self.forwarder = forwarder or passthrough.forward
        self.state = WorkflowState.IDLE

    def _transition(self, state: WorkflowState) -> None:
        logger.debug(f"Workflow {self.state.value} -> {state.value}")
        self.state = state

    def run(self, command: Command) -> int:
        """Execute `command` and return the process exit status."""
        self.state = WorkflowState.IDLE
        try:
            return self._dispatch(command)
        finally:
            self._transition(WorkflowState.DONE)

    def _dispatch(self, command: Command) -> int:
        if isinstance(command, PassthroughCommand):
            return self.run_passthrough(command)
        if isinstance(command, AddCommand):
            return self.run_add(command)
        if isinstance(command, InitCommand):
            return self.run_init()
        if isinstance(command, StatusCommand):
            return self.run_status(command)
        if isinstance(command, CommitCommand):
            return self.run_commit(command)
        if isinstance(command, LogCommand):
            return self.run_log()
        if isinstance(command, HelpCommand):
            print_usage(self.console, self.config)
            return EX_OK
        if isinstance(command, NoneCommand):
            print_usage(self.console, self.config)
            return EX_USAGE
        raise TypeError(f"Unhandled command: {command!r}")

    def _open_session(self) -> RepositorySession:
        self._transition(WorkflowState.RESOLVING)
        session = RepositorySession.open(self.config, confirm=self.confirm)
        self._transition(WorkflowState.ACTING)
        return session

    def run_add(self, command: AddCommand) -> int:
        session = self._open_session()
        if command.mode == AddMode.ALL:
            session.stage_all_modified()
        else:
            session.stage(command.paths)
        return EX_OK

    def run_init(self) -> int:
        self._transition(WorkflowState.RESOLVING)
        store_dir = resolve_store_dir(self.config)
        if store_exists(store_dir):
            raise StoreExistsError(f"Git home repo already exists at {store_dir}.")
        if not self.confirm(f"Create git home repo at {store_dir}?"):
            self.console.print("No repository created.")
            return EX_OK

        self._transition(WorkflowState.ACTING)
        RepositorySession.init_store(self.config)
        self.console.print(
            f"Initialized empty git home repository in {store_dir}", markup=False
        )
        return EX_OK

    def run_status(self, command: StatusCommand) -> int:
        session = self._open_session()
        unstaged = session.status(StatusScope.WORKTREE)
        staged = session.status(StatusScope.INDEX)

        if not unstaged and not staged:
            self.console.print("Git home is up to date.")
            return EX_OK

        if unstaged:
            self._print_section(
                "Changes not staged for commit:", unstaged, "yellow", command.color
            )
        if staged:
            self._print_section(
                "Changes to be committed:", staged, "green", command.color
            )
        return EX_OK

    def _print_section(
        self, title: str, paths: List[str], style: str, color: bool
    ) -> None:
        self.console.print(title)
        for path in paths:
            self.console.print(
                f"\t{path}", style=style if color else None, markup=False
            )

    def run_commit(self, command: CommitCommand) -> int:
        session = self._open_session()

        message = command.message
        if message is None:
            message = self._message_from_editor(session)

        bootstrap = not session.has_history()
        entry = session.commit(message, allow_empty_parents=bootstrap)

        label = " (root-commit)" if bootstrap else ""
        self.console.print(f"[{entry.short_id}{label}] {entry.subject}", markup=False)
        return EX_OK

    def _message_from_editor(self, session: RepositorySession) -> str:
        template = gen_commit_template(
            staged=session.status(StatusScope.INDEX),
            unstaged=session.status(StatusScope.WORKTREE),
        )
        try:
            edited = self.editor(template)
        except click.ClickException as e:
            raise EditorError(e.format_message()) from e

        message = strip_commit_template(edited)
        if not message.strip():
            raise AbortedByUser("Commit aborted", exit_code=EX_FAILURE)
        return message

    def run_log(self) -> int:
        session = self._open_session()
        self.render_entry(session.last_entry())
        return EX_OK

    def render_entry(self, entry: LogEntry) -> None:
        timestamp = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S %z")
        self.console.print(
            f"commit {entry.id}\n"
            f"Author: {entry.author}\n"
            f"Date: {timestamp}\n"
            "\n"
            f"   {entry.message.rstrip()}\n",
            markup=False,
        )

    def run_passthrough(self, command: PassthroughCommand) -> int:
        prefix = command.prefix
        if isinstance(prefix, PassthroughCommand):
            logger.warning("Nested pass-through prefix ignored, forwarding tokens only")
            print_usage(self.console, self.config)
        elif prefix is not None:
            status = self._dispatch(prefix)
            if status != EX_OK:
                return status

        self._transition(WorkflowState.ACTING)
        return self.forwarder(self.config, command.tokens, self.console)
