"""Argument parsing for `git home`."""

from typing import List, Optional, Sequence, Tuple

from loguru import logger

from git_home.config import GitHomeConfig
from git_home.core.paths import canonicalize_path
from git_home.exceptions import UsageError
from git_home.models import (
    AddCommand,
    AddMode,
    Command,
    CommitCommand,
    HelpCommand,
    InitCommand,
    LogCommand,
    NoneCommand,
    PassthroughCommand,
    StatusCommand,
)

PASSTHROUGH_SEPARATOR = "--"


def split_passthrough(argv: Sequence[str]) -> Tuple[List[str], Optional[List[str]]]:
    """Split `argv` at the first literal `--`.

    Returns:
        The primary arguments and the tokens to forward, or None when there is
        nothing to forward.
    """
    args = list(argv)
    if PASSTHROUGH_SEPARATOR not in args:
        return args, None

    index = args.index(PASSTHROUGH_SEPARATOR)
    forwarded = args[index + 1 :]
    return args[:index], forwarded or None


def _is_update_flag(token: str) -> bool:
    return token == "-u" or token.startswith("--update")


def parse_add(args: List[str], config: GitHomeConfig) -> AddCommand:
    if not args:
        raise UsageError("Nothing specified, nothing added.", usage="add")

    if _is_update_flag(args[0]):
        if len(args) > 1:
            raise UsageError("add --update takes no paths.", usage="add")
        return AddCommand(mode=AddMode.ALL)

    paths = [canonicalize_path(arg, config) for arg in args]
    return AddCommand(mode=AddMode.NORMAL, paths=paths)


def parse_commit(args: List[str]) -> CommitCommand:
    if not args:
        return CommitCommand(message=None)

    first, rest = args[0], args[1:]
    if first == "-m":
        if not rest:
            raise UsageError("switch `m' requires a value", usage="commit")
        message, rest = rest[0], rest[1:]
    elif first.startswith("--message="):
        message = first.partition("=")[2]
    elif first.startswith("-m"):
        message = first[2:]
    elif first.startswith("-"):
        raise UsageError(f"unknown option: {first}", usage="commit")
    else:
        message = first

    if rest:
        raise UsageError("commit takes a single message.", usage="commit")
    return CommitCommand(message=message)


def _reject_trailing(name: str, args: List[str]) -> None:
    if args:
        raise UsageError(f"home {name} takes no args.")


def parse_primary(args: List[str], config: GitHomeConfig) -> Command:
    """Parse the arguments in front of `--` into a single command."""
    if not args:
        return NoneCommand()

    keyword, rest = args[0], args[1:]
    if keyword == "add":
        return parse_add(rest, config)
    if keyword == "init":
        _reject_trailing("init", rest)
        return InitCommand()
    if keyword == "status":
        _reject_trailing("status", rest)
        return StatusCommand(color=config.color_enabled)
    if keyword == "commit":
        return parse_commit(rest)
    if keyword == "log":
        _reject_trailing("log", rest)
        return LogCommand()
    if keyword == "--help":
        return HelpCommand()

    logger.debug(f"Unrecognized command {keyword!r}")
    return NoneCommand()


def parse_args(argv: Sequence[str], config: GitHomeConfig) -> Command:
    """Convert the arguments after the program name into a command."""
    primary, forwarded = split_passthrough(argv)
    command = parse_primary(primary, config)

    if forwarded is None:
        return command

    prefix = None if isinstance(command, NoneCommand) else command
    return PassthroughCommand(prefix=prefix, tokens=forwarded)
