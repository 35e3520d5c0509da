"""Main CLI interface for git-home."""

import sys
from typing import List

import click
from loguru import logger
from rich.console import Console

from git_home.cli.usage import print_usage_for
from git_home.config import GitHomeConfig
from git_home.core.parser import parse_args
from git_home.core.workflow import Workflow
from git_home.exceptions import AbortedByUser, GitHomeError, UsageError
from git_home.logging_setup import setup_logging

RAW_ARGV_KEY = "git_home.argv"

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


class RawArgsCommand(click.Command):
    """Click command that keeps the argument vector untouched.

    click would swallow the `--` separator, which git-home needs to see.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.meta[RAW_ARGV_KEY] = list(args)
        return super().parse_args(ctx, [])


@click.command(
    cls=RawArgsCommand,
    context_settings={"help_option_names": [], "ignore_unknown_options": True},
)
@click.pass_context
def main(ctx: click.Context) -> None:
    """git-home - manage dotfiles in a bare git repository bound to $HOME."""
    argv = ctx.meta.get(RAW_ARGV_KEY, [])
    config = GitHomeConfig.from_env()
    setup_logging(config)
    logger.debug(f"Arguments: {argv}")

    try:
        command = parse_args(argv, config)
        status = Workflow(config, console=console).run(command)
    except UsageError as e:
        err_console.print(str(e), style="red", markup=False)
        print_usage_for(e.usage, console, config)
        sys.exit(e.exit_code)
    except AbortedByUser as e:
        console.print(str(e), markup=False)
        sys.exit(e.exit_code)
    except GitHomeError as e:
        err_console.print(str(e), style="red", markup=False)
        sys.exit(e.exit_code)

    sys.exit(status)


if __name__ == "__main__":
    main()
