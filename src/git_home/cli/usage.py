"""Help texts for the git-home command line."""

from rich.console import Console

from git_home.config import DEFAULT_STORE_DIR, GitHomeConfig


def print_commit_usage(console: Console) -> None:
    console.print(
        "Usage: \n"
        "\tgit home commit <command>\n"
        "\n"
        "Options: \n"
        '\t[-m | --message=]"message":\n'
        "\t\t Commits index to working head with message.",
        markup=False,
    )


def print_add_help(console: Console) -> None:
    console.print("git home add <file>... | -u | --update", markup=False)


def print_usage(console: Console, config: GitHomeConfig) -> None:
    if config.store_override is not None:
        git_dir = str(config.store_override)
    else:
        git_dir = f"$HOME/{DEFAULT_STORE_DIR} (default value)"

    console.print(
        "Usage:\n"
        "\tgit home [command] <args>\n"
        "Commands:\n"
        "\t    add: add a file to the git_home repo.\n"
        "\t status: print status of files in the index.\n"
        "\t   init: initialize a new home repo.\n"
        "\t commit: commit current index to repository.\n"
        "\t    log: prints a log of the last commit.\n"
        "\t --help: prints this help dialog.\n"
        "\t     --: passes any commands following the double dashes to git.\n"
        "\t         any command preceding the double dash will be executed first.\n"
        "\n"
        "\t\t For example, to commit your changes and then see a log of\n"
        "\t\t your commit history you could run:\n"
        "\n"
        '\t\t\t git home commit -m "some message" -- log -1\n'
        "\n"
        "Global Variables:\n"
        f"\tGIT_HOME_DIR: {git_dir}",
        markup=False,
    )


USAGE_PRINTERS = {
    "add": lambda console, config: print_add_help(console),
    "commit": lambda console, config: print_commit_usage(console),
    "general": print_usage,
}


def print_usage_for(name: str, console: Console, config: GitHomeConfig) -> None:
    USAGE_PRINTERS.get(name, print_usage)(console, config)
