"""Tests for command-line parsing."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from git_home.config import GitHomeConfig
from git_home.core.parser import parse_args, split_passthrough
from git_home.exceptions import NotInHomeDirectory, UsageError
from git_home.models import (
    AddCommand,
    AddMode,
    CommitCommand,
    HelpCommand,
    InitCommand,
    LogCommand,
    NoneCommand,
    PassthroughCommand,
    StatusCommand,
)


@pytest.fixture
def home():
    """Create a temporary home directory with a couple of dotfiles."""
    with tempfile.TemporaryDirectory() as temp_dir:
        home_path = Path(temp_dir).resolve() / "alice"
        home_path.mkdir()
        (home_path / ".bashrc").write_text("export EDITOR=vim\n")
        (home_path / ".vimrc").write_text("set number\n")
        yield home_path


@pytest.fixture
def config(home):
    return GitHomeConfig(home=home, user="alice")


class TestSplitPassthrough:
    """Splitting at the first `--`."""

    def test_no_separator(self):
        assert split_passthrough(["status"]) == (["status"], None)

    def test_splits_at_first_separator_only(self):
        primary, forwarded = split_passthrough(["commit", "-m", "x", "--", "log", "--", "a"])

        assert primary == ["commit", "-m", "x"]
        assert forwarded == ["log", "--", "a"]

    def test_leading_separator_gives_empty_primary(self):
        assert split_passthrough(["--", "status", "-s"]) == ([], ["status", "-s"])

    def test_trailing_separator_forwards_nothing(self):
        assert split_passthrough(["status", "--"]) == (["status"], None)

    @pytest.mark.parametrize(
        "argv",
        [
            ["--", "log", "-1"],
            ["log", "--", "show", "HEAD"],
            ["add", "-u", "--", "diff", "--cached", "--stat"],
            ["unknown", "words", "--", "--", "--"],
        ],
    )
    def test_forwarded_tokens_are_verbatim(self, argv):
        index = argv.index("--")
        primary, forwarded = split_passthrough(argv)

        assert primary == argv[:index]
        assert forwarded == argv[index + 1 :]


class TestAdd:
    def test_paths_are_canonicalized(self, home, config, monkeypatch):
        monkeypatch.chdir(home)

        command = parse_args(["add", ".bashrc", str(home / ".vimrc")], config)

        assert command == AddCommand(
            mode=AddMode.NORMAL, paths=[home / ".bashrc", home / ".vimrc"]
        )

    @pytest.mark.parametrize("flag", ["-u", "--update", "--update-all"])
    def test_update_flag_selects_all_mode(self, config, flag):
        command = parse_args(["add", flag], config)

        assert command.mode == AddMode.ALL
        assert command.paths == []

    def test_no_paths_is_usage_error(self, config):
        with pytest.raises(UsageError) as exc_info:
            parse_args(["add"], config)

        assert exc_info.value.usage == "add"
        assert exc_info.value.exit_code == 64

    def test_update_with_paths_is_usage_error(self, home, config):
        with pytest.raises(UsageError):
            parse_args(["add", "-u", str(home / ".bashrc")], config)

    def test_path_outside_home_is_rejected(self, config):
        with pytest.raises(NotInHomeDirectory):
            parse_args(["add", "/"], config)


class TestSimpleCommands:
    def test_init(self, config):
        assert parse_args(["init"], config) == InitCommand()

    def test_init_with_arguments_is_usage_error(self, config):
        with pytest.raises(UsageError, match="init takes no args"):
            parse_args(["init", "now"], config)

    def test_log(self, config):
        assert parse_args(["log"], config) == LogCommand()

    def test_log_with_arguments_is_usage_error(self, config):
        with pytest.raises(UsageError):
            parse_args(["log", "-5"], config)

    def test_help(self, config):
        assert parse_args(["--help"], config) == HelpCommand()

    @pytest.mark.parametrize("argv", [[], ["bogus"], ["-h"], ["ADD"]])
    def test_unrecognized_is_none(self, config, argv):
        assert parse_args(argv, config) == NoneCommand()


class TestStatus:
    @pytest.mark.parametrize("colorterm", ["truecolor", "24bit"])
    def test_color_terminals(self, home, colorterm):
        config = GitHomeConfig(home=home, user="alice", colorterm=colorterm)

        assert parse_args(["status"], config) == StatusCommand(color=True)

    @pytest.mark.parametrize("colorterm", [None, "yes", "256color"])
    def test_other_terminals(self, home, colorterm):
        config = GitHomeConfig(home=home, user="alice", colorterm=colorterm)

        assert parse_args(["status"], config) == StatusCommand(color=False)


class TestCommit:
    def test_no_arguments_means_editor(self, config):
        assert parse_args(["commit"], config) == CommitCommand(message=None)

    @pytest.mark.parametrize(
        "argv, message",
        [
            (["commit", "-m", "fix typo"], "fix typo"),
            (["commit", "-mfix typo"], "fix typo"),
            (["commit", "--message=fix typo"], "fix typo"),
            (["commit", "--message=a=b"], "a=b"),
            (["commit", "fix typo"], "fix typo"),
        ],
    )
    def test_message_forms(self, config, argv, message):
        assert parse_args(argv, config) == CommitCommand(message=message)

    def test_m_without_value(self, config):
        with pytest.raises(UsageError) as exc_info:
            parse_args(["commit", "-m"], config)

        assert exc_info.value.usage == "commit"

    def test_extra_arguments(self, config):
        with pytest.raises(UsageError):
            parse_args(["commit", "-m", "one", "two"], config)

    def test_unknown_option(self, config):
        with pytest.raises(UsageError, match="unknown option"):
            parse_args(["commit", "--amend"], config)


class TestPassthrough:
    def test_commit_then_forward(self, config):
        command = parse_args(["commit", "-m", "fix typo", "--", "log", "-1"], config)

        assert command == PassthroughCommand(
            prefix=CommitCommand(message="fix typo"), tokens=["log", "-1"]
        )

    def test_pure_forwarding(self, config):
        command = parse_args(["--", "status"], config)

        assert command == PassthroughCommand(prefix=None, tokens=["status"])

    def test_unrecognized_prefix_is_dropped(self, config):
        command = parse_args(["bogus", "--", "status"], config)

        assert command.prefix is None
        assert command.tokens == ["status"]

    def test_help_prefix(self, config):
        command = parse_args(["--help", "--", "version"], config)

        assert command.prefix == HelpCommand()

    def test_separator_alone_is_none(self, config):
        assert parse_args(["--"], config) == NoneCommand()

    def test_prefix_errors_surface_at_parse_time(self, config):
        with pytest.raises(UsageError):
            parse_args(["add", "--", "status"], config)


class TestCommandModels:
    def test_passthrough_cannot_nest(self):
        inner = PassthroughCommand(prefix=None, tokens=["status"])

        with pytest.raises(ValidationError):
            PassthroughCommand(prefix=inner, tokens=["log"])

    def test_passthrough_cannot_wrap_none(self):
        with pytest.raises(ValidationError):
            PassthroughCommand(prefix=NoneCommand(), tokens=["log"])

    def test_normal_add_requires_paths(self):
        with pytest.raises(ValidationError):
            AddCommand(mode=AddMode.NORMAL, paths=[])

    def test_all_add_carries_no_paths(self):
        with pytest.raises(ValidationError):
            AddCommand(mode=AddMode.ALL, paths=[Path("/home/alice/.bashrc")])

    def test_commands_are_immutable(self):
        command = CommitCommand(message="x")

        with pytest.raises(ValidationError):
            command.message = "y"
