"""Data models for git-home."""

from .command import (
    AddCommand,
    AddMode,
    Command,
    CommitCommand,
    HelpCommand,
    InitCommand,
    LogCommand,
    NoneCommand,
    PassthroughCommand,
    PrimaryCommand,
    StatusCommand,
)
from .entry import LogEntry

__all__ = [
    "AddCommand",
    "AddMode",
    "Command",
    "CommitCommand",
    "HelpCommand",
    "InitCommand",
    "LogCommand",
    "LogEntry",
    "NoneCommand",
    "PassthroughCommand",
    "PrimaryCommand",
    "StatusCommand",
]
