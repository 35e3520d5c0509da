"""Parsed command variants for git-home."""

from enum import Enum
from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


class AddMode(str, Enum):
    """How `add` selects the files it stages."""

    NORMAL = "normal"
    ALL = "all"


class AddCommand(BaseModel):
    """Stage the given files, or every modified tracked file."""

    kind: Literal["add"] = "add"
    mode: AddMode = AddMode.NORMAL
    paths: List[Path] = []

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_paths(self) -> "AddCommand":
        if self.mode == AddMode.NORMAL and not self.paths:
            raise ValueError("add needs at least one path")
        if self.mode == AddMode.ALL and self.paths:
            raise ValueError("add --update takes no paths")
        return self


class InitCommand(BaseModel):
    kind: Literal["init"] = "init"

    model_config = {"frozen": True}


class StatusCommand(BaseModel):
    kind: Literal["status"] = "status"
    color: bool = False

    model_config = {"frozen": True}


class CommitCommand(BaseModel):
    """Commit the index; a missing message means ask the editor for one."""

    kind: Literal["commit"] = "commit"
    message: Optional[str] = None

    model_config = {"frozen": True}


class LogCommand(BaseModel):
    kind: Literal["log"] = "log"

    model_config = {"frozen": True}


class HelpCommand(BaseModel):
    kind: Literal["help"] = "help"

    model_config = {"frozen": True}


class NoneCommand(BaseModel):
    """Unrecognized or missing command keyword."""

    kind: Literal["none"] = "none"

    model_config = {"frozen": True}


PrimaryCommand = Annotated[
    Union[AddCommand, InitCommand, StatusCommand, CommitCommand, LogCommand, HelpCommand],
    Field(discriminator="kind"),
]


class PassthroughCommand(BaseModel):
    """Run `prefix` (if any), then forward `tokens` to git verbatim.

    `prefix` can never be another pass-through, which keeps nesting at one
    level.
    """

    kind: Literal["passthrough"] = "passthrough"
    prefix: Optional[PrimaryCommand] = None
    tokens: List[str]

    model_config = {"frozen": True}


Command = Union[
    AddCommand,
    InitCommand,
    StatusCommand,
    CommitCommand,
    LogCommand,
    HelpCommand,
    NoneCommand,
    PassthroughCommand,
]
