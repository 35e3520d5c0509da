"""Exception classes for git-home.

Every error carries the exit status the command line reports for it, so the
CLI is the single place that turns failures into output.
"""

EX_OK = 0
EX_FAILURE = 1
EX_USAGE = 64
EX_IOERR = 74


class GitHomeError(Exception):
    """Base exception for all git-home errors."""

    exit_code = EX_FAILURE


class UsageError(GitHomeError):
    """Raised when a command is given malformed or missing arguments."""

    exit_code = EX_USAGE

    def __init__(self, message: str, usage: str = "general"):
        super().__init__(message)
        self.usage = usage


class PermissionScopeError(GitHomeError):
    """Raised when a path lies outside the invoking user's home tree."""

    exit_code = EX_USAGE


class NotInHomeDirectory(PermissionScopeError):
    pass


class MissingEnvironmentError(GitHomeError):
    """Raised when a required environment variable is not set."""

    exit_code = EX_FAILURE


class ResolutionError(GitHomeError):
    """Raised when a path does not exist or cannot be canonicalized."""

    exit_code = EX_IOERR


class EncodingError(GitHomeError):
    """Raised when a resolved path cannot be represented as text."""

    exit_code = EX_IOERR


class BackendError(GitHomeError):
    """Raised when the store cannot be opened, written or committed to."""

    exit_code = EX_IOERR


class StoreExistsError(BackendError):
    pass


class NoIdentityConfigured(BackendError):
    """Raised when user.name or user.email is missing from git configuration."""


class EditorError(GitHomeError):
    exit_code = EX_FAILURE


class AbortedByUser(GitHomeError):
    """Raised when the user declines a prompt or leaves the commit message empty."""

    def __init__(self, message: str, exit_code: int = EX_OK):
        super().__init__(message)
        self.exit_code = exit_code
