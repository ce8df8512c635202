"""Errors raised by dotmenu commands; the CLI prints them and exits with status 1."""


class DotmenuError(Exception):
    """Base class; the message is shown to the operator as-is."""


class MissingEnvError(DotmenuError):
    """A ``DOTMENU_*`` variable names a path that is not a directory."""


class GitCommandError(DotmenuError):
    """A captured git call exited non-zero."""

    def __init__(self, command: list[str], returncode: int, stderr: str | None = None):
        self.command = command
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        subcommand = command[1] if len(command) > 1 else "git"
        message = f"ERROR: git {subcommand} exited with status {returncode}."
        if self.stderr:
            message = f"{message}\n{self.stderr}"
        super().__init__(message)


class ValidationError(DotmenuError):
    """Missing or malformed operator input (file, limit, repository, remote)."""


class UserAbort(DotmenuError):
    """The operator interrupted a confirmation prompt."""
