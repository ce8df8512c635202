"""Load environment variables and resolve the working repository."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from .exceptions import GitCommandError, MissingEnvError, ValidationError
from .git import rev_parse_toplevel

DEFAULT_DOTFILES_DIR = "~/.bash"
DEFAULT_GIT_HOOKS_DIR = "~/.git_template/hooks/extensions"
DEFAULT_LOG_LIMIT = 25
DEFAULT_RAILS_BRANCH = "master"

# scheme://[user@]host[:port]/path or user@host:path, with an optional ".git"
_REMOTE = re.compile(
    r"^(?:[a-z][a-z0-9+.-]*://)?(?:[^@/]+@)?(?P<host>[^:/@]+)(?::\d+)?[:/](?P<path>.+?)(?:\.git)?/?$"
)


@dataclass(frozen=True)
class Settings:
    """Runtime knobs read from ``DOTMENU_*`` variables."""

    dotfiles_dir: Path
    git_hooks_dir: Path
    log_limit: int
    rails_branch: str

    @property
    def aliases_file(self) -> Path:
        return self.dotfiles_dir / "aliases.sh"

    @property
    def functions_file(self) -> Path:
        return self.dotfiles_dir / "functions-public.sh"


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        dotfiles_dir=_env_path(env, "DOTMENU_DOTFILES_DIR", DEFAULT_DOTFILES_DIR),
        git_hooks_dir=_env_path(env, "DOTMENU_GIT_HOOKS_DIR", DEFAULT_GIT_HOOKS_DIR),
        log_limit=_env_int(env, "DOTMENU_LOG_LIMIT", DEFAULT_LOG_LIMIT),
        rails_branch=env.get("DOTMENU_RAILS_BRANCH") or DEFAULT_RAILS_BRANCH,
    )


def resolve_repo_path(repo_override: Path | None) -> Path:
    """Top level of the repository at ``--repo`` or the current directory."""

    start = repo_override.expanduser() if repo_override else Path.cwd()
    if not start.is_dir():
        raise ValidationError(f"ERROR: --repo must name an existing directory: {start}")
    try:
        return rev_parse_toplevel(start)
    except GitCommandError as exc:
        logger.debug("rev-parse failed in {}: {}", start, exc.stderr)
        raise ValidationError("ERROR: Not a Git repository!") from exc


def repository_web_url(remote: str) -> str:
    """Turn an ssh or https remote into the repository's web address."""

    host, owner, name = parse_remote(remote)
    return f"https://{host}/{owner}/{name}"


def parse_remote(remote: str) -> tuple[str, str, str]:
    """Split a remote such as ``git@github.com:octo/dotfiles.git`` into host, owner and name."""

    match = _REMOTE.match(remote.strip())
    if not match:
        raise ValidationError(f"ERROR: Can't derive a web address from remote {remote!r}.")
    segments = match.group("path").split("/")
    if len(segments) < 2 or not all(segments[-2:]):
        raise ValidationError(f"ERROR: Remote {remote!r} has no owner/repository path.")
    return match.group("host"), segments[-2], segments[-1]


def _env_path(env, var: str, default: str) -> Path:
    raw = env.get(var) or default
    path = Path(raw).expanduser()
    if path.exists() and not path.is_dir():
        raise MissingEnvError(f"Environment variable {var} must point to a directory: {path}")
    return path


def _env_int(env, var: str, default: int) -> int:
    raw = env.get(var)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"Environment variable {var} must be an integer, got {raw!r}.") from exc
    if value <= 0:
        raise ValidationError(f"Environment variable {var} must be positive, got {value}.")
    return value
