"""Typer-based CLI for dotmenu."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import typer
from loguru import logger
from rich.console import Console

from . import __version__, branches, dotfiles, github, history, rails, stash
from .config import Settings, load_settings, resolve_repo_path
from .exceptions import DotmenuError
from .interactive import Prompter
from .logging_setup import setup_logging
from .menu import run_menu

app = typer.Typer(
    help="Interactive menus for git, GitHub, Rails templates and dotfiles",
    add_completion=False,
    no_args_is_help=True,
)

CODE_HELP = "Option code; omit to choose from a menu."
ARGUMENT_HELP = "Secondary input for the option (commit hash, PR number, search term)."


@dataclass
class AppState:
    settings: Settings
    prompter: Prompter
    repo_override: Optional[Path] = None
    verbose: bool = False

    @property
    def console(self) -> Console:
        return self.prompter.console

    def repo_path(self) -> Path:
        return resolve_repo_path(self.repo_override)

    def workdir(self) -> Path:
        return (self.repo_override or Path.cwd()).expanduser()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dotmenu {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        "-r",
        help="Path to the repository to operate on (defaults to current working directory).",
        dir_okay=True,
        file_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the dotmenu version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    setup_logging(verbose)
    with _handle_errors():
        settings = load_settings()
    ctx.obj = AppState(settings=settings, prompter=Prompter(console=Console()), repo_override=repo, verbose=verbose)


def _require_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return state


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except DotmenuError as exc:
        logger.debug("command failed: {!r}", exc)
        _fail(str(exc))


def _fail(message: str, code: int = 1) -> None:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


@app.command(help="Open GitHub pages for the current repository")
def gh(
    ctx: typer.Context,
    code: Optional[str] = typer.Argument(None, help=CODE_HELP),
    argument: Optional[str] = typer.Argument(None, help=ARGUMENT_HELP),
) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        actions = github.GitHubActions(repo_path=state.repo_path(), console=state.console)
        run_menu(github.build_option_set(actions), code, argument, prompter=state.prompter)


@app.command(help="Print or search dotfile aliases, functions and git hooks")
def dots(
    ctx: typer.Context,
    code: Optional[str] = typer.Argument(None, help=CODE_HELP),
    argument: Optional[str] = typer.Argument(None, help=ARGUMENT_HELP),
) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        actions = dotfiles.DotfileActions(settings=state.settings, console=state.console)
        run_menu(dotfiles.build_option_set(actions), code, argument, prompter=state.prompter)


@app.command(help="Create a new Rails application from a template")
def rew(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Rails application name."),
    template: Optional[str] = typer.Argument(None, help="Template: default, slim, api or setup."),
    branch: Optional[str] = typer.Argument(None, help="Template branch (defaults to DOTMENU_RAILS_BRANCH)."),
) -> None:
    state = _require_state(ctx)
    if not name:
        _fail("ERROR: Rails application name must be supplied.")
    with _handle_errors():
        actions = rails.RailsActions(
            app_name=name,
            branch=state.settings.rails_branch,
            cwd=state.workdir(),
            console=state.console,
        )
        run_menu(
            rails.build_option_set(actions),
            template,
            branch,
            prompter=state.prompter,
            prompt="Please pick one (or type 'q' to quit): ",
        )


@app.command(help="Show a stash (d: diff, t: difftool)")
def gashs(
    ctx: typer.Context,
    option: Optional[str] = typer.Argument(None, help="d for git diff, t for git difftool."),
) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        stash.show(state.repo_path(), state.prompter, option)


@app.command(help="Pop a stash")
def gashp(ctx: typer.Context) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        stash.pop(state.repo_path(), state.prompter)


@app.command(help="Drop a stash")
def gashd(ctx: typer.Context) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        stash.drop(state.repo_path(), state.prompter)


@app.command(help="Browse recent commits and view their diffs")
def gli(
    ctx: typer.Context,
    limit: Optional[int] = typer.Argument(None, help="Number of commits to list (defaults to DOTMENU_LOG_LIMIT)."),
) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        history.log(state.repo_path(), state.prompter, limit if limit is not None else state.settings.log_limit)


@app.command(help="Browse the commit history of a file")
def gistory(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="File path."),
) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        history.file_history(state.repo_path(), state.prompter, file)


@app.command(help="Browse the commits behind a file's (or line range's) blame")
def glameh(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="File path."),
    lines: Optional[str] = typer.Argument(None, help="Line range as <start>,<end>."),
) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        history.blame_history(state.repo_path(), state.prompter, file, lines)


@app.command(help="Fetch, review incoming commits and optionally pull")
def gup(ctx: typer.Context) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        history.update(state.repo_path(), state.prompter)


@app.command(help="Switch to another branch")
def gbs(ctx: typer.Context) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        branches.switch(state.repo_path(), state.prompter)


@app.command(help="Delete a local and/or remote branch")
def gbd(ctx: typer.Context) -> None:
    state = _require_state(ctx)
    with _handle_errors():
        branches.delete(state.repo_path(), state.prompter)


if __name__ == "__main__":
    app()
