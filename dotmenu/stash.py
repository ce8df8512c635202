"""Stash show/pop/drop with a numbered picker when more than one stash exists."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from rich.text import Text

from . import git
from .interactive import Prompter
from .menu import ExitSignal, Option, OptionSet, SelectionContext, render_banner
from .models import StashEntry
from .selector import SingleItemPolicy, select_from_list

EMPTY_MESSAGE = "Git stash is empty. Nothing to do."

StashCommand = Callable[[StashEntry], object]


def choose_stash(repo_path: Path, prompter: Prompter, title: str) -> StashEntry | None:
    return select_from_list(
        git.list_stashes(repo_path),
        lambda entry: entry.display_name,
        prompter=prompter,
        title=title,
        empty_message=EMPTY_MESSAGE,
        single_policy=SingleItemPolicy.AUTO,
    )


def process_stash(repo_path: Path, prompter: Prompter, title: str, command: StashCommand) -> StashEntry | None:
    """Pick a stash (the sole one is used as-is) and run ``command`` on it."""

    entry = choose_stash(repo_path, prompter, title)
    if entry is None:
        return None
    prompter.console.print()
    command(entry)
    return entry


def show(repo_path: Path, prompter: Prompter, option: str | None = None) -> None:
    """``gashs``: show details, or the patch (``d``) or difftool (``t``) of a stash."""

    def details(entry: StashEntry) -> None:
        prompter.console.print(Text.from_ansi(git.show_details(repo_path, entry.ref)), soft_wrap=True)

    if option is None:
        process_stash(repo_path, prompter, "Git Stash Show Options (select stash to show)", details)
        return

    option_set = diff_option_set(repo_path, prompter)
    selected = option_set.get(option)
    if selected is None:
        render_banner(option_set, prompter.console)
        return
    selected.action(SelectionContext(code=option, argument=None, option_set=option_set))


def diff_option_set(repo_path: Path, prompter: Prompter) -> OptionSet:
    title = "Git Stash Diff Options (select stash to diff)"

    def patch(context: SelectionContext) -> ExitSignal:
        process_stash(
            repo_path,
            prompter,
            title,
            lambda entry: prompter.console.print(Text.from_ansi(git.stash_patch(repo_path, entry.ref)), soft_wrap=True),
        )
        return ExitSignal.TERMINATE

    def tool(context: SelectionContext) -> ExitSignal:
        process_stash(repo_path, prompter, title, lambda entry: git.difftool(repo_path, entry.ref))
        return ExitSignal.TERMINATE

    return OptionSet(
        title="Available options",
        usage="gashs OPTION",
        options=(
            Option("d", "Git diff.", patch),
            Option("t", "Git difftool.", tool),
        ),
    )


def pop(repo_path: Path, prompter: Prompter) -> StashEntry | None:
    return process_stash(
        repo_path,
        prompter,
        "Git Stash Pop Options (select stash to pop)",
        lambda entry: git.stash_pop(repo_path, entry.ref),
    )


def drop(repo_path: Path, prompter: Prompter) -> StashEntry | None:
    return process_stash(
        repo_path,
        prompter,
        "Git Stash Drop Options (select stash to drop)",
        lambda entry: git.stash_drop(repo_path, entry.ref),
    )
