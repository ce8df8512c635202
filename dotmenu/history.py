"""Commit log browsing and upstream review."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.rule import Rule
from rich.text import Text

from . import git
from .exceptions import ValidationError
from .interactive import Prompter
from .menu import INVALID_OPTION, QUIT_CODE, ExitSignal, Option, OptionSet, SelectionContext, dispatch
from .models import CommitEntry
from .selector import SingleItemPolicy, select_from_list

NO_FILE_HISTORY = "No file history detected."
NOTHING_TO_UPDATE = "All is quiet, nothing to update."


def print_details(repo_path: Path, prompter: Prompter, sha: str, paths: Sequence[str] = ()) -> None:
    output = git.show_details(repo_path, sha, paths=paths)
    prompter.console.print(Text.from_ansi(output), soft_wrap=True)


def browse_commits(
    repo_path: Path,
    commits: Sequence[CommitEntry],
    prompter: Prompter,
    *,
    title: str,
    empty_message: str,
    paths: Sequence[str] = (),
) -> CommitEntry | None:
    """Pick a commit, print its details and offer the difftool."""

    commit = select_from_list(
        commits,
        lambda entry: entry.display_name,
        prompter=prompter,
        title=title,
        empty_message=empty_message,
        single_policy=SingleItemPolicy.PROMPT,
    )
    if commit is None:
        return None
    prompter.console.print()
    print_details(repo_path, prompter, commit.sha, paths)
    prompter.console.print()
    response = prompter.read_line("View diff (y = yes, n = no)? ")
    if (response or "").strip() == "y":
        git.difftool(repo_path, f"{commit.sha}^!", paths=paths)
    return commit


def log(repo_path: Path, prompter: Prompter, limit: int) -> CommitEntry | None:
    """``gli``: the last ``limit`` non-merge commits on HEAD."""

    if limit <= 0:
        raise ValidationError("Commit limit must be a positive number.")
    return browse_commits(
        repo_path,
        git.recent_commits(repo_path, limit),
        prompter,
        title="Commit Log",
        empty_message="No commits detected.",
    )


def file_history(repo_path: Path, prompter: Prompter, file: str | None) -> CommitEntry | None:
    """``gistory``: every commit that touched ``file``, oldest first."""

    file = _require_file(file)
    return browse_commits(
        repo_path,
        git.file_commits(repo_path, file),
        prompter,
        title=f"Commit History ({file})",
        empty_message=NO_FILE_HISTORY,
        paths=[file],
    )


def blame_history(repo_path: Path, prompter: Prompter, file: str | None, lines: str | None = None) -> CommitEntry | None:
    """``glameh``: commits that last touched ``file`` (optionally ``<start>,<end>`` lines)."""

    file = _require_file(file)
    return browse_commits(
        repo_path,
        git.blame_commits(repo_path, file, lines),
        prompter,
        title=f"Commit History ({file})",
        empty_message=NO_FILE_HISTORY,
        paths=[file],
    )


def update(repo_path: Path, prompter: Prompter) -> int:
    """``gup``: fetch, review each incoming commit, then optionally pull.

    Returns the number of commits reviewed.
    """

    console = prompter.console
    git.fetch(repo_path)
    commits = git.upstream_commits(repo_path)
    if not commits:
        console.print(Text(NOTHING_TO_UPDATE))
        return 0

    total = len(commits)
    console.print(Text("Commit Summary:"))
    console.print(Rule(characters="-"))
    for commit in commits:
        console.print(Text(commit.display_name), soft_wrap=True)
    console.print(Rule(characters="-"))
    console.print(Text(f"Commit Review (↓{total}):"))

    reviewed = 0
    for position, commit in enumerate(commits, start=1):
        console.print(Rule(characters="-"))
        console.print(Text(f"[{position}/{total}] "), end="")
        print_details(repo_path, prompter, commit.sha)
        console.print()
        reviewed = position
        response = prompter.read_line("View Diff (y = yes, n = no, q = quit)? ")
        if response is None:
            break
        options = _review_options(repo_path, commit)
        code = response.strip()
        # an unrecognised answer ends the review rather than re-asking
        if code != QUIT_CODE and options.get(code) is None:
            console.print(Text(INVALID_OPTION))
            break
        signal = dispatch(SelectionContext(code=code, argument=None, option_set=options), console)
        if signal is ExitSignal.TERMINATE:
            break

    console.print(Rule(characters="-"))
    if prompter.confirm("Commit Pull"):
        git.pull(repo_path)
    return reviewed


def _review_options(repo_path: Path, commit: CommitEntry) -> OptionSet:
    def view_diff(context: SelectionContext) -> ExitSignal:
        git.difftool(repo_path, f"{commit.sha}^!")
        return ExitSignal.CONTINUE

    return OptionSet(
        title="Commit Review",
        options=(
            Option("y", "View diff.", view_diff),
            Option("n", "Next commit.", lambda context: ExitSignal.CONTINUE),
        ),
    )


def _require_file(file: str | None) -> str:
    if not file:
        raise ValidationError("ERROR: File must be supplied.")
    return file
