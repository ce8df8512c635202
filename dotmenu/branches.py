"""Switch to or delete a branch picked from a numbered list."""

from __future__ import annotations

from pathlib import Path

from rich.text import Text

from . import git
from .interactive import Prompter
from .models import BranchEntry
from .selector import SingleItemPolicy, select_from_list

SWITCH_EMPTY = "Sorry, no branches to switch to."
SWITCH_SINGLE = "Sorry, only one branch to switch to and you're on it!"
DELETE_EMPTY = "Sorry, no branches to delete."
DELETE_SINGLE = "Sorry, only the master branch exists and it can't be deleted."


def switch(repo_path: Path, prompter: Prompter) -> BranchEntry | None:
    """``gbs``: check out the selected branch."""

    branch = select_from_list(
        git.list_branches(repo_path),
        lambda entry: entry.display_name,
        prompter=prompter,
        title="Select branch to switch to",
        empty_message=SWITCH_EMPTY,
        single_policy=SingleItemPolicy.REFUSE,
        single_message=SWITCH_SINGLE,
    )
    if branch is None:
        return None
    prompter.console.print()
    git.checkout(repo_path, branch.name)
    return branch


def delete(repo_path: Path, prompter: Prompter) -> BranchEntry | None:
    """``gbd``: delete the selected branch locally and on ``origin``, confirming each."""

    branch = select_from_list(
        git.list_branches(repo_path),
        lambda entry: entry.display_name,
        prompter=prompter,
        title="Select branch to delete",
        empty_message=DELETE_EMPTY,
        single_policy=SingleItemPolicy.REFUSE,
        single_message=DELETE_SINGLE,
    )
    if branch is None:
        return None
    prompter.console.print()
    delete_local(repo_path, branch.name, prompter)
    delete_remote(repo_path, branch.name, prompter)
    return branch


def delete_local(repo_path: Path, name: str, prompter: Prompter) -> bool:
    console = prompter.console
    if not prompter.confirm(f'Delete "{name}" local branch'):
        console.print(Text("Local branch deletion aborted."))
        return False
    if not git.branch_exists(repo_path, name):
        console.print(Text("Local branch not found."))
        return False
    return git.delete_local_branch(repo_path, name) == 0


def delete_remote(repo_path: Path, name: str, prompter: Prompter) -> bool:
    console = prompter.console
    if not prompter.confirm(f'Delete "{name}" remote branch'):
        console.print(Text("Remote branch deletion aborted."))
        return False
    if not git.remote_branch_exists(repo_path, name):
        console.print(Text("Remote branch not found."))
        return False
    return git.delete_remote_branch(repo_path, name) == 0
