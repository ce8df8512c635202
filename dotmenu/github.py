"""GitHub pages for the current repository, opened in the default browser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import typer
from loguru import logger
from rich.console import Console
from rich.text import Text

from . import git
from .config import repository_web_url
from .menu import ExitSignal, Option, OptionSet, SelectionContext

_COMMIT_PATTERN = re.compile(r"^([0-9a-f]{40}|[0-9a-f]{7})$")
_NUMBER_PATTERN = re.compile(r"^[0-9]+$")

# (code, label, path under the repository URL)
_PAGES = [
    ("o", "Open repository.", ""),
    ("i", "Open repository issues.", "issues"),
    ("t", "Open repository tags (releases).", "tags"),
    ("w", "Open repository wiki.", "wiki"),
    ("p", "Open repository pulse.", "pulse"),
    ("g", "Open repository graphs.", "graphs"),
    ("s", "Open repository settings.", "settings"),
]


@dataclass
class GitHubActions:
    repo_path: Path
    console: Console
    opener: Callable[[str], object] = typer.launch

    @property
    def base_url(self) -> str:
        return repository_web_url(git.remote_url(self.repo_path))

    def open(self, suffix: str = "") -> ExitSignal:
        url = f"{self.base_url}/{suffix}" if suffix else self.base_url
        logger.debug("opening {}", url)
        self.opener(url)
        return ExitSignal.TERMINATE

    def open_page(self, suffix: str) -> Callable[[SelectionContext], ExitSignal]:
        return lambda context: self.open(suffix)

    def commits(self, context: SelectionContext) -> ExitSignal:
        if context.argument:
            return self.open(f"commit/{context.argument}")
        return self.open("commits")

    def branches(self, context: SelectionContext) -> ExitSignal:
        if context.argument == "c":
            return self.open(f"tree/{git.current_branch(self.repo_path)}")
        return self.open("branches")

    def pull_requests(self, context: SelectionContext) -> ExitSignal:
        argument = context.argument or ""
        if _NUMBER_PATTERN.match(argument):
            return self.open(f"pull/{argument}")
        if argument == "l":
            for ref in git.pull_request_refs(self.repo_path):
                self.console.print(Text(ref.display_name), soft_wrap=True)
            return ExitSignal.TERMINATE
        return self.open("pulls")

    def url(self, context: SelectionContext) -> ExitSignal:
        argument = context.argument or ""
        if _COMMIT_PATTERN.match(argument):
            value = f"{self.base_url}/commit/{argument}"
        elif argument == "l":
            value = f"{self.base_url}/commit/{git.last_commit(self.repo_path)}"
        else:
            value = self.base_url
        self.console.print(Text(value), soft_wrap=True)
        return ExitSignal.TERMINATE


def build_option_set(actions: GitHubActions) -> OptionSet:
    pages = {code: (label, actions.open_page(suffix)) for code, label, suffix in _PAGES}

    def page(code: str) -> Option:
        label, action = pages[code]
        return Option(code, label, action)

    return OptionSet(
        title="GitHub Options (default browser)",
        usage="gh OPTION",
        options=(
            page("o"),
            page("i"),
            Option("c", "Open repository commits. Options:", actions.commits, hints=("HASH: Open commit.",)),
            Option("b", "Open repository branches. Options:", actions.branches, hints=("c: Open current branch.",)),
            page("t"),
            Option(
                "r",
                "Open repository pull requests. Options:",
                actions.pull_requests,
                hints=("NUMBER: Open pull request.", "l: List pull requests."),
            ),
            page("w"),
            page("p"),
            page("g"),
            page("s"),
            Option(
                "u",
                "Print repository URL. Options:",
                actions.url,
                hints=("HASH: Print commit URL.", "l: Print last commit URL."),
            ),
        ),
    )
