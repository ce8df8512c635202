"""Create a Rails application skeleton from one of the starter templates."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from loguru import logger
from rich.console import Console
from rich.text import Text

from .menu import ExitSignal, Option, OptionSet, SelectionContext

TEMPLATE_FLAGS = (
    "--skip-bundle",
    "--database",
    "sqlite3",
    "--skip-test-unit",
    "--force",
    "--skip-keeps",
    "--template",
)
TEMPLATE_URL = "https://raw.github.com/bkuhlmann/rails_{name}_template/{branch}/template.rb"

# (code, label); "default" runs a plain ``rails new``
TEMPLATES = [
    ("default", "Rails Default Template"),
    ("slim", "Rails Slim Template"),
    ("api", "Rails API Template"),
    ("setup", "Rails Setup Template"),
]

Runner = Callable[[Sequence[str], Path], int]


def run_attached(command: Sequence[str], cwd: Path) -> int:
    logger.debug("running {} in {}", " ".join(command), cwd)
    return subprocess.run(list(command), cwd=str(cwd), check=False).returncode


def rails_new_command(app_name: str, template: str, branch: str) -> list[str]:
    command = ["rails", "new", app_name]
    if template != "default":
        command.extend(TEMPLATE_FLAGS)
        command.append(TEMPLATE_URL.format(name=template, branch=branch))
    return command


@dataclass
class RailsActions:
    app_name: str
    branch: str
    cwd: Path
    console: Console
    runner: Runner = run_attached

    def create(self, template: str) -> Callable[[SelectionContext], ExitSignal]:
        def action(context: SelectionContext) -> ExitSignal:
            command = rails_new_command(self.app_name, template, context.argument or self.branch)
            self.console.print(Text(" ".join(command)), soft_wrap=True)
            self.runner(command, self.cwd)
            return ExitSignal.TERMINATE

        return action


def build_option_set(actions: RailsActions) -> OptionSet:
    return OptionSet(
        title="Available Ruby on Rails Templates",
        usage="rew NAME TEMPLATE",
        options=tuple(Option(code, label, actions.create(code)) for code, label in TEMPLATES),
    )
