"""Browse the aliases, functions and git hooks defined in the dotfiles."""

from __future__ import annotations

import re
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from loguru import logger
from rich.console import Console
from rich.text import Text

from .config import Settings
from .menu import ExitSignal, Option, OptionSet, SelectionContext
from .models import DotfileEntry

_SECTION = re.compile(r"^#\s*Section:\s*(?P<name>.*)$")
_LABEL = re.compile(r"^#\s*Label:\s*(?P<value>.*)$")
_DESCRIPTION = re.compile(r"^#\s*Description:\s*(?P<value>.*)$")
_ALIAS = re.compile(r"^alias\s+(?P<name>[^=\s]+)=(?P<value>.*)$")
_FUNCTION = re.compile(r"^(?:function\s+)?(?P<name>[A-Za-z0-9_:.-]+)\s*\(\)\s*\{")

NOTHING_TO_SEARCH = "ERROR: Nothing to search for. Criteria must be supplied."


def section_name(line: str) -> str | None:
    match = _SECTION.match(line.strip())
    if not match:
        return None
    return match.group("name").replace("#", "").strip()


def parse_aliases(lines: Iterable[str]) -> list[DotfileEntry]:
    entries: list[DotfileEntry] = []
    section: str | None = None
    for raw in lines:
        line = raw.strip()
        section = section_name(line) or section
        match = _ALIAS.match(line)
        if match:
            entries.append(DotfileEntry("alias", match.group("name"), match.group("value"), section))
    return entries


def parse_functions(lines: Iterable[str]) -> list[DotfileEntry]:
    """Public functions with their ``# Label:`` and ``# Description:`` comments."""

    entries: list[DotfileEntry] = []
    section: str | None = None
    label = description = ""
    for raw in lines:
        line = raw.strip()
        section = section_name(line) or section
        label_match = _LABEL.match(line)
        if label_match:
            label = label_match.group("value").strip()
            continue
        description_match = _DESCRIPTION.match(line)
        if description_match:
            description = description_match.group("value").strip()
            continue
        match = _FUNCTION.match(line)
        if not match:
            continue
        name = match.group("name")
        if not name.startswith("_"):
            entries.append(DotfileEntry("function", name, f"{label} - {description}", section))
        label = description = ""
    return entries


def render_entries(entries: Iterable[DotfileEntry]) -> Iterator[str]:
    """Yield ``##### <section>`` headings followed by indented entries."""

    current: str | None = None
    for entry in entries:
        if entry.section and entry.section != current:
            current = entry.section
            yield f"##### {current}"
        yield f"    {entry.display_name}"


def _read_lines(path: Path) -> list[str]:
    if not path.is_file():
        logger.warning("dotfile not found: {}", path)
        return []
    return path.read_text(encoding="utf-8", errors="replace").splitlines()


def hook_files(hooks_dir: Path) -> list[Path]:
    if not hooks_dir.is_dir():
        logger.warning("git hooks directory not found: {}", hooks_dir)
        return []
    return sorted(path for path in hooks_dir.iterdir() if path.is_file())


@dataclass
class DotfileActions:
    settings: Settings
    console: Console

    def aliases(self) -> list[DotfileEntry]:
        return parse_aliases(_read_lines(self.settings.aliases_file))

    def functions(self, path: Path | None = None) -> list[DotfileEntry]:
        return parse_functions(_read_lines(path or self.settings.functions_file))

    def hooks(self) -> list[DotfileEntry]:
        entries: list[DotfileEntry] = []
        for path in hook_files(self.settings.git_hooks_dir):
            entries.extend(self.functions(path))
        return entries

    def search(self, term: str) -> list[str]:
        lines = [f'"{term}" Search Results:']
        for entry in self.aliases():
            if term in entry.name or term in entry.value:
                lines.append(f"    Alias: {entry.display_name}")
        for entry in self.functions():
            if term in entry.name:
                lines.append(f"    Function: {entry.display_name}")
        return lines

    def page(self, lines: Iterable[str]) -> ExitSignal:
        pager = self.console.pager() if self.console.is_terminal else nullcontext()
        with pager:
            for line in lines:
                self.console.print(Text(line), soft_wrap=True)
        return ExitSignal.TERMINATE

    def print_aliases(self, context: SelectionContext) -> ExitSignal:
        return self.page(render_entries(self.aliases()))

    def print_functions(self, context: SelectionContext) -> ExitSignal:
        return self.page(render_entries(self.functions()))

    def print_hooks(self, context: SelectionContext) -> ExitSignal:
        return self.page(render_entries(self.hooks()))

    def print_all(self, context: SelectionContext) -> ExitSignal:
        lines = ["#### Aliases", "", *render_entries(self.aliases())]
        lines += ["", "#### Functions", "", *render_entries(self.functions())]
        lines += ["", "#### Git Hooks", "", *render_entries(self.hooks())]
        return self.page(lines)

    def find(self, context: SelectionContext) -> ExitSignal:
        if not context.argument:
            self.console.print(Text(NOTHING_TO_SEARCH))
            return ExitSignal.TERMINATE
        return self.page(self.search(context.argument))


def build_option_set(actions: DotfileActions) -> OptionSet:
    return OptionSet(
        title="Dotfile Options",
        usage="dots OPTION",
        options=(
            Option("a", "Print aliases.", actions.print_aliases),
            Option("f", "Print functions.", actions.print_functions),
            Option("g", "Print Git hooks.", actions.print_hooks),
            Option("p", "Print all.", actions.print_all),
            Option("s", "Search for alias/function.", actions.find, hints=("TERM: Text to search for.",)),
        ),
    )
