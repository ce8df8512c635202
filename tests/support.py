"""Shared helpers for driving prompts from in-memory streams."""

from __future__ import annotations

import io

from rich.console import Console

from dotmenu.interactive import Prompter


def make_prompter(input_text: str = "") -> Prompter:
    console = Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)
    return Prompter(console=console, stream=io.StringIO(input_text))


def output_of(prompter: Prompter) -> str:
    return prompter.console.file.getvalue()
