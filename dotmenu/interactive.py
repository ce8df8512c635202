"""Line-oriented prompt helpers built on rich, with InquirerPy confirmations on a TTY."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO

from InquirerPy import inquirer
from loguru import logger
from rich.console import Console

from .exceptions import UserAbort

SELECTION_PROMPT = "Enter selection: "
YES_ANSWERS = frozenset({"y", "yes"})


@dataclass
class Prompter:
    """Writes a visible prompt to the console and reads one line of input.

    ``stream`` defaults to ``None`` which means the builtin ``input`` (and therefore
    ``sys.stdin``) at call time. Tests bind it to an in-memory stream instead.
    """

    console: Console = field(default_factory=Console)
    stream: TextIO | None = None

    def read_line(self, prompt: str = SELECTION_PROMPT) -> str | None:
        """Return the line without its newline, or ``None`` once input is exhausted."""

        try:
            raw = self.console.input(prompt, markup=False, stream=self.stream)
        except EOFError:
            raw = None
        if raw is None or (self.stream is not None and raw == ""):
            logger.debug("end of input while waiting on {!r}", prompt)
            return None
        return raw.rstrip("\r\n")

    def confirm(self, message: str) -> bool:
        if self._is_tty():
            try:
                return bool(inquirer.confirm(message=message, default=False).execute())
            except KeyboardInterrupt as exc:  # pragma: no cover - user cancel
                raise UserAbort("User cancelled the prompt.") from exc
        answer = self.read_line(f"{message} (y/n)? ")
        return (answer or "").strip().lower() in YES_ANSWERS

    def _is_tty(self) -> bool:
        if self.stream is not None:
            return False
        return sys.stdin.isatty() and self.console.is_terminal
