"""Numbered list selection for branches, stashes and commits."""

from __future__ import annotations

import enum
import re
from typing import Callable, Sequence, TypeVar

from loguru import logger
from rich.text import Text

from .interactive import SELECTION_PROMPT, Prompter
from .menu import QUIT_CODE, QUIT_LABEL

T = TypeVar("T")

_INDEX_PATTERN = re.compile(r"^[0-9]{1,2}$")


class SingleItemPolicy(enum.Enum):
    """How a one-item list is handled."""

    AUTO = "auto"  # use the sole item without prompting
    REFUSE = "refuse"  # print the refusal message, select nothing
    PROMPT = "prompt"  # prompt as for longer lists


def parse_index(response: str | None, size: int) -> int | None:
    """Map a response onto ``range(size)``; anything else is no selection."""

    if response is None:
        return None
    candidate = response.rstrip("\r\n")
    if not _INDEX_PATTERN.match(candidate):
        return None
    index = int(candidate)
    if index >= size:
        return None
    return index


def render_list(items: Sequence[T], render: Callable[[T], str], prompter: Prompter, title: str | None) -> None:
    width = len(str(len(items) - 1))
    console = prompter.console
    if title:
        console.print(Text(f"{title}:"))
    for index, item in enumerate(items):
        console.print(Text.from_ansi(f"  {index:>{width}}: {render(item)}"), soft_wrap=True)
    console.print(Text(f"  {QUIT_CODE:>{width}}: {QUIT_LABEL}"))
    console.print()


def select_from_list(
    items: Sequence[T],
    render: Callable[[T], str],
    *,
    prompter: Prompter,
    title: str | None = None,
    empty_message: str = "Nothing to do.",
    single_policy: SingleItemPolicy = SingleItemPolicy.PROMPT,
    single_message: str | None = None,
) -> T | None:
    """Show ``items`` with zero-based indices and return the one the user picks.

    Returns ``None`` when there is nothing to pick, when a one-item list is
    refused, and for any response that is not an in-range index (including
    ``q`` and end of input). Invalid responses are not reported.
    """

    console = prompter.console
    if not items:
        console.print(Text(empty_message))
        return None
    if len(items) == 1 and single_policy is SingleItemPolicy.AUTO:
        return items[0]
    if len(items) == 1 and single_policy is SingleItemPolicy.REFUSE:
        if single_message:
            console.print(Text(single_message))
        return None

    render_list(items, render, prompter, title)
    response = prompter.read_line(SELECTION_PROMPT)
    index = parse_index(response, len(items))
    if index is None:
        logger.debug("no selection from response {!r}", response)
        return None
    return items[index]
