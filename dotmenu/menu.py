"""Option-code menus: render a usage banner, read a code, run the bound action.

A menu is an :class:`OptionSet`, an ordered table of ``(code, label, action)``
rows. :func:`run_menu` either dispatches a code supplied up front (``dotmenu gh o``)
or renders the banner and prompts until an action terminates the loop, the
operator types ``q`` or input runs out.

An unrecognised code prints ``ERROR: Invalid option.``; interactively the banner
is shown again, with a code supplied up front the menu returns.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable

from loguru import logger
from rich.console import Console
from rich.text import Text

from .interactive import SELECTION_PROMPT, Prompter

QUIT_CODE = "q"
QUIT_LABEL = "Quit/Exit."
INVALID_OPTION = "ERROR: Invalid option."


class ExitSignal(enum.Enum):
    """What the dispatcher does after an action returns."""

    CONTINUE = "continue"
    TERMINATE = "terminate"


@dataclass(frozen=True)
class SelectionContext:
    """Transient state for one dispatch cycle."""

    code: str
    argument: str | None
    option_set: "OptionSet"
    interactive: bool = False


Action = Callable[[SelectionContext], ExitSignal]


@dataclass(frozen=True)
class Option:
    code: str
    label: str
    action: Action
    hints: tuple[str, ...] = ()


@dataclass(frozen=True)
class OptionSet:
    """Ordered option table; declaration order is banner order."""

    title: str
    options: tuple[Option, ...]
    usage: str | None = None
    _index: dict[str, Option] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, Option] = {}
        for option in self.options:
            if not option.code or any(char.isspace() for char in option.code):
                raise ValueError(f"Invalid option code: {option.code!r}")
            if option.code == QUIT_CODE:
                raise ValueError(f"Option code {QUIT_CODE!r} is reserved for quitting.")
            if option.code in index:
                raise ValueError(f"Duplicate option code: {option.code!r}")
            index[option.code] = option
        object.__setattr__(self, "_index", index)

    @property
    def codes(self) -> list[str]:
        return [option.code for option in self.options]

    def get(self, code: str) -> Option | None:
        return self._index.get(code)


def render_banner(option_set: OptionSet, console: Console) -> None:
    """Print the usage line, the title and every option followed by the quit code."""

    width = max([len(QUIT_CODE), *(len(code) for code in option_set.codes)])
    lines: list[str] = [""]
    if option_set.usage:
        lines.extend([f"Usage: {option_set.usage}", ""])
    lines.append(f"{option_set.title}:")
    for option in option_set.options:
        lines.append(f"  {option.code:>{width}}: {option.label}")
        for hint in option.hints:
            lines.append(f"  {'':>{width}}  {hint}")
    lines.append(f"  {QUIT_CODE:>{width}}: {QUIT_LABEL}")
    lines.append("")
    for line in lines:
        console.print(Text(line))


def split_response(response: str) -> tuple[str, str | None]:
    """Split ``"c abc123"`` into the code and its argument."""

    parts = response.strip().split(maxsplit=1)
    if not parts:
        return "", None
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1].strip()


def dispatch(context: SelectionContext, console: Console) -> ExitSignal:
    """Run the action bound to ``context.code``.

    Returns ``TERMINATE`` for the quit code and ``CONTINUE`` after reporting an
    unrecognised code. Whatever the action raises propagates.
    """

    if context.code == QUIT_CODE:
        return ExitSignal.TERMINATE
    option = context.option_set.get(context.code)
    if option is None:
        logger.debug("invalid option {!r} for {}", context.code, context.option_set.title)
        console.print(Text(INVALID_OPTION))
        return ExitSignal.CONTINUE
    logger.debug("dispatching {!r} ({}) with argument {!r}", option.code, option.label, context.argument)
    return option.action(context)


def run_menu(
    option_set: OptionSet,
    code: str | None = None,
    argument: str | None = None,
    *,
    prompter: Prompter,
    prompt: str = SELECTION_PROMPT,
) -> None:
    if code is not None:
        dispatch(SelectionContext(code=code, argument=argument, option_set=option_set), prompter.console)
        return

    while True:
        render_banner(option_set, prompter.console)
        response = prompter.read_line(prompt)
        if response is None:
            return
        prompter.console.print()
        chosen, inline_argument = split_response(response)
        context = SelectionContext(
            code=chosen,
            argument=inline_argument if inline_argument is not None else argument,
            option_set=option_set,
            interactive=True,
        )
        if dispatch(context, prompter.console) is ExitSignal.TERMINATE:
            return
