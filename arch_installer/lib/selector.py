"""Paginated single-choice selection over long option lists.

Used for zoneinfo continents/cities and the ~500 entries of locale.gen, which
do not fit on a console screen. Choices are numbered globally (page 2 of a
30-per-page list starts at 31), so a number seen on any page stays valid after
paging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .prompt import Prompter

logger = logging.getLogger(__name__)

COLUMNS = 3
NEXT_COMMANDS = {"n", "next"}
PREV_COMMANDS = {"p", "prev", "previous"}


@dataclass
class SelectionList:
    options: Sequence[str]
    page_size: int
    page: int = 1

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError("Nothing to select from")
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        if not 1 <= self.page <= self.page_count:
            raise ValueError(f"page {self.page} out of range 1..{self.page_count}")

    @property
    def page_count(self) -> int:
        return (len(self.options) + self.page_size - 1) // self.page_size

    def visible(self) -> List[Tuple[int, str]]:
        """Return ``(number, option)`` pairs on the current page, 1-based."""

        start = (self.page - 1) * self.page_size
        end = min(start + self.page_size, len(self.options))
        return [(i + 1, self.options[i]) for i in range(start, end)]

    def next_page(self) -> int:
        self.page = 1 if self.page >= self.page_count else self.page + 1
        return self.page

    def prev_page(self) -> int:
        self.page = self.page_count if self.page <= 1 else self.page - 1
        return self.page


def render_page(sel: SelectionList) -> List[str]:
    lines = [f"Page {sel.page}/{sel.page_count}:"]
    row: List[str] = []
    for number, option in sel.visible():
        row.append(f"{number:2d}) {option:<35}")
        if len(row) == COLUMNS:
            lines.append("".join(row).rstrip())
            row = []
    if row:
        lines.append("".join(row).rstrip())
    return lines


def select(
    options: Sequence[str],
    page_size: int,
    prompter: Prompter,
    *,
    title: str = "Select an option",
    default: Optional[str] = None,
) -> Optional[int]:
    """Let the operator pick one of ``options``.

    Returns the zero-based index of the chosen option, or ``None`` when a
    ``default`` was offered and accepted with an empty answer. Never returns on
    invalid input; it reprompts until it gets something usable.
    """

    sel = SelectionList(options=options, page_size=page_size)

    prompter.say(title)
    if default is not None:
        prompter.say(f"Default is {default}. Press Enter to select it, or choose from the list below.")

    if default is not None:
        hint = f"Choice (default {default}): "
    else:
        hint = "Choice: "

    while True:
        for line in render_page(sel):
            prompter.say(line)
        prompter.say("n) Next page")
        prompter.say("p) Previous page")

        choice = prompter.ask(hint).strip()

        if not choice:
            if default is not None:
                logger.info("%s: default accepted (%s)", title, default)
                return None
            prompter.say("Invalid option, try again.")
            continue

        lowered = choice.lower()
        if lowered in NEXT_COMMANDS:
            sel.next_page()
            continue
        if lowered in PREV_COMMANDS:
            sel.prev_page()
            continue

        if not (choice.isascii() and choice.isdigit()):
            prompter.say("Invalid option, try again.")
            continue

        number = int(choice)
        if 1 <= number <= len(options):
            logger.info("%s: selected %s", title, options[number - 1])
            return number - 1

        prompter.say("Invalid option, try again.")
