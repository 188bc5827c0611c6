"""Interactive selection of a kubeconfig from the store.

The prompt is described by a `KonfPrompt` and run by a prompt function that
returns the index of the selected item. The terminal prompt renders on stderr,
since stdout is reserved for communicating the result to the shell hook.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
import logging
import sys
from typing import TextIO

import readchar
from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from konf.config import KonfConfig
from konf.exceptions import InvalidSelectionError, PromptAbortedError
from konf.filesystem import Filesystem
from konf.manifest import StoreEntry
from konf.search import search_konf
from konf.store import fetch_konfs

from .format import RowTemplate, prepare_table

__all__ = [
    "KonfPrompt",
    "PromptFunc",
    "PickerState",
    "create_prompt",
    "select_konf",
    "select_context",
    "terminal_prompt",
]

_LOGGER = logging.getLogger(__name__)

COLUMN_LEN = 25
PAGE_SIZE = 15


@dataclass
class KonfPrompt:
    """Description of a selection prompt over store entries."""

    label: str
    items: list[StoreEntry]
    inactive: RowTemplate
    active: RowTemplate
    searcher: Callable[[str, int], bool]
    """Check if the item at an index matches the search input."""

    size: int = PAGE_SIZE
    """Number of items visible at once."""

    hide_selected: bool = True
    """Remove the prompt from the terminal once an item was selected."""


PromptFunc = Callable[[KonfPrompt], int]


def create_prompt(options: list[StoreEntry]) -> KonfPrompt:
    """Create the prompt for selecting one of the options."""
    inactive, active, label = prepare_table(COLUMN_LEN)

    def searcher(term: str, index: int) -> bool:
        return search_konf(term, options[index])

    return KonfPrompt(
        label=label,
        items=options,
        inactive=inactive,
        active=active,
        searcher=searcher,
    )


def select_konf(entries: list[StoreEntry], prompt_func: PromptFunc) -> int:
    """Run the prompt over the entries and return the selected index.

    Errors of the prompt function are propagated unchanged.

    Raises:
        InvalidSelectionError: If the prompt returned an index out of range.
    """
    index = prompt_func(create_prompt(entries))
    if not 0 <= index < len(entries):
        raise InvalidSelectionError(index)
    return index


def select_context(
    fs: Filesystem, config: KonfConfig, prompt_func: PromptFunc
) -> str:
    """Let the user select a kubeconfig from the store and return its id."""
    entries = fetch_konfs(fs, config)
    selected = entries[select_konf(entries, prompt_func)]
    _LOGGER.debug("Selected %s", selected)
    return selected.konf_id


@dataclass
class PickerState:
    """State of the terminal picker, independent of any input or output."""

    prompt: KonfPrompt
    query: str = ""
    cursor: int = 0
    """Position of the selection within the matching items."""

    offset: int = 0
    """Position of the first visible item within the matching items."""

    matches: list[int] = field(init=False)
    """Indices of the items matching the query."""

    def __post_init__(self) -> None:
        self._filter()

    def _filter(self) -> None:
        self.matches = [
            i
            for i in range(len(self.prompt.items))
            if not self.query or self.prompt.searcher(self.query, i)
        ]
        self.cursor = 0
        self.offset = 0

    def _move(self, delta: int) -> None:
        if not self.matches:
            return
        self.cursor = max(0, min(len(self.matches) - 1, self.cursor + delta))
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.prompt.size:
            self.offset = self.cursor - self.prompt.size + 1

    @property
    def visible(self) -> list[int]:
        """Return the indices of the items on the current page."""
        return self.matches[self.offset : self.offset + self.prompt.size]

    @property
    def selected(self) -> int | None:
        """Return the index of the item under the cursor."""
        if not self.matches:
            return None
        return self.matches[self.cursor]

    def handle_key(self, key: str) -> int | None:
        """Update the state for a key press.

        Returns the index of the chosen item once the selection is confirmed.

        Raises:
            PromptAbortedError: If the user cancelled the prompt.
        """
        if key in (readchar.key.ESC, readchar.key.CTRL_C):
            raise PromptAbortedError("selection cancelled")
        if key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF):
            return self.selected
        if key == readchar.key.UP:
            self._move(-1)
        elif key == readchar.key.DOWN:
            self._move(1)
        elif key == readchar.key.PAGE_UP:
            self._move(-self.prompt.size)
        elif key == readchar.key.PAGE_DOWN:
            self._move(self.prompt.size)
        elif key == readchar.key.BACKSPACE:
            if self.query:
                self.query = self.query[:-1]
                self._filter()
        elif len(key) == 1 and key.isprintable():
            self.query += key
            self._filter()
        return None

    def render(self) -> Group:
        """Render the prompt for the current state."""
        lines = [Text("Use the arrow keys to navigate, type to search", style="dim")]
        lines.append(Text(f"Search: {self.query}"))
        lines.append(Text(self.prompt.label, style="bold"))
        for index in self.visible:
            template = (
                self.prompt.active
                if index == self.selected
                else self.prompt.inactive
            )
            lines.append(template.render(self.prompt.items[index]))
        if not self.matches:
            lines.append(Text("  No results", style="dim"))
        return Group(*lines)


def terminal_prompt(prompt: KonfPrompt, file: TextIO | None = None) -> int:
    """Run the prompt in the terminal and return the index of the selected item.

    Raises:
        PromptAbortedError: If the user cancelled the prompt.
    """
    console = Console(file=file if file is not None else sys.stderr)
    state = PickerState(prompt)
    with Live(
        state.render(),
        console=console,
        auto_refresh=False,
        transient=prompt.hide_selected,
    ) as live:
        while True:
            try:
                key = readchar.readkey()
            except KeyboardInterrupt as err:
                raise PromptAbortedError("selection cancelled") from err
            if (index := state.handle_key(key)) is not None:
                return index
            live.update(state.render(), refresh=True)
