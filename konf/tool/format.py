"""Library for formatting store entries as table rows."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from rich.text import Text

from konf.manifest import StoreEntry

__all__ = [
    "Style",
    "RowTemplate",
    "prepare_table",
]

HEADERS = ("Context", "Cluster", "File")

# A column is never narrower than the longest header so the label line does not
# break its alignment with the rows
MIN_COLUMN_LEN = max(len(header) for header in HEADERS)

SEPARATOR = " | "
ROW_END = " |"
INACTIVE_MARKER = "  "
ACTIVE_MARKER = "▸ "


class Style(str, Enum):
    """Styles that may be applied to the cells of a row."""

    BOLD = "bold"
    FAINT = "dim"
    ITALIC = "italic"
    UNDERLINE = "underline"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


DEFAULT_ACTIVE_STYLES = (Style.BOLD, Style.CYAN)


def _cell(value: str, width: int) -> str:
    """Pad the value with spaces and truncate it to the width."""
    return f"{value:<{width}.{width}}"


@dataclass(frozen=True)
class RowTemplate:
    """Template for rendering a store entry as a row of fixed width cells."""

    width: int
    """Width of every column."""

    marker: str = INACTIVE_MARKER
    """Leading text of the row, of the same width for all templates."""

    styles: tuple[Style, ...] = ()

    def cells(self, entry: StoreEntry) -> list[str]:
        """Return the padded and truncated cells of an entry."""
        return [
            _cell(str(value), self.width)
            for value in (entry.context, entry.cluster, entry.file)
        ]

    def format(self, entry: StoreEntry) -> str:
        """Render the row without any styling."""
        return self.render(entry).plain

    def render(self, entry: StoreEntry) -> Text:
        """Render the row with the styles applied to each cell."""
        style = " ".join(s.value for s in self.styles)
        text = Text(self.marker)
        for i, cell in enumerate(self.cells(entry)):
            if i:
                text.append(SEPARATOR)
            text.append(cell, style=style)
        text.append(ROW_END)
        return text


def prepare_table(
    max_column_len: int, active_styles: Sequence[Style] = DEFAULT_ACTIVE_STYLES
) -> tuple[RowTemplate, RowTemplate, str]:
    """Return the inactive and active row templates and the header label.

    Both templates produce cells of the same width, so moving the selection
    only changes the marker and styling of a row.
    """
    width = max(max_column_len, MIN_COLUMN_LEN)
    inactive = RowTemplate(width=width)
    active = RowTemplate(
        width=width, marker=ACTIVE_MARKER, styles=tuple(active_styles)
    )
    # The label is assembled by hand as the headers are not entry fields
    label = (
        INACTIVE_MARKER
        + SEPARATOR.join(header + " " * (width - len(header)) for header in HEADERS)
        + " "
    )
    return inactive, active, label
