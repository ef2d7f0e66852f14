"""LeaderboardModal - Modal for viewing the persisted top-N table."""

from typing import ClassVar

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Static

from hustle.services.leaderboard import (
    LeaderboardEntry,
    LeaderboardStore,
    format_rank,
)

EMPTY_CELL = "---"
HIGHLIGHT_ROW_STYLE = "bold #F1FA8C"


class LeaderboardModal(ModalScreen[None]):
    """Modal listing every leaderboard slot, filled or not.

    Returns None on close (view-only modal).

    Layout:
    +--------------------------------+
    |          Leaderboard           |
    +--------------------------------+
    | Rank | Name | Score            |
    |------+------+------------------|
    | 1ST  | ABC  | 42               |
    | 2ND  | ---  | ---              |
    | ...                            |
    +--------------------------------+
    |                      [Close]   |
    +--------------------------------+
    """

    DEFAULT_CSS = """
    LeaderboardModal {
        align: center middle;
        background: black 50%;
    }

    LeaderboardModal #container {
        width: 48;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    LeaderboardModal .modal-title {
        width: 100%;
        content-align: center middle;
        text-style: bold;
    }

    LeaderboardModal #buttons {
        height: auto;
        align: right middle;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "close", "Close", show=False),
    ]

    def __init__(
        self,
        store: LeaderboardStore,
        highlight: LeaderboardEntry | None = None,
    ) -> None:
        super().__init__()
        self._store = store
        self._highlight = highlight

    def compose(self) -> ComposeResult:
        with Vertical(id="container"):
            yield Static("Leaderboard", classes="modal-title")
            yield DataTable(id="results-table", classes="results-table")

            with Horizontal(id="buttons"):
                yield Button("Close", id="close-btn", variant="primary")

    def on_mount(self) -> None:
        self._show_leaderboard()

    def _show_leaderboard(self) -> None:
        table = self.query_one("#results-table", DataTable)
        table.clear(columns=True)
        table.add_column("Rank", key="rank", width=6)
        table.add_column("Name", key="name", width=12)
        table.add_column("Score", key="score", width=8)

        for rank, entry in enumerate(self._store.slots(), start=1):
            cells = self._build_row_cells(rank, entry)
            if entry is not None and entry is self._highlight:
                cells = [Text(c, style=HIGHLIGHT_ROW_STYLE) for c in cells]
            table.add_row(*cells)

        table.cursor_type = "row"
        table.zebra_stripes = True

    def _build_row_cells(self, rank: int, entry: LeaderboardEntry | None) -> list[str]:
        if entry is None:
            return [format_rank(rank), EMPTY_CELL, EMPTY_CELL]
        return [format_rank(rank), entry.name, str(entry.score)]

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-btn":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
