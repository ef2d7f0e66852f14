"""NameEntryModal - Prompt for a player name when the day score places."""

from typing import ClassVar

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

from hustle.services.leaderboard import (
    DEFAULT_NAME_LENGTH,
    LeaderboardStore,
    NameEntry,
    NotEligibleError,
    RegisterResult,
)


class NameEntryModal(ModalScreen[RegisterResult | None]):
    """Collects a name and registers the score once it is complete.

    Returns the RegisterResult on success, or None if cancelled.

    Layout:
    +------------------------------+
    |        Day complete!         |
    |        Your score: 42        |
    |          Name: AB_           |
    |  Letters, Enter to confirm   |
    +------------------------------+
    """

    DEFAULT_CSS = """
    NameEntryModal {
        align: center middle;
        background: black 50%;
    }

    NameEntryModal #container {
        width: 40;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    NameEntryModal Static {
        width: 100%;
        content-align: center middle;
    }

    NameEntryModal .modal-title {
        text-style: bold;
    }

    NameEntryModal #hint-text {
        color: $text-muted;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(
        self,
        store: LeaderboardStore,
        score: int,
        name_length: int = DEFAULT_NAME_LENGTH,
    ) -> None:
        super().__init__()
        self._store = store
        self._score = score
        self._entry = NameEntry(name_length)

    @property
    def entry(self) -> NameEntry:
        return self._entry

    def compose(self) -> ComposeResult:
        with Vertical(id="container"):
            yield Static("Day complete!", classes="modal-title")
            yield Static(f"Your score: {self._score}", id="score-text")
            yield Static(self._name_label(), id="name-box")
            yield Static(
                f"Type {self._entry.length} letters, Enter to confirm",
                id="hint-text",
            )

    def _name_label(self) -> str:
        return f"Name: {self._entry.display()}"

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            return
        event.stop()
        if event.key == "enter":
            self._submit()
            return
        if event.key == "backspace":
            changed = self._entry.backspace()
        elif event.character:
            changed = self._entry.type(event.character)
        else:
            changed = False
        if changed:
            self.query_one("#name-box", Static).update(self._name_label())

    def _submit(self) -> None:
        if self._entry.submitted:
            return
        if not self._entry.is_complete:
            self.notify(
                f"Enter {self._entry.length} letters first.", severity="warning"
            )
            return

        name = self._entry.submit()
        try:
            result = self._store.register(self._score, name)
        except NotEligibleError as exc:
            self.notify(str(exc), severity="error")
            self.dismiss(None)
            return

        if not result.persisted:
            self.notify(
                "Could not save the leaderboard. Your result may not be kept.",
                severity="warning",
            )
        self.dismiss(result)

    def action_cancel(self) -> None:
        self.dismiss(None)
