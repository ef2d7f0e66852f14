"""Hustle - Textual front end for the end-of-day leaderboard flow.

The app is a thin presentation layer over the services package:
- NameEntryModal collects a name when the day score places
- LeaderboardModal shows the table, highlighting a fresh entry
"""

import sys

from textual.app import App
from textual.binding import Binding

from hustle import __version__
from hustle.modals import LeaderboardModal, NameEntryModal
from hustle.services.config import HustleSettings, HustleSettingsManager
from hustle.services.leaderboard import (
    DEFAULT_NAME_LENGTH,
    LeaderboardEntry,
    LeaderboardStore,
    RegisterResult,
)

USAGE = "usage: hustle [SCORE]"


class HustleApp(App):
    """Runs the end-of-day flow once and exits when the leaderboard closes."""

    TITLE = f"Hustle v{__version__}"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        store: LeaderboardStore,
        score: int | None = None,
        name_length: int = DEFAULT_NAME_LENGTH,
    ) -> None:
        super().__init__()
        self._store = store
        self._score = score
        self._name_length = name_length

    @property
    def store(self) -> LeaderboardStore:
        return self._store

    def on_mount(self) -> None:
        if self._score is not None and self._store.is_eligible(self._score):
            self.push_screen(
                NameEntryModal(self._store, self._score, self._name_length),
                callback=self._on_name_entered,
            )
            return
        if self._score is not None:
            self.notify(f"Your score: {self._score}", title="Day complete")
        self._show_leaderboard()

    def _on_name_entered(self, result: RegisterResult | None) -> None:
        self._show_leaderboard(result.entry if result else None)

    def _show_leaderboard(self, highlight: LeaderboardEntry | None = None) -> None:
        self.push_screen(
            LeaderboardModal(self._store, highlight=highlight),
            callback=lambda _: self.exit(),
        )


def parse_args(argv: list[str]) -> int | None:
    """Return the optional day score from the command line."""
    if not argv:
        return None
    if len(argv) > 1:
        raise SystemExit(USAGE)
    try:
        return int(argv[0])
    except ValueError:
        raise SystemExit(f"{USAGE}\nSCORE must be an integer, got {argv[0]!r}") from None


def main(argv: list[str] | None = None) -> None:
    """Entry point for the application."""
    score = parse_args(sys.argv[1:] if argv is None else argv)
    settings: HustleSettings = HustleSettingsManager().load()

    app = HustleApp(
        settings.build_store(),
        score=score,
        name_length=settings.name_length,
    )
    app.run()


if __name__ == "__main__":
    main()
