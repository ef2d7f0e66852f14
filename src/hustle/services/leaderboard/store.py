"""LeaderboardStore - bounded top-N table persisted as ``#name,score`` lines."""

import contextlib
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from hustle import DATA_DIR

_log = logging.getLogger(__name__)

MAX_ENTRIES = 10
LINE_MARKER = "#"
FIELD_SEPARATOR = ","
DEFAULT_LEADERBOARD_PATH = DATA_DIR / "leaderboards.txt"

_FORBIDDEN_NAME_CHARS = frozenset({FIELD_SEPARATOR, "\n", "\r"})


class NotEligibleError(ValueError):
    """Raised when a score is registered that does not place in the table."""

    def __init__(self, score: int, lowest: int | None) -> None:
        super().__init__(
            f"Score {score} does not place on the leaderboard (lowest is {lowest})"
        )
        self.score = score
        self.lowest = lowest


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    """A single (name, score) row of the leaderboard."""

    name: str
    score: int

    def to_line(self) -> str:
        return f"{LINE_MARKER}{self.name}{FIELD_SEPARATOR}{self.score}"


@dataclass(frozen=True, slots=True)
class RegisterResult:
    """Outcome of a successful register call."""

    entry: LeaderboardEntry
    rank: int
    evicted: LeaderboardEntry | None = None
    persisted: bool = True


def rank_suffix(rank: int) -> str:
    """Return the ordinal suffix for a 1-based rank ("ST", "ND", "RD" or "TH").

    11, 12 and 13 (and 111, 212, ...) always take "TH".
    """
    if rank % 100 in (11, 12, 13):
        return "TH"
    return {1: "ST", 2: "ND", 3: "RD"}.get(rank % 10, "TH")


def format_rank(rank: int) -> str:
    """Format a rank for display, e.g. ``1`` -> ``"1ST"``."""
    if rank < 1:
        raise ValueError(f"Rank must be 1 or greater, got {rank}")
    return f"{rank}{rank_suffix(rank)}"


def validate_name(name: str) -> str:
    """Check that ``name`` can be written to a leaderboard line."""
    if not name:
        raise ValueError("Leaderboard name cannot be empty")
    if _FORBIDDEN_NAME_CHARS.intersection(name):
        raise ValueError(f"Leaderboard name cannot contain commas or newlines: {name!r}")
    return name


def parse_line(line: str) -> LeaderboardEntry:
    """Parse one ``#name,score`` line.

    Raises ValueError when the line lacks a separator or the score is not
    an integer.
    """
    body = line[len(LINE_MARKER):] if line.startswith(LINE_MARKER) else line
    name, sep, raw_score = body.partition(FIELD_SEPARATOR)
    if not sep:
        raise ValueError(f"Missing '{FIELD_SEPARATOR}' in leaderboard line {line!r}")
    return LeaderboardEntry(name=name, score=int(raw_score))


def _by_score(entry: LeaderboardEntry) -> int:
    return -entry.score


class LeaderboardStore:
    """Top-N high score table backed by a flat text file.

    The table is loaded once on construction and written back in full after
    every successful :meth:`register`. I/O problems are logged and never
    raised to the caller: a store that cannot read its file starts empty,
    and a store that cannot write keeps its in-memory table.
    """

    def __init__(
        self,
        path: Path = DEFAULT_LEADERBOARD_PATH,
        capacity: int = MAX_ENTRIES,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"Leaderboard capacity must be positive, got {capacity}")
        self._path = Path(path)
        self._capacity = capacity
        self._entries: list[LeaderboardEntry] = []
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._entries) >= self._capacity

    @property
    def lowest_score(self) -> int | None:
        """Score of the last-ranked entry, or None for an empty table."""
        if not self._entries:
            return None
        return self._entries[-1].score

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LeaderboardEntry]:
        return iter(list(self._entries))

    def load(self) -> None:
        """Replace the in-memory table with the contents of the backing file.

        Parsing stops at the first empty line, the first line without the
        ``#`` marker, or the first line with a malformed score. Whatever was
        read up to that point is kept.

        At most ``capacity`` lines are read from the top of the file and only
        then sorted, so an unsorted file longer than the table keeps its first
        lines rather than its highest scores.
        """
        self._entries = []
        if not self._ensure_file():
            return

        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            _log.warning("Could not read leaderboard %s: %s", self._path, exc)
            return

        loaded: list[LeaderboardEntry] = []
        for lineno, line in enumerate(lines, start=1):
            if len(loaded) >= self._capacity:
                break
            if not line.startswith(LINE_MARKER):
                break
            try:
                loaded.append(parse_line(line))
            except ValueError as exc:
                _log.warning(
                    "Stopped reading leaderboard %s at line %d: %s",
                    self._path,
                    lineno,
                    exc,
                )
                break

        loaded.sort(key=_by_score)
        self._entries = loaded
        _log.debug("Loaded %d leaderboard entries from %s", len(loaded), self._path)

    def is_eligible(self, score: int) -> bool:
        """Return True if ``score`` would earn a place in the table."""
        if score < 0:
            return False
        if not self.is_full:
            return True
        return score > self._entries[-1].score

    def register(self, score: int, name: str) -> RegisterResult:
        """Insert a new entry, evicting the lowest one if the table is full.

        Raises:
            NotEligibleError: ``score`` does not place in the table.
            ValueError: ``name`` cannot be stored in the leaderboard file.
        """
        if not self.is_eligible(score):
            raise NotEligibleError(score, self.lowest_score)
        entry = LeaderboardEntry(name=validate_name(name), score=score)

        ranked = [*self._entries, entry]
        ranked.sort(key=_by_score)
        evicted = ranked.pop() if len(ranked) > self._capacity else None
        self._entries = ranked

        rank = next(i for i, e in enumerate(ranked, start=1) if e is entry)
        persisted = self._write()
        return RegisterResult(entry=entry, rank=rank, evicted=evicted, persisted=persisted)

    def get_entries(self) -> list[LeaderboardEntry]:
        """Snapshot of the filled entries, highest score first."""
        return list(self._entries)

    def slots(self) -> list[LeaderboardEntry | None]:
        """Snapshot padded with None up to capacity, for fixed-size display."""
        return [*self._entries, *([None] * (self._capacity - len(self._entries)))]

    def _ensure_file(self) -> bool:
        """Create an empty backing file if none exists. Returns False on failure."""
        if self._path.exists():
            return True
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch()
        except OSError as exc:
            _log.warning("Could not create leaderboard file %s: %s", self._path, exc)
            return False
        return True

    def _write(self) -> bool:
        """Overwrite the backing file with the current table.

        Writes to a sibling ``.tmp`` file first and renames it into place.
        """
        payload = "".join(f"{entry.to_line()}\n" for entry in self._entries)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            tmp.replace(self._path)
        except OSError as exc:
            _log.warning("Could not write leaderboard %s: %s", self._path, exc)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            return False
        return True
