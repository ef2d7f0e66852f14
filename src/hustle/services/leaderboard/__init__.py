"""Leaderboard services: the persisted top-N table and name entry."""

from hustle.services.leaderboard.name_entry import DEFAULT_NAME_LENGTH, NameEntry
from hustle.services.leaderboard.store import (
    DEFAULT_LEADERBOARD_PATH,
    MAX_ENTRIES,
    LeaderboardEntry,
    LeaderboardStore,
    NotEligibleError,
    RegisterResult,
    format_rank,
    rank_suffix,
)

__all__ = [
    "DEFAULT_LEADERBOARD_PATH",
    "DEFAULT_NAME_LENGTH",
    "LeaderboardEntry",
    "LeaderboardStore",
    "MAX_ENTRIES",
    "NameEntry",
    "NotEligibleError",
    "RegisterResult",
    "format_rank",
    "rank_suffix",
]
