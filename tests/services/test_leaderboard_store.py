"""Tests for the file-backed leaderboard store."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from hustle.services.leaderboard import (
    MAX_ENTRIES,
    LeaderboardEntry,
    LeaderboardStore,
    NotEligibleError,
    format_rank,
    rank_suffix,
)
from hustle.services.leaderboard.store import parse_line


def _write_lines(path: Path, *lines: str) -> None:
    path.write_text("".join(f"{line}\n" for line in lines))


def _full_store(path: Path, lowest: int = 100) -> LeaderboardStore:
    """A full table with scores lowest, lowest+10, ..., lowest+90."""
    _write_lines(
        path,
        *(f"#P{i:02d},{lowest + 10 * i}" for i in reversed(range(MAX_ENTRIES))),
    )
    return LeaderboardStore(path)


def _scores(store: LeaderboardStore) -> list[int]:
    return [e.score for e in store.get_entries()]


class TestRankSuffix:
    """Tests for ordinal suffixes."""

    @pytest.mark.parametrize(
        ("rank", "expected"),
        [
            pytest.param(1, "ST", id="first"),
            pytest.param(2, "ND", id="second"),
            pytest.param(3, "RD", id="third"),
            pytest.param(4, "TH", id="fourth"),
            pytest.param(10, "TH", id="tenth"),
            pytest.param(11, "TH", id="eleventh"),
            pytest.param(12, "TH", id="twelfth"),
            pytest.param(13, "TH", id="thirteenth"),
            pytest.param(21, "ST", id="twenty_first"),
            pytest.param(22, "ND", id="twenty_second"),
            pytest.param(23, "RD", id="twenty_third"),
            pytest.param(101, "ST", id="hundred_first"),
            pytest.param(111, "TH", id="hundred_eleventh"),
            pytest.param(112, "TH", id="hundred_twelfth"),
            pytest.param(213, "TH", id="two_hundred_thirteenth"),
        ],
    )
    def test_suffix(self, rank: int, expected: str) -> None:
        assert rank_suffix(rank) == expected

    def test_format_rank(self) -> None:
        assert format_rank(1) == "1ST"
        assert format_rank(12) == "12TH"

    def test_format_rank_rejects_zero(self) -> None:
        with pytest.raises(ValueError, match="Rank must be 1 or greater"):
            format_rank(0)


class TestParseLine:
    """Tests for parsing a single #name,score line."""

    def test_valid_line(self) -> None:
        assert parse_line("#ABC,250") == LeaderboardEntry(name="ABC", score=250)

    @pytest.mark.parametrize(
        "line",
        [
            pytest.param("#ABC,lots", id="non_numeric_score"),
            pytest.param("#ABC", id="missing_separator"),
            pytest.param("#ABC,", id="empty_score"),
        ],
    )
    def test_malformed_line_raises(self, line: str) -> None:
        with pytest.raises(ValueError):
            parse_line(line)


class TestLoad:
    """Tests for reading the backing file at construction."""

    def test_missing_file_is_created_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "leaderboards.txt"

        store = LeaderboardStore(path)

        assert path.exists()
        assert path.read_text() == ""
        assert store.get_entries() == []

    def test_reads_entries_in_order(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#AAA,30", "#BBB,20", "#CCC,10")

        store = LeaderboardStore(path)

        assert store.get_entries() == [
            LeaderboardEntry("AAA", 30),
            LeaderboardEntry("BBB", 20),
            LeaderboardEntry("CCC", 10),
        ]

    def test_stops_at_line_without_marker(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#AAA,30", "BBB,20", "#CCC,10")

        store = LeaderboardStore(path)

        assert _scores(store) == [30]

    def test_stops_at_empty_line(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#AAA,30", "", "#CCC,10")

        assert len(LeaderboardStore(path)) == 1

    def test_malformed_score_keeps_earlier_entries(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#AAA,30", "#BBB,abc", "#CCC,10")

        with caplog.at_level(logging.WARNING, logger="hustle.services.leaderboard.store"):
            store = LeaderboardStore(path)

        assert _scores(store) == [30]
        assert "line 2" in caplog.text

    def test_reads_at_most_capacity_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, *(f"#P{i},{100 - i}" for i in range(15)))

        store = LeaderboardStore(path)

        assert len(store) == MAX_ENTRIES
        assert store.lowest_score == 91

    def test_capacity_applies_to_first_lines_before_sorting(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#LOW,1", "#MID,2", "#TOP,99")

        store = LeaderboardStore(path, capacity=2)

        assert _scores(store) == [2, 1]

    def test_unsorted_file_is_sorted_on_load(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#LOW,5", "#TOP,50", "#MID,20")

        assert _scores(LeaderboardStore(path)) == [50, 20, 5]

    def test_unreadable_file_starts_empty(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#AAA,30")

        with (
            patch.object(Path, "read_text", side_effect=PermissionError("denied")),
            caplog.at_level(logging.WARNING),
        ):
            store = LeaderboardStore(path)

        assert store.get_entries() == []
        assert "Could not read leaderboard" in caplog.text

    def test_uncreatable_file_starts_empty(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "leaderboards.txt"

        with (
            patch.object(Path, "touch", side_effect=PermissionError("denied")),
            caplog.at_level(logging.WARNING),
        ):
            store = LeaderboardStore(path)

        assert store.get_entries() == []
        assert "Could not create leaderboard file" in caplog.text


class TestEligibility:
    """Tests for is_eligible on partial and full tables."""

    @pytest.mark.parametrize("score", [0, 1, 50, 10_000])
    def test_partial_table_accepts_any_non_negative_score(
        self, tmp_path: Path, score: int
    ) -> None:
        path = tmp_path / "leaderboards.txt"
        _write_lines(path, "#AAA,500", "#BBB,400")

        assert LeaderboardStore(path).is_eligible(score) is True

    def test_negative_score_never_eligible(self, tmp_path: Path) -> None:
        assert LeaderboardStore(tmp_path / "lb.txt").is_eligible(-5) is False

    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            pytest.param(99, False, id="below_lowest"),
            pytest.param(100, False, id="ties_lowest"),
            pytest.param(101, True, id="beats_lowest"),
            pytest.param(500, True, id="beats_top"),
        ],
    )
    def test_full_table_requires_beating_lowest(
        self, tmp_path: Path, score: int, expected: bool
    ) -> None:
        store = _full_store(tmp_path / "leaderboards.txt", lowest=100)

        assert store.is_full
        assert store.is_eligible(score) is expected

    def test_is_eligible_has_no_side_effects(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        store = _full_store(path)
        before = path.read_text()

        store.is_eligible(1_000)

        assert path.read_text() == before
        assert len(store) == MAX_ENTRIES


class TestRegister:
    """Tests for inserting, evicting, and persisting entries."""

    def test_register_into_empty_table(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        store = LeaderboardStore(path)

        result = store.register(42, "ABC")

        assert result.entry == LeaderboardEntry("ABC", 42)
        assert result.rank == 1
        assert result.evicted is None
        assert result.persisted is True
        assert path.read_text() == "#ABC,42\n"

    def test_register_keeps_descending_order(self, tmp_path: Path) -> None:
        store = LeaderboardStore(tmp_path / "leaderboards.txt")

        for score in (10, 30, 20, 5, 25):
            store.register(score, "XYZ")

        assert _scores(store) == [30, 25, 20, 10, 5]

    def test_ties_rank_below_existing_entries(self, tmp_path: Path) -> None:
        store = LeaderboardStore(tmp_path / "leaderboards.txt")
        store.register(20, "OLD")

        result = store.register(20, "NEW")

        assert result.rank == 2
        assert [e.name for e in store.get_entries()] == ["OLD", "NEW"]

    def test_eviction_of_lowest_entry(self, tmp_path: Path) -> None:
        """A full table with lowest 100: registering 150 evicts the 100 entry."""
        path = tmp_path / "leaderboards.txt"
        store = _full_store(path, lowest=100)

        result = store.register(150, "AAA")

        assert len(store) == MAX_ENTRIES
        assert result.evicted == LeaderboardEntry("P00", 100)
        assert 100 not in _scores(store)
        assert _scores(store) == sorted(_scores(store), reverse=True)
        assert store.get_entries()[result.rank - 1] == LeaderboardEntry("AAA", 150)
        assert result.rank == 6

    def test_capacity_never_exceeded(self, tmp_path: Path) -> None:
        store = LeaderboardStore(tmp_path / "leaderboards.txt")

        for score in range(1, 40):
            store.register(score, "RUN")
            assert len(store) <= MAX_ENTRIES
            assert _scores(store) == sorted(_scores(store), reverse=True)

        assert _scores(store) == list(range(39, 29, -1))

    def test_ineligible_score_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        store = _full_store(path, lowest=100)
        before = path.read_text()

        with pytest.raises(NotEligibleError, match="lowest is 100") as excinfo:
            store.register(100, "BAD")

        assert excinfo.value.score == 100
        assert path.read_text() == before
        assert len(store) == MAX_ENTRIES

    @pytest.mark.parametrize(
        "name",
        [
            pytest.param("", id="empty"),
            pytest.param("A,B", id="comma"),
            pytest.param("A\nB", id="newline"),
        ],
    )
    def test_invalid_name_raises(self, tmp_path: Path, name: str) -> None:
        store = LeaderboardStore(tmp_path / "leaderboards.txt")

        with pytest.raises(ValueError, match="name"):
            store.register(10, name)

        assert store.get_entries() == []

    def test_file_is_overwritten_not_appended(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        store = LeaderboardStore(path)

        store.register(10, "AAA")
        store.register(20, "BBB")

        assert path.read_text() == "#BBB,20\n#AAA,10\n"
        assert not path.with_suffix(".txt.tmp").exists()

    def test_write_failure_keeps_memory_state(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "leaderboards.txt"
        store = LeaderboardStore(path)

        with (
            patch.object(Path, "replace", side_effect=OSError("disk full")),
            caplog.at_level(logging.WARNING),
        ):
            result = store.register(77, "ABC")

        assert result.persisted is False
        assert store.get_entries() == [LeaderboardEntry("ABC", 77)]
        assert path.read_text() == ""
        assert "Could not write leaderboard" in caplog.text

    def test_failed_cleanup_after_write_failure_is_not_raised(
        self, tmp_path: Path, caplog
    ) -> None:
        path = tmp_path / "leaderboards.txt"
        store = LeaderboardStore(path)

        with (
            patch.object(Path, "replace", side_effect=OSError("disk full")),
            patch.object(Path, "unlink", side_effect=OSError("read-only")),
            caplog.at_level(logging.WARNING),
        ):
            result = store.register(77, "ABC")

        assert result.persisted is False
        assert store.get_entries() == [LeaderboardEntry("ABC", 77)]
        assert "Could not write leaderboard" in caplog.text


class TestSnapshots:
    """Tests for read-only views of the table."""

    def test_file_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "leaderboards.txt"
        store = LeaderboardStore(path)
        for score, name in ((30, "AAA"), (10, "CCC"), (20, "BBB")):
            store.register(score, name)

        reloaded = LeaderboardStore(path)

        assert reloaded.get_entries() == store.get_entries()
        assert len(reloaded) == 3

    def test_slots_pad_with_none(self, tmp_path: Path) -> None:
        store = LeaderboardStore(tmp_path / "leaderboards.txt")
        store.register(5, "ABC")

        slots = store.slots()

        assert len(slots) == MAX_ENTRIES
        assert slots[0] == LeaderboardEntry("ABC", 5)
        assert slots[1:] == [None] * (MAX_ENTRIES - 1)

    def test_get_entries_returns_copy(self, tmp_path: Path) -> None:
        store = LeaderboardStore(tmp_path / "leaderboards.txt")
        store.register(5, "ABC")

        store.get_entries().clear()

        assert len(store) == 1

    def test_custom_capacity(self, tmp_path: Path) -> None:
        store = LeaderboardStore(tmp_path / "leaderboards.txt", capacity=3)
        for score in (1, 2, 3):
            store.register(score, "ABC")

        assert store.is_full
        assert store.is_eligible(1) is False
        assert len(store.slots()) == 3

    def test_zero_capacity_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="capacity"):
            LeaderboardStore(tmp_path / "leaderboards.txt", capacity=0)
