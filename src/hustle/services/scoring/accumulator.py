"""ScoreAccumulator - turns a day of player actions into an integer score."""

import logging
from dataclasses import dataclass

_log = logging.getLogger(__name__)

MIN_STUDY_HOURS = 1
MAX_STUDY_HOURS = 2

STUDY_BAND_REWARD = 10
UNDER_STUDY_PENALTY = -5
OVER_STUDY_PENALTY = -3

LOCATION_BONUS = 5
RECREATION_ACTIVITY_BONUS = 4

SINGLE_MEAL_BONUS = 3
MEAL_INTERVAL_BONUS = 5
MIN_MEAL_INTERVAL = 2
MAX_MEAL_INTERVAL = 6


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """Per-term contributions from the last score calculation."""

    study_band: int
    study_locations: int
    recreation_locations: int
    recreation_activities: int
    meal_bonus: int

    @property
    def total(self) -> int:
        return (
            self.study_band
            + self.study_locations
            + self.recreation_locations
            + self.recreation_activities
            + self.meal_bonus
        )


def study_band(study_count: int) -> int:
    """Reward studying within the target band, penalize either side of it."""
    if MIN_STUDY_HOURS <= study_count <= MAX_STUDY_HOURS:
        return STUDY_BAND_REWARD
    if study_count < MIN_STUDY_HOURS:
        return UNDER_STUDY_PENALTY
    return OVER_STUDY_PENALTY


def _interval_ok(earlier: int, later: int) -> bool:
    return MIN_MEAL_INTERVAL <= later - earlier <= MAX_MEAL_INTERVAL


def meal_interval_bonus(sorted_times: list[int]) -> int:
    """Bonus for well-spaced meals, given meal times in ascending order.

    One meal earns a flat bonus. With two or more, the gap between the first
    two meals is checked, and only when that gap qualifies and exactly three
    meals were eaten is the second gap checked too. Later meals are ignored.
    """
    if len(sorted_times) == 1:
        return SINGLE_MEAL_BONUS
    if len(sorted_times) < 2 or not _interval_ok(sorted_times[0], sorted_times[1]):
        return 0

    bonus = MEAL_INTERVAL_BONUS
    if len(sorted_times) == 3 and _interval_ok(sorted_times[1], sorted_times[2]):
        bonus += MEAL_INTERVAL_BONUS
    return bonus


class ScoreAccumulator:
    """Tracks study, meals and recreation for the current day.

    Call :meth:`calculate_score` at the end of the day, then
    :meth:`reset_daily_counters` before the next one. The reset clears the
    location sets and meal times but keeps the cumulative hour, meal and
    activity counts.
    """

    def __init__(self) -> None:
        self._study_locations: set[str] = set()
        self._recreation_locations: set[str] = set()
        self._meal_times: list[int] = []
        self._study_count = 0
        self._meal_count = 0
        self._recreation_count = 0
        self._score = 0
        self._breakdown: ScoreBreakdown | None = None

    def study(self, hours: int, location: str) -> None:
        if hours < 0:
            raise ValueError(f"Study hours cannot be negative, got {hours}")
        self._study_count += hours
        self._study_locations.add(location)

    def eat(self, time_eaten: int) -> None:
        """Record a meal at ``time_eaten`` (hour on a 24-hour clock)."""
        self._meal_count += 1
        self._meal_times.append(time_eaten)

    def do_rec_activity(self, location: str) -> None:
        self._recreation_count += 1
        self._recreation_locations.add(location)

    def calculate_score(self) -> int:
        """Recompute the score from the current counters and store it.

        Sorts the recorded meal times in place as a side effect.
        """
        self._meal_times.sort()
        breakdown = ScoreBreakdown(
            study_band=study_band(self._study_count),
            study_locations=len(self._study_locations) * LOCATION_BONUS,
            recreation_locations=len(self._recreation_locations) * LOCATION_BONUS,
            recreation_activities=self._recreation_count * RECREATION_ACTIVITY_BONUS,
            meal_bonus=meal_interval_bonus(self._meal_times),
        )
        self._breakdown = breakdown
        self._score = breakdown.total
        _log.debug("Calculated day score %d from %s", self._score, breakdown)
        return self._score

    def reset_daily_counters(self) -> None:
        self._study_locations.clear()
        self._recreation_locations.clear()
        self._meal_times.clear()

    @property
    def score(self) -> int:
        return self._score

    @property
    def study_count(self) -> int:
        return self._study_count

    @property
    def meal_count(self) -> int:
        return self._meal_count

    @property
    def recreation_count(self) -> int:
        return self._recreation_count

    @property
    def study_locations(self) -> frozenset[str]:
        return frozenset(self._study_locations)

    @property
    def recreation_locations(self) -> frozenset[str]:
        return frozenset(self._recreation_locations)

    @property
    def meal_times(self) -> tuple[int, ...]:
        return tuple(self._meal_times)

    @property
    def breakdown(self) -> ScoreBreakdown | None:
        """Terms of the last :meth:`calculate_score` call, if any."""
        return self._breakdown
