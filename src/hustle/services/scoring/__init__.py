"""Scoring services for the daily score."""

from hustle.services.scoring.accumulator import (
    ScoreAccumulator,
    ScoreBreakdown,
    meal_interval_bonus,
    study_band,
)

__all__ = [
    "ScoreAccumulator",
    "ScoreBreakdown",
    "meal_interval_bonus",
    "study_band",
]
