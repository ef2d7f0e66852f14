"""Hustle - end-of-day scoring and a persistent top-ten leaderboard."""

from pathlib import Path

__version__ = "0.1.0"

DATA_DIR = Path.home() / ".hustle"
