"""Services package - import from subdirectories directly.

Subpackages:
- config: Persisted user settings
- leaderboard: Top-N leaderboard store and name entry
- scoring: Daily score accumulator
"""
