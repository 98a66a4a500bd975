"""Game-specific condition sets and helpers built on the simulation engine."""

from roller.games.presets import ConditionSet, Game, get_preset, presets
from roller.games.rankings import rankings

__all__ = [
    "ConditionSet",
    "Game",
    "get_preset",
    "presets",
    "rankings",
]
