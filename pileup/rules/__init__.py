"""
Rules Module - The boundary between the engine and a game's rules.

Contains:
- GameRules: the callbacks a game implements
- Tagged variants for playability and play targets
- TableLayout: pydantic configuration for piles, groups and settings
- SettingsResolver: "*" / ".group" / id precedence for settings
- Pile actions and their conditions
"""

from .base import GameRules
from .variants import (
    Playability,
    NotPlayable,
    Playable,
    PlayableWithPrep,
    NOT_PLAYABLE,
    PLAYABLE,
    to_playability,
    Target,
    NoTarget,
    PileTarget,
    CardTarget,
    NO_TARGET,
    to_target,
)
from .schema import TableLayout, PileSettings
from .settings import SettingsResolver
from .actions import PileAction, move_into, flip_into, shuffle_into, not_, any_, all_, when_empty

__all__ = [
    "GameRules",
    "Playability",
    "NotPlayable",
    "Playable",
    "PlayableWithPrep",
    "NOT_PLAYABLE",
    "PLAYABLE",
    "to_playability",
    "Target",
    "NoTarget",
    "PileTarget",
    "CardTarget",
    "NO_TARGET",
    "to_target",
    "TableLayout",
    "PileSettings",
    "SettingsResolver",
    "PileAction",
    "move_into",
    "flip_into",
    "shuffle_into",
    "not_",
    "any_",
    "all_",
    "when_empty",
]
