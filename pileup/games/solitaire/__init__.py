"""
Solitaire - Klondike on a standard deck of playing cards.
"""

from .cards import LIBRARY, SUITS, SUIT_COLORS, build_library, card_rank, card_suit, card_color
from .rules import KlondikeRules, new_game

__all__ = [
    "LIBRARY",
    "SUITS",
    "SUIT_COLORS",
    "build_library",
    "card_rank",
    "card_suit",
    "card_color",
    "KlondikeRules",
    "new_game",
]
