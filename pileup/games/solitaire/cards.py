"""
Standard Playing Cards - A 52-card deck plus two jokers.

Type ids read "<name> of <suit>" ("Ace of hearts", "7 of clubs",
"King of spades"), with "Joker #1" and "Joker #2" for the jokers.

Each type carries properties:
- suit: "hearts", "clubs", "diamonds", "spades" or "jokers"
- symbol: the suit's symbol
- rank: 1 (Ace) to 13 (King), 0 for jokers
- name: "Ace", "2", ..., "King", "Joker"
- short_name: "A", "2", ..., "K"

Groups are created for each suit, for "jokers", and for the colours
"red" and "black".
"""

from __future__ import annotations

from ...engine_core.card import CardInstance
from ...engine_core.library import Library


SUITS = ["hearts", "clubs", "diamonds", "spades"]

SUIT_SYMBOLS = {
    "diamonds": "♦",
    "hearts": "♥",
    "spades": "♠",
    "clubs": "♣",
    "jokers": "JJ",
}

SUIT_COLORS = {
    "diamonds": "red",
    "hearts": "red",
    "spades": "black",
    "clubs": "black",
    "jokers": "purple",
}

CARD_NAMES = {
    0: "Joker",
    1: "Ace",
    11: "Jack",
    12: "Queen",
    13: "King",
}

JOKERS = ["Joker #1", "Joker #2"]


def _card_name(rank: int) -> str:
    return CARD_NAMES.get(rank, str(rank))


def _short_name(name: str) -> str:
    # Named cards abbreviate to their initial; numbered ones keep the number
    return name[0] if len(name) > 2 else name


def build_library() -> Library:
    """Build a fresh playing-card library."""
    library = Library("playing cards")

    for suit in SUITS:
        symbol = SUIT_SYMBOLS[suit]
        for rank in range(1, 14):
            name = _card_name(rank)
            short_name = _short_name(name)
            library.register(
                f"{name} of {suit}",
                face=f"{short_name}{symbol}",
                properties={
                    "suit": suit,
                    "symbol": symbol,
                    "rank": rank,
                    "name": name,
                    "short_name": short_name,
                },
            )

    for joker_id in JOKERS:
        library.register(
            joker_id,
            face="JOKER",
            properties={
                "suit": "jokers",
                "symbol": "",
                "rank": 0,
                "name": "Joker",
                "short_name": "J O K E R",
            },
        )

    for suit in SUITS:
        library.create_group(suit, lambda props, suit=suit: props["suit"] == suit)
    library.create_group("jokers", lambda props: props["suit"] == "jokers")
    library.create_group("red", lambda props: SUIT_COLORS[props["suit"]] == "red")
    library.create_group("black", lambda props: SUIT_COLORS[props["suit"]] == "black")

    return library


LIBRARY = build_library()


# =============================================================================
# Convenience accessors
# =============================================================================

def card_rank(card: CardInstance) -> int:
    """1-13, or 0 for jokers."""
    return card.properties["rank"]


def card_suit(card: CardInstance) -> str:
    return card.properties["suit"]


def card_color(card: CardInstance) -> str:
    """red or black, and purple for jokers."""
    return SUIT_COLORS[card.properties["suit"]]
