"""
Queries - Read-only accessors over piles and stacks.

Used by rule callbacks to inspect the table. Nothing here mutates state,
and "nothing there" is always answered with None (or False), never with
an exception. Asking about a pile id that doesn't exist is a programmer
error and raises UnknownPileError.
"""

from __future__ import annotations

from . import stacking
from .card import CardInstance
from .piles import PileStore


class QueryAPI:
    """Read-only view of one session's piles and stacks."""

    def __init__(self, piles: PileStore):
        self.piles = piles

    # Pile contents

    def cards_in_pile(self, pile_id: str) -> list[CardInstance]:
        """All cards in a pile, bottom first (a copy)."""
        return list(self.piles.get(pile_id).items)

    def card_at(self, pile_id: str, position: int) -> CardInstance | None:
        """The card at a zero-based position in a pile, or None."""
        items = self.piles.get(pile_id).items
        if 0 <= position < len(items):
            return items[position]
        return None

    def top_card(self, pile_id: str) -> CardInstance | None:
        return self.piles.get(pile_id).top_card

    def bottom_card(self, pile_id: str) -> CardInstance | None:
        return self.piles.get(pile_id).bottom_card

    def pile_size(self, pile_id: str) -> int:
        return self.piles.get(pile_id).count

    # Card position

    def position_in_pile(self, card: CardInstance) -> int | None:
        """Zero-based index of the card in its pile, or None if pile-less."""
        if card.pile is None:
            return None
        items = self.piles.get(card.pile).items
        for index, item in enumerate(items):
            if item is card:
                return index
        return None

    def is_top_of_pile(self, card: CardInstance) -> bool:
        if card.pile is None:
            return False
        return self.piles.get(card.pile).top_card is card

    # Stacks

    def has_stack(self, card: CardInstance) -> bool:
        """True if any card is stacked directly on this one."""
        return card.stack is not None

    def position_in_stack(self, card: CardInstance) -> int | None:
        """
        Index of the card among the cards stacked on the same parent.

        0 means it is the first card stacked on its parent. Cards stacked
        on this card itself are ignored. Returns None for unstacked cards,
        even if they are the base of a stack.
        """
        parent = card.stacked_on
        if parent is None or parent.stack is None:
            return None
        for index, sibling in enumerate(parent.stack):
            if sibling is card:
                return index
        return None

    def is_top_of_stack(self, card: CardInstance) -> bool:
        """
        True if nothing is stacked on the card and it is the last card
        stacked on its parent (or has no parent at all).
        """
        if card.stack is not None:
            return False
        parent = card.stacked_on
        if parent is None:
            return True
        return self.position_in_stack(card) == len(parent.stack) - 1

    def stack_root(self, card: CardInstance) -> CardInstance:
        return stacking.root(card)

    def has_stack_ancestor(self, card: CardInstance, ancestor: CardInstance) -> bool:
        return stacking.is_ancestor(card, ancestor)
