"""
Piles - Named, ordered collections of cards plus pile groups.

Index 0 of a pile is the bottom card and the last item is the top card.
Every card in pile.items has card.pile == pile.id and vice versa; only
the MoveEngine's pile primitives edit items or card.pile.

Pile groups are plain labels (many-to-many) used for settings lookups
and by rule code ("is this one of the foundation piles?").
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .card import CardInstance
from .errors import DuplicatePileError, InvalidPileIdError, UnknownPileError


def validate_pile_id(pile_id: str) -> None:
    """Raise InvalidPileIdError for ids that clash with settings keys."""
    if not pile_id or pile_id.startswith(".") or pile_id == "*":
        raise InvalidPileIdError(pile_id)


@dataclass
class Pile:
    """A pile of cards."""
    id: str
    items: list[CardInstance] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0

    @property
    def top_card(self) -> CardInstance | None:
        return self.items[-1] if self.items else None

    @property
    def bottom_card(self) -> CardInstance | None:
        return self.items[0] if self.items else None


class PileStore:
    """
    All piles of one session, and their group memberships.

    create_pile/delete_pile manage the piles themselves. Deleting a pile
    detaches its cards through the detach hook supplied by the MoveEngine
    so card.pile never names a pile that is gone.
    """

    def __init__(self):
        self._piles: dict[str, Pile] = {}
        # pile id -> group ids, in the order the pile joined them
        self._groups: dict[str, list[str]] = {}

    def __contains__(self, pile_id: str) -> bool:
        return pile_id in self._piles

    def __iter__(self):
        return iter(list(self._piles.values()))

    @property
    def pile_ids(self) -> list[str]:
        """All pile ids, in creation order."""
        return list(self._piles.keys())

    def get(self, pile_id: str) -> Pile:
        """Get a pile by id."""
        pile = self._piles.get(pile_id)
        if pile is None:
            raise UnknownPileError(pile_id)
        return pile

    def create_pile(self, pile_id: str) -> Pile:
        """Create a new, empty pile."""
        validate_pile_id(pile_id)
        if pile_id in self._piles:
            raise DuplicatePileError(pile_id)
        pile = Pile(id=pile_id)
        self._piles[pile_id] = pile
        return pile

    def delete_pile(self, pile_id: str, detach) -> None:
        """
        Delete a pile.

        detach(card) is called for every card in the pile and must take
        the card out of the pile without touching its stacking.
        """
        pile = self.get(pile_id)
        for card in list(pile.items):
            detach(card)
        del self._piles[pile_id]
        self._groups.pop(pile_id, None)

    def clear_all(self) -> None:
        """Empty every pile's item list. Used when starting a new game."""
        for pile in self._piles.values():
            pile.items = []

    # =========================================================================
    # Pile groups
    # =========================================================================

    def add_to_group(self, pile_id: str, group_id: str) -> None:
        """Add a pile to a group. Does nothing if it is already there."""
        self.get(pile_id)
        groups = self._groups.setdefault(pile_id, [])
        if group_id not in groups:
            groups.append(group_id)

    def remove_from_group(self, pile_id: str, group_id: str) -> None:
        """Remove a pile from a group. Does nothing if it isn't in it."""
        groups = self._groups.get(pile_id)
        if groups and group_id in groups:
            groups.remove(group_id)

    def is_in_group(self, pile_id: str | None, group_id: str) -> bool:
        if pile_id is None:
            return False
        return group_id in self._groups.get(pile_id, ())

    def all_in_group(self, group_id: str) -> list[str]:
        """All piles in a group, in pile creation order."""
        return [
            pile_id for pile_id in self._piles
            if group_id in self._groups.get(pile_id, ())
        ]

    def groups_of(self, pile_id: str) -> list[str]:
        """All groups a pile belongs to."""
        return list(self._groups.get(pile_id, ()))
