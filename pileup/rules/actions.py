"""
Pile Actions - Things a player can trigger on a pile besides playing a card.

An action bundles:
- icon: a short label for whatever displays the trigger
- perform(game, pile_id): the effect
- condition(game, pile_id) -> bool: optional gate

Conditions compose with not_(), any_() and all_(). The built-in actions
cover the usual deck chores: dealing cards across, flipping cards over
onto another pile, and shuffling cards back in.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Union

if TYPE_CHECKING:
    from ..session.game import Game


Condition = Callable[["Game", str], bool]
Perform = Callable[["Game", str], None]
CardCount = Union[int, str]


@dataclass
class PileAction:
    """An action attached to a pile."""
    icon: str
    perform: Perform
    condition: Optional[Condition] = None

    def with_icon(self, icon: str) -> PileAction:
        """Replace the icon. Returns the action for chaining."""
        self.icon = icon
        return self

    def with_condition(self, condition: Condition) -> PileAction:
        """
        Replace the condition. Returns the action for chaining.

        Use all_() to require several conditions at once.
        """
        self.condition = condition
        return self

    def is_available(self, game: Game, pile_id: str) -> bool:
        return self.condition is None or bool(self.condition(game, pile_id))

    def trigger(self, game: Game, pile_id: str) -> bool:
        """Perform the action if its condition holds. Returns whether it ran."""
        if not self.is_available(game, pile_id):
            return False
        self.perform(game, pile_id)
        return True


def _resolve_count(count: CardCount, available: int) -> int:
    if count == "all":
        return available
    return min(available, int(count))


# =============================================================================
# Built-in actions
# =============================================================================

def move_into(dest_pile_id: str, count: CardCount = 1) -> PileAction:
    """
    Move the top `count` cards (or "all") onto another pile.

    The moved cards keep their order and facing. They move one at a time,
    so any stacking among them is lost.
    """
    def perform(game: Game, pile_id: str) -> None:
        size = game.pile_size(pile_id)
        to_move = _resolve_count(count, size)
        move_index = size - to_move
        for _ in range(to_move):
            card = game.card_at(pile_id, move_index)
            game.put_on_pile(card, dest_pile_id)

    return PileAction(icon="→", perform=perform)


def flip_into(dest_pile_id: str, count: CardCount = 1) -> PileAction:
    """
    Flip the top `count` cards (or "all") over onto another pile.

    Cards are taken one by one from the top, so they land in reverse
    order, as when turning a handful of cards over together.
    """
    def perform(game: Game, pile_id: str) -> None:
        to_move = _resolve_count(count, game.pile_size(pile_id))
        for _ in range(to_move):
            card = game.top_card(pile_id)
            game.put_on_pile(card, dest_pile_id)
            game.flip_card(card)

    return PileAction(icon="↷", perform=perform)


def shuffle_into(dest_pile_id: str, count: CardCount = "all") -> PileAction:
    """
    Move the top `count` cards (default all) onto another pile, then
    shuffle that pile. The destination is shuffled even if nothing moved.
    """
    def perform(game: Game, pile_id: str) -> None:
        to_move = _resolve_count(count, game.pile_size(pile_id))
        for _ in range(to_move):
            card = game.top_card(pile_id)
            game.put_on_pile(card, dest_pile_id)
        game.shuffle_pile(dest_pile_id)

    return PileAction(icon="⭮", perform=perform)


# =============================================================================
# Conditions
# =============================================================================

def not_(condition: Condition) -> Condition:
    def check(game: Game, pile_id: str) -> bool:
        return not condition(game, pile_id)
    return check


def any_(*conditions: Condition) -> Condition:
    def check(game: Game, pile_id: str) -> bool:
        return any(cond(game, pile_id) for cond in conditions)
    return check


def all_(*conditions: Condition) -> Condition:
    def check(game: Game, pile_id: str) -> bool:
        return all(cond(game, pile_id) for cond in conditions)
    return check


def when_empty(pile_id: str) -> Condition:
    """
    Met when the named pile is empty.

    Note this checks `pile_id`, not the pile the action is attached to.
    """
    def check(game: Game, base_pile_id: str) -> bool:
        return game.pile_size(pile_id) == 0
    return check
