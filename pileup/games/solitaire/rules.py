"""
Klondike Solitaire - Rules for the classic patience game.

Table:
- draw: the face-down stock; its action turns three cards onto "drawn"
- drawn: the waste; once "draw" is empty its action turns everything back
- n1..n7 ("numbered"): the tableau, dealt 1..7 cards with the top face up
- top1..top4 ("top"): the foundations, built up by suit from the Ace

Plays:
- A face-up card on a numbered pile can be picked up together with every
  card above it, provided colours alternate all the way up. While it is
  considered, the cards above are stacked onto it so they move as one.
- The top card of "drawn" or of a foundation can be picked up alone.
- A numbered pile accepts a card one rank below its top card and of the
  other colour, or a King when empty.
- A foundation accepts a single card (no stack) of the same suit, one
  rank above its top card, or an Ace when empty.
- After a card leaves a numbered pile, that pile's new top card is
  turned face up.
"""

from __future__ import annotations
from typing import Any

from ...engine_core.card import CardInstance
from ...rules.actions import flip_into, when_empty
from ...rules.base import GameRules
from ...rules.variants import NOT_PLAYABLE, NO_TARGET, CleanupFn, Playability, PlayableWithPrep, PileTarget, Target, to_playability
from ...session.game import Game
from . import cards
from .cards import card_color, card_rank, card_suit


NUMBERED = [f"n{n}" for n in range(1, 8)]
FOUNDATIONS = [f"top{n}" for n in range(1, 5)]


def heads_valid_stack(game: Game, card: CardInstance) -> bool:
    """True if the cards above this one in its pile alternate in colour."""
    position = game.position_in_pile(card)
    if position is None:
        return False
    last_color = card_color(card)
    for index in range(position + 1, game.pile_size(card.pile)):
        here_color = card_color(game.card_at(card.pile, index))
        if here_color == last_color:
            return False
        last_color = here_color
    return True


def _gather_stack(game: Game, card: CardInstance) -> CleanupFn:
    # Each stacked card lands right after the stack, so its index is unchanged
    position = game.position_in_pile(card)
    for index in range(position + 1, game.pile_size(card.pile)):
        game.stack_onto(game.card_at(card.pile, index), card)

    def release(game: Game, card: CardInstance) -> None:
        game.unstack_all_from(card)

    return release


class KlondikeRules(GameRules):
    """Klondike: draw three, build down in alternating colours."""

    layout: dict[str, Any] = {
        "piles": ["draw", "drawn", *NUMBERED, *FOUNDATIONS],
        "pile_groups": {
            "numbered": NUMBERED,
            "top": FOUNDATIONS,
        },
        "pile_settings": {
            "draw": {
                "display": "deck",
                "actions": [flip_into("drawn", 3)],
            },
            "drawn": {
                "display": "show_top_3",
                "actions": [
                    flip_into("draw", "all")
                    .with_condition(when_empty("draw"))
                    .with_icon("⭮")
                ],
            },
            ".numbered": {"display": "stacked"},
            ".top": {"display": "show_top_1"},
        },
    }

    def setup(self, game: Game) -> None:
        """Shuffle every non-joker card into "draw", then deal the tableau."""
        for type_id in game.library.all_types:
            if type_id in cards.JOKERS:
                continue
            game.put_on_pile(game.create_card(type_id), "draw")

        game.shuffle_pile("draw")
        for n, pile_id in enumerate(NUMBERED, start=1):
            for _ in range(n):
                game.put_on_pile(game.top_card("draw"), pile_id)
            game.flip_card(game.top_card(pile_id), True)

    def playable(self, game: Game, card: CardInstance) -> Playability:
        if card.pile is None or not card.face_up:
            return NOT_PLAYABLE
        if game.pile_is_in_group(card.pile, "numbered"):
            if heads_valid_stack(game, card):
                return PlayableWithPrep(prep=_gather_stack)
            return NOT_PLAYABLE
        if card.pile == "drawn" or game.pile_is_in_group(card.pile, "top"):
            return to_playability(game.is_top_of_pile(card))
        return NOT_PLAYABLE

    def play_target(
        self,
        game: Game,
        card: CardInstance,
        pile_id: str | None,
        target_card: CardInstance | None,
    ) -> Target:
        """Only ever targets whole piles, never individual cards."""
        if pile_id is None:
            return NO_TARGET

        if game.pile_is_in_group(pile_id, "numbered"):
            onto = game.top_card(pile_id)
            if onto is None:
                accepted = card_rank(card) == 13
            else:
                accepted = (
                    card_color(card) != card_color(onto)
                    and card_rank(onto) == card_rank(card) + 1
                )
            return PileTarget(pile_id) if accepted else NO_TARGET

        if game.pile_is_in_group(pile_id, "top"):
            if game.has_stack(card):
                return NO_TARGET
            onto = game.top_card(pile_id)
            if onto is None:
                accepted = card_rank(card) == 1
            else:
                accepted = (
                    card_suit(card) == card_suit(onto)
                    and card_rank(onto) == card_rank(card) - 1
                )
            return PileTarget(pile_id) if accepted else NO_TARGET

        return NO_TARGET

    def play_card(
        self,
        game: Game,
        card: CardInstance,
        pile_id: str | None,
        target_card: CardInstance | None,
    ) -> None:
        prev_pile = card.pile

        if game.pile_is_in_group(pile_id, "numbered"):
            game.put_stack_on_pile(card, pile_id)
        elif game.pile_is_in_group(pile_id, "top"):
            game.put_on_pile(card, pile_id)
        else:
            raise ValueError(f"Invalid pile target '{pile_id}'")

        if game.pile_is_in_group(prev_pile, "numbered"):
            old_top = game.top_card(prev_pile)
            if old_top is not None:
                game.flip_card(old_top, True)

    def has_won(self, game: Game) -> bool:
        """True once all four foundations hold a full suit."""
        return all(game.pile_size(pile_id) == 13 for pile_id in FOUNDATIONS)


def new_game(seed: int | None = None) -> Game:
    """Create a Klondike game and deal it."""
    game = Game(cards.LIBRARY, KlondikeRules(), seed=seed)
    game.new_game()
    return game
