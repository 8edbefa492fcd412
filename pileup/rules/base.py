"""
Game Rules - The interface a game's rules implement.

The engine never decides what is legal; it asks the rules:
- setup(game): fill an empty table for a fresh game
- cleanup(game): undo dynamic setup (e.g. delete piles made mid-game)
  before the table is reset
- playable(game, card): can this card be picked up?
- play_target(game, card, pile_id, target_card): is this a valid target?
- play_card(game, card, pile_id, target_card): apply a play

Subclass GameRules and override what the game needs. Answers may be the
variants from rules.variants or the loose forms those helpers accept.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

from ..engine_core.card import CardInstance
from .schema import TableLayout
from .variants import NOT_PLAYABLE, NO_TARGET

if TYPE_CHECKING:
    from ..session.game import Game


class GameRules:
    """Base rules: an empty table where nothing can be played."""

    layout: TableLayout | dict[str, Any] | None = None

    def setup(self, game: Game) -> None:
        pass

    def cleanup(self, game: Game) -> None:
        pass

    def playable(self, game: Game, card: CardInstance) -> Any:
        return NOT_PLAYABLE

    def play_target(
        self,
        game: Game,
        card: CardInstance,
        pile_id: str | None,
        target_card: CardInstance | None,
    ) -> Any:
        return NO_TARGET

    def play_card(
        self,
        game: Game,
        card: CardInstance,
        pile_id: str | None,
        target_card: CardInstance | None,
    ) -> None:
        pass
