"""
Game - One game session's table state.

A Game owns everything that must not be shared between sessions:
- an IdAllocator for card ids
- the PileStore
- a MoveEngine (and its random source)
- a QueryAPI
- a PlayController for consider/target/play

It is the surface rule callbacks work against: card creation, every move
operation, every query, and pile/group management are exposed directly
on the Game.

Lifecycle:
1. Game(library, rules) creates the layout's piles and groups
2. new_game() runs rules.cleanup, drops all cards, empties every pile,
   then runs rules.setup
3. Rule callbacks react to plays through the PlayController
"""

from __future__ import annotations
import logging
import random
from typing import Any

from ..config import shuffle_seed
from ..engine_core.card import CardInstance, IdAllocator, copy_properties
from ..engine_core.library import Library
from ..engine_core.moves import MoveEngine
from ..engine_core.piles import PileStore
from ..engine_core.queries import QueryAPI
from ..rules.base import GameRules
from ..rules.schema import PileSettings, TableLayout
from ..rules.settings import SettingsResolver
from .play import PlayController


logger = logging.getLogger(__name__)


class Game:
    """
    The state of a single ongoing game.

    Args:
        library: card types available to this game
        rules: the game's rules (defaults to an empty GameRules)
        layout: piles, groups and pile settings; defaults to rules.layout
        seed: seed for shuffling (defaults to PILEUP_SHUFFLE_SEED)
        rng: random source, overrides seed
    """

    def __init__(
        self,
        library: Library,
        rules: GameRules | None = None,
        layout: TableLayout | dict[str, Any] | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        self.library = library
        self.rules = rules or GameRules()
        self.layout = TableLayout.from_config(layout if layout is not None else self.rules.layout)

        if rng is None:
            rng = random.Random(seed if seed is not None else shuffle_seed())
        self.ids = IdAllocator()
        self.piles = PileStore()
        self.engine = MoveEngine(self.piles, rng=rng)
        self.queries = QueryAPI(self.piles)
        self.existing_cards: list[CardInstance] = []

        for pile_id in self.layout.piles:
            self.piles.create_pile(pile_id)
        for group_id, members in self.layout.pile_groups.items():
            for pile_id in members:
                self.piles.add_to_group(pile_id, group_id)

        self._settings = SettingsResolver(
            self.layout.pile_settings,
            groups_of=self.piles.groups_of,
            model=PileSettings,
        )
        self.controller = PlayController(self)

    @property
    def rng(self) -> random.Random:
        return self.engine.rng

    # =========================================================================
    # Cards
    # =========================================================================

    def create_card(self, type_id: str, face_up: bool = False) -> CardInstance:
        """
        Create a card of the given type, face down unless face_up.

        The card starts outside every pile. Its properties are a deep copy
        of the type's properties.
        """
        card_type = self.library.get_type(type_id)
        card = CardInstance(
            id=self.ids.next_id(),
            type_id=card_type.id,
            face_up=bool(face_up),
            properties=copy_properties(card_type.properties),
        )
        self.existing_cards.append(card)
        return card

    def flip_card(self, card: CardInstance, face_up: bool | None = None) -> None:
        self.engine.flip_card(card, face_up)

    # =========================================================================
    # Piles and pile groups
    # =========================================================================

    def create_pile(self, pile_id: str) -> None:
        self.piles.create_pile(pile_id)

    def delete_pile(self, pile_id: str) -> None:
        """Delete a pile. Its cards become pile-less; stacking is untouched."""
        self.engine.delete_pile(pile_id)

    def add_pile_to_group(self, pile_id: str, group_id: str) -> None:
        self.piles.add_to_group(pile_id, group_id)

    def remove_pile_from_group(self, pile_id: str, group_id: str) -> None:
        self.piles.remove_from_group(pile_id, group_id)

    def pile_is_in_group(self, pile_id: str | None, group_id: str) -> bool:
        return self.piles.is_in_group(pile_id, group_id)

    def all_piles_in_group(self, group_id: str) -> list[str]:
        return self.piles.all_in_group(group_id)

    def pile_settings(self, pile_id: str) -> PileSettings:
        """Resolved settings for a pile (its own > its groups > "*")."""
        self.piles.get(pile_id)
        return self._settings.resolve(pile_id)

    def trigger_action(self, pile_id: str, index: int) -> bool:
        """Trigger one of a pile's actions. Returns False if its condition failed."""
        action = self.pile_settings(pile_id).actions[index]
        triggered = action.trigger(self, pile_id)
        logger.debug("action %s on %s: %s", action.icon, pile_id, "ran" if triggered else "unavailable")
        return triggered

    # =========================================================================
    # Moves
    # =========================================================================

    def remove_from_pile(self, card: CardInstance) -> None:
        self.engine.remove_from_pile(card)

    def remove_stack_from_pile(self, card: CardInstance) -> None:
        self.engine.remove_stack_from_pile(card)

    def stack_onto(self, card: CardInstance, target: CardInstance) -> bool:
        return self.engine.stack_onto(card, target)

    def insert_stack_after(self, card: CardInstance, insert_after: CardInstance) -> bool:
        return self.engine.insert_stack_after(card, insert_after)

    def insert_card_after(self, card: CardInstance, insert_after: CardInstance) -> bool:
        return self.engine.insert_card_after(card, insert_after)

    def put_on_pile(self, card: CardInstance, pile_id: str) -> None:
        self.engine.put_on_pile(card, pile_id)

    def put_stack_on_pile(self, card: CardInstance, pile_id: str) -> None:
        self.engine.put_stack_on_pile(card, pile_id)

    def unstack_card(self, card: CardInstance) -> None:
        self.engine.unstack_card(card)

    def unstack_all_from(self, base: CardInstance) -> None:
        self.engine.unstack_all_from(base)

    def shuffle_pile(self, pile_id: str) -> None:
        self.engine.shuffle_pile(pile_id)

    # =========================================================================
    # Queries
    # =========================================================================

    def cards_in_pile(self, pile_id: str) -> list[CardInstance]:
        return self.queries.cards_in_pile(pile_id)

    def card_at(self, pile_id: str, position: int) -> CardInstance | None:
        return self.queries.card_at(pile_id, position)

    def top_card(self, pile_id: str) -> CardInstance | None:
        return self.queries.top_card(pile_id)

    def bottom_card(self, pile_id: str) -> CardInstance | None:
        return self.queries.bottom_card(pile_id)

    def pile_size(self, pile_id: str) -> int:
        return self.queries.pile_size(pile_id)

    def position_in_pile(self, card: CardInstance) -> int | None:
        return self.queries.position_in_pile(card)

    def is_top_of_pile(self, card: CardInstance) -> bool:
        return self.queries.is_top_of_pile(card)

    def has_stack(self, card: CardInstance) -> bool:
        return self.queries.has_stack(card)

    def position_in_stack(self, card: CardInstance) -> int | None:
        return self.queries.position_in_stack(card)

    def is_top_of_stack(self, card: CardInstance) -> bool:
        return self.queries.is_top_of_stack(card)

    def stack_root(self, card: CardInstance) -> CardInstance:
        return self.queries.stack_root(card)

    # =========================================================================
    # Game lifecycle
    # =========================================================================

    def new_game(self) -> None:
        """
        Reset the table and run the rules' setup.

        rules.cleanup runs first, before anything is touched. Then every
        existing card is dropped and every pile emptied. Piles themselves
        are kept, so piles created mid-game should be removed by cleanup.
        A play in progress is abandoned (its cleanup runs) beforehand.
        """
        self.controller.stop_considering()
        self.rules.cleanup(self)

        for card in self.existing_cards:
            card.pile = None
            card.stacked_on = None
            card.stack = None
        self.existing_cards = []
        self.piles.clear_all()

        logger.debug("new game: %d piles reset", len(self.piles.pile_ids))
        self.rules.setup(self)
