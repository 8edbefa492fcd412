"""
Pytest fixtures for pileup tests.
"""

from __future__ import annotations
import random

import pytest

from ..engine_core import stacking
from ..engine_core.library import Library
from ..rules.actions import flip_into
from ..rules.base import GameRules
from ..session.game import Game


def build_test_library() -> Library:
    """Five numbered types and a handful of groups over them."""
    library = Library("test cards")
    library.register("t1", "t1", {"number": 1, "color": "blue"})
    library.register("t2", "t2", {"number": 2, "color": "blue"})
    library.register("t3", "t3", {"number": 3, "color": "red"})
    library.register("t4", "t4", {"number": 4, "color": "red"})
    library.register("t5", "t5", {"number": 5, "color": "yellow"})
    library.create_group("evens", lambda props: props["number"] % 2 == 0)
    library.create_group("odds", lambda props: props["number"] % 2 == 1)
    library.create_group("blues", lambda props: props["color"] == "blue")
    library.create_group("reds", lambda props: props["color"] == "red")
    library.create_group("yellows", lambda props: props["color"] == "yellow")
    library.create_group("all", lambda props: True)
    return library


class DeckRules(GameRules):
    """
    Small game for exercising a session: two decks, a discard pile, a
    free-form play area and three slots.
    """

    layout = {
        "piles": ["deck1", "deck2", "drawn", "play", "slot1", "slot2", "slot3"],
        "pile_groups": {
            "slot": ["slot1", "slot2", "slot3"],
            "deck": ["deck1", "deck2"],
        },
        "pile_settings": {
            ".deck": {"display": "deck", "actions": [flip_into("drawn", 1)]},
            "drawn": {"display": "show_top_3"},
            "play": {"display": "individual_stacks"},
        },
    }

    def setup(self, game):
        # Odd cards into deck1, even cards into deck2, five of each
        for _ in range(5):
            for type_id, pile_id in [("t1", "deck1"), ("t2", "deck2"), ("t3", "deck1"), ("t4", "deck2")]:
                game.put_on_pile(game.create_card(type_id), pile_id)
        for i in range(4):
            game.put_on_pile(game.create_card("t5"), "deck1" if i % 2 == 0 else "deck2")
        game.shuffle_pile("deck1")
        game.shuffle_pile("deck2")

    def playable(self, game, card):
        if card.pile is None or not card.face_up:
            return False
        if game.pile_is_in_group(card.pile, "slot"):
            return True
        if card.pile == "drawn":
            return game.is_top_of_pile(card)
        if card.pile == "play":
            return game.is_top_of_stack(card)
        return False

    def play_target(self, game, card, pile_id, target_card):
        if game.pile_is_in_group(pile_id, "slot"):
            return pile_id if game.pile_size(pile_id) == 0 else None
        if pile_id == "play":
            if target_card is None:
                return pile_id
            return target_card.stacked_on or target_card
        return None

    def play_card(self, game, card, pile_id, target_card):
        if target_card is not None:
            game.stack_onto(card, target_card)
        else:
            game.put_on_pile(card, pile_id)


def check_consistency(game: Game) -> None:
    """Assert that piles and stacks agree with each other."""
    seen = set()
    for pile in game.piles:
        for card in pile.items:
            assert card.pile == pile.id
            assert id(card) not in seen, f"{card!r} appears twice"
            seen.add(id(card))

    for card in game.existing_cards:
        if card.pile is not None:
            items = game.piles.get(card.pile).items
            assert sum(1 for c in items if c is card) == 1
        else:
            assert id(card) not in seen

        if card.stack is not None:
            assert len(card.stack) > 0, "empty stack must be None"
            for child in card.stack:
                assert child.stacked_on is card
        parent = card.stacked_on
        if parent is not None:
            assert parent.stack is not None
            assert sum(1 for c in parent.stack if c is card) == 1
            assert card.pile == parent.pile, "stacks can't span piles"
            assert not stacking.is_ancestor(parent, card), "stacking cycle"


@pytest.fixture
def library() -> Library:
    return build_test_library()


@pytest.fixture
def game(library) -> Game:
    """A session with the layout piles but no cards."""
    return Game(library, DeckRules(), rng=random.Random(1234))


@pytest.fixture
def dealt_game(game) -> Game:
    game.new_game()
    return game


@pytest.fixture
def table(game) -> Game:
    """A session with two extra empty piles, "tp" and "tp2"."""
    game.create_pile("tp")
    game.create_pile("tp2")
    return game


@pytest.fixture
def consistent():
    return check_consistency
