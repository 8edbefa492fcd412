"""
Randomized move sequences.

Every public move is applied in random order to a small table, and pile
membership and stacking are checked for consistency after each one.
"""

import random

import pytest

from ..engine_core.errors import SelfStackError
from ..session.game import Game


PILES = ["a", "b", "c"]


def random_move(game, rng, deck):
    card = rng.choice(deck)
    other = rng.choice(deck)
    pile_id = rng.choice(PILES)
    move = rng.randrange(11)

    if move == 0:
        game.put_on_pile(card, pile_id)
    elif move == 1:
        game.put_stack_on_pile(card, pile_id)
    elif move == 2:
        try:
            game.stack_onto(card, other)
        except SelfStackError:
            assert card is other
    elif move == 3:
        game.insert_stack_after(card, other)
    elif move == 4:
        game.insert_card_after(card, other)
    elif move == 5:
        game.unstack_card(card)
    elif move == 6:
        game.unstack_all_from(card)
    elif move == 7:
        game.remove_from_pile(card)
    elif move == 8:
        game.remove_stack_from_pile(card)
    elif move == 9:
        game.shuffle_pile(pile_id)
    else:
        game.flip_card(card)


class TestRandomSequences:
    """Consistency holds after any sequence of moves."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_moves(self, library, consistent, seed):
        rng = random.Random(seed)
        game = Game(library, layout={"piles": PILES}, rng=random.Random(seed))
        deck = [game.create_card(rng.choice(library.all_types)) for _ in range(12)]
        for card in deck[:8]:
            game.put_on_pile(card, rng.choice(PILES))

        for _ in range(300):
            random_move(game, rng, deck)
            consistent(game)

        total = sum(game.pile_size(pile_id) for pile_id in PILES)
        assert total == sum(1 for card in deck if card.pile is not None)
