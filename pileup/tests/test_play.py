"""
Tests for the consider / target / play controller.
"""

import logging

from ..rules.base import GameRules
from ..rules.variants import PLAYABLE, NO_TARGET, PlayableWithPrep, PileTarget
from ..session.game import Game


def draw(game):
    """Flip the top card of deck1 into "drawn" and return it."""
    game.trigger_action("deck1", 0)
    return game.top_card("drawn")


class TestConsidering:
    """Tests for start_considering / stop_considering."""

    def test_face_down_not_playable(self, dealt_game):
        controller = dealt_game.controller
        card = dealt_game.top_card("deck1")
        assert controller.start_considering(card) is False
        assert controller.considering is None

    def test_top_of_drawn_playable(self, dealt_game):
        controller = dealt_game.controller
        card = draw(dealt_game)
        assert controller.start_considering(card)
        assert controller.considering is card
        controller.stop_considering()
        assert controller.considering is None

    def test_buried_drawn_card_not_playable(self, dealt_game):
        first = draw(dealt_game)
        draw(dealt_game)
        assert dealt_game.controller.start_considering(first) is False

    def test_targeting_requires_consideration(self, dealt_game, caplog):
        """Targeting with nothing considered warns and fails."""
        with caplog.at_level(logging.WARNING, logger="pileup"):
            assert dealt_game.controller.start_targeting("slot1") is False
        assert "before any card is being considered" in caplog.text
        assert not dealt_game.controller.is_targeting()


class TestPlaying:
    """Tests for start_targeting and play."""

    def test_play_into_empty_slot(self, dealt_game, consistent):
        controller = dealt_game.controller
        card = draw(dealt_game)
        controller.start_considering(card)

        assert controller.start_targeting("slot1")
        assert controller.is_targeting()
        assert controller.target_pile == "slot1"
        assert controller.target_card is None

        assert controller.play()
        assert dealt_game.cards_in_pile("slot1") == [card]
        assert controller.considering is None
        assert not controller.is_targeting()
        consistent(dealt_game)

    def test_full_slot_rejected(self, dealt_game):
        controller = dealt_game.controller
        controller.start_considering(draw(dealt_game))
        controller.start_targeting("slot1")
        controller.play()

        controller.start_considering(draw(dealt_game))
        assert controller.start_targeting("slot1") is False
        assert not controller.is_targeting()
        assert controller.play() is False
        assert dealt_game.pile_size("slot1") == 1
        assert controller.considering is None

    def test_card_target_stacks(self, dealt_game, consistent):
        """Targeting a card in "play" stacks onto the base of its stack."""
        game = dealt_game
        controller = game.controller
        base = draw(game)
        game.put_on_pile(base, "play")
        first = draw(game)
        game.stack_onto(first, base)

        card = draw(game)
        controller.start_considering(card)
        assert controller.start_targeting("play", first)
        assert controller.target_card is base
        assert controller.target_pile == "play"
        controller.play()

        assert base.stack == [first, card]
        assert game.cards_in_pile("play") == [base, first, card]
        consistent(game)

    def test_retarget_replaces_target(self, dealt_game):
        controller = dealt_game.controller
        controller.start_considering(draw(dealt_game))
        controller.start_targeting("slot1")
        assert controller.start_targeting("deck2") is False
        assert not controller.is_targeting()


class PrepRules(GameRules):
    """Every card is playable after prep; everything targets pile "to"."""

    layout = {"piles": ["from", "to"]}

    def __init__(self):
        self.log = []

    def playable(self, game, card):
        def prep(game, card):
            self.log.append("prep")

            def cleanup(game, card):
                self.log.append("cleanup")
            return cleanup
        return PlayableWithPrep(prep=prep)

    def play_target(self, game, card, pile_id, target_card):
        return PileTarget(pile_id) if pile_id == "to" else NO_TARGET

    def play_card(self, game, card, pile_id, target_card):
        self.log.append("play")
        game.put_on_pile(card, pile_id)


class TestPrepAndCleanup:
    """Tests for prep functions and their cleanups."""

    def test_order(self, library):
        rules = PrepRules()
        game = Game(library, rules, seed=0)
        card = game.create_card("t1")
        game.put_on_pile(card, "from")

        controller = game.controller
        assert controller.start_considering(card)
        assert rules.log == ["prep"]
        controller.start_targeting("to")
        controller.play()
        assert rules.log == ["prep", "play", "cleanup"]
        assert card.pile == "to"

    def test_cleanup_on_abandon(self, library):
        rules = PrepRules()
        game = Game(library, rules, seed=0)
        card = game.create_card("t1")
        game.controller.start_considering(card)
        game.controller.stop_considering()
        game.controller.stop_considering()
        assert rules.log == ["prep", "cleanup"]

    def test_new_game_abandons_play(self, library):
        rules = PrepRules()
        game = Game(library, rules, seed=0)
        game.controller.start_considering(game.create_card("t1"))
        game.new_game()
        assert rules.log == ["prep", "cleanup"]
        assert game.controller.considering is None


class TestPileOverrides:
    """Per-pile settings override the rules' hooks."""

    def test_overrides(self, library):
        played = []
        game = Game(
            library,
            PrepRules(),
            layout={
                "piles": ["from", "to", "locked", "special"],
                "pile_settings": {
                    "locked": {"playable": lambda game, card: False},
                    "special": {
                        "play_target": lambda game, card, pile_id, target: pile_id,
                        "play_card": lambda game, card, pile_id, target: played.append(card),
                    },
                },
            },
            seed=0,
        )
        locked = game.create_card("t1")
        game.put_on_pile(locked, "locked")
        assert game.controller.start_considering(locked) is False

        card = game.create_card("t2")
        game.put_on_pile(card, "from")
        game.controller.start_considering(card)
        assert game.controller.start_targeting("special")
        game.controller.play()
        assert played == [card]
        assert card.pile == "from"

    def test_plain_playable(self, library):
        class Simple(GameRules):
            def playable(self, game, card):
                return PLAYABLE

        game = Game(library, Simple(), seed=0)
        assert game.controller.start_considering(game.create_card("t1"))
