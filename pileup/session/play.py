"""
Play Controller - Consider a card, pick a target, play it.

A play goes through three steps:
1. start_considering(card): ask whether the card can be picked up. A
   PlayableWithPrep answer runs its prep now and keeps whatever cleanup
   the prep returns.
2. start_targeting(pile_id, card): ask whether the pile (or a card in
   it) is a valid target for the considered card. Only one target is
   held at a time.
3. play(): hand the considered card and the current target to
   play_card, then stop considering (which runs the cleanup).

Each hook can be overridden per pile through pile settings: the pile
holding the considered card decides playable, the targeted pile decides
play_target and play_card. Without an override the rules' hook is used.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Callable

from ..engine_core.card import CardInstance
from ..rules.variants import CardTarget, CleanupFn, NoTarget, PileTarget, PlayableWithPrep, to_playability, to_target

if TYPE_CHECKING:
    from .game import Game


logger = logging.getLogger(__name__)


class PlayController:
    """Tracks the card being considered for play and its potential target."""

    def __init__(self, game: Game):
        self.game = game
        self.considering: CardInstance | None = None
        self.play_cleanup: CleanupFn | None = None
        self.target_pile: str | None = None
        self.target_card: CardInstance | None = None

    def _hook(self, pile_id: str | None, name: str) -> Callable[..., Any]:
        if pile_id is not None and pile_id in self.game.piles:
            override = getattr(self.game.pile_settings(pile_id), name)
            if override is not None:
                return override
        return getattr(self.game.rules, name)

    # =========================================================================
    # Consideration
    # =========================================================================

    def start_considering(self, card: CardInstance) -> bool:
        """
        Begin considering a card for play.

        Returns False (and changes nothing) if the card isn't playable.
        Anything already being considered is dropped first.
        """
        playability = to_playability(self._hook(card.pile, "playable")(self.game, card))
        if not playability.playable:
            return False

        self.stop_considering()
        if isinstance(playability, PlayableWithPrep):
            self.play_cleanup = playability.prep(self.game, card)
        self.considering = card
        logger.debug("considering %r", card)
        return True

    def stop_considering(self) -> None:
        """Drop the considered card and its target, running any cleanup."""
        self.stop_targeting()

        card = self.considering
        if card is None:
            return
        cleanup = self.play_cleanup
        self.considering = None
        self.play_cleanup = None
        if cleanup is not None:
            cleanup(self.game, card)

    # =========================================================================
    # Targeting
    # =========================================================================

    def start_targeting(self, pile_id: str | None, card: CardInstance | None = None) -> bool:
        """
        Offer a pile (and optionally a card in it) as the play target.

        Returns True if play_target accepted a target. Fails with a warning
        when no card is being considered.
        """
        self.stop_targeting()

        if self.considering is None:
            logger.warning("Attempt to start targeting before any card is being considered")
            return False

        hook = self._hook(pile_id, "play_target")
        target = to_target(hook(self.game, self.considering, pile_id, card))
        if isinstance(target, NoTarget):
            return False
        if isinstance(target, PileTarget):
            self.target_pile = target.pile_id
            self.target_card = None
        elif isinstance(target, CardTarget):
            self.target_pile = target.pile_id
            self.target_card = target.card
        return True

    def is_targeting(self) -> bool:
        return self.target_pile is not None or self.target_card is not None

    def stop_targeting(self) -> None:
        self.target_pile = None
        self.target_card = None

    # =========================================================================
    # Play
    # =========================================================================

    def play(self) -> bool:
        """
        Play the considered card onto the current target.

        Consideration ends either way. Returns whether play_card was called.
        """
        played = False
        if self.considering is not None and self.is_targeting():
            card = self.considering
            pile_id, target_card = self.target_pile, self.target_card
            self._hook(pile_id, "play_card")(self.game, card, pile_id, target_card)
            logger.debug("played %r onto %s / %r", card, pile_id, target_card)
            played = True
        self.stop_considering()
        return played
