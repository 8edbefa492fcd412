"""
Move Engine - Every mutation of piles and stacks goes through here.

The engine keeps two structures consistent with each other:
- pile order (PileStore: pile.items and card.pile)
- stacking (card.stacked_on and card.stack)

Public operations are built from four primitives:
1. _detach_from_pile: take one card out of its pile, stacking untouched
2. _detach_stack_from_pile: the same for a card and all its dependents;
   stacking links survive, so this can leave a stack scattered across
   piles and is only used as an intermediate step
3. _attach_to_pile: put a pile-less card into a pile at an index
4. stacking.attach / stacking.detach

At rest (after every public operation) a stacked card is in the same pile
as the card it is stacked on, or both are pile-less, and the stacking
relation has no cycles. The two illegal moves (stacking a card onto
itself, moving a stack after one of its own dependents) are rejected
before anything changes.
"""

from __future__ import annotations
import logging
import random

from . import stacking
from .card import CardInstance
from .errors import CycleViolationError, SelfStackError, StackingError
from .piles import PileStore


logger = logging.getLogger(__name__)


class MoveEngine:
    """
    Performs composite moves on one session's piles and stacks.

    Usage:
        engine = MoveEngine(piles, rng=random.Random(7))
        engine.put_on_pile(card, "deck")
        engine.stack_onto(other, card)
    """

    def __init__(self, piles: PileStore, rng: random.Random | None = None):
        self.piles = piles
        self.rng = rng or random.Random()

    # =========================================================================
    # Primitives
    # =========================================================================

    def _detach_from_pile(self, card: CardInstance) -> None:
        if card.pile is None:
            return
        pile = self.piles.get(card.pile)
        pile.items.remove(card)
        card.pile = None

    def _detach_stack_from_pile(self, card: CardInstance) -> None:
        self._detach_from_pile(card)
        for dependent in stacking.descendants(card):
            self._detach_from_pile(dependent)

    def _attach_to_pile(self, card: CardInstance, pile_id: str, index: int | None = None) -> None:
        if card.pile is not None:
            raise StackingError(f"{card!r} must leave pile '{card.pile}' before joining '{pile_id}'")
        pile = self.piles.get(pile_id)
        if index is None:
            pile.items.append(card)
        else:
            pile.items.insert(index, card)
        card.pile = pile_id

    def _index_after_stack(self, anchor: CardInstance) -> int:
        """One past the highest position held by anchor or its dependents in anchor's pile."""
        items = self.piles.get(anchor.pile).items
        last = items.index(anchor)
        for dependent in stacking.descendants(anchor):
            if dependent.pile == anchor.pile:
                last = max(last, items.index(dependent))
        return last + 1

    def _report_cycle(self, card: CardInstance, anchor: CardInstance) -> None:
        logger.error("%s", CycleViolationError(card, anchor))

    # =========================================================================
    # Removal
    # =========================================================================

    def remove_from_pile(self, card: CardInstance) -> None:
        """
        Take a card out of play structure entirely.

        Cards stacked on it fall off (staying where they are in the pile),
        it is unstacked from whatever it was stacked on, then it leaves its
        pile. Does nothing to a card that is already loose.
        """
        logger.debug("remove_from_pile %r", card)
        self.unstack_all_from(card)
        self.unstack_card(card)
        self._detach_from_pile(card)

    def remove_stack_from_pile(self, card: CardInstance) -> None:
        """
        Take a card and everything stacked on it out of their piles.

        The card is unstacked from its parent, but its own dependents stay
        stacked on it.
        """
        logger.debug("remove_stack_from_pile %r", card)
        stacking.detach(card)
        self._detach_stack_from_pile(card)

    # =========================================================================
    # Stacking moves
    # =========================================================================

    def stack_onto(self, card: CardInstance, target: CardInstance) -> bool:
        """
        Stack card onto target, above anything already stacked there.

        The card's own stack moves with it. If target is in a pile, the
        moved cards join that pile directly after target's stack;
        otherwise they become pile-less like target.

        Raises SelfStackError if card is target. Returns False (and logs a
        CycleViolationError) if target is stacked somewhere on card.
        """
        if card is target:
            raise SelfStackError(card)
        if stacking.is_ancestor(target, card):
            self._report_cycle(card, target)
            return False

        logger.debug("stack_onto %r -> %r", card, target)
        stacking.detach(card)
        if target.pile is not None:
            self._insert_stack_after(card, target)
        else:
            self._detach_stack_from_pile(card)
        stacking.attach(card, target)
        return True

    def insert_stack_after(self, card: CardInstance, insert_after: CardInstance) -> bool:
        """
        Move card and its stack into insert_after's pile, right after
        insert_after and everything stacked on it.

        If card is stacked on a card that is not in the destination pile,
        that link is cut. Returns False (and logs a CycleViolationError)
        when insert_after belongs to card's own stack.
        """
        if stacking.is_ancestor(insert_after, card):
            self._report_cycle(card, insert_after)
            return False
        logger.debug("insert_stack_after %r -> %r", card, insert_after)
        self._insert_stack_after(card, insert_after)
        return True

    def _insert_stack_after(self, card: CardInstance, insert_after: CardInstance) -> None:
        self._detach_stack_from_pile(card)

        # Stacks can't span piles
        if card.stacked_on is not None and card.stacked_on.pile != insert_after.pile:
            stacking.detach(card)

        if insert_after.pile is None:
            return

        index = self._index_after_stack(insert_after)
        self._attach_to_pile(card, insert_after.pile, index)

        # Children land in the same pile as card, so their links survive
        for child in list(card.stack or ()):
            self._insert_stack_after(child, card)

    def insert_card_after(self, card: CardInstance, insert_after: CardInstance) -> bool:
        """
        Like insert_stack_after, but card first drops out of every stack:
        it is unstacked from its parent and its own dependents fall off.
        """
        if card is insert_after:
            self._report_cycle(card, insert_after)
            return False
        logger.debug("insert_card_after %r -> %r", card, insert_after)
        stacking.detach(card)
        self.unstack_all_from(card)
        self._insert_stack_after(card, insert_after)
        return True

    def unstack_card(self, card: CardInstance) -> None:
        """
        Unstack a card from the card it is stacked on.

        If other cards are still stacked on the former parent, the card
        (with its own stack) moves to just above them in the pile.
        Does nothing if the card isn't stacked.
        """
        pile_id = card.pile
        parent = stacking.detach(card)
        if parent is None:
            return
        logger.debug("unstack_card %r from %r", card, parent)
        if pile_id is not None and parent.pile is not None and parent.stack:
            self._insert_stack_after(card, parent)

    def unstack_all_from(self, base: CardInstance) -> None:
        """
        Unstack every card stacked directly on base.

        Nothing moves, and grandchildren stay stacked on their own parents.
        """
        if base.stack is None:
            return
        logger.debug("unstack_all_from %r", base)
        for child in list(base.stack):
            stacking.detach(child)

    # =========================================================================
    # Pile moves
    # =========================================================================

    def put_on_pile(self, card: CardInstance, pile_id: str) -> None:
        """
        Put a card alone on top of a pile.

        It leaves any stack it was part of, and cards stacked on it fall
        off where they are.
        """
        self.piles.get(pile_id)
        logger.debug("put_on_pile %r -> %s", card, pile_id)
        stacking.detach(card)
        self.unstack_all_from(card)
        self._put_stack_on_pile(card, pile_id)

    def put_stack_on_pile(self, card: CardInstance, pile_id: str) -> None:
        """
        Put a card on top of a pile, followed by everything stacked on it
        in stack order.

        Its dependents stay stacked on it. If the card was stacked on a
        card in another pile, that link is cut.
        """
        self.piles.get(pile_id)
        logger.debug("put_stack_on_pile %r -> %s", card, pile_id)
        self._put_stack_on_pile(card, pile_id)

    def _put_stack_on_pile(self, card: CardInstance, pile_id: str) -> None:
        self._detach_stack_from_pile(card)
        self._append_stack(card, pile_id)
        if card.stacked_on is not None and card.stacked_on.pile != pile_id:
            stacking.detach(card)

    def _append_stack(self, card: CardInstance, pile_id: str) -> None:
        self._attach_to_pile(card, pile_id)
        for child in list(card.stack or ()):
            self._append_stack(child, pile_id)

    def shuffle_pile(self, pile_id: str) -> None:
        """
        Shuffle a pile.

        All stacking between cards in the pile is destroyed first, then
        the items are permuted with a Fisher-Yates shuffle.
        """
        pile = self.piles.get(pile_id)
        logger.debug("shuffle_pile %s (%d cards)", pile_id, pile.count)
        for card in list(pile.items):
            self.unstack_all_from(card)

        items = pile.items
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randint(0, i)
            items[i], items[j] = items[j], items[i]

    def delete_pile(self, pile_id: str) -> None:
        """Delete a pile; its cards become pile-less but keep their stacking."""
        logger.debug("delete_pile %s", pile_id)
        self.piles.delete_pile(pile_id, self._detach_from_pile)

    # =========================================================================
    # Card state
    # =========================================================================

    def flip_card(self, card: CardInstance, face_up: bool | None = None) -> None:
        """Turn a card face up (True), face down (False) or over (None)."""
        card.face_up = (not card.face_up) if face_up is None else face_up
