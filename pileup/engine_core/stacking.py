"""
Stacking - The stacked-on relation between cards.

Cards form a forest: every card has at most one parent (stacked_on) and an
ordered list of direct children (stack). attach() and detach() are the only
functions that edit the relation, and they never touch piles; the
MoveEngine combines them with pile edits.

Invariant: child.stacked_on is parent  <=>  child in parent.stack
"""

from __future__ import annotations
from typing import Iterator

from .card import CardInstance
from .errors import StackingError


def root(card: CardInstance) -> CardInstance:
    """
    Follow stacked_on links down to the base of the card's stack.

    An unstacked card is its own root. If the links loop back on
    themselves, the root is the immediate parent of the card where the
    loop closes (for a loop through `card` that is card.stacked_on).
    """
    seen = {id(card)}
    current = card
    while current.stacked_on is not None:
        parent = current.stacked_on
        if id(parent) in seen:
            return parent.stacked_on
        seen.add(id(parent))
        current = parent
    return current


def is_ancestor(card: CardInstance, ancestor: CardInstance) -> bool:
    """True if ancestor is card itself or anywhere below it in its stack chain."""
    seen = set()
    current = card
    while current is not None and id(current) not in seen:
        if current is ancestor:
            return True
        seen.add(id(current))
        current = current.stacked_on
    return False


def attach(child: CardInstance, parent: CardInstance) -> None:
    """Stack child onto parent, after any cards already stacked there."""
    if child.stacked_on is not None:
        raise StackingError(f"{child!r} is already stacked on {child.stacked_on!r}")
    child.stacked_on = parent
    if parent.stack is None:
        parent.stack = [child]
    else:
        parent.stack.append(child)


def detach(child: CardInstance) -> CardInstance | None:
    """
    Unstack child from its parent without moving anything.

    Returns the former parent, or None if child wasn't stacked.
    """
    parent = child.stacked_on
    if parent is None:
        return None
    child.stacked_on = None
    if parent.stack is not None:
        parent.stack = [c for c in parent.stack if c is not child] or None
    return parent


def descendants(card: CardInstance) -> Iterator[CardInstance]:
    """Every card stacked on card, directly or not, in pre-order."""
    seen = {id(card)}
    pending = list(reversed(card.stack or ()))
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.extend(reversed(current.stack or ()))


def stack_size(card: CardInstance) -> int:
    """Number of cards stacked directly on card."""
    return len(card.stack) if card.stack else 0
