"""
Cards - Runtime card instances.

A CardInstance is one physical card on the table. The definition it was
created from lives in the Library as a CardType; the instance keeps its
own deep copy of the type's properties so later edits to the type never
leak into cards that already exist.

Location state lives directly on the card:
- pile: id of the pile holding the card, or None
- stacked_on: the card this one is stacked on (a back-reference)
- stack: cards stacked directly on this one, or None when there are none

Only the MoveEngine changes location state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .errors import PropertyCopyError


MAX_PROPERTY_DEPTH = 100000


@dataclass(eq=False)
class CardInstance:
    """
    A card instance in the game.

    Equality and hashing are by identity: two cards of the same type are
    still two different cards.
    """
    id: int
    type_id: str
    face_up: bool = False
    properties: dict[str, Any] = field(default_factory=dict)

    # Location state
    pile: str | None = None
    stacked_on: CardInstance | None = field(default=None, repr=False)
    stack: list[CardInstance] | None = field(default=None, repr=False)

    @property
    def is_stacked(self) -> bool:
        return self.stacked_on is not None

    @property
    def has_stack(self) -> bool:
        return self.stack is not None

    def __repr__(self) -> str:
        facing = "up" if self.face_up else "down"
        return f"CardInstance(id={self.id}, type_id={self.type_id!r}, {facing}, pile={self.pile!r})"


class IdAllocator:
    """
    Hands out card ids for one session.

    Ids are sequential and never reused, including across new_game()
    resets. Each session owns its own allocator.
    """

    def __init__(self, start: int = 0):
        self._next = start

    def next_id(self) -> int:
        """Return a fresh id."""
        result = self._next
        self._next += 1
        return result

    @property
    def peek(self) -> int:
        """The id the next call to next_id() will return."""
        return self._next


def copy_properties(value: Any) -> Any:
    """
    Deep-copy a JSON-like value (dicts, lists, tuples and scalars).

    Raises PropertyCopyError if the value contains itself or nests deeper
    than MAX_PROPERTY_DEPTH levels.
    """
    try:
        return _copy_value(value, 0, set())
    except RecursionError as e:
        raise PropertyCopyError("Properties are too deep to copy") from e


def _copy_value(value: Any, depth: int, path: set[int]) -> Any:
    if depth > MAX_PROPERTY_DEPTH:
        raise PropertyCopyError("Properties are too deep to copy (most likely recursive)")

    if not isinstance(value, (dict, list, tuple)):
        # Scalars are immutable
        return value

    marker = id(value)
    if marker in path:
        raise PropertyCopyError("Properties contain a reference to themselves")
    path.add(marker)
    try:
        if isinstance(value, dict):
            return {key: _copy_value(item, depth + 1, path) for key, item in value.items()}
        items = [_copy_value(item, depth + 1, path) for item in value]
        return tuple(items) if isinstance(value, tuple) else items
    finally:
        path.discard(marker)
