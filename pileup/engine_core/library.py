"""
Library - Registry of card types and card-type groups.

A Library holds every kind of card a game can create. It is filled once
during setup and read afterwards:
- register() adds a card type (id, face payload, property bag)
- create_group() snapshots the ids of all types matching a predicate

Groups are frozen at creation. Types registered after a group exists are
never added to it, even if they match the predicate.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable

from .errors import DuplicateGroupError, DuplicateTypeError, UnknownCardTypeError, UnknownGroupError


GroupPredicate = Callable[[dict[str, Any]], bool]


@dataclass(frozen=True)
class CardType:
    """
    A card definition.

    The face is an opaque payload for whatever renders the card; the engine
    never looks inside it.
    """
    id: str
    face: Any
    properties: dict[str, Any] = field(default_factory=dict)


class Library:
    """
    Registry of card types for use in one or more games.

    Registration order is preserved: all_types lists ids in the order
    they were registered, and group membership follows the same order.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._types: dict[str, CardType] = {}
        self._type_order: list[str] = []
        self._groups: dict[str, tuple[str, ...]] = {}
        self._group_order: list[str] = []

    def __len__(self) -> int:
        return len(self._type_order)

    def __contains__(self, type_id: str) -> bool:
        return type_id in self._types

    def register(self, type_id: str, face: Any, properties: dict[str, Any] | None = None) -> CardType:
        """
        Register a new card type under the given id.

        Raises DuplicateTypeError if the id is already taken.
        """
        if type_id in self._types:
            raise DuplicateTypeError(type_id)
        card_type = CardType(id=type_id, face=face, properties=properties if properties is not None else {})
        self._types[type_id] = card_type
        self._type_order.append(type_id)
        return card_type

    def create_group(self, group_id: str, predicate: GroupPredicate) -> list[str]:
        """
        Create a group of every registered type whose properties match.

        The predicate runs once per type, in registration order. Returns
        the member ids.
        """
        if group_id in self._groups:
            raise DuplicateGroupError(group_id)
        members = tuple(
            type_id for type_id in self._type_order
            if predicate(self._types[type_id].properties)
        )
        self._groups[group_id] = members
        self._group_order.append(group_id)
        return list(members)

    def get_type(self, type_id: str) -> CardType:
        """Get a card type by id."""
        card_type = self._types.get(type_id)
        if card_type is None:
            raise UnknownCardTypeError(type_id)
        return card_type

    def belongs_to_group(self, type_id: str, group_id: str) -> bool:
        """Check if a card type is a member of a group."""
        return type_id in self._group_members(group_id)

    def types_in_group(self, group_id: str) -> list[str]:
        """Get the ids of all card types in a group (a copy)."""
        return list(self._group_members(group_id))

    @property
    def all_types(self) -> list[str]:
        """All card type ids, in registration order."""
        return list(self._type_order)

    @property
    def all_groups(self) -> list[str]:
        """All group ids, in creation order."""
        return list(self._group_order)

    def _group_members(self, group_id: str) -> tuple[str, ...]:
        members = self._groups.get(group_id)
        if members is None:
            raise UnknownGroupError(group_id)
        return members
