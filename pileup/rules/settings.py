"""
Settings Resolver - Most-specific-wins lookup for settings entries.

Entries are keyed by:
- "*"       every entity
- ".group"  every entity in that group
- "id"      one entity

Resolution applies wildcard, then group entries (in the order they were
declared), then the entity's own entry, field by field: an entry only
overrides the fields it explicitly sets.
"""

from __future__ import annotations
from typing import Callable, Generic, Iterable, Mapping, TypeVar

from pydantic import BaseModel

from .schema import GROUP_PREFIX, WILDCARD


S = TypeVar("S", bound=BaseModel)


class SettingsResolver(Generic[S]):
    """
    Resolves settings for entities (piles, phases, cards) from keyed entries.

    Args:
        entries: settings keyed by "*", ".group" or entity id
        groups_of: returns the groups an entity belongs to
        model: the settings model, used for defaults
    """

    def __init__(
        self,
        entries: Mapping[str, S],
        groups_of: Callable[[str], Iterable[str]],
        model: type[S],
    ):
        self.model = model
        self.groups_of = groups_of
        self._wildcard: S | None = None
        self._by_group: list[tuple[str, S]] = []
        self._by_id: dict[str, S] = {}

        for key, settings in entries.items():
            if key == WILDCARD:
                self._wildcard = settings
            elif key.startswith(GROUP_PREFIX):
                self._by_group.append((key[len(GROUP_PREFIX):], settings))
            else:
                self._by_id[key] = settings

    def layers(self, entity_id: str) -> list[S]:
        """Settings entries that apply to an entity, least specific first."""
        result = []
        if self._wildcard is not None:
            result.append(self._wildcard)
        member_of = set(self.groups_of(entity_id))
        for group_id, settings in self._by_group:
            if group_id in member_of:
                result.append(settings)
        if entity_id in self._by_id:
            result.append(self._by_id[entity_id])
        return result

    def resolve(self, entity_id: str) -> S:
        """Merge every applicable entry into one settings object."""
        merged = {}
        for settings in self.layers(entity_id):
            for name in settings.model_fields_set:
                merged[name] = getattr(settings, name)
        return self.model(**merged)
