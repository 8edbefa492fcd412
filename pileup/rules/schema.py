"""
Table Layout Schema - Pydantic models for a game's pile configuration.

A layout declares:
- piles: the pile ids created when the game is constructed
- pile_groups: group id -> pile ids in that group
- pile_settings: settings keyed by pile id, ".group" or "*"

Settings keys follow a precedence convention resolved by
SettingsResolver: "*" applies to every pile, ".name" to every pile in
group "name", and a plain id to that pile only.
"""

from __future__ import annotations
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..engine_core.errors import LayoutValidationError
from .actions import PileAction


WILDCARD = "*"
GROUP_PREFIX = "."


class PileSettings(BaseModel):
    """
    Settings for one pile (or a group of piles, or all piles).

    Only the fields a settings entry actually sets override less specific
    entries; unset fields fall through.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    display: Optional[str] = Field(None, description="Style name handed to the renderer")
    actions: list[Any] = Field(default_factory=list, description="PileAction objects")
    playable: Optional[Callable[..., Any]] = Field(None, description="Overrides rules.playable for cards in this pile")
    play_target: Optional[Callable[..., Any]] = Field(None, description="Overrides rules.play_target when targeting this pile")
    play_card: Optional[Callable[..., Any]] = Field(None, description="Overrides rules.play_card when playing onto this pile")

    @field_validator("actions")
    @classmethod
    def _check_actions(cls, actions: list[Any]) -> list[Any]:
        for action in actions:
            if not isinstance(action, PileAction):
                raise ValueError(f"actions must be PileAction objects, got {type(action).__name__}")
        return actions


class TableLayout(BaseModel):
    """Piles, pile groups and pile settings for a game."""
    piles: list[str] = Field(default_factory=list)
    pile_groups: dict[str, list[str]] = Field(default_factory=dict)
    pile_settings: dict[str, PileSettings] = Field(default_factory=dict)

    @field_validator("piles")
    @classmethod
    def _check_pile_ids(cls, piles: list[str]) -> list[str]:
        seen = set()
        for pile_id in piles:
            if not pile_id or pile_id.startswith(GROUP_PREFIX) or pile_id == WILDCARD:
                raise ValueError(f"invalid pile id '{pile_id}'")
            if pile_id in seen:
                raise ValueError(f"duplicate pile id '{pile_id}'")
            seen.add(pile_id)
        return piles

    @model_validator(mode="after")
    def _check_references(self) -> TableLayout:
        known = set(self.piles)
        errors = []
        for group_id, members in self.pile_groups.items():
            for pile_id in members:
                if pile_id not in known:
                    errors.append(f"group '{group_id}' names unknown pile '{pile_id}'")
        for key in self.pile_settings:
            if key == WILDCARD:
                continue
            if key.startswith(GROUP_PREFIX):
                if key[1:] not in self.pile_groups:
                    errors.append(f"settings name unknown pile group '{key[1:]}'")
            elif key not in known:
                errors.append(f"settings name unknown pile '{key}'")
        if errors:
            raise ValueError("; ".join(errors))
        return self

    @classmethod
    def from_config(cls, data: TableLayout | dict[str, Any] | None) -> TableLayout:
        """
        Build a layout from a dict (or pass a layout through).

        Raises LayoutValidationError listing every problem found.
        """
        if data is None:
            return cls()
        if isinstance(data, TableLayout):
            return data
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise LayoutValidationError([error["msg"] for error in e.errors()]) from e
