"""
Rule Results - Tagged variants returned by rule callbacks.

A playable() callback answers one of:
- NotPlayable: the card can't be picked up
- Playable: the card can be picked up as is
- PlayableWithPrep(prep): the card can be picked up, but prep(game, card)
  runs first; whatever prep returns (a cleanup callable or None) runs
  once the play is finished or abandoned

A play_target() callback answers one of:
- NoTarget
- PileTarget(pile_id)
- CardTarget(card)

to_playability() and to_target() accept the loose forms rule code tends
to return (bools, callables, pile ids, cards, None) and convert them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional, Union

from ..engine_core.card import CardInstance

if TYPE_CHECKING:
    from ..session.game import Game


CleanupFn = Callable[["Game", CardInstance], None]
PrepFn = Callable[["Game", CardInstance], Optional[CleanupFn]]


# =============================================================================
# Playability
# =============================================================================

@dataclass(frozen=True)
class NotPlayable:
    playable: ClassVar[bool] = False


@dataclass(frozen=True)
class Playable:
    playable: ClassVar[bool] = True


@dataclass(frozen=True)
class PlayableWithPrep:
    """Playable once prep has run."""
    prep: PrepFn
    playable: ClassVar[bool] = True


Playability = Union[NotPlayable, Playable, PlayableWithPrep]

NOT_PLAYABLE = NotPlayable()
PLAYABLE = Playable()


def to_playability(value: Any) -> Playability:
    """Convert a playable() answer to a Playability variant."""
    if isinstance(value, (NotPlayable, Playable, PlayableWithPrep)):
        return value
    if callable(value):
        return PlayableWithPrep(prep=value)
    return PLAYABLE if value else NOT_PLAYABLE


# =============================================================================
# Targets
# =============================================================================

@dataclass(frozen=True)
class NoTarget:
    pass


@dataclass(frozen=True)
class PileTarget:
    pile_id: str


@dataclass(frozen=True)
class CardTarget:
    card: CardInstance

    @property
    def pile_id(self) -> str | None:
        """The pile the targeted card is in, if any."""
        return self.card.pile


Target = Union[NoTarget, PileTarget, CardTarget]

NO_TARGET = NoTarget()


def to_target(value: Any) -> Target:
    """
    Convert a play_target() answer to a Target variant.

    Raises TypeError for values that are neither a pile id, a card, a
    Target nor None.
    """
    if isinstance(value, (NoTarget, PileTarget, CardTarget)):
        return value
    if value is None or value is False:
        return NO_TARGET
    if isinstance(value, str):
        return PileTarget(pile_id=value)
    if isinstance(value, CardInstance):
        return CardTarget(card=value)
    raise TypeError(f"Invalid target value from play_target: {value!r}")
