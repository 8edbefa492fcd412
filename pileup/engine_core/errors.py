"""
Engine Errors - Exception taxonomy for the state engine.

Three kinds of failure exist:
1. Configuration errors (duplicate ids, unknown ids, bad layouts):
   programmer error in a library or rules definition, raised at setup time.
2. Illegal moves (stacking a card onto itself, moves that would make a
   stack contain itself): rejected before any state changes.
3. Absent results (empty pile, card not in a pile): these are NOT errors,
   queries return None instead.
"""

from __future__ import annotations


class PileupError(Exception):
    """Base class for all engine errors."""


# =============================================================================
# Configuration errors
# =============================================================================

class ConfigurationError(PileupError):
    """A library, layout or pile setup is invalid."""


class DuplicateTypeError(ConfigurationError):
    """A card type id was registered twice."""

    def __init__(self, type_id: str):
        self.type_id = type_id
        super().__init__(f"Card type '{type_id}' is already registered in this library")


class DuplicateGroupError(ConfigurationError):
    """A card-type group id was created twice."""

    def __init__(self, group_id: str):
        self.group_id = group_id
        super().__init__(f"Group '{group_id}' already exists")


class DuplicatePileError(ConfigurationError):
    """A pile id was created twice."""

    def __init__(self, pile_id: str):
        self.pile_id = pile_id
        super().__init__(f"Pile '{pile_id}' already exists")


class InvalidPileIdError(ConfigurationError):
    """A pile id is empty, starts with '.' or is the '*' wildcard."""

    def __init__(self, pile_id: str):
        self.pile_id = pile_id
        super().__init__(
            f"Invalid pile id '{pile_id}': pile ids may not be empty, "
            "start with '.' or be '*'"
        )


class UnknownCardTypeError(ConfigurationError):
    """A card type id is not registered."""

    def __init__(self, type_id: str):
        self.type_id = type_id
        super().__init__(f"Unknown card type '{type_id}'")


class UnknownGroupError(ConfigurationError):
    """A card-type group id does not exist."""

    def __init__(self, group_id: str):
        self.group_id = group_id
        super().__init__(f"Unknown group '{group_id}'")


class UnknownPileError(ConfigurationError):
    """A pile id does not exist."""

    def __init__(self, pile_id: str):
        self.pile_id = pile_id
        super().__init__(f"Unknown pile '{pile_id}'")


class LayoutValidationError(ConfigurationError):
    """Raised when a table layout fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Layout validation failed with {len(errors)} error(s): " + "; ".join(errors))


# =============================================================================
# Illegal moves
# =============================================================================

class IllegalMoveError(PileupError):
    """A move was rejected before any mutation happened."""


class SelfStackError(IllegalMoveError):
    """A card was stacked onto itself."""

    def __init__(self, card):
        self.card = card
        super().__init__(f"Can't stack a card onto itself ({card!r})")


class CycleViolationError(IllegalMoveError):
    """
    A move would put a card's stack after (or onto) one of its own
    dependents.

    The engine logs this error and ignores the move rather than raising,
    since rule code can trigger it from unexpected player input.
    """

    def __init__(self, card, anchor):
        self.card = card
        self.anchor = anchor
        super().__init__(
            f"Attempted to move the stack of {card!r} after {anchor!r}, "
            "which is part of that stack"
        )


class StackingError(IllegalMoveError):
    """A stacking primitive was used on a card in the wrong state."""


class PropertyCopyError(PileupError):
    """A property bag is too deep to copy (most likely self-referential)."""
