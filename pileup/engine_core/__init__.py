"""
Engine Core - Card, pile and stack state management.

The engine is the runtime that:
1. Registers card types in a Library
2. Creates card instances with session-unique ids
3. Keeps piles and stacks consistent through the MoveEngine
4. Answers read-only questions through the QueryAPI
"""

from .card import CardInstance, IdAllocator, copy_properties
from .library import Library, CardType
from .piles import Pile, PileStore, validate_pile_id
from .moves import MoveEngine
from .queries import QueryAPI
from . import stacking
from .errors import (
    PileupError,
    ConfigurationError,
    DuplicateTypeError,
    DuplicateGroupError,
    DuplicatePileError,
    InvalidPileIdError,
    UnknownCardTypeError,
    UnknownGroupError,
    UnknownPileError,
    LayoutValidationError,
    IllegalMoveError,
    SelfStackError,
    CycleViolationError,
    StackingError,
    PropertyCopyError,
)

__all__ = [
    "CardInstance",
    "IdAllocator",
    "copy_properties",
    "Library",
    "CardType",
    "Pile",
    "PileStore",
    "validate_pile_id",
    "MoveEngine",
    "QueryAPI",
    "stacking",
    "PileupError",
    "ConfigurationError",
    "DuplicateTypeError",
    "DuplicateGroupError",
    "DuplicatePileError",
    "InvalidPileIdError",
    "UnknownCardTypeError",
    "UnknownGroupError",
    "UnknownPileError",
    "LayoutValidationError",
    "IllegalMoveError",
    "SelfStackError",
    "CycleViolationError",
    "StackingError",
    "PropertyCopyError",
]
