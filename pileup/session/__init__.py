"""
Session Module - Games in progress.

A Game holds one table: its cards, piles and stacking. The
PlayController walks a card through consider -> target -> play, and the
SessionManager keeps several games apart from one another.
"""

from .game import Game
from .play import PlayController
from .manager import SessionManager, Session, SessionState

__all__ = [
    "Game",
    "PlayController",
    "SessionManager",
    "Session",
    "SessionState",
]
