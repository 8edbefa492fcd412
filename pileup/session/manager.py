"""
Session Manager - Keeps several games apart from one another.

Every session owns its own Game: its own card id allocator, pile store
and random source. Nothing is shared between sessions except the
(read-only) card library and rules objects they were created from.

Sessions are in-memory only:
- create_session() builds a Game and deals a fresh game
- end_session() drops the session and everything it holds
- cleanup_stale_sessions() drops sessions nobody has touched for a while
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..engine_core.library import Library
from ..rules.base import GameRules
from ..rules.schema import TableLayout
from .game import Game


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle of a session: playing, finished, or given up on."""
    ACTIVE = "active"
    FINISHED = "finished"
    ABANDONED = "abandoned"


@dataclass
class Session:
    """One game being played."""
    session_id: str
    game: Game
    created_at: float
    last_active: float
    state: SessionState = SessionState.ACTIVE
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def touch(self) -> None:
        self.last_active = time.time()


class SessionManager:
    """
    Owns every live session, keyed by a random uuid.

    It:
    - creates sessions, each with an isolated Game
    - looks sessions up, refreshing their last_active time
    - ends sessions on request or once they go stale
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        library: Library,
        rules: GameRules | None = None,
        layout: TableLayout | dict[str, Any] | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new session and start its first game.

        Args:
            library: card types for the game
            rules: the game's rules
            layout: overrides rules.layout
            seed: shuffle seed (defaults to PILEUP_SHUFFLE_SEED)

        Returns:
            New Session with rules.setup already run
        """
        game = Game(library, rules=rules, layout=layout, seed=seed)
        game.new_game()

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game,
            created_at=now,
            last_active=now,
        )
        self._sessions[session.session_id] = session
        logger.debug("created session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID, marking it as recently used."""
        session = self._sessions.get(session_id)
        if session is not None:
            session.touch()
        return session

    def end_session(self, session_id: str, reason: str = "completed") -> Session | None:
        """
        End a session and forget it.

        Any play in progress is abandoned. Returns the ended session, or
        None if the id was unknown.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return None
        session.game.controller.stop_considering()
        if reason == "completed":
            session.state = SessionState.FINISHED
        else:
            session.state = SessionState.ABANDONED
        logger.debug("ended session %s (%s)", session_id, reason)
        return session

    def list_active_sessions(self) -> list[str]:
        """Ids of sessions still being played."""
        return [
            session_id for session_id, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: float = 3600) -> list[str]:
        """
        End sessions not used for longer than max_age_seconds.

        Returns the ids of the sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove

    def __len__(self) -> int:
        return len(self._sessions)
