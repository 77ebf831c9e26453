"""
In-memory battle sessions, one per player.

Battles are not persisted; a restart discards them.
"""

import logging
from dataclasses import dataclass, field
from threading import Lock

from cardbattler.engine.session import BattleSession

logger = logging.getLogger(__name__)


@dataclass
class BattleSessionRegistry:
    """Thread-safe map from player id to that player's battle session."""

    _sessions: dict[str, BattleSession] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def get(self, user_id: str) -> BattleSession:
        """Get the player's session, creating a NOT_STARTED one if needed."""
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = BattleSession()
                self._sessions[user_id] = session
                logger.debug("battle_session_created", extra={"user_id": user_id})
            return session

    def discard(self, user_id: str) -> bool:
        """Forget a player's session. Returns True if one existed."""
        with self._lock:
            existed = self._sessions.pop(user_id, None) is not None
        if existed:
            logger.info("battle_session_discarded", extra={"user_id": user_id})
        return existed

    def clear(self) -> None:
        """Forget all sessions."""
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


_registry = BattleSessionRegistry()


def get_battle_registry() -> BattleSessionRegistry:
    """Get the process-wide registry."""
    return _registry
