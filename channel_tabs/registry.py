"""Per-user session registry.

A session is created by ``get_or_create`` on first access for a user and
lives until ``evict`` (logout) or ``clear``.  Only one instance exists per
user id at a time.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from .log import logger

S = TypeVar("S")


class SessionRegistry(Generic[S]):
    """Maps user ids to lazily created sessions."""

    def __init__(
        self,
        factory: Callable[[str], S],
        on_evict: Callable[[S], None] | None = None,
    ) -> None:
        self._factory = factory
        self._on_evict = on_evict
        self._sessions: dict[str, S] = {}

    def get_or_create(self, user_id: str) -> S:
        session = self._sessions.get(user_id)
        if session is None:
            session = self._factory(user_id)
            self._sessions[user_id] = session
            logger.debug("created session for %s", user_id)
        return session

    def get(self, user_id: str) -> S | None:
        return self._sessions.get(user_id)

    def evict(self, user_id: str) -> bool:
        """Drop the session for *user_id*.  Returns ``False`` if there was none."""
        session = self._sessions.pop(user_id, None)
        if session is None:
            return False
        if self._on_evict is not None:
            self._on_evict(session)
        logger.debug("evicted session for %s", user_id)
        return True

    def clear(self) -> None:
        for user_id in list(self._sessions):
            self.evict(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
