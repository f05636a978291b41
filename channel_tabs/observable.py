"""Synchronous subscriber registry used by both sessions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from .log import logger

S = TypeVar("S")

Subscriber = Callable[[S], None]


class Observable(Generic[S]):
    """Holds subscribers and notifies them with a snapshot after each change."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber[S]] = []

    def subscribe(self, callback: Subscriber[S]) -> Callable[[], None]:
        """Register *callback*; return a handle that unsubscribes it.

        Calling the handle more than once is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def _notify(self, snapshot: S) -> None:
        # Iterate over a copy so callbacks may unsubscribe themselves.
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.warning("subscriber %r failed", callback, exc_info=True)
