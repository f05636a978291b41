"""Textual widgets presenting tab and bookmark snapshots."""

from .bookmarks import BookmarkBar, BookmarkButton, BookmarkStar
from .tabs import TabBar, TabButton

__all__ = [
    "BookmarkBar",
    "BookmarkButton",
    "BookmarkStar",
    "TabBar",
    "TabButton",
]
