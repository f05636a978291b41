"""Browser-like channel tabs and bookmarks, kept per user."""

from .bookmarks import BookmarkSession
from .models import (
    Bookmark,
    BookmarkEntry,
    BookmarkFolder,
    BookmarkKind,
    LocationReference,
    Tab,
    TabSnapshot,
)
from .registry import SessionRegistry
from .reorder import reorder, transfer
from .tabs import TabSession

__all__ = [
    "Bookmark",
    "BookmarkEntry",
    "BookmarkFolder",
    "BookmarkKind",
    "BookmarkSession",
    "LocationReference",
    "SessionRegistry",
    "Tab",
    "TabSession",
    "TabSnapshot",
    "reorder",
    "transfer",
]

__version__ = "0.1.0"
