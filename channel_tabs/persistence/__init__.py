"""Persistence layer – each store owns its file path, data format, and I/O."""

from ._base import JsonStore, MemoryStore, PersistenceAdapter, UserRecordStore
from .bookmarks import BookmarkStore
from .tabs import TabStore

__all__ = [
    "BookmarkStore",
    "JsonStore",
    "MemoryStore",
    "PersistenceAdapter",
    "TabStore",
    "UserRecordStore",
]
