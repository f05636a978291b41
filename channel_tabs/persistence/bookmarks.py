"""Bookmark persistence store."""

from __future__ import annotations

from pathlib import Path

from ..constants import BOOKMARKS_KIND
from ..models import BookmarkEntry, entries_from_list
from ._base import UserRecordStore


class BookmarkStore(UserRecordStore[tuple[BookmarkEntry, ...]]):
    """Bookmarks collection (``[{kind: leaf|folder, ...}, ...]``)."""

    kind = BOOKMARKS_KIND

    def __init__(self, directory: Path) -> None:
        super().__init__(directory)

    def _encode(self, value: tuple[BookmarkEntry, ...]) -> list:
        return [entry.to_dict() for entry in value]

    def _decode(self, raw: dict | list) -> tuple[BookmarkEntry, ...]:
        if not isinstance(raw, list):
            raise TypeError(f"expected a bookmark list, got {type(raw).__name__}")
        return tuple(entries_from_list(raw))
