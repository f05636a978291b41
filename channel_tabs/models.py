"""Data models for channel tabs and bookmarks.

Every model is a frozen dataclass: sessions replace elements instead of
mutating them, so the tuples handed to presentation code are safe to keep.
Each model also owns its plain-dict wire form (camelCase field names, as
stored on disk).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from .constants import DM_GUILD


def new_tab_id() -> str:
    """Return a fresh, never-reused tab identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class LocationReference:
    """A (guild, channel) address.  ``guild_id`` is ``None`` for DMs."""

    channel_id: str
    guild_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"guildId": self.guild_id, "channelId": self.channel_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LocationReference:
        channel_id = data["channelId"]
        if not isinstance(channel_id, str) or not channel_id:
            raise ValueError(f"Invalid channelId: {channel_id!r}")
        guild_id = data.get("guildId")
        if guild_id == DM_GUILD or guild_id == "":
            guild_id = None
        return cls(channel_id=channel_id, guild_id=guild_id)


@dataclass(frozen=True)
class Tab:
    """An open tab.

    ``message_id`` is a message to jump to, ``True`` for "jump to latest",
    or ``None`` for no jump.
    """

    id: str
    location: LocationReference
    message_id: str | bool | None = None
    unread: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "location": self.location.to_dict(),
            "unread": self.unread,
        }
        if self.message_id is not None:
            data["messageId"] = self.message_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tab:
        tab_id = data.get("id")
        if not isinstance(tab_id, str) or not tab_id:
            tab_id = new_tab_id()
        message_id = data.get("messageId")
        if message_id is not None and not isinstance(message_id, (str, bool)):
            message_id = str(message_id)
        return cls(
            id=tab_id,
            location=LocationReference.from_dict(data["location"]),
            message_id=message_id,
            unread=bool(data.get("unread", False)),
        )


@dataclass(frozen=True)
class TabSnapshot:
    """Read-only view of a tab session."""

    tabs: tuple[Tab, ...] = ()
    active_tab_id: str | None = None

    @property
    def active_tab(self) -> Tab | None:
        for tab in self.tabs:
            if tab.id == self.active_tab_id:
                return tab
        return None

    @property
    def active_index(self) -> int | None:
        for i, tab in enumerate(self.tabs):
            if tab.id == self.active_tab_id:
                return i
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "tabs": [tab.to_dict() for tab in self.tabs],
            "activeTabId": self.active_tab_id,
        }


class BookmarkKind(Enum):
    """Discriminator for bookmark collection entries."""

    LEAF = "leaf"
    FOLDER = "folder"


@dataclass(frozen=True)
class Bookmark:
    """A saved location."""

    kind: ClassVar[BookmarkKind] = BookmarkKind.LEAF

    name: str
    location: LocationReference

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "location": self.location.to_dict(),
        }


@dataclass(frozen=True)
class BookmarkFolder:
    """A named, colored, single-level group of bookmarks."""

    kind: ClassVar[BookmarkKind] = BookmarkKind.FOLDER

    name: str
    icon_color: str
    bookmarks: tuple[Bookmark, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "iconColor": self.icon_color,
            "bookmarks": [b.to_dict() for b in self.bookmarks],
        }


BookmarkEntry = Union[Bookmark, BookmarkFolder]


def _entry_kind(data: dict[str, Any]) -> BookmarkKind:
    """Read the ``kind`` tag, classifying untagged legacy records by shape."""
    tag = data.get("kind")
    if tag is not None:
        return BookmarkKind(tag)
    return BookmarkKind.FOLDER if "bookmarks" in data else BookmarkKind.LEAF


def _leaf_from_dict(data: dict[str, Any]) -> Bookmark:
    # Legacy records store the location fields inline.
    location = data.get("location", data)
    return Bookmark(
        name=str(data.get("name") or ""),
        location=LocationReference.from_dict(location),
    )


def _leaves_from_list(items: list[Any]) -> list[Bookmark]:
    """Decode a folder's children, flattening any nested folders."""
    leaves: list[Bookmark] = []
    for item in items:
        try:
            if _entry_kind(item) is BookmarkKind.FOLDER:
                leaves.extend(_leaves_from_list(item.get("bookmarks") or []))
            else:
                leaves.append(_leaf_from_dict(item))
        except (AttributeError, KeyError, TypeError, ValueError):
            continue
    return leaves


def entry_from_dict(data: dict[str, Any]) -> BookmarkEntry:
    """Decode one top-level bookmark collection entry."""
    if _entry_kind(data) is BookmarkKind.FOLDER:
        return BookmarkFolder(
            name=str(data.get("name") or ""),
            icon_color=str(data.get("iconColor") or ""),
            bookmarks=tuple(_leaves_from_list(data.get("bookmarks") or [])),
        )
    return _leaf_from_dict(data)


def entries_from_list(items: list[Any]) -> list[BookmarkEntry]:
    """Decode a stored collection, skipping entries that fail to parse."""
    entries: list[BookmarkEntry] = []
    for item in items:
        try:
            entries.append(entry_from_dict(item))
        except (AttributeError, KeyError, TypeError, ValueError):
            continue
    return entries


def tabs_from_dict(data: dict[str, Any]) -> TabSnapshot:
    """Decode a stored tab record, dropping malformed and duplicate-id tabs."""
    tabs: list[Tab] = []
    seen: set[str] = set()
    for item in data.get("tabs") or []:
        try:
            tab = Tab.from_dict(item)
        except (AttributeError, KeyError, TypeError, ValueError):
            continue
        if tab.id in seen:
            continue
        seen.add(tab.id)
        tabs.append(tab)
    active = data.get("activeTabId")
    if active not in seen:
        active = tabs[0].id if tabs else None
    return TabSnapshot(tabs=tuple(tabs), active_tab_id=active)
