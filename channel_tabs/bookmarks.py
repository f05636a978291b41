"""Bookmark session: top-level bookmarks and one level of folders.

Positions are plain indices into the current collection (``index`` plus an
optional ``folder_index`` for entries inside a folder).  Stale or invalid
indices are ignored rather than raised.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from .constants import DEFAULT_FOLDER_COLOR, FOLDER_COLORS
from .log import logger
from .models import (
    Bookmark,
    BookmarkEntry,
    BookmarkFolder,
    BookmarkKind,
    LocationReference,
)
from .observable import Observable
from .persistence import PersistenceAdapter
from .reorder import reorder, transfer

BookmarkSnapshot = tuple[BookmarkEntry, ...]

# Resolves a location to a display name (channel/guild metadata lookup).
Labeler = Callable[[LocationReference], str]


def default_label(location: LocationReference) -> str:
    return f"#{location.channel_id}"


def is_folder(entry: BookmarkEntry) -> bool:
    return entry.kind is BookmarkKind.FOLDER


def resolve_folder_color(color: str) -> str:
    """Map a swatch name such as ``"green"`` to its hex value; pass anything else through."""
    return FOLDER_COLORS.get(color.strip().lower(), color)


class BookmarkSession(Observable[BookmarkSnapshot]):
    """Bookmarks for one user."""

    def __init__(
        self,
        user_id: str,
        store: PersistenceAdapter[BookmarkSnapshot],
        *,
        label_for: Labeler | None = None,
        default_folder_color: str = DEFAULT_FOLDER_COLOR,
    ) -> None:
        super().__init__()
        self.user_id = user_id
        self._store = store
        self._label_for = label_for or default_label
        self.default_folder_color = resolve_folder_color(default_folder_color)

        stored = store.load(user_id)
        self._entries: list[BookmarkEntry] = list(stored) if stored is not None else []
        if stored is None:
            self._persist(self.snapshot())

    # -- read access ----------------------------------------------------------

    def snapshot(self) -> BookmarkSnapshot:
        return tuple(self._entries)

    @property
    def bookmarks(self) -> BookmarkSnapshot:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def find_bookmark(self, location: LocationReference) -> tuple[int, int | None] | None:
        """Return ``(index, folder_index)`` of the first bookmark for *location*.

        ``folder_index`` is ``None`` for top-level bookmarks.
        """
        for i, entry in enumerate(self._entries):
            if is_folder(entry):
                for j, child in enumerate(entry.bookmarks):  # type: ignore[union-attr]
                    if child.location == location:
                        return j, i
            elif entry.location == location:
                return i, None
        return None

    def is_bookmarked(self, location: LocationReference) -> bool:
        return self.find_bookmark(location) is not None

    def folder_summary(self, folder_index: int) -> str | None:
        """Comma-separated names of the bookmarks in a folder."""
        folder = self._folder_at(folder_index)
        if folder is None:
            return None
        return ", ".join(b.name for b in folder.bookmarks)

    # -- adding ---------------------------------------------------------------

    def add_bookmark(self, location: LocationReference, name: str | None = None) -> None:
        """Append a bookmark for *location* at the top level."""
        label = name if name else self._label_for(location)
        self._entries.append(Bookmark(name=label, location=location))
        self._commit()

    def add_folder(
        self,
        name: str,
        icon_color: str | None = None,
        bookmark_index: int | None = None,
    ) -> int:
        """Create a folder and return its index.

        With *bookmark_index*, the top-level bookmark at that index is moved
        into the new folder, which takes its place.  Otherwise the empty
        folder is appended.
        """
        folder = BookmarkFolder(
            name=name, icon_color=resolve_folder_color(icon_color or self.default_folder_color)
        )
        leaf = self._leaf_at(bookmark_index) if bookmark_index is not None else None
        if leaf is not None and bookmark_index is not None:
            self._entries[bookmark_index] = replace(folder, bookmarks=(leaf,))
            index = bookmark_index
        else:
            self._entries.append(folder)
            index = len(self._entries) - 1
        self._commit()
        return index

    def toggle_bookmark(self, location: LocationReference, name: str | None = None) -> bool:
        """Bookmark *location*, or remove its bookmark if it has one.

        The existing bookmark is looked up when called, so the result never
        depends on indices captured earlier.  Returns ``True`` when the
        location is bookmarked afterwards.
        """
        found = self.find_bookmark(location)
        if found is None:
            self.add_bookmark(location, name)
            return True
        index, folder_index = found
        self.delete_bookmark(index, folder_index)
        return False

    # -- removing -------------------------------------------------------------

    def delete_bookmark(self, index: int, folder_index: int | None = None) -> bool:
        """Remove a top-level entry (bookmark or whole folder) or a folder child.

        Deleting the last bookmark in a folder keeps the (now empty) folder.
        """
        if folder_index is None:
            if not 0 <= index < len(self._entries):
                return False
            del self._entries[index]
        else:
            folder = self._folder_at(folder_index)
            if folder is None or not 0 <= index < len(folder.bookmarks):
                return False
            children = list(folder.bookmarks)
            del children[index]
            self._entries[folder_index] = replace(folder, bookmarks=tuple(children))
        self._commit()
        return True

    def delete_folder(self, folder_index: int) -> bool:
        """Remove a folder together with its bookmarks."""
        if self._folder_at(folder_index) is None:
            return False
        del self._entries[folder_index]
        self._commit()
        return True

    def remove_from_folder(self, index: int, folder_index: int) -> bool:
        """Move a folder's bookmark to the end of the top level."""
        folder = self._folder_at(folder_index)
        if folder is None or not 0 <= index < len(folder.bookmarks):
            return False
        children = list(folder.bookmarks)
        leaf = children.pop(index)
        self._entries[folder_index] = replace(folder, bookmarks=tuple(children))
        self._entries.append(leaf)
        self._commit()
        return True

    # -- editing --------------------------------------------------------------

    def rename_bookmark(
        self, index: int, new_name: str, folder_index: int | None = None
    ) -> bool:
        """Rename a top-level entry (bookmark or folder) or a folder child."""
        if folder_index is None:
            if not 0 <= index < len(self._entries):
                return False
            self._entries[index] = replace(self._entries[index], name=new_name)
        else:
            folder = self._folder_at(folder_index)
            if folder is None or not 0 <= index < len(folder.bookmarks):
                return False
            children = list(folder.bookmarks)
            children[index] = replace(children[index], name=new_name)
            self._entries[folder_index] = replace(folder, bookmarks=tuple(children))
        self._commit()
        return True

    def recolor_folder(self, folder_index: int, color: str) -> bool:
        """Set a folder's icon color (hex value or swatch name)."""
        folder = self._folder_at(folder_index)
        if folder is None:
            return False
        self._entries[folder_index] = replace(folder, icon_color=resolve_folder_color(color))
        self._commit()
        return True

    # -- drag reordering ------------------------------------------------------

    def move_dragged_bookmarks(
        self,
        drag_index: int,
        hover_index: int,
        drag_folder_index: int | None = None,
        hover_folder_index: int | None = None,
    ) -> tuple[int, int | None]:
        """Apply one drag-hover event.

        ``drag_folder_index``/``hover_folder_index`` select the container
        (``None`` = top level) of the dragged and hovered entries.  When the
        containers differ, the dragged bookmark is removed from its container
        first and ``hover_folder_index`` addresses the collection as it is
        after that removal; the bookmark lands just after the hovered entry.

        Returns the dragged entry's new ``(index, folder_index)`` for the
        next event.  Rejected moves (a folder into a folder, stale indices)
        return the input coordinates unchanged.
        """
        unchanged = (drag_index, drag_folder_index)

        if drag_folder_index == hover_folder_index:
            if drag_folder_index is None:
                entries, new_index = reorder(self._entries, drag_index, hover_index)
                if new_index == drag_index:
                    return unchanged
                self._entries = entries
                self._commit()
                return new_index, None
            folder = self._folder_at(drag_folder_index)
            if folder is None:
                return unchanged
            children, new_index = reorder(folder.bookmarks, drag_index, hover_index)
            if new_index == drag_index:
                return unchanged
            self._entries[drag_folder_index] = replace(folder, bookmarks=tuple(children))
            self._commit()
            return new_index, drag_folder_index

        if drag_folder_index is None:
            return self._move_into_folder(drag_index, hover_index, hover_folder_index)
        if hover_folder_index is None:
            return self._move_out_of_folder(drag_index, hover_index, drag_folder_index)
        return self._move_between_folders(
            drag_index, hover_index, drag_folder_index, hover_folder_index
        )

    def _move_into_folder(
        self, drag_index: int, hover_index: int, hover_folder_index: int | None
    ) -> tuple[int, int | None]:
        unchanged = (drag_index, None)
        if hover_folder_index is None or self._leaf_at(drag_index) is None:
            return unchanged
        remaining = self._entries[:drag_index] + self._entries[drag_index + 1 :]
        if not 0 <= hover_folder_index < len(remaining):
            return unchanged
        folder = remaining[hover_folder_index]
        if not is_folder(folder):
            return unchanged
        moved = transfer(self._entries, folder.bookmarks, drag_index, hover_index)
        if moved is None:
            return unchanged
        entries, children, new_index = moved
        entries[hover_folder_index] = replace(folder, bookmarks=tuple(children))
        self._entries = entries
        self._commit()
        return new_index, hover_folder_index

    def _move_out_of_folder(
        self, drag_index: int, hover_index: int, drag_folder_index: int
    ) -> tuple[int, int | None]:
        unchanged = (drag_index, drag_folder_index)
        folder = self._folder_at(drag_folder_index)
        if folder is None:
            return unchanged
        moved = transfer(folder.bookmarks, self._entries, drag_index, hover_index)
        if moved is None:
            return unchanged
        children, entries, new_index = moved
        folder_position = drag_folder_index if new_index > drag_folder_index else drag_folder_index + 1
        entries[folder_position] = replace(folder, bookmarks=tuple(children))
        self._entries = entries
        self._commit()
        return new_index, None

    def _move_between_folders(
        self,
        drag_index: int,
        hover_index: int,
        drag_folder_index: int,
        hover_folder_index: int,
    ) -> tuple[int, int | None]:
        unchanged = (drag_index, drag_folder_index)
        source = self._folder_at(drag_folder_index)
        target = self._folder_at(hover_folder_index)
        if source is None or target is None:
            return unchanged
        moved = transfer(source.bookmarks, target.bookmarks, drag_index, hover_index)
        if moved is None:
            return unchanged
        source_children, target_children, new_index = moved
        self._entries[drag_folder_index] = replace(source, bookmarks=tuple(source_children))
        self._entries[hover_folder_index] = replace(target, bookmarks=tuple(target_children))
        self._commit()
        return new_index, hover_folder_index

    # -- internals ------------------------------------------------------------

    def _folder_at(self, index: int | None) -> BookmarkFolder | None:
        if index is None or not 0 <= index < len(self._entries):
            return None
        entry = self._entries[index]
        return entry if is_folder(entry) else None  # type: ignore[return-value]

    def _leaf_at(self, index: int) -> Bookmark | None:
        if not 0 <= index < len(self._entries):
            return None
        entry = self._entries[index]
        return None if is_folder(entry) else entry  # type: ignore[return-value]

    def _persist(self, snapshot: BookmarkSnapshot) -> None:
        try:
            self._store.save(self.user_id, snapshot)
        except Exception:
            logger.warning("failed to persist bookmarks for %s", self.user_id, exc_info=True)

    def _commit(self) -> None:
        snapshot = self.snapshot()
        self._persist(snapshot)
        self._notify(snapshot)
