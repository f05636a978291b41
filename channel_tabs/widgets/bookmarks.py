"""Bookmark bar widgets for channel tabs."""

from __future__ import annotations

from rich.color import Color, ColorParseError
from rich.markup import escape
from rich.text import Text
from textual.containers import Horizontal
from textual.widgets import Static

from ..models import BookmarkEntry, BookmarkKind

STAR_EMPTY = "☆"
STAR_FILLED = "★"
FOLDER_ICON = "▤"


def _icon_style(color: str) -> str:
    """Folder colors come from user data; fall back to no color if unparsable."""
    try:
        Color.parse(color)
    except ColorParseError:
        return ""
    return color


class BookmarkStar(Static):
    """Toggles a bookmark for the current location."""

    def on_click(self) -> None:
        app = self.app
        if hasattr(app, "action_toggle_bookmark"):
            app.action_toggle_bookmark()


class BookmarkButton(Static):
    """A bookmark or folder in the bookmark bar."""

    def __init__(self, entry: BookmarkEntry, index: int, **kwargs) -> None:
        label: Text | str
        if entry.kind is BookmarkKind.FOLDER:
            label = Text.assemble(
                " ",
                (FOLDER_ICON, _icon_style(entry.icon_color)),  # type: ignore[union-attr]
                f" {entry.name} ",
            )
        else:
            label = f" {escape(entry.name)} "
        super().__init__(label, **kwargs)
        self.entry = entry
        self.index = index

    def on_click(self) -> None:
        app = self.app
        if hasattr(app, "open_bookmark"):
            app.open_bookmark(self.index)


class BookmarkBar(Horizontal):
    """Star toggle followed by the user's bookmarks."""

    def update_bookmarks(
        self, entries: tuple[BookmarkEntry, ...], current_bookmarked: bool
    ) -> None:
        """Rebuild the bookmark bar."""
        self.remove_children()
        star = STAR_FILLED if current_bookmarked else STAR_EMPTY
        widgets: list[Static] = [BookmarkStar(f" {star} ", classes="bookmark-star")]
        if entries:
            for i, entry in enumerate(entries):
                cls = "bookmark bookmark-folder" if entry.kind is BookmarkKind.FOLDER else "bookmark"
                widgets.append(BookmarkButton(entry, i, classes=cls))
        else:
            widgets.append(
                Static(
                    "You have no bookmarks. Press ctrl+d to bookmark this channel.",
                    classes="bookmark-placeholder",
                )
            )
        self.mount(*widgets)
