"""Constants for channel-tabs: storage locations, palette, keybindings."""

from __future__ import annotations

import re
from pathlib import Path

# -- Storage ----------------------------------------------------------------

CONFIG_DIR = Path.home() / ".channel-tabs"
PREFS_PATH = CONFIG_DIR / "preferences.yaml"
DEFAULT_STORAGE_DIR = CONFIG_DIR / "data"

TABS_KIND = "tabs"
BOOKMARKS_KIND = "bookmarks"

# -- Bookmarks --------------------------------------------------------------

DEFAULT_FOLDER_COLOR = "#5865f2"

# Named swatches; accepted in place of a hex value wherever a folder color is given.
FOLDER_COLORS: dict[str, str] = {
    "blurple": "#5865f2",
    "green": "#57f287",
    "yellow": "#fee75c",
    "fuchsia": "#eb459e",
    "red": "#ed4245",
    "white": "#ffffff",
    "gray": "#99aab5",
}

# -- Links ------------------------------------------------------------------

# https://discord.com/channels/<guild | @me>/<channel>[/<message>]
MESSAGE_LINK_RE = re.compile(
    r"^https?://(?:\w+\.)?discord(?:app)?\.com/channels/"
    r"(\d{17,20}|@me)/(\d{17,20})(?:/(\d{17,20}))?$"
)

DM_GUILD = "@me"

# -- Keybindings (key, action, description) ---------------------------------

KEYBINDINGS: list[tuple[str, str, str]] = [
    ("ctrl+t", "new_tab", "New tab"),
    ("ctrl+w", "close_tab", "Close tab"),
    ("ctrl+pagedown", "next_tab", "Next tab"),
    ("ctrl+pageup", "previous_tab", "Previous tab"),
    ("ctrl+shift+right", "next_unread", "Next unread"),
    ("ctrl+shift+left", "previous_unread", "Previous unread"),
    ("alt+right", "move_tab_right", "Move tab right"),
    ("alt+left", "move_tab_left", "Move tab left"),
    ("ctrl+d", "toggle_bookmark", "Bookmark"),
    ("ctrl+q", "quit", "Quit"),
]
