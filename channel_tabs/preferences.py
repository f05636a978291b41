"""User preferences for channel tabs.

Loads settings from ~/.channel-tabs/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import DEFAULT_FOLDER_COLOR, DEFAULT_STORAGE_DIR, PREFS_PATH
from .log import logger

_DEFAULT_YAML = f"""\
# Channel Tabs Preferences
# Delete this file to reset to defaults.

startup:
  restore_tabs: true             # reopen last session's tabs (false = start with one tab)

display:
  show_bookmark_bar: true        # bookmark bar above the tabs
  show_unread_indicators: true   # dot on tabs with unread messages
  wider_tabs: false              # roomier tab and bookmark labels

folders:
  default_color: "{DEFAULT_FOLDER_COLOR}"   # icon color for new folders

storage:
  directory: ""                  # where tabs/bookmarks are kept (empty = default)
"""


@dataclass
class StartupPreferences:
    """What to open when a user's session is first created."""

    restore_tabs: bool = True


@dataclass
class DisplayPreferences:
    """Display settings for the tab and bookmark bars."""

    show_bookmark_bar: bool = True
    show_unread_indicators: bool = True
    wider_tabs: bool = False


@dataclass
class Preferences:
    """Top-level channel-tabs preferences."""

    startup: StartupPreferences = field(default_factory=StartupPreferences)
    display: DisplayPreferences = field(default_factory=DisplayPreferences)
    default_folder_color: str = DEFAULT_FOLDER_COLOR
    storage_dir: Path = DEFAULT_STORAGE_DIR


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or PREFS_PATH
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
            if isinstance(data.get("startup"), dict):
                sdata = data["startup"]
                if "restore_tabs" in sdata:
                    prefs.startup.restore_tabs = bool(sdata["restore_tabs"])
            if isinstance(data.get("display"), dict):
                ddata = data["display"]
                for key in ("show_bookmark_bar", "show_unread_indicators", "wider_tabs"):
                    if key in ddata:
                        setattr(prefs.display, key, bool(ddata[key]))
            if isinstance(data.get("folders"), dict):
                color = data["folders"].get("default_color")
                if color:
                    prefs.default_folder_color = str(color)
            if isinstance(data.get("storage"), dict):
                directory = data["storage"].get("directory")
                if directory:
                    prefs.storage_dir = Path(str(directory)).expanduser()
        except Exception:
            logger.debug("failed to parse preferences at %s", path, exc_info=True)
            return Preferences()
    else:
        # Create default file for user to customize
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML)
        except OSError:
            logger.debug("could not write default preferences to %s", path)

    return prefs


def _save_key(section: str, key: str, value: str, path: Path | None = None) -> None:
    """Surgically set ``section.key`` to *value*, preserving the rest of the file."""
    path = path or PREFS_PATH
    try:
        if path.exists():
            text = path.read_text()
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = _DEFAULT_YAML

        if re.search(rf"^\s+{key}:", text, re.MULTILINE):
            # Replace the value, keep any trailing comment
            text = re.sub(
                rf'^(\s+{key}:)\s*(?:"[^"]*"|[^\s#]+)?(.*)$',
                lambda m: f"{m.group(1)} {value}{m.group(2)}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        elif re.search(rf"^{section}:", text, re.MULTILINE):
            text = re.sub(
                rf"^({section}:.*)$",
                lambda m: f"{m.group(1)}\n  {key}: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            text = text.rstrip() + f"\n\n{section}:\n  {key}: {value}\n"

        path.write_text(text)
    except OSError:
        logger.debug("failed to save %s.%s", section, key, exc_info=True)


def _yaml_bool(enabled: bool) -> str:
    return "true" if enabled else "false"


def save_restore_tabs(enabled: bool, path: Path | None = None) -> None:
    _save_key("startup", "restore_tabs", _yaml_bool(enabled), path)


def save_show_bookmark_bar(enabled: bool, path: Path | None = None) -> None:
    _save_key("display", "show_bookmark_bar", _yaml_bool(enabled), path)


def save_show_unread_indicators(enabled: bool, path: Path | None = None) -> None:
    _save_key("display", "show_unread_indicators", _yaml_bool(enabled), path)


def save_wider_tabs(enabled: bool, path: Path | None = None) -> None:
    _save_key("display", "wider_tabs", _yaml_bool(enabled), path)


def save_default_folder_color(color: str, path: Path | None = None) -> None:
    _save_key("folders", "default_color", f'"{color}"', path)
