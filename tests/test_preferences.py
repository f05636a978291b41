"""Tests for channel_tabs.preferences.

Covers load_preferences defaults, parsing, first-run file creation, and the
save_* round-trip functions.  All file I/O uses tmp_path so nothing touches
the real user config.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from channel_tabs.constants import DEFAULT_FOLDER_COLOR, DEFAULT_STORAGE_DIR
from channel_tabs.preferences import (
    Preferences,
    load_preferences,
    save_default_folder_color,
    save_restore_tabs,
    save_show_bookmark_bar,
    save_show_unread_indicators,
    save_wider_tabs,
)


class TestLoadPreferences:
    def test_defaults(self):
        prefs = Preferences()
        assert prefs.startup.restore_tabs is True
        assert prefs.display.show_bookmark_bar is True
        assert prefs.display.wider_tabs is False
        assert prefs.default_folder_color == DEFAULT_FOLDER_COLOR
        assert prefs.storage_dir == DEFAULT_STORAGE_DIR

    def test_creates_default_file(self, tmp_path):
        path = tmp_path / "sub" / "preferences.yaml"
        prefs = load_preferences(path)
        assert path.exists()
        assert prefs == Preferences()
        data = yaml.safe_load(path.read_text())
        assert data["startup"]["restore_tabs"] is True

    def test_default_file_loads_to_defaults(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        load_preferences(path)
        assert load_preferences(path) == Preferences()

    def test_reads_values(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        path.write_text(
            "startup:\n  restore_tabs: false\n"
            "display:\n  show_bookmark_bar: false\n  wider_tabs: true\n"
            "folders:\n  default_color: '#123456'\n"
            f"storage:\n  directory: '{tmp_path / 'data'}'\n"
        )
        prefs = load_preferences(path)
        assert prefs.startup.restore_tabs is False
        assert prefs.display.show_bookmark_bar is False
        assert prefs.display.show_unread_indicators is True
        assert prefs.display.wider_tabs is True
        assert prefs.default_folder_color == "#123456"
        assert prefs.storage_dir == tmp_path / "data"

    def test_expands_home_in_storage_dir(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        path.write_text("storage:\n  directory: '~/tabs'\n")
        assert load_preferences(path).storage_dir == Path.home() / "tabs"

    def test_invalid_yaml_falls_back(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        path.write_text("startup: [unclosed\n")
        assert load_preferences(path) == Preferences()

    def test_unknown_sections_ignored(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        path.write_text("other:\n  thing: 1\n")
        assert load_preferences(path) == Preferences()


class TestSavePreferences:
    def test_save_restore_tabs_round_trip(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        load_preferences(path)
        save_restore_tabs(False, path)
        assert load_preferences(path).startup.restore_tabs is False
        save_restore_tabs(True, path)
        assert load_preferences(path).startup.restore_tabs is True

    def test_save_preserves_comments(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        load_preferences(path)
        save_show_bookmark_bar(False, path)
        text = path.read_text()
        assert "# bookmark bar above the tabs" in text
        assert "show_bookmark_bar: false" in text

    def test_save_without_file_uses_default_template(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        save_wider_tabs(True, path)
        prefs = load_preferences(path)
        assert prefs.display.wider_tabs is True
        assert prefs.startup.restore_tabs is True

    def test_adds_missing_key_to_section(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        path.write_text("display:\n  wider_tabs: true\n")
        save_show_unread_indicators(False, path)
        prefs = load_preferences(path)
        assert prefs.display.show_unread_indicators is False
        assert prefs.display.wider_tabs is True

    def test_adds_missing_section(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        path.write_text("display:\n  wider_tabs: true\n")
        save_default_folder_color("#abcdef", path)
        assert load_preferences(path).default_folder_color == "#abcdef"

    def test_save_folder_color_replaces_quoted(self, tmp_path):
        path = tmp_path / "preferences.yaml"
        load_preferences(path)
        save_default_folder_color("#010203", path)
        assert load_preferences(path).default_folder_color == "#010203"
