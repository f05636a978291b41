"""Textual host for the tab and bookmark sessions.

The app plays the host's part: it supplies the current user id, resolves
labels, and "navigates" by updating the location view.  All state lives in
the sessions; the bars only re-render the snapshots they are handed.
"""

from __future__ import annotations

from collections.abc import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Input, Static

from .bookmarks import BookmarkSession, BookmarkSnapshot, default_label
from .constants import KEYBINDINGS
from .links import open_link_in_tab, parse_address
from .log import logger
from .models import LocationReference, TabSnapshot
from .persistence import BookmarkStore, PersistenceAdapter, TabStore
from .preferences import Preferences, load_preferences
from .registry import SessionRegistry
from .tabs import TabSession
from .widgets import BookmarkBar, TabBar

DEFAULT_LOCATION = LocationReference(channel_id="0")


class ChannelTabsApp(App):
    """Browser-like channel tabs with a bookmark bar."""

    CSS_PATH = "styles.tcss"
    TITLE = "Channel Tabs"

    BINDINGS = [
        Binding(
            key,
            action,
            description,
            show=action in ("new_tab", "close_tab", "quit"),
            priority=True,
        )
        for key, action, description in KEYBINDINGS
    ]

    def __init__(
        self,
        user_id: str = "local",
        initial_location: LocationReference | None = None,
        prefs: Preferences | None = None,
        tab_store: PersistenceAdapter[TabSnapshot] | None = None,
        bookmark_store: PersistenceAdapter[BookmarkSnapshot] | None = None,
        label_for: Callable[[LocationReference], str] | None = None,
    ) -> None:
        super().__init__()
        self.user_id = user_id
        self._prefs = prefs or load_preferences()
        self.current_location = initial_location or DEFAULT_LOCATION
        self.label_for = label_for or default_label
        self._tab_store = tab_store or TabStore(self._prefs.storage_dir)
        self._bookmark_store = bookmark_store or BookmarkStore(self._prefs.storage_dir)
        self._unsubscribers: list[Callable[[], None]] = []
        self._ui_ready = False

        self.tab_sessions: SessionRegistry[TabSession] = SessionRegistry(
            lambda uid: TabSession(
                uid,
                self._tab_store,
                initial_location=self.current_location,
                navigate=self.navigate,
                restore=self._prefs.startup.restore_tabs,
            )
        )
        self.bookmark_sessions: SessionRegistry[BookmarkSession] = SessionRegistry(
            lambda uid: BookmarkSession(
                uid,
                self._bookmark_store,
                label_for=self.label_for,
                default_folder_color=self._prefs.default_folder_color,
            )
        )

    # ── Sessions ────────────────────────────────────────────────

    @property
    def tabs(self) -> TabSession:
        return self.tab_sessions.get_or_create(self.user_id)

    @property
    def bookmarks(self) -> BookmarkSession:
        return self.bookmark_sessions.get_or_create(self.user_id)

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        with Vertical(id="tabs-area"):
            yield BookmarkBar(id="bookmark-bar")
            yield TabBar(id="tab-bar")
        yield Static("", id="location-view")
        yield Input(placeholder="Channel link or guild/channel", id="open-input")

    def on_mount(self) -> None:
        self.query_one("#bookmark-bar", BookmarkBar).display = (
            self._prefs.display.show_bookmark_bar
        )
        self._unsubscribers.append(self.tabs.subscribe(self._render_tabs))
        self._unsubscribers.append(self.bookmarks.subscribe(self._render_bookmarks))
        active = self.tabs.active_tab
        if active is not None:
            self.current_location = active.location
        self._ui_ready = True
        self._render_location()
        self._render_tabs(self.tabs.snapshot())
        self._render_bookmarks(self.bookmarks.snapshot())

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    # ── Rendering ───────────────────────────────────────────────

    def _render_tabs(self, snapshot: TabSnapshot) -> None:
        self.query_one("#tab-bar", TabBar).update_tabs(
            snapshot,
            self.label_for,
            show_unread=self._prefs.display.show_unread_indicators,
            wide=self._prefs.display.wider_tabs,
        )

    def _render_bookmarks(self, entries: BookmarkSnapshot) -> None:
        self.query_one("#bookmark-bar", BookmarkBar).update_bookmarks(
            entries, self.bookmarks.is_bookmarked(self.current_location)
        )

    def _render_location(self) -> None:
        location = self.current_location
        guild = location.guild_id or "@me"
        self.query_one("#location-view", Static).update(
            f"{self.label_for(location)}  ({guild}/{location.channel_id})"
        )

    # ── Navigation (host side) ──────────────────────────────────

    def navigate(self, location: LocationReference, message_id: str | bool | None = None) -> None:
        self.current_location = location
        logger.debug("navigate to %s (message %s)", location, message_id)
        if not self._ui_ready:
            return
        self._render_location()
        self._render_bookmarks(self.bookmarks.snapshot())

    def activate_tab(self, tab_id: str) -> None:
        self.tabs.switch_tab(tab_id)

    def open_bookmark(self, index: int) -> None:
        entries = self.bookmarks.snapshot()
        if not 0 <= index < len(entries):
            return
        summary = self.bookmarks.folder_summary(index)
        if summary is not None:
            self.notify(summary or "This folder is empty.")
            return
        self.tabs.create_tab(entries[index].location)  # type: ignore[union-attr]

    def receive_message(self, location: LocationReference) -> None:
        """Incoming message for *location*: flag inactive tabs there as unread."""
        self.tabs.mark_unread_for(location)

    # ── Input ───────────────────────────────────────────────────

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        event.input.value = ""
        if not text:
            return
        if open_link_in_tab(self.tabs, text) is not None:
            return
        location = parse_address(text)
        if location is None:
            self.notify(f"Not a channel link: {text}", severity="warning")
            return
        self.tabs.create_tab(location)

    # ── Actions ─────────────────────────────────────────────────

    def action_new_tab(self) -> None:
        self.tabs.create_tab(self.current_location, force_new=True)

    def action_close_tab(self) -> None:
        active = self.tabs.active_tab_id
        if active is not None and len(self.tabs) > 1:
            self.tabs.close_tab(active)

    def action_next_tab(self) -> None:
        self.tabs.switch_to_next()

    def action_previous_tab(self) -> None:
        self.tabs.switch_to_previous()

    def action_next_unread(self) -> None:
        self.tabs.switch_to_next_unread(1)

    def action_previous_unread(self) -> None:
        self.tabs.switch_to_next_unread(-1)

    def action_move_tab_right(self) -> None:
        active = self.tabs.active_tab_id
        if active is not None:
            self.tabs.move_tab_by(active, 1)

    def action_move_tab_left(self) -> None:
        active = self.tabs.active_tab_id
        if active is not None:
            self.tabs.move_tab_by(active, -1)

    def action_toggle_bookmark(self) -> None:
        self.bookmarks.toggle_bookmark(self.current_location)
