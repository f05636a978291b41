"""Tab bar widgets for channel tabs."""

from __future__ import annotations

from collections.abc import Callable

from rich.markup import escape
from textual.containers import Horizontal
from textual.widgets import Static

from ..models import LocationReference, TabSnapshot

UNREAD_DOT = "●"


class TabButton(Static):
    """A clickable tab label in the tab bar."""

    def __init__(self, label: str, tab_id: str, **kwargs) -> None:
        super().__init__(escape(label), **kwargs)
        self.tab_id = tab_id

    def on_click(self) -> None:
        app = self.app
        if hasattr(app, "activate_tab"):
            app.activate_tab(self.tab_id)


class TabBar(Horizontal):
    """Horizontal tab bar showing the open tabs."""

    def update_tabs(
        self,
        snapshot: TabSnapshot,
        label_for: Callable[[LocationReference], str],
        show_unread: bool = True,
        wide: bool = False,
    ) -> None:
        """Rebuild the tab bar buttons."""
        self.remove_children()
        pad = "  " if wide else " "
        buttons = []
        for tab in snapshot.tabs:
            label = label_for(tab.location)
            if show_unread and tab.unread:
                label = f"{UNREAD_DOT} {label}"
            cls = "tab-btn tab-active" if tab.id == snapshot.active_tab_id else "tab-btn tab-inactive"
            if tab.unread:
                cls += " tab-unread"
            buttons.append(TabButton(f"{pad}{label}{pad}", tab_id=tab.id, classes=cls))
        if buttons:
            self.mount(*buttons)
        # Hide tab bar when there's only one tab
        if len(snapshot.tabs) <= 1:
            self.add_class("single-tab")
        else:
            self.remove_class("single-tab")
