"""Open-tab session: an ordered tab list with a single active tab.

Tabs are identified by ``Tab.id``; indices are only used for drag
reordering and are valid for the current snapshot only.  Every mutation is
persisted (best effort) and then reported to subscribers synchronously.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from .log import logger
from .models import LocationReference, Tab, TabSnapshot, new_tab_id
from .observable import Observable
from .persistence import PersistenceAdapter
from .reorder import reorder

# navigate(location, message_id) - message_id is a message, True for latest.
Navigator = Callable[[LocationReference, str | bool | None], None]


class TabSession(Observable[TabSnapshot]):
    """Tabs for one user."""

    def __init__(
        self,
        user_id: str,
        store: PersistenceAdapter[TabSnapshot],
        *,
        initial_location: LocationReference | None = None,
        navigate: Navigator | None = None,
        restore: bool = True,
    ) -> None:
        super().__init__()
        self.user_id = user_id
        self._store = store
        self._navigate = navigate
        self._tabs: list[Tab] = []
        self._active_id: str | None = None

        stored = store.load(user_id) if restore else None
        if stored is not None and stored.tabs:
            self._tabs = list(stored.tabs)
            self._active_id = stored.active_tab_id
            if self._index_of(self._active_id) is None:
                self._active_id = self._tabs[0].id
        else:
            if initial_location is not None:
                tab = Tab(id=new_tab_id(), location=initial_location)
                self._tabs.append(tab)
                self._active_id = tab.id
            self._persist(self.snapshot())

    # -- read access ----------------------------------------------------------

    def snapshot(self) -> TabSnapshot:
        return TabSnapshot(tabs=tuple(self._tabs), active_tab_id=self._active_id)

    @property
    def tabs(self) -> tuple[Tab, ...]:
        return tuple(self._tabs)

    @property
    def active_tab_id(self) -> str | None:
        return self._active_id

    @property
    def active_tab(self) -> Tab | None:
        i = self._index_of(self._active_id)
        return None if i is None else self._tabs[i]

    def __len__(self) -> int:
        return len(self._tabs)

    def find_tab(self, location: LocationReference) -> Tab | None:
        """Return the first open tab at *location*."""
        for tab in self._tabs:
            if tab.location == location:
                return tab
        return None

    # -- creating and closing -------------------------------------------------

    def create_tab(
        self,
        location: LocationReference,
        message_id: str | bool | None = None,
        force_new: bool = False,
    ) -> str:
        """Open *location* in a new tab and activate it; return the tab id.

        Unless *force_new* is set, an existing tab at the same location is
        activated instead and its id returned.
        """
        if not force_new:
            existing = self.find_tab(location)
            if existing is not None:
                self.switch_tab(existing.id, message_id)
                return existing.id

        tab = Tab(id=new_tab_id(), location=location, message_id=message_id)
        self._tabs.append(tab)
        self._active_id = tab.id
        self._commit()
        self._go(tab)
        return tab.id

    def open_message(self, location: LocationReference, message_id: str) -> str:
        """Open a specific message (ctrl-click on a search result)."""
        return self.create_tab(location, message_id)

    def close_tab(self, tab_id: str) -> bool:
        """Close *tab_id*.  Returns ``False`` if no such tab is open.

        Closing the active tab activates its left neighbour, or the new first
        tab when it was leftmost.
        """
        i = self._index_of(tab_id)
        if i is None:
            return False
        del self._tabs[i]
        successor: Tab | None = None
        if tab_id == self._active_id:
            if self._tabs:
                successor = self._activate_at(i - 1 if i > 0 else 0)
            else:
                self._active_id = None
        self._commit()
        if successor is not None:
            self._go(successor)
        return True

    def close_other_tabs(self, tab_id: str) -> bool:
        """Close every tab except *tab_id*, which becomes active."""
        i = self._index_of(tab_id)
        if i is None:
            return False
        keep = self._tabs[i]
        changed_active = self._active_id != tab_id
        if len(self._tabs) == 1 and not changed_active:
            return True
        self._tabs = [keep]
        keep = self._activate_at(0)
        self._commit()
        if changed_active:
            self._go(keep)
        return True

    def close_tabs_to_the_right(self, tab_id: str) -> bool:
        """Close every tab after *tab_id*."""
        i = self._index_of(tab_id)
        if i is None:
            return False
        if i == len(self._tabs) - 1:
            return True
        active_index = self._index_of(self._active_id)
        del self._tabs[i + 1 :]
        successor: Tab | None = None
        if active_index is not None and active_index > i:
            successor = self._activate_at(i)
        self._commit()
        if successor is not None:
            self._go(successor)
        return True

    # -- activation -----------------------------------------------------------

    def switch_tab(self, tab_id: str, message_id: str | bool | None = None) -> bool:
        """Activate *tab_id*, clear its unread flag, and navigate to it.

        *message_id* becomes the tab's jump target for this navigation only;
        a plain switch clears any earlier target so the tab opens as usual.
        """
        i = self._index_of(tab_id)
        if i is None:
            return False
        tab = replace(self._tabs[i], unread=False, message_id=message_id)
        self._tabs[i] = tab
        self._active_id = tab_id
        self._commit()
        self._go(tab)
        return True

    def switch_to_next(self, step: int = 1) -> str | None:
        """Cycle the active tab by *step* positions, wrapping at the ends."""
        if not self._tabs:
            return None
        current = self._index_of(self._active_id)
        if current is None:
            target = 0 if step >= 0 else len(self._tabs) - 1
        else:
            target = (current + step) % len(self._tabs)
        tab_id = self._tabs[target].id
        self.switch_tab(tab_id)
        return tab_id

    def switch_to_previous(self) -> str | None:
        return self.switch_to_next(-1)

    def switch_to_next_unread(self, direction: int = 1) -> str | None:
        """Activate the nearest unread tab in *direction* (``1`` or ``-1``)."""
        count = len(self._tabs)
        if not count:
            return None
        step = 1 if direction >= 0 else -1
        start = self._index_of(self._active_id)
        if start is None:
            start = -1 if step > 0 else count
        for offset in range(1, count + 1):
            tab = self._tabs[(start + offset * step) % count]
            if tab.unread and tab.id != self._active_id:
                self.switch_tab(tab.id)
                return tab.id
        return None

    # -- reordering -----------------------------------------------------------

    def move_tab(self, from_index: int, to_index: int) -> int:
        """Apply one drag-hover event; return the dragged tab's new index."""
        new_tabs, new_index = reorder(self._tabs, from_index, to_index)
        if new_index != from_index:
            self._tabs = new_tabs
            self._commit()
        return new_index

    def move_tab_by(self, tab_id: str, offset: int) -> int | None:
        """Move *tab_id* left/right by *offset*, clamped to the ends."""
        i = self._index_of(tab_id)
        if i is None:
            return None
        target = max(0, min(len(self._tabs) - 1, i + offset))
        return self.move_tab(i, target)

    # -- unread markers -------------------------------------------------------

    def mark_unread(self, tab_id: str) -> bool:
        return self._set_unread(tab_id, True)

    def clear_unread(self, tab_id: str) -> bool:
        return self._set_unread(tab_id, False)

    def mark_unread_for(self, location: LocationReference) -> int:
        """Mark every inactive tab at *location* unread; return how many changed."""
        changed = 0
        for i, tab in enumerate(self._tabs):
            if tab.location == location and tab.id != self._active_id and not tab.unread:
                self._tabs[i] = replace(tab, unread=True)
                changed += 1
        if changed:
            self._commit()
        return changed

    def _set_unread(self, tab_id: str, unread: bool) -> bool:
        i = self._index_of(tab_id)
        if i is None:
            return False
        if self._tabs[i].unread != unread:
            self._tabs[i] = replace(self._tabs[i], unread=unread)
            self._commit()
        return True

    # -- internals ------------------------------------------------------------

    def _index_of(self, tab_id: str | None) -> int | None:
        if tab_id is None:
            return None
        for i, tab in enumerate(self._tabs):
            if tab.id == tab_id:
                return i
        return None

    def _activate_at(self, i: int) -> Tab:
        tab = replace(self._tabs[i], message_id=None)
        self._tabs[i] = tab
        self._active_id = tab.id
        return tab

    def _go(self, tab: Tab) -> None:
        if self._navigate is not None:
            self._navigate(tab.location, tab.message_id)

    def _persist(self, snapshot: TabSnapshot) -> None:
        try:
            self._store.save(self.user_id, snapshot)
        except Exception:
            logger.warning("failed to persist tabs for %s", self.user_id, exc_info=True)

    def _commit(self) -> None:
        snapshot = self.snapshot()
        self._persist(snapshot)
        self._notify(snapshot)
