"""Shared test fixtures for channel-tabs test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from channel_tabs.bookmarks import BookmarkSession
from channel_tabs.models import LocationReference
from channel_tabs.persistence import MemoryStore
from channel_tabs.tabs import TabSession


# -- Locations -----------------------------------------------------------------


@pytest.fixture
def loc_a() -> LocationReference:
    return LocationReference(channel_id="100000000000000001", guild_id="900000000000000001")


@pytest.fixture
def loc_b() -> LocationReference:
    return LocationReference(channel_id="100000000000000002", guild_id="900000000000000001")


@pytest.fixture
def loc_c() -> LocationReference:
    return LocationReference(channel_id="100000000000000003", guild_id="900000000000000002")


@pytest.fixture
def dm_loc() -> LocationReference:
    return LocationReference(channel_id="1")


# -- Sessions ------------------------------------------------------------------


@pytest.fixture
def tab_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def bookmark_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def navigate() -> MagicMock:
    """Stand-in for the host's navigation collaborator."""
    return MagicMock()


@pytest.fixture
def tabs(tab_store, navigate) -> TabSession:
    """A tab session with no stored state and no default tab."""
    return TabSession("user-1", tab_store, navigate=navigate)


@pytest.fixture
def bookmarks(bookmark_store) -> BookmarkSession:
    return BookmarkSession("user-1", bookmark_store)
