"""Tests for the per-user session registry."""

from __future__ import annotations

from unittest.mock import MagicMock

from channel_tabs.persistence import MemoryStore
from channel_tabs.registry import SessionRegistry
from channel_tabs.tabs import TabSession


class TestSessionRegistry:
    def test_created_lazily_once(self):
        factory = MagicMock(side_effect=lambda uid: object())
        registry = SessionRegistry(factory)
        assert len(registry) == 0
        first = registry.get_or_create("u1")
        assert registry.get_or_create("u1") is first
        factory.assert_called_once_with("u1")

    def test_separate_users(self):
        registry = SessionRegistry(lambda uid: [uid])
        assert registry.get_or_create("a") is not registry.get_or_create("b")
        assert "a" in registry and "b" in registry

    def test_get_does_not_create(self):
        registry = SessionRegistry(lambda uid: object())
        assert registry.get("u1") is None
        assert "u1" not in registry

    def test_evict(self):
        on_evict = MagicMock()
        registry = SessionRegistry(lambda uid: uid.upper(), on_evict=on_evict)
        registry.get_or_create("u1")
        assert registry.evict("u1") is True
        assert registry.evict("u1") is False
        on_evict.assert_called_once_with("U1")
        assert registry.get("u1") is None

    def test_recreated_after_evict(self):
        registry = SessionRegistry(lambda uid: object())
        first = registry.get_or_create("u1")
        registry.evict("u1")
        assert registry.get_or_create("u1") is not first

    def test_clear(self):
        registry = SessionRegistry(lambda uid: object())
        registry.get_or_create("a")
        registry.get_or_create("b")
        registry.clear()
        assert len(registry) == 0

    def test_tab_sessions_reload_from_store_after_evict(self, loc_a, loc_b):
        store = MemoryStore()
        registry = SessionRegistry(lambda uid: TabSession(uid, store, initial_location=loc_a))
        session = registry.get_or_create("u1")
        session.create_tab(loc_b)
        registry.evict("u1")
        reloaded = registry.get_or_create("u1")
        assert reloaded.snapshot() == session.snapshot()
