"""Open-tab persistence store."""

from __future__ import annotations

from pathlib import Path

from ..constants import TABS_KIND
from ..models import TabSnapshot, tabs_from_dict
from ._base import UserRecordStore


class TabStore(UserRecordStore[TabSnapshot]):
    """Ordered open tabs plus the active tab id (``{tabs, activeTabId}``)."""

    kind = TABS_KIND

    def __init__(self, directory: Path) -> None:
        super().__init__(directory)

    def _encode(self, value: TabSnapshot) -> dict:
        return value.to_dict()

    def _decode(self, raw: dict | list) -> TabSnapshot:
        if not isinstance(raw, dict):
            raise TypeError(f"expected a tab record, got {type(raw).__name__}")
        return tabs_from_dict(raw)
