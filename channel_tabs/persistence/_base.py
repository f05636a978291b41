"""Base JSON persistence stores."""

from __future__ import annotations

import asyncio
import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

from ..log import logger

T = TypeVar("T")


class PersistenceAdapter(Protocol[T]):
    """What a session needs from storage.

    ``save`` must never raise; failures are the adapter's to log.
    """

    def load(self, user_id: str) -> T | None: ...

    def save(self, user_id: str, value: T) -> None: ...


class JsonStore:
    """One JSON document on disk, replaced atomically on every write."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> Any:
        """Return the parsed document, or ``None`` if it is missing or unreadable."""
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("failed to load JSON from %s", self.path, exc_info=True)
            return None

    @staticmethod
    def encode(data: Any) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False)

    def write_text(self, text: str) -> None:
        """Replace the file with *text* via a sibling temp file.

        Concurrent writers each use their own temp file, so the target always
        holds one complete payload.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise


_UNSAFE_CHARS = re.compile(r"[^\w.-]")


class UserRecordStore(Generic[T]):
    """One JSON record per user: ``<directory>/<user_id>/<kind>.json``.

    Subclasses set ``kind`` and implement the ``_encode``/``_decode`` pair.
    ``save`` serializes the value immediately; the file write runs in the
    running event loop's executor when there is one, inline otherwise, and is
    never awaited.
    """

    kind: str = ""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path_for(self, user_id: str) -> Path:
        safe = _UNSAFE_CHARS.sub("_", user_id).strip(".") or "_"
        return self.directory / safe / f"{self.kind}.json"

    def load(self, user_id: str) -> T | None:
        """Return the stored value for *user_id*, or ``None`` if absent/unreadable."""
        path = self.path_for(user_id)
        raw = JsonStore(path).read()
        if raw is None:
            return None
        try:
            return self._decode(raw)
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.warning("discarding malformed %s record at %s", self.kind, path)
            return None

    def save(self, user_id: str, value: T) -> None:
        store = JsonStore(self.path_for(user_id))
        try:
            text = store.encode(self._encode(value))
        except (TypeError, ValueError):
            logger.warning("failed to encode %s for %s", self.kind, user_id, exc_info=True)
            return

        def write() -> None:
            try:
                store.write_text(text)
            except OSError:
                logger.warning(
                    "failed to save %s to %s", self.kind, store.path, exc_info=True
                )

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            write()
            return
        loop.run_in_executor(None, write)

    def clear(self, user_id: str) -> None:
        """Delete the stored record for *user_id*, if any."""
        try:
            self.path_for(user_id).unlink(missing_ok=True)
        except OSError:
            logger.debug("failed to remove %s for %s", self.kind, user_id, exc_info=True)

    # -- override points --------------------------------------------------------

    def _encode(self, value: T) -> dict | list:
        raise NotImplementedError

    def _decode(self, raw: dict | list) -> T:
        raise NotImplementedError


class MemoryStore(Generic[T]):
    """In-process adapter with the same contract as the file stores."""

    def __init__(self) -> None:
        self.records: dict[str, T] = {}
        self.save_count = 0

    def load(self, user_id: str) -> T | None:
        return self.records.get(user_id)

    def save(self, user_id: str, value: T) -> None:
        self.records[user_id] = value
        self.save_count += 1

    def clear(self, user_id: str) -> None:
        self.records.pop(user_id, None)
