from __future__ import annotations

import threading
from typing import Any

from phonebook.errors import StorageFailure
from phonebook.models import KEY_ATTR


class MemoryBlobStore:
    def __init__(self) -> None:
        self.blobs: dict[str, str] = {}

    def put(self, name: str, content: str) -> None:
        self.blobs[name] = content

    def delete(self, name: str) -> None:
        self.blobs.pop(name, None)


class MemoryItemStore:
    """
    Dict-backed stand-in for the item table. Items are copied on the way in and out
    so callers can't mutate stored state.
    """

    def __init__(self, key_attr: str = KEY_ATTR) -> None:
        self.key_attr = key_attr
        self.items: dict[str, dict[str, Any]] = {}
        # Route handlers run in a threadpool.
        self._lock = threading.Lock()

    def put(self, item: dict[str, Any]) -> None:
        key = item.get(self.key_attr)
        if not key:
            raise StorageFailure(f"item is missing its key attribute {self.key_attr!r}")
        with self._lock:
            self.items[str(key)] = dict(item)

    def delete(self, key: str) -> None:
        with self._lock:
            self.items.pop(key, None)

    def query_by_key(self, key_name: str, value: str) -> list[dict[str, Any]]:
        if key_name != self.key_attr:
            raise StorageFailure(f"{key_name!r} is not the key attribute of this table")
        with self._lock:
            item = self.items.get(value)
            return [dict(item)] if item is not None else []

    def scan_by_attribute(self, attr_name: str, value: str) -> list[dict[str, Any]]:
        with self._lock:
            return [dict(i) for i in self.items.values() if i.get(attr_name) == value]
