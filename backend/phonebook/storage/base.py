from __future__ import annotations

from typing import Any, Protocol


class BlobStore(Protocol):
    def put(self, name: str, content: str) -> None: ...
    def delete(self, name: str) -> None: ...


class ItemStore(Protocol):
    def put(self, item: dict[str, Any]) -> None: ...
    def delete(self, key: str) -> None: ...
    def query_by_key(self, key_name: str, value: str) -> list[dict[str, Any]]: ...
    def scan_by_attribute(self, attr_name: str, value: str) -> list[dict[str, Any]]: ...
