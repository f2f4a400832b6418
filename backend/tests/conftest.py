from __future__ import annotations

from typing import Any

import pytest

from phonebook.gateway.store import StoreGateway
from phonebook.storage import Storage
from phonebook.storage.memory import MemoryBlobStore, MemoryItemStore


SOURCE_TEXT = "Lovelace Ada id=1\nTuring Alan id=2\n"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage() -> Storage:
    return Storage(blobs=MemoryBlobStore(), items=MemoryItemStore())


class RecordingGateway(StoreGateway):
    """StoreGateway that remembers every call made through it."""

    def __init__(self, storage: Storage):
        super().__init__(storage)
        self.calls: list[tuple[str, Any]] = []

    async def put_blob(self, name, content):
        self.calls.append(("put_blob", name))
        return await super().put_blob(name, content)

    async def delete_blob(self, name):
        self.calls.append(("delete_blob", name))
        return await super().delete_blob(name)

    async def put_item(self, item):
        self.calls.append(("put_item", item.get("Name")))
        return await super().put_item(item)

    async def delete_item(self, key):
        self.calls.append(("delete_item", key))
        return await super().delete_item(key)

    async def query_by_key(self, key_name, value):
        self.calls.append(("query_by_key", (key_name, value)))
        return await super().query_by_key(key_name, value)

    async def scan_by_attribute(self, attr_name, value):
        self.calls.append(("scan_by_attribute", (attr_name, value)))
        return await super().scan_by_attribute(attr_name, value)

    def names(self, op: str) -> list[Any]:
        return [arg for name, arg in self.calls if name == op]


@pytest.fixture
def gateway(storage) -> RecordingGateway:
    return RecordingGateway(storage)


@pytest.fixture
def fetch_source_text():
    async def fetch() -> str:
        return SOURCE_TEXT

    return fetch
