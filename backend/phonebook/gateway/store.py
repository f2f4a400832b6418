from __future__ import annotations

from typing import Any, Callable

from starlette.concurrency import run_in_threadpool

from phonebook.errors import PhonebookError, StorageFailure
from phonebook.models import Record
from phonebook.result import Result, failure, success
from phonebook.storage import Storage


class StoreGateway:
    """In-process gateway over server-side stores. Blocking store calls run in the threadpool."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def put_blob(self, name: str, content: str) -> Result[None]:
        return await self._run(self.storage.blobs.put, name, content)

    async def delete_blob(self, name: str) -> Result[None]:
        return await self._run(self.storage.blobs.delete, name)

    async def put_item(self, item: dict[str, Any]) -> Result[None]:
        return await self._run(self.storage.items.put, item)

    async def delete_item(self, key: str) -> Result[None]:
        return await self._run(self.storage.items.delete, key)

    async def query_by_key(self, key_name: str, value: str) -> Result[list[Record]]:
        res = await self._run(self.storage.items.query_by_key, key_name, value)
        return success([Record.from_item(i) for i in res.value or []]) if res.ok else res

    async def scan_by_attribute(self, attr_name: str, value: str) -> Result[list[Record]]:
        res = await self._run(self.storage.items.scan_by_attribute, attr_name, value)
        return success([Record.from_item(i) for i in res.value or []]) if res.ok else res

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Result:
        try:
            return success(await run_in_threadpool(fn, *args))
        except PhonebookError as e:
            return failure(e)
        except Exception as e:
            return failure(StorageFailure(str(e)))
