from __future__ import annotations

from typing import Any, Protocol

from phonebook.models import Record
from phonebook.result import Result


class StorageGateway(Protocol):
    """
    The six calls the client workflows make. Every call is attempted once and
    reports its outcome as a Result instead of raising.
    """

    async def put_blob(self, name: str, content: str) -> Result[None]: ...
    async def delete_blob(self, name: str) -> Result[None]: ...
    async def put_item(self, item: dict[str, Any]) -> Result[None]: ...
    async def delete_item(self, key: str) -> Result[None]: ...
    async def query_by_key(self, key_name: str, value: str) -> Result[list[Record]]: ...
    async def scan_by_attribute(self, attr_name: str, value: str) -> Result[list[Record]]: ...
