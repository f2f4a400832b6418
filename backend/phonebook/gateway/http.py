from __future__ import annotations

import logging
from typing import Any

import httpx

from phonebook.errors import StorageFailure
from phonebook.models import FIRST_NAME_ATTR, KEY_ATTR, LAST_NAME_ATTR, Record
from phonebook.result import Result, failure, success


log = logging.getLogger("phonebook.client")

_SCAN_ROUTES = {FIRST_NAME_ATTR: "/query/first", LAST_NAME_ATTR: "/query/last"}


class HttpGateway:
    """
    Gateway that goes through the server's HTTP surface, the way the browser page does.
    The server pins the blob name and only exposes first/last-name scans, so other
    names fail without a request being made.
    """

    def __init__(
        self,
        base_url: str,
        blob_name: str = "input.txt",
        client: httpx.AsyncClient | None = None,
        timeout_s: float = 25.0,
    ):
        self.blob_name = blob_name
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout_s)

    async def __aenter__(self) -> "HttpGateway":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def put_blob(self, name: str, content: str) -> Result[None]:
        if name != self.blob_name:
            return failure(StorageFailure(f"server only stores blob {self.blob_name!r}, not {name!r}"))
        res = await self._send("POST", "/upload/s3", data={"text": content})
        return success() if res.ok else res

    async def delete_blob(self, name: str) -> Result[None]:
        if name != self.blob_name:
            return failure(StorageFailure(f"server only stores blob {self.blob_name!r}, not {name!r}"))
        res = await self._send("GET", "/delete/s3")
        return success() if res.ok else res

    async def put_item(self, item: dict[str, Any]) -> Result[None]:
        res = await self._send("POST", "/upload/dynamo", data={k: str(v) for k, v in item.items()})
        if not res.ok:
            return res
        return success() if res.value.text == "success" else failure(StorageFailure(res.value.text))

    async def delete_item(self, key: str) -> Result[None]:
        res = await self._send("POST", "/delete/dynamo", data={"name": key})
        if not res.ok:
            return res
        return success() if res.value.text == "deleted" else failure(StorageFailure(f"delete of {key!r} failed"))

    async def query_by_key(self, key_name: str, value: str) -> Result[list[Record]]:
        if key_name != KEY_ATTR:
            return failure(StorageFailure(f"{key_name!r} is not the key attribute"))
        return await self._query("/query/full", value)

    async def scan_by_attribute(self, attr_name: str, value: str) -> Result[list[Record]]:
        route = _SCAN_ROUTES.get(attr_name)
        if route is None:
            return failure(StorageFailure(f"no scan route for attribute {attr_name!r}"))
        return await self._query(route, value)

    async def _query(self, route: str, value: str) -> Result[list[Record]]:
        res = await self._send("GET", route, params={KEY_ATTR: value})
        if not res.ok:
            return res
        try:
            body = res.value.json()
        except ValueError as e:
            return failure(StorageFailure(f"{route} returned invalid JSON: {e}"))
        if body.get("error"):
            return failure(StorageFailure(str(body["error"])))
        return success([Record.from_item(i) for i in body.get("Items") or []])

    async def _send(self, method: str, url: str, **kwargs: Any) -> Result[httpx.Response]:
        try:
            resp = await self.client.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            log.debug("http_call_failed method=%s url=%s error=%s", method, url, e)
            return failure(StorageFailure(f"{method} {url} failed: {e}"))
        return success(resp)
