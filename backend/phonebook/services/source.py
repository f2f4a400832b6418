from __future__ import annotations

import httpx

from phonebook.errors import FetchFailure


async def fetch_source(url: str, client: httpx.AsyncClient | None = None, timeout_s: float = 25.0) -> str:
    """Downloads the source document as text. Any transport, status or URL error becomes FetchFailure."""
    try:
        if client is not None:
            resp = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True) as c:
                resp = await c.get(url)
        resp.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchFailure(f"could not fetch {url}: {e}") from e
    return resp.text
