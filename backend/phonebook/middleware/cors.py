from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class AllowAnyOriginMiddleware(BaseHTTPMiddleware):
    """Stamps the permissive CORS header on every response, not only on cross-origin ones."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers.setdefault("access-control-allow-origin", "*")
        return response
