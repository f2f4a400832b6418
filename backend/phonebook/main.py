from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from phonebook.config import get_settings
from phonebook.errors import StorageFailure
from phonebook.middleware.cors import AllowAnyOriginMiddleware
from phonebook.middleware.logging_filter import configure_logging
from phonebook.middleware.request_id import RequestIdMiddleware
from phonebook.models import FIRST_NAME_ATTR, KEY_ATTR, LAST_NAME_ATTR
from phonebook.schemas import MISS_MESSAGE, HealthResponse, QueryResponse
from phonebook.storage import Storage, get_storage


settings = get_settings()
configure_logging(settings.log_level)
log = logging.getLogger("phonebook")

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(title="Phonebook Loader API", version="0.1.0")

app.add_middleware(AllowAnyOriginMiddleware)
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _read_body(request: Request) -> dict[str, Any]:
    """The page posts multipart forms; JSON bodies are accepted too."""
    if request.headers.get("content-type", "").startswith("application/json"):
        body = await request.json()
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return {k: v if isinstance(v, str) else str(v) for k, v in form.items()}


@app.get("/")
def index():
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/test", response_class=PlainTextResponse)
def test():
    return "connected"


@app.get("/health", response_model=HealthResponse)
def health(storage: Storage = Depends(get_storage)):
    return HealthResponse(storage=storage.backend)


@app.post("/upload/s3", response_class=PlainTextResponse)
async def upload_blob(request: Request, storage: Storage = Depends(get_storage)):
    body = await _read_body(request)
    text = str(body.get("text") or "")
    try:
        await run_in_threadpool(storage.blobs.put, settings.blob_name, text)
    except StorageFailure as e:
        log.error("blob_put_failed blob=%s error=%s", settings.blob_name, e)
        return PlainTextResponse("failed", status_code=502)
    return "recieved"


@app.get("/delete/s3", response_class=PlainTextResponse)
async def delete_blob(storage: Storage = Depends(get_storage)):
    try:
        await run_in_threadpool(storage.blobs.delete, settings.blob_name)
    except StorageFailure as e:
        log.error("blob_delete_failed blob=%s error=%s", settings.blob_name, e)
        return PlainTextResponse("failed", status_code=502)
    return "deleted"


@app.post("/upload/dynamo", response_class=PlainTextResponse)
async def upload_item(request: Request, storage: Storage = Depends(get_storage)):
    item = await _read_body(request)
    if not item.get(KEY_ATTR):
        return PlainTextResponse(f"missing {KEY_ATTR}", status_code=400)
    try:
        await run_in_threadpool(storage.items.put, item)
    except StorageFailure as e:
        log.error("item_put_failed name=%s error=%s", item.get(KEY_ATTR), e)
        return PlainTextResponse("failed", status_code=502)
    return "success"


@app.get("/query/full", response_model=QueryResponse, response_model_exclude_none=True)
def query_full(name: str = Query("", alias=KEY_ATTR), storage: Storage = Depends(get_storage)):
    try:
        items = storage.items.query_by_key(KEY_ATTR, name)
    except StorageFailure as e:
        log.error("query_failed attr=%s value=%s error=%s", KEY_ATTR, name, e)
        return QueryResponse(error=MISS_MESSAGE)
    return QueryResponse(items=items, count=len(items))


@app.get("/query/first", response_model=QueryResponse, response_model_exclude_none=True)
def query_first(name: str = Query("", alias=KEY_ATTR), storage: Storage = Depends(get_storage)):
    return _scan(storage, FIRST_NAME_ATTR, name)


@app.get("/query/last", response_model=QueryResponse, response_model_exclude_none=True)
def query_last(name: str = Query("", alias=KEY_ATTR), storage: Storage = Depends(get_storage)):
    return _scan(storage, LAST_NAME_ATTR, name)


def _scan(storage: Storage, attr: str, value: str) -> QueryResponse:
    try:
        items = storage.items.scan_by_attribute(attr, value)
    except StorageFailure as e:
        log.error("scan_failed attr=%s value=%s error=%s", attr, value, e)
        return QueryResponse(error=MISS_MESSAGE)
    return QueryResponse(items=items, count=len(items))


@app.post("/delete/dynamo", response_class=PlainTextResponse)
async def delete_item(request: Request, storage: Storage = Depends(get_storage)):
    body = await _read_body(request)
    name = str(body.get("name") or "")
    if not name:
        return "failed"
    try:
        await run_in_threadpool(storage.items.delete, name)
    except StorageFailure as e:
        log.error("item_delete_failed name=%s error=%s", name, e)
        return "failed"
    return "deleted"


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
