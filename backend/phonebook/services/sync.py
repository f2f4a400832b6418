from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from phonebook.errors import FetchFailure, MalformedRecord
from phonebook.gateway.base import StorageGateway
from phonebook.models import Record
from phonebook.services.parser import parse_document
from phonebook.session import SessionState, SyncState


log = logging.getLogger("phonebook.client")

Fetcher = Callable[[], Awaitable[str]]


@dataclass
class LoadReport:
    lines: list[str] = field(default_factory=list)
    records: list[Record] = field(default_factory=list)
    skipped: list[MalformedRecord] = field(default_factory=list)
    blob_stored: bool = False
    items_failed: list[str] = field(default_factory=list)
    error: FetchFailure | None = None

    @property
    def items_stored(self) -> int:
        return len(self.records) - len(self.items_failed)


@dataclass
class ClearReport:
    blob_deleted: bool = False
    items_deleted: int = 0
    items_failed: list[str] = field(default_factory=list)


async def load_data(session: SessionState, gateway: StorageGateway, fetch: Fetcher, blob_name: str = "input.txt") -> LoadReport:
    """
    Idle -> Fetching -> BlobStoring -> Parsing -> ItemStoring -> Loaded.

    Item writes are issued together and none waits on another; a failed write is
    logged and left in place, the batch is still declared loaded. Only a failed
    fetch stops the run, since there is nothing to store.
    """
    report = LoadReport()

    session.state = SyncState.FETCHING
    try:
        text = await fetch()
    except FetchFailure as e:
        log.error("load_fetch_failed error=%s", e)
        session.state = SyncState.IDLE
        report.error = e
        return report

    session.state = SyncState.BLOB_STORING
    res = await gateway.put_blob(blob_name, text)
    report.blob_stored = res.ok
    if not res.ok:
        log.error("load_blob_failed blob=%s error=%s", blob_name, res.error)

    session.state = SyncState.PARSING
    parsed = parse_document(text)
    report.lines, report.records, report.skipped = parsed.lines, parsed.records, parsed.skipped
    session.loaded_lines.extend(parsed.lines)
    session.key_registry.extend(parsed.keys)

    session.state = SyncState.ITEM_STORING
    results = await asyncio.gather(*(gateway.put_item(r.to_item()) for r in parsed.records))
    for record, r in zip(parsed.records, results):
        if not r.ok:
            log.error("load_item_failed name=%s error=%s", record.full_name, r.error)
            report.items_failed.append(record.full_name)

    session.state = SyncState.LOADED
    session.first_run = False
    log.info(
        "load_done lines=%s records=%s skipped=%s item_failures=%s blob_stored=%s",
        len(report.lines),
        len(report.records),
        len(report.skipped),
        len(report.items_failed),
        report.blob_stored,
    )
    return report


async def clear_data(session: SessionState, gateway: StorageGateway, blob_name: str = "input.txt") -> ClearReport:
    """
    Loaded -> Clearing -> Idle. Deletes the blob, then every registered key one at a
    time. Keys are dropped from the registry whether or not their delete succeeded.
    """
    report = ClearReport()
    session.state = SyncState.CLEARING

    res = await gateway.delete_blob(blob_name)
    report.blob_deleted = res.ok
    if not res.ok:
        log.error("clear_blob_failed blob=%s error=%s", blob_name, res.error)

    for key in list(session.key_registry):
        res = await gateway.delete_item(key)
        if res.ok:
            report.items_deleted += 1
        else:
            log.error("clear_item_failed name=%s error=%s", key, res.error)
            report.items_failed.append(key)

    session.reset()
    log.info("clear_done items_deleted=%s item_failures=%s", report.items_deleted, len(report.items_failed))
    return report
