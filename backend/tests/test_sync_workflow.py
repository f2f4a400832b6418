from __future__ import annotations

import pytest

from phonebook.errors import FetchFailure, StorageFailure
from phonebook.result import failure
from phonebook.services.query import run_query
from phonebook.services.sync import clear_data, load_data
from phonebook.session import SessionState, SyncState


SOURCE_TEXT = "Lovelace Ada id=1\nTuring Alan id=2\n"


@pytest.mark.anyio
async def test_end_to_end_load_query_clear(storage, gateway, fetch_source_text):
    session = SessionState()

    report = await load_data(session, gateway, fetch_source_text)
    assert session.state == SyncState.LOADED
    assert [r.full_name for r in report.records] == ["Ada Lovelace", "Alan Turing"]
    assert session.key_registry == ["Ada Lovelace", "Alan Turing"]
    assert storage.blobs.blobs["input.txt"] == SOURCE_TEXT

    res = await gateway.query_by_key("Name", "Ada Lovelace")
    assert res.ok
    assert len(res.value) == 1
    assert res.value[0].attributes == {"id": "1"}

    gateway.calls.clear()
    cleared = await clear_data(session, gateway)
    assert session.key_registry == []
    assert session.state == SyncState.IDLE
    assert len(gateway.names("delete_item")) == 2
    assert gateway.names("delete_blob") == ["input.txt"]
    assert cleared.items_deleted == 2
    assert storage.items.items == {}
    assert storage.blobs.blobs == {}


@pytest.mark.anyio
async def test_load_stores_blob_before_items(gateway, fetch_source_text):
    await load_data(SessionState(), gateway, fetch_source_text)
    ops = [op for op, _ in gateway.calls]
    assert ops[0] == "put_blob"
    assert sorted(gateway.names("put_item")) == ["Ada Lovelace", "Alan Turing"]


@pytest.mark.anyio
async def test_fetch_failure_stores_nothing(gateway):
    async def fetch():
        raise FetchFailure("offline")

    session = SessionState()
    report = await load_data(session, gateway, fetch)
    assert isinstance(report.error, FetchFailure)
    assert session.state == SyncState.IDLE
    assert gateway.calls == []
    assert session.key_registry == []


@pytest.mark.anyio
async def test_item_failures_are_logged_not_rolled_back(storage, gateway, fetch_source_text, caplog):
    class Flaky(type(gateway)):
        async def put_item(self, item):
            if item["Name"] == "Alan Turing":
                return failure(StorageFailure("throttled"))
            return await super().put_item(item)

    flaky = Flaky(storage)
    session = SessionState()
    report = await load_data(session, flaky, fetch_source_text)
    assert session.state == SyncState.LOADED
    assert report.items_failed == ["Alan Turing"]
    assert list(storage.items.items) == ["Ada Lovelace"]
    assert session.key_registry == ["Ada Lovelace", "Alan Turing"]
    assert "load_item_failed" in caplog.text


@pytest.mark.anyio
async def test_malformed_lines_are_skipped(gateway):
    async def fetch():
        return "Lovelace Ada id=1\nCher\nTuring Alan\n"

    session = SessionState()
    report = await load_data(session, gateway, fetch)
    assert len(report.skipped) == 1
    assert session.key_registry == ["Ada Lovelace", "Alan Turing"]


@pytest.mark.anyio
async def test_clear_drops_keys_even_when_delete_fails(storage, gateway, fetch_source_text):
    session = SessionState()
    await load_data(session, gateway, fetch_source_text)

    class Stubborn(type(gateway)):
        async def delete_item(self, key):
            self.calls.append(("delete_item", key))
            return failure(StorageFailure("denied"))

    stubborn = Stubborn(storage)
    report = await clear_data(session, stubborn)
    assert session.key_registry == []
    assert report.items_failed == ["Ada Lovelace", "Alan Turing"]
    assert len(storage.items.items) == 2


@pytest.mark.anyio
async def test_clear_resets_query_counter(gateway, fetch_source_text):
    session = SessionState()
    await load_data(session, gateway, fetch_source_text)
    await run_query(session, gateway, "Ada", None)
    assert session.query_count == 1
    await clear_data(session, gateway)
    assert session.query_count == 0
    assert not session.first_run


@pytest.mark.anyio
async def test_delete_item_twice_is_a_noop(gateway):
    await gateway.put_item({"Name": "Ada Lovelace"})
    first = await gateway.delete_item("Ada Lovelace")
    second = await gateway.delete_item("Ada Lovelace")
    assert first.ok and second.ok
