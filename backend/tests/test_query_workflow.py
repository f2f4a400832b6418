from __future__ import annotations

import pytest

from phonebook.errors import EmptyQueryInput
from phonebook.models import Record
from phonebook.services.query import plan_query, run_query
from phonebook.services.render import render_query
from phonebook.session import SessionState


def _seed(storage, *lines):
    for first, last, attrs in lines:
        storage.items.put(Record(first, last, attrs).to_item())


def test_plan_query_decision_table():
    assert plan_query("Ada", "Lovelace").lookup == "full"
    assert plan_query("Ada", "Lovelace").value == "Ada Lovelace"
    assert plan_query("Ada", "").attr == "First_Name"
    assert plan_query(None, " Lovelace ").attr == "Last_Name"
    assert plan_query(None, " Lovelace ").value == "Lovelace"
    with pytest.raises(EmptyQueryInput):
        plan_query("  ", None)


@pytest.mark.anyio
async def test_full_name_uses_key_lookup(storage, gateway):
    _seed(storage, ("Ada", "Lovelace", {"id": "1"}))
    out = await run_query(SessionState(), gateway, "Ada", "Lovelace")
    assert gateway.calls == [("query_by_key", ("Name", "Ada Lovelace"))]
    assert [r.full_name for r in out.records] == ["Ada Lovelace"]


@pytest.mark.anyio
async def test_first_name_only_scans_first_name(storage, gateway):
    _seed(storage, ("Ada", "Lovelace", {}), ("Ada", "Byron", {}), ("Alan", "Turing", {}))
    out = await run_query(SessionState(), gateway, "Ada", "")
    assert gateway.calls == [("scan_by_attribute", ("First_Name", "Ada"))]
    assert sorted(r.last_name for r in out.records) == ["Byron", "Lovelace"]


@pytest.mark.anyio
async def test_last_name_only_scans_last_name(storage, gateway):
    _seed(storage, ("Alan", "Turing", {}))
    out = await run_query(SessionState(), gateway, "", "Turing")
    assert gateway.calls == [("scan_by_attribute", ("Last_Name", "Turing"))]
    assert len(out.records) == 1


@pytest.mark.anyio
async def test_empty_input_makes_no_calls_and_shows_banner(gateway):
    session = SessionState()
    out = await run_query(session, gateway, "", "")
    assert gateway.calls == []
    assert out.empty_input
    assert session.query_count == 0
    assert render_query(out).startswith("[!]")


@pytest.mark.anyio
async def test_scan_without_matches_renders_no_entries(gateway):
    out = await run_query(SessionState(), gateway, "Grace", None)
    assert out.records == []
    text = render_query(out)
    assert "No Entries" in text
    assert "Grace" in text


@pytest.mark.anyio
async def test_query_counter_increases_across_queries(gateway):
    session = SessionState()
    first = await run_query(session, gateway, "Ada", None)
    second = await run_query(session, gateway, None, "Turing")
    assert (first.number, second.number) == (1, 2)
    assert render_query(second).startswith("Query 2: Turing")


@pytest.mark.anyio
async def test_render_lists_every_attribute(storage, gateway):
    _seed(storage, ("Ada", "Lovelace", {"id": "1", "phone": "555"}), ("Ada", "Byron", {"id": "3"}))
    out = await run_query(SessionState(), gateway, "Ada", None)
    text = render_query(out)
    assert "Found 2 Entries in the Phone Book by the Query: Ada" in text
    assert "Result 1:" in text and "Result 2:" in text
    assert "      phone: 555" in text
    assert "      Name: Ada Byron" in text


@pytest.mark.anyio
async def test_failed_lookup_reads_as_no_entries(gateway):
    # The memory table only accepts its own key attribute for key lookups.
    res = await gateway.query_by_key("First_Name", "Ada")
    assert not res.ok

    class Broken(type(gateway)):
        async def scan_by_attribute(self, attr_name, value):
            return res

    out = await run_query(SessionState(), Broken(gateway.storage), "Ada", None)
    assert out.records == []
    assert out.error is res.error
    assert "No Entries" in render_query(out)
