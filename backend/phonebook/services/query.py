from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from phonebook.errors import EmptyQueryInput
from phonebook.gateway.base import StorageGateway
from phonebook.models import FIRST_NAME_ATTR, KEY_ATTR, LAST_NAME_ATTR, Record
from phonebook.session import SessionState


log = logging.getLogger("phonebook.client")

Lookup = Literal["full", "first", "last"]


@dataclass(frozen=True)
class QueryPlan:
    lookup: Lookup
    attr: str
    value: str


@dataclass
class QueryOutcome:
    query: str = ""
    number: int | None = None
    records: list[Record] = field(default_factory=list)
    error: Exception | None = None

    @property
    def empty_input(self) -> bool:
        return isinstance(self.error, EmptyQueryInput)


def plan_query(first: str | None, last: str | None) -> QueryPlan:
    first = (first or "").strip()
    last = (last or "").strip()
    if first and last:
        return QueryPlan("full", KEY_ATTR, f"{first} {last}")
    if first:
        return QueryPlan("first", FIRST_NAME_ATTR, first)
    if last:
        return QueryPlan("last", LAST_NAME_ATTR, last)
    raise EmptyQueryInput()


async def run_query(session: SessionState, gateway: StorageGateway, first: str | None, last: str | None) -> QueryOutcome:
    try:
        plan = plan_query(first, last)
    except EmptyQueryInput as e:
        return QueryOutcome(error=e)

    if plan.lookup == "full":
        res = await gateway.query_by_key(plan.attr, plan.value)
    else:
        res = await gateway.scan_by_attribute(plan.attr, plan.value)

    outcome = QueryOutcome(query=plan.value, number=session.next_query_number())
    if res.ok:
        outcome.records = list(res.value or [])
    else:
        # A failed lookup reads as "no entries" to the user.
        log.error("query_failed lookup=%s value=%s error=%s", plan.lookup, plan.value, res.error)
        outcome.error = res.error
    log.info("query_done n=%s lookup=%s value=%s results=%s", outcome.number, plan.lookup, plan.value, len(outcome.records))
    return outcome
