from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from phonebook.errors import MalformedRecord
from phonebook.models import Record


log = logging.getLogger("phonebook.client")

# Left-hand sides that are leftovers of a trailing carriage return, not real keys.
STRAY_KEYS = {"", "%0D", "\r"}


@dataclass
class ParseReport:
    lines: list[str] = field(default_factory=list)
    records: list[Record] = field(default_factory=list)
    skipped: list[MalformedRecord] = field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        return [r.full_name for r in self.records]


def clean_lines(lines: Iterable[str]) -> list[str]:
    return [line for line in lines if line.strip() != ""]


def parse_line(line: str) -> Record:
    """
    `<last> <first> <key=value> ...` -> Record.
    Tokens are separated by single spaces; extra spaces produce empty tokens which are skipped.
    """
    tokens = line.rstrip("\r\n").strip().split(" ")
    if len(tokens) < 2 or not tokens[0] or not tokens[1]:
        raise MalformedRecord(line)

    last, first = tokens[0], tokens[1]
    attrs: dict[str, str] = {}
    for tok in tokens[2:]:
        key, _, value = tok.partition("=")
        if key in STRAY_KEYS:
            continue
        attrs[key] = value.rstrip("\r")
    return Record(first_name=first, last_name=last, attributes=attrs)


def parse_document(text: str) -> ParseReport:
    """
    Splits raw source text into lines, drops blank ones and parses the rest.
    A malformed line is skipped and reported; it never aborts the batch.
    """
    report = ParseReport(lines=clean_lines(text.split("\n")))
    for line in report.lines:
        try:
            report.records.append(parse_line(line))
        except MalformedRecord as e:
            log.warning("record_skipped reason=%s line=%r", e.reason, line)
            report.skipped.append(e)
    return report
