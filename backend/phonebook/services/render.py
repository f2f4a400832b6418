from __future__ import annotations

from phonebook.models import Record
from phonebook.services.query import QueryOutcome
from phonebook.services.sync import ClearReport, LoadReport


def render_record(record: Record, indent: str = "      ") -> list[str]:
    return [f"{indent}{k}: {v}" for k, v in record.to_item().items()]


def render_query(outcome: QueryOutcome) -> str:
    if outcome.empty_input:
        return render_banner(str(outcome.error))

    q = outcome.query
    lines = [f"Query {outcome.number}: {q}"]
    n = len(outcome.records)
    if n == 0:
        lines.append(f"  No Entries in the Phone Book Match the Name {q}")
        return "\n".join(lines)

    noun = "Entry" if n == 1 else "Entries"
    lines.append(f"  Found {n} {noun} in the Phone Book by the Query: {q}")
    for i, rec in enumerate(outcome.records, start=1):
        lines.append(f"    Result {i}:")
        lines.extend(render_record(rec))
    return "\n".join(lines)


def render_loaded(report: LoadReport) -> str:
    if report.error is not None:
        return render_banner(f"Could not load the phone book: {report.error}")
    lines = ["Loaded entries:"]
    lines.extend(f"  - {line.rstrip()}" for line in report.lines)
    if report.skipped:
        lines.append(f"Skipped {len(report.skipped)} malformed line(s)")
    if report.items_failed:
        lines.append(f"{len(report.items_failed)} entr{'y' if len(report.items_failed) == 1 else 'ies'} failed to store")
    return "\n".join(lines)


def render_cleared(report: ClearReport) -> str:
    return f"Cleared {report.items_deleted} entries" + ("" if report.blob_deleted else " (source file was not removed)")


def render_banner(message: str) -> str:
    return f"[!] {message}"
