from __future__ import annotations

import argparse
import asyncio
import shlex
import sys
from typing import AsyncIterator, Iterable, Optional

from phonebook.config import get_settings
from phonebook.gateway import HttpGateway, StorageGateway
from phonebook.middleware.logging_filter import configure_logging
from phonebook.services.query import run_query
from phonebook.services.render import render_banner, render_cleared, render_loaded, render_query
from phonebook.services.source import fetch_source
from phonebook.services.sync import Fetcher, clear_data, load_data
from phonebook.session import SessionState


HELP = """Commands:
  load                  fetch the source file and load it into both stores
  query <first> [last]  look up by full name, or by first name alone
  first <name>          look up by first name
  last <name>           look up by last name
  show                  list the lines of the last load
  clear                 remove the source file and every loaded entry
  quit"""


class PhonebookClient:
    """
    One page session: owns the session state and turns commands into workflow runs.
    The load/clear/query availability mirrors which buttons the page shows.
    """

    def __init__(self, gateway: StorageGateway, fetch: Fetcher, blob_name: str = "input.txt", session: SessionState | None = None):
        self.gateway = gateway
        self.fetch = fetch
        self.blob_name = blob_name
        self.session = session or SessionState()

    async def handle(self, line: str) -> Optional[str]:
        """Runs one command line. Returns the text to show, or None to end the session."""
        try:
            words = shlex.split(line)
        except ValueError as e:
            return render_banner(str(e))
        if not words:
            return ""
        cmd, args = words[0].lower(), words[1:]

        if cmd in {"quit", "exit"}:
            return None
        if cmd == "help":
            return HELP
        if cmd == "load":
            if self.session.loaded:
                return render_banner("Data is already loaded; clear it first")
            first_run = self.session.first_run
            report = await load_data(self.session, self.gateway, self.fetch, self.blob_name)
            text = render_loaded(report)
            if first_run and self.session.loaded:
                text += "\nLoaded. Search with: query <first> [last], first <name>, last <name>; remove everything with: clear"
            return text
        if not self.session.loaded:
            return render_banner("Nothing is loaded yet; run load first")
        if cmd == "clear":
            return render_cleared(await clear_data(self.session, self.gateway, self.blob_name))
        if cmd == "show":
            return "\n".join(self.session.loaded_lines)
        if cmd == "query":
            first = args[0] if args else ""
            last = " ".join(args[1:])
            return render_query(await run_query(self.session, self.gateway, first, last))
        if cmd == "first":
            return render_query(await run_query(self.session, self.gateway, " ".join(args), None))
        if cmd == "last":
            return render_query(await run_query(self.session, self.gateway, None, " ".join(args)))
        return render_banner(f"Unknown command {cmd!r}; try help")


def get_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="phonebook-client", description="Load, query and clear the phone book through the server.")
    p.add_argument("--server", default=settings.server_url, help="Base URL of the phonebook server")
    p.add_argument("--source", default=settings.source_url, help="URL of the source text file")
    p.add_argument("--log-level", default=settings.log_level)
    p.add_argument("commands", nargs="*", help='Commands to run in order, e.g. "load" "query Ada Lovelace"; interactive if omitted')
    return p


async def _session(args: argparse.Namespace) -> int:
    settings = get_settings()

    async def fetch() -> str:
        return await fetch_source(args.source, timeout_s=settings.http_timeout_s)

    async with HttpGateway(args.server, blob_name=settings.blob_name, timeout_s=settings.http_timeout_s) as gateway:
        client = PhonebookClient(gateway, fetch, blob_name=settings.blob_name)
        async for line in _lines(args.commands):
            out = await client.handle(line)
            if out is None:
                break
            if out:
                print(out)
    return 0


async def _lines(commands: list[str]) -> AsyncIterator[str]:
    if commands:
        for c in commands:
            yield c
        return
    print(HELP)
    while True:
        try:
            yield await asyncio.to_thread(input, "phonebook> ")
        except EOFError:
            return


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = get_parser().parse_args(list(argv) if argv is not None else None)
    configure_logging(args.log_level)
    return asyncio.run(_session(args))


if __name__ == "__main__":
    sys.exit(main())
