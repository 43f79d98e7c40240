"""Route file loader.

Turns a line-oriented route file into a RouteTable::

    # comment
    /net/lldp   git   https://example.org/net/lldp.git
    /www        hg    https://example.org/www

Each record is ``prefix vcs url`` separated by runs of whitespace. Blank
lines and lines starting with ``#`` are skipped. The first malformed line
or duplicate prefix aborts the whole load, so a caller either gets a
complete table or an exception and never a partial one.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

from perch.errors import RouteFileParseError, RouteFileUnreadable
from perch.routing.route import Source
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.routing")

FIELD_COUNT = 3


def load_routes(path: str | os.PathLike[str]) -> RouteTable:
    """Read and parse the route file at *path*.

    Raises:
        RouteFileUnreadable: The file is missing or cannot be read.
        RouteFileParseError: A record is malformed, is not valid UTF-8,
            or repeats a prefix.
    """
    filename = os.fspath(path)
    try:
        with open(filename, "rb") as f:
            data = f.read()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise RouteFileUnreadable(filename, reason) from exc

    table = parse_routes(data.split(b"\n"), filename)
    logger.debug("Parsed %d routes from %s", len(table), filename)
    return table


def parse_routes(lines: Iterable[bytes | str], filename: str = "<routes>") -> RouteTable:
    """Build a RouteTable from raw lines.

    Lines may be ``bytes`` (decoded as strict UTF-8) or ``str``. A trailing
    carriage return is dropped so CRLF files parse the same as LF files.
    """
    entries: dict[str, Source] = {}

    for lineno, raw in enumerate(lines, start=1):
        text = _decode_line(raw, filename, lineno).rstrip("\r")
        if text.startswith("#"):
            continue
        fields = text.split()
        if not fields:
            continue
        if len(fields) != FIELD_COUNT:
            msg = f"expected {FIELD_COUNT} fields (prefix vcs url), got {len(fields)}"
            raise RouteFileParseError(filename, lineno, msg)

        prefix, vcs, url = fields
        if not prefix:
            raise RouteFileParseError(filename, lineno, "empty prefix")
        if prefix in entries:
            raise RouteFileParseError(filename, lineno, f"duplicate entry {prefix}")
        entries[prefix] = Source(vcs=vcs, url=url)

    return RouteTable(entries)


def _decode_line(raw: bytes | str, filename: str, lineno: int) -> str:
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"invalid UTF-8 at byte {exc.start}"
        raise RouteFileParseError(filename, lineno, msg) from exc
