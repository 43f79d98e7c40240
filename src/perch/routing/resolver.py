"""Longest-prefix resolution over whole path segments.

Candidates are rebuilt by joining whole ``/``-separated segments, so a
prefix ``/net`` can match ``/net`` or ``/net/...`` but never ``/network``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from perch.routing.route import RouteMatch, Source


def candidate_prefixes(path: str) -> Iterator[str]:
    """Yield *path* and each of its segment-wise ancestors, longest first.

    Examples::

        list(candidate_prefixes("/net/lldp"))  -> ["/net/lldp", "/net", ""]
        list(candidate_prefixes("/net/"))      -> ["/net/", "/net", ""]
    """
    segments = path.split("/")
    while segments:
        yield "/".join(segments)
        segments.pop()


def resolve(table: Mapping[str, Source], path: str) -> RouteMatch | None:
    """Find the longest registered prefix that is an ancestor of *path*.

    Returns ``None`` (not an exception) when no prefix matches; callers
    decide what a miss means. Pure: safe to call from any number of
    threads against the same table.
    """
    for candidate in candidate_prefixes(path):
        source = table.get(candidate)
        if source is not None:
            return RouteMatch(source=source, root=candidate)
    return None
