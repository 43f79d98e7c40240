"""Immutable route table.

Implements ``Mapping[str, Source]``. A table is one generation of the
route file: built completely by the loader, then shared read-only between
the supervisor and every request that picked it up.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from perch.routing.route import RouteMatch, Source


class RouteTable(Mapping[str, Source]):
    """Immutable mapping from path prefix to Source.

    The constructor copies its input, so later changes to the caller's
    dict never show through::

        table = RouteTable({"/net": Source("git", "https://example.org/net.git")})
        table.resolve("/net/lldp")  # RouteMatch(source=..., root="/net")
    """

    __slots__ = ("_entries",)

    _entries: Mapping[str, Source]

    def __init__(self, entries: Mapping[str, Source] | None = None) -> None:
        object.__setattr__(self, "_entries", MappingProxyType(dict(entries or {})))

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __getitem__(self, prefix: str) -> Source:
        return self._entries[prefix]

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RouteTable({len(self._entries)} routes)"

    def resolve(self, path: str) -> RouteMatch | None:
        """Longest-prefix match for *path*; ``None`` when nothing matches."""
        from perch.routing.resolver import resolve

        return resolve(self, path)
