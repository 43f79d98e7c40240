"""Tests for perch.routing.resolver: longest-prefix resolution."""

from perch.routing import RouteTable, Source, candidate_prefixes, resolve

NET = Source("git", "https://example.org/net.git")
LLDP = Source("git", "https://example.org/net/lldp.git")
WWW = Source("hg", "https://example.org/www")


def _table() -> RouteTable:
    return RouteTable({"/net": NET, "/net/lldp": LLDP, "/www": WWW})


class TestCandidatePrefixes:
    def test_longest_first(self) -> None:
        assert list(candidate_prefixes("/net/lldp")) == ["/net/lldp", "/net", ""]

    def test_trailing_slash(self) -> None:
        assert list(candidate_prefixes("/net/")) == ["/net/", "/net", ""]

    def test_root(self) -> None:
        assert list(candidate_prefixes("/")) == ["/", ""]


class TestResolve:
    def test_exact_match(self) -> None:
        match = resolve(_table(), "/www")
        assert match is not None
        assert match.root == "/www"
        assert match.source is WWW

    def test_longest_prefix_wins(self) -> None:
        match = resolve(_table(), "/net/lldp/internal/x")
        assert match is not None
        assert match.root == "/net/lldp"
        assert match.source is LLDP

    def test_falls_back_to_shorter_prefix(self) -> None:
        match = resolve(_table(), "/net/http")
        assert match is not None
        assert match.root == "/net"
        assert match.source is NET

    def test_segment_boundary(self) -> None:
        table = RouteTable({"/net": NET})
        assert resolve(table, "/network") is None
        assert resolve(table, "/ne") is None

    def test_trailing_slash_matches_parent(self) -> None:
        match = resolve(_table(), "/www/")
        assert match is not None
        assert match.root == "/www"

    def test_no_match(self) -> None:
        assert resolve(_table(), "/other/thing") is None

    def test_empty_table(self) -> None:
        assert resolve(RouteTable(), "/net") is None

    def test_slash_prefix_matches_only_root(self) -> None:
        table = RouteTable({"/": WWW})
        match = resolve(table, "/")
        assert match is not None
        assert match.root == "/"
        assert resolve(table, "/anything") is None

    def test_works_on_plain_mapping(self) -> None:
        match = resolve({"/net": NET}, "/net/x")
        assert match is not None
        assert match.source is NET
