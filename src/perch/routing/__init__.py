"""Routing: immutable prefix tables with longest-prefix resolution.

Tables are built once per load by ``load_routes()`` and never mutated
afterwards; a reload installs a new table instead.
"""

from perch.routing.loader import load_routes, parse_routes
from perch.routing.resolver import candidate_prefixes, resolve
from perch.routing.route import RouteMatch, Source
from perch.routing.table import RouteTable

__all__ = [
    "RouteMatch",
    "RouteTable",
    "Source",
    "candidate_prefixes",
    "load_routes",
    "parse_routes",
    "resolve",
]
