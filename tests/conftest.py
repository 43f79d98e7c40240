"""Shared fixtures: route files on disk."""

from pathlib import Path

import pytest

from perch.testing import write_routes

EXAMPLE_ROUTES = """
# comment
/net/lldp git https://example.org/net/lldp.git
/www hg https://example.org/www
"""


@pytest.fixture
def routes_file(tmp_path: Path) -> Path:
    """The two-route example file."""
    return write_routes(tmp_path / "routes.txt", EXAMPLE_ROUTES)
