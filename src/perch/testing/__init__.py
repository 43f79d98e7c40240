"""Test utilities for perch applications::

    from perch.testing import TestClient, write_routes
"""

from perch.testing.client import TestClient
from perch.testing.routes import write_routes

__all__ = ["TestClient", "write_routes"]
