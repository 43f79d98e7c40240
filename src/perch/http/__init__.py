"""HTTP primitives: a frozen Request and immutable Response types."""
