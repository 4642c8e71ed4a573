"""HTTP API for blog search."""
