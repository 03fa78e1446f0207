"""HTTP API for vault graph and search queries."""
