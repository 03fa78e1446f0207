"""Note parsing, link graph, and search indexing for Markdown vaults."""

__version__ = "0.1.0"
