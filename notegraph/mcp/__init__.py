"""MCP tool server for vault queries."""
