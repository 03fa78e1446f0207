"""FastMCP server exposing vault graph and search tools."""

from __future__ import annotations

import logging
import os
import time
from typing import Annotated, Any, Dict, List, Optional

from fastmcp import FastMCP
from pydantic import Field

from ..services.config import get_config
from ..services.workspace import VaultContext

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Vault link-graph tools. Open a vault directory first; it is scanned for '.md' and "
    "'.markdown' notes (hidden entries and .git are skipped). Note paths are vault-relative "
    "with '/' separators. Wikilinks are [[name]] or [[name|display]] where name is a file "
    "stem; when two notes share a stem the most recently indexed one wins. Local graphs walk "
    "links in both directions up to the requested depth."
)


def _log_call(tool_name: str, start_time: float, **fields: Any) -> None:
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "MCP tool called",
        extra={"tool_name": tool_name, "duration_ms": f"{duration_ms:.2f}", **fields},
    )


class VaultTools:
    """Tool implementations bound to one vault context."""

    def __init__(self, context: VaultContext) -> None:
        self.context = context

    def open_vault(
        self,
        path: Annotated[str, Field(description="Absolute path of the vault directory.")],
    ) -> Dict[str, Any]:
        start_time = time.time()
        vault = self.context.open(path)
        _log_call("open_vault", start_time, vault_root=vault.path)
        return vault.model_dump()

    def get_backlinks(
        self,
        path: Annotated[str, Field(description="Vault-relative note path.")],
    ) -> List[str]:
        start_time = time.time()
        backlinks = self.context.get_backlinks(path)
        _log_call("get_backlinks", start_time, note_path=path, result_count=len(backlinks))
        return backlinks

    def get_local_graph(
        self,
        path: Annotated[str, Field(description="Vault-relative note path at the centre.")],
        depth: Annotated[
            Optional[int], Field(ge=0, le=10, description="Hop count (default 2).")
        ] = None,
    ) -> Dict[str, Any]:
        start_time = time.time()
        graph = self.context.get_local_graph(path, depth)
        _log_call(
            "get_local_graph",
            start_time,
            note_path=path,
            node_count=len(graph.nodes),
            edge_count=len(graph.edges),
        )
        return graph.model_dump()

    def resolve_wikilink(
        self,
        name: Annotated[str, Field(description="Wikilink target as written, e.g. 'My Note'.")],
    ) -> Dict[str, Any]:
        start_time = time.time()
        path = self.context.resolve_wikilink(name)
        _log_call("resolve_wikilink", start_time, link_name=name, resolved=path is not None)
        return {"name": name, "path": path}

    def search_notes(
        self,
        query: Annotated[str, Field(description="Free text; a trailing '*' searches by prefix.")],
        limit: Annotated[
            Optional[int], Field(ge=1, le=100, description="Maximum results.")
        ] = None,
    ) -> List[Dict[str, Any]]:
        start_time = time.time()
        results = self.context.search_notes(query, limit)
        _log_call("search_notes", start_time, result_count=len(results))
        return [result.model_dump() for result in results]

    def reindex_note(
        self,
        path: Annotated[str, Field(description="Vault-relative note path that changed.")],
    ) -> Dict[str, Any]:
        start_time = time.time()
        parsed = self.context.reindex_file(path)
        _log_call("reindex_note", start_time, note_path=path)
        return {"path": path, **parsed.model_dump()}


def build_server(context: VaultContext) -> FastMCP:
    """Create a FastMCP server whose tools operate on ``context``."""
    mcp = FastMCP("notegraph", instructions=INSTRUCTIONS)
    tools = VaultTools(context)

    mcp.tool(name="open_vault", description="Open a vault directory and index its notes.")(
        tools.open_vault
    )
    mcp.tool(name="get_backlinks", description="List notes that link to the given note.")(
        tools.get_backlinks
    )
    mcp.tool(
        name="get_local_graph",
        description="Nodes and edges within a number of hops of a note, both directions.",
    )(tools.get_local_graph)
    mcp.tool(
        name="resolve_wikilink",
        description="Resolve a wikilink name to a note path (null when the note does not exist).",
    )(tools.resolve_wikilink)
    mcp.tool(name="search_notes", description="Full-text search across the vault.")(
        tools.search_notes
    )
    mcp.tool(name="reindex_note", description="Re-read one note and refresh its index entries.")(
        tools.reindex_note
    )
    return mcp


def main() -> None:
    config = get_config()
    logging.basicConfig(level=config.log_level)
    context = VaultContext(config)
    if config.vault_path is not None:
        context.open(config.vault_path)

    mcp = build_server(context)
    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower() or "stdio"
    try:
        if transport == "http":
            port = int(os.getenv("MCP_PORT", "8001"))
            host = os.getenv("MCP_HOST", "127.0.0.1")
            logger.info(
                "Starting MCP server",
                extra={"transport": transport, "host": host, "port": port},
            )
            mcp.run(transport=transport, host=host, port=port)
        else:
            logger.info("Starting MCP server", extra={"transport": transport})
            mcp.run(transport=transport)
    finally:
        context.close()


if __name__ == "__main__":
    main()
