from typing import Annotated, Optional
from urllib.parse import unquote

from fastapi import APIRouter, Depends, Query

from ...models.graph import GraphData
from ...services.workspace import VaultContext
from ..dependencies import get_vault_context

router = APIRouter()

@router.get("/api/graph", response_model=GraphData)
def get_graph_data(
    context: Annotated[VaultContext, Depends(get_vault_context)],
) -> GraphData:
    """Retrieve graph visualization data."""
    return context.get_graph_data()

@router.get("/api/graph/local/{path:path}", response_model=GraphData)
def get_local_graph(
    path: str,
    context: Annotated[VaultContext, Depends(get_vault_context)],
    depth: Optional[int] = Query(None, ge=0, le=10),
) -> GraphData:
    """Retrieve the neighborhood of one note."""
    return context.get_local_graph(unquote(path), depth)
