"""FastAPI exception handlers aligned with the HTTP API contract."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...services.search_index import InvalidQueryError, SearchIndexError
from ...services.vault import VaultError, VaultNotOpenError

logger = logging.getLogger(__name__)

DEFAULT_ERRORS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("validation_error", "Invalid request payload"),
    status.HTTP_404_NOT_FOUND: ("not_found", "Resource not found"),
    status.HTTP_409_CONFLICT: ("vault_not_open", "No vault open"),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("internal_error", "Internal server error"),
}


def _normalize_error(
    status_code: int, detail: Any
) -> Tuple[str, str, Optional[Dict[str, Any]]]:
    default_error, default_message = DEFAULT_ERRORS.get(
        status_code, DEFAULT_ERRORS[status.HTTP_500_INTERNAL_SERVER_ERROR]
    )
    if isinstance(detail, dict):
        error = detail.get("error", default_error)
        message = detail.get("message", default_message)
        detail_payload = detail.get("detail")
        if detail_payload is None:
            remainder = {
                k: v for k, v in detail.items() if k not in {"error", "message", "detail"}
            }
            detail_payload = remainder or None
        return error, message, detail_payload
    if isinstance(detail, str) and detail:
        return default_error, detail, None
    return default_error, default_message, None


def _response(status_code: int, detail: Any) -> JSONResponse:
    error, message, extra = _normalize_error(status_code, detail)
    return JSONResponse(
        status_code=status_code, content={"error": error, "message": message, "detail": extra}
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail = {"detail": {"errors": exc.errors()}}
    return _response(status.HTTP_400_BAD_REQUEST, detail)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _response(exc.status_code, exc.detail)


async def vault_not_open_handler(request: Request, exc: VaultNotOpenError) -> JSONResponse:
    return _response(status.HTTP_409_CONFLICT, {"error": "vault_not_open", "message": str(exc)})


async def vault_error_handler(request: Request, exc: VaultError) -> JSONResponse:
    return _response(status.HTTP_400_BAD_REQUEST, {"error": "vault_error", "message": str(exc)})


async def not_found_handler(request: Request, exc: FileNotFoundError) -> JSONResponse:
    return _response(
        status.HTTP_404_NOT_FOUND,
        {"error": "note_not_found", "message": f"Note not found: {exc.filename or exc}"},
    )


async def invalid_input_handler(request: Request, exc: ValueError) -> JSONResponse:
    return _response(status.HTTP_400_BAD_REQUEST, {"error": "invalid_input", "message": str(exc)})


async def search_error_handler(request: Request, exc: SearchIndexError) -> JSONResponse:
    logger.error("Search index failure: %s", exc)
    return _response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "search_error", "message": str(exc)}
    )


async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.args[0] if exc.args else None)


def register_error_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(VaultNotOpenError, vault_not_open_handler)
    app.add_exception_handler(VaultError, vault_error_handler)
    app.add_exception_handler(FileNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidQueryError, invalid_input_handler)
    app.add_exception_handler(SearchIndexError, search_error_handler)
    app.add_exception_handler(ValueError, invalid_input_handler)
    app.add_exception_handler(Exception, internal_exception_handler)
