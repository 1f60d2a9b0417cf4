"""
Error types and global exception handlers.

Retrieval failures from TechDocs, the catalog, and Glean are raised as
``RetrievalError`` (upstream answered with a non-success status) or
``NetworkError`` (the request never completed). Neither is retried here:
they abort the current build or upload and propagate to whoever started the
run. The handlers below turn them into JSON responses for the HTTP trigger.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class IndexerError(Exception):
    """Base class for indexing failures."""


class RetrievalError(IndexerError):
    """An upstream service answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NetworkError(IndexerError):
    """An upstream service could not be reached."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


# ---------------------------------------------------------------------
# Exception Handlers
# ---------------------------------------------------------------------

async def upstream_error_handler(request: Request, exc: IndexerError) -> JSONResponse:
    """Report a failed indexing run caused by an upstream service."""
    logger.error(
        "Indexing failed during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "upstream_error",
        "detail": str(exc),
    }
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=payload)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    Logs the full traceback and returns a generic 500 with no internal
    details.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "internal_server_error",
        "detail": "Internal server error",
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)
