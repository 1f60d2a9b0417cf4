"""Indexing API routes."""

import logging

from fastapi import APIRouter, Depends, Response, status

from glean_indexer.api.deps import get_indexing_service
from glean_indexer.indexing.service import IndexingService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/bulk-index", status_code=status.HTTP_200_OK)
def bulk_index(service: IndexingService = Depends(get_indexing_service)) -> Response:
    """Re-index all TechDocs content in Glean.

    Runs synchronously; failures are turned into error responses by the
    application's exception handlers.
    """
    logger.info("Bulk index requested")
    service.bulk_index()
    return Response(status_code=status.HTTP_200_OK)
