"""FastAPI dependencies."""

from typing import Iterator

from glean_indexer.indexing.service import IndexingService, create_indexing_service


def get_indexing_service() -> Iterator[IndexingService]:
    """Provide an indexing service with short-lived clients for one request."""
    service = create_indexing_service()
    try:
        yield service
    finally:
        service.close()
