"""Indexing run orchestration."""

import logging
from typing import Optional

from glean_indexer.core.config import settings
from glean_indexer.indexing.indexer import BatchIndexer
from glean_indexer.ingestion.builder import DocumentBuilder
from glean_indexer.ingestion.entities import EntityProvider, get_entity_provider
from glean_indexer.ingestion.techdocs_client import TechDocsClient, create_techdocs_client
from glean_indexer.search.glean_client import GleanClient, create_glean_client

logger = logging.getLogger(__name__)


class IndexingService:
    """Entry point for scheduled and manually triggered indexing runs."""

    def __init__(
        self,
        indexer: BatchIndexer,
        entity_provider: EntityProvider,
        techdocs_client: Optional[TechDocsClient] = None,
        glean_client: Optional[GleanClient] = None,
    ):
        self.indexer = indexer
        self.entity_provider = entity_provider
        self._techdocs_client = techdocs_client
        self._glean_client = glean_client

    def bulk_index(self) -> None:
        """Re-index every entity the provider selects, one after another."""
        entities = list(self.entity_provider())
        logger.info(f"Starting bulk index of {len(entities)} entities")
        for entity in entities:
            self.indexer.bulk_index_tech_docs(entity)

    def close(self) -> None:
        """Close the HTTP clients owned by this service."""
        if self._techdocs_client:
            self._techdocs_client.close()
        if self._glean_client:
            self._glean_client.close()


def create_indexing_service() -> IndexingService:
    """Wire an indexing service from settings."""
    techdocs_client = create_techdocs_client()
    glean_client = create_glean_client()
    builder = DocumentBuilder(techdocs_client, datasource=settings.glean_datasource)
    indexer = BatchIndexer(
        techdocs_client,
        builder,
        glean_client,
        batch_size=settings.batch_size,
        concurrency=settings.build_concurrency,
    )
    return IndexingService(
        indexer,
        entity_provider=get_entity_provider(techdocs_client),
        techdocs_client=techdocs_client,
        glean_client=glean_client,
    )


def run_bulk_index() -> None:
    """Run one indexing pass with short-lived clients."""
    service = create_indexing_service()
    try:
        service.bulk_index()
    finally:
        service.close()
