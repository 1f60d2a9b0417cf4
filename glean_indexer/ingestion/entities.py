"""Entity providers: decide which entities an indexing run covers."""

import logging
from typing import Callable, Iterable, Optional

from glean_indexer.core.config import settings
from glean_indexer.ingestion.models import EntityRef
from glean_indexer.ingestion.techdocs_client import TechDocsClient

logger = logging.getLogger(__name__)

EntityProvider = Callable[[], Iterable[EntityRef]]


class FixedEntityProvider:
    """Always yields the same configured entities."""

    def __init__(self, entities: Iterable[EntityRef]):
        self.entities = list(entities)

    def __call__(self) -> list[EntityRef]:
        return list(self.entities)


class CatalogEntityProvider:
    """Asks the catalog for every entity with TechDocs."""

    def __init__(self, techdocs_client: TechDocsClient):
        self.techdocs_client = techdocs_client

    def __call__(self) -> list[EntityRef]:
        return self.techdocs_client.fetch_techdocs_entities()


def get_entity_provider(techdocs_client: TechDocsClient, source: Optional[str] = None) -> EntityProvider:
    """Get the entity provider selected in settings."""
    source = source or settings.entity_source
    if source == "catalog":
        logger.info("Using catalog entity provider")
        return CatalogEntityProvider(techdocs_client)

    entities = [EntityRef.parse(ref) for ref in settings.default_entity_refs]
    logger.info(f"Using fixed entity provider: {[entity.uri for entity in entities]}")
    return FixedEntityProvider(entities)
