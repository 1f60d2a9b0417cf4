"""Bulk index CLI script."""

import logging
from typing import Optional

import typer

from glean_indexer.core.config import settings
from glean_indexer.core.logging import setup_logging
from glean_indexer.indexing.service import create_indexing_service
from glean_indexer.ingestion.entities import FixedEntityProvider
from glean_indexer.ingestion.models import EntityRef

setup_logging()
logger = logging.getLogger(__name__)

app = typer.Typer()


@app.command()
def main(
    entity: Optional[list[str]] = typer.Option(
        None, help="Entity ref to index as namespace/kind/name (repeatable); defaults to the configured selection"
    ),
    batch_size: int = typer.Option(settings.batch_size, min=1, help="Documents per bulk index request"),
):
    """Re-index TechDocs content in Glean once and exit."""
    service = create_indexing_service()
    service.indexer.batch_size = batch_size
    if entity:
        service.entity_provider = FixedEntityProvider(EntityRef.parse(ref) for ref in entity)

    logger.info(f"Starting bulk index: batch_size={batch_size}")
    try:
        service.bulk_index()
    finally:
        service.close()
    logger.info("Bulk index complete")


if __name__ == "__main__":
    app()
