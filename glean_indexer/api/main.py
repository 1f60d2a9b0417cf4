"""FastAPI application main module."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from glean_indexer.api.routes_index import router as index_router
from glean_indexer.core.config import settings
from glean_indexer.core.errors import IndexerError, unhandled_exception_handler, upstream_error_handler
from glean_indexer.core.logging import setup_logging
from glean_indexer.indexing.scheduler import create_scheduler
from glean_indexer.indexing.service import run_bulk_index

VERSION = "0.1.0"

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    logger.info("Glean backend starting up ...")
    scheduler = None
    if settings.schedule_enabled:
        scheduler = create_scheduler(run_bulk_index)
        scheduler.start()
    app.state.scheduler = scheduler
    yield
    if scheduler:
        await scheduler.stop()
    logger.info("Shutting down Glean backend")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Glean TechDocs Indexer",
        description="Indexes Backstage TechDocs into a Glean datasource",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_exception_handler(IndexerError, upstream_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(index_router, tags=["index"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": VERSION}

    return app


app = create_app()
