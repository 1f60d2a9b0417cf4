"""Batch indexing of one entity's TechDocs into Glean."""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Iterator

from glean_indexer.core.constants import DEFAULT_BATCH_SIZE
from glean_indexer.core.utils import generate_upload_id
from glean_indexer.ingestion.builder import DocumentBuilder
from glean_indexer.ingestion.models import EntityRef, GleanDocument
from glean_indexer.ingestion.techdocs_client import TechDocsClient
from glean_indexer.search.glean_client import GleanClient

logger = logging.getLogger(__name__)


def partition_batches(items: list[str], batch_size: int) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(start_index, batch)`` pairs covering ``items`` in order."""
    for index in range(0, len(items), batch_size):
        yield index, items[index : index + batch_size]


def page_flags(index: int, total: int, batch_size: int) -> tuple[bool, bool]:
    """First/last page flags for the batch starting at ``index``."""
    is_first_page = index < batch_size
    is_last_page = index >= total - batch_size
    return is_first_page, is_last_page


class BatchIndexer:
    """Runs one full re-index of an entity's TechDocs site."""

    def __init__(
        self,
        techdocs_client: TechDocsClient,
        builder: DocumentBuilder,
        glean_client: GleanClient,
        batch_size: int = DEFAULT_BATCH_SIZE,
        concurrency: int = DEFAULT_BATCH_SIZE,
    ):
        self.techdocs_client = techdocs_client
        self.builder = builder
        self.glean_client = glean_client
        self.batch_size = batch_size
        self.concurrency = concurrency

    def build_documents(self, entity: EntityRef, file_paths: list[str]) -> list[GleanDocument]:
        """Build all documents of a batch concurrently.

        Returns documents in the order of ``file_paths``. The first failed
        build cancels whatever has not started yet and is re-raised.
        """
        with ThreadPoolExecutor(max_workers=self.concurrency) as executor:
            futures = [executor.submit(self.builder.build_document, entity, path) for path in file_paths]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            failed = [future for future in futures if future in done and future.exception() is not None]
            if failed:
                for future in pending:
                    future.cancel()
                raise failed[0].exception()
            return [future.result() for future in futures]

    def bulk_index_tech_docs(self, entity: EntityRef) -> int:
        """Re-index every HTML page of an entity. Returns the number of batches uploaded."""
        upload_id = generate_upload_id()
        logger.info(f"Bulk indexing {entity.uri} with uploadId: {upload_id}")

        metadata = self.techdocs_client.fetch_collection_metadata(entity)
        if not metadata.files:
            logger.warning(f"No files to index for {entity.uri}")
            return 0

        files_to_index = [path for path in metadata.files if path.endswith(".html")]
        total = len(files_to_index)

        batch_count = 0
        for index, files_to_build in partition_batches(files_to_index, self.batch_size):
            logger.info(f"Bulk indexing batch: {batch_count} ({len(files_to_build)} files)")

            is_first_page, is_last_page = page_flags(index, total, self.batch_size)
            documents = self.build_documents(entity, files_to_build)

            self.glean_client.bulk_index_batch(documents, is_first_page, is_last_page, upload_id)
            batch_count += 1

        logger.info(f'Successfully bulk indexed "{upload_id}" in {batch_count} batches')
        return batch_count
