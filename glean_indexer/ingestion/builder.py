"""Builds Glean documents from TechDocs pages."""

import logging

from glean_indexer.core.utils import start_case
from glean_indexer.ingestion.models import DocumentBody, DocumentPermissions, EntityRef, GleanDocument
from glean_indexer.ingestion.parse_html import remove_navigation
from glean_indexer.ingestion.techdocs_client import TechDocsClient

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """Turns one TechDocs page into one Glean document."""

    def __init__(self, techdocs_client: TechDocsClient, datasource: str):
        self.techdocs_client = techdocs_client
        self.datasource = datasource

    def build_document(self, entity: EntityRef, file_path: str) -> GleanDocument:
        """Fetch a page and convert it into a Glean document."""
        raw_html = self.techdocs_client.fetch_raw_document(entity, file_path)

        text_content = remove_navigation(raw_html)
        title = self.techdocs_client.extract_title(raw_html) or start_case(file_path)
        updated_at = int(self.techdocs_client.extract_updated_at(raw_html).timestamp())

        document = GleanDocument(
            id=f"{entity.name}/{file_path}",
            title=title,
            container=entity.name,
            datasource=self.datasource,
            view_url=self.techdocs_client.resolve_view_url(entity, file_path),
            body=DocumentBody(text_content=text_content),
            updated_at=updated_at,
            # Anyone who can sign in to Glean may view the document
            permissions=DocumentPermissions(allow_anonymous_access=True),
        )

        logger.debug(f"Building document: {document.model_dump_json(by_alias=True, exclude={'body'})}")
        return document
