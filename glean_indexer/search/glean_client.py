"""Glean indexing API client."""

import logging
from typing import Optional

import httpx

from glean_indexer.core.config import settings
from glean_indexer.core.constants import BULK_INDEX_PATH
from glean_indexer.core.errors import NetworkError, RetrievalError
from glean_indexer.ingestion.models import GleanDocument

logger = logging.getLogger(__name__)


class GleanClient:
    """Uploads documents to a Glean datasource."""

    def __init__(
        self,
        api_base_url: str,
        token: str,
        datasource: str,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.token = token
        self.datasource = datasource
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def __enter__(self) -> "GleanClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def bulk_index_url(self) -> str:
        return f"{self.api_base_url}/{BULK_INDEX_PATH}"

    def bulk_index_batch(
        self,
        documents: list[GleanDocument],
        is_first_page: bool,
        is_last_page: bool,
        upload_id: str,
    ) -> None:
        """Upload one page of a bulk upload session.

        The first page also tells Glean to drop any unfinished upload for
        this datasource.
        """
        payload = {
            "datasource": self.datasource,
            "documents": [document.model_dump(by_alias=True) for document in documents],
            "isFirstPage": is_first_page,
            "isLastPage": is_last_page,
            "forceRestartUpload": is_first_page,
            "uploadId": upload_id,
        }
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

        try:
            response = self.client.post(self.bulk_index_url, json=payload, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"Error bulk indexing: {upload_id}: {e}")
            raise NetworkError(str(e) or type(e).__name__, url=self.bulk_index_url) from e

        if not response.is_success:
            logger.error(f"Error bulk indexing: {upload_id} ({response.status_code})")
            raise RetrievalError(
                response.reason_phrase,
                status_code=response.status_code,
                url=self.bulk_index_url,
            )

    def close(self) -> None:
        """Close HTTP client."""
        if self._owns_client:
            self.client.close()


def create_glean_client(client: Optional[httpx.Client] = None) -> GleanClient:
    """Create a Glean client configured from settings."""
    return GleanClient(
        api_base_url=settings.glean_api_base_url,
        token=settings.glean_token,
        datasource=settings.glean_datasource,
        client=client,
        timeout=settings.http_timeout_seconds,
    )
