"""Client for the Backstage TechDocs and catalog APIs."""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

import httpx

from glean_indexer.core.config import settings
from glean_indexer.core.constants import TECHDOCS_REF_ANNOTATION
from glean_indexer.core.errors import NetworkError, RetrievalError
from glean_indexer.core.utils import strip_html_suffix
from glean_indexer.ingestion import parse_html
from glean_indexer.ingestion.models import EntityRef, TechDocsMetadata

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


def static_token(token: Optional[str]) -> TokenProvider:
    """Token provider that always hands out the same token."""
    return lambda: token or None


class TechDocsClient:
    """Fetches TechDocs metadata and pages for catalog entities."""

    def __init__(
        self,
        techdocs_base_url: str,
        app_base_url: str,
        catalog_base_url: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.techdocs_base_url = techdocs_base_url.rstrip("/")
        self.app_base_url = app_base_url.rstrip("/")
        self.catalog_base_url = catalog_base_url.rstrip("/") if catalog_base_url else None
        self.token_provider = token_provider or static_token(None)
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=timeout,
            limits=httpx.Limits(max_keepalive_connections=0),
        )

    def __enter__(self) -> "TechDocsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def metadata_url(self, path: str = "") -> str:
        return f"{self.techdocs_base_url}/metadata/techdocs/{path}"

    def static_url(self, path: str = "") -> str:
        return f"{self.techdocs_base_url}/static/docs/{path}"

    def resolve_entity_uri(self, entity: EntityRef) -> str:
        """Lowercase ``namespace/kind/name`` for an entity."""
        return entity.uri

    def resolve_view_url(self, entity: EntityRef, file_path: str) -> str:
        """URL where a page is viewed in the Backstage app."""
        entity_url = f"{self.app_base_url}/docs/{self.resolve_entity_uri(entity)}"
        return f"{entity_url}/{strip_html_suffix(file_path)}"

    def _get(self, url: str, accept: str, params: Optional[dict[str, Any]] = None) -> httpx.Response:
        """Issue an authenticated GET and fail on non-success responses."""
        headers = {"Accept": accept}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug(f"Fetching {url}")
        try:
            response = self.client.get(url, headers=headers, params=params)
        except httpx.TransportError as e:
            logger.error(f"Error fetching {url}: {e}")
            raise NetworkError(str(e) or type(e).__name__, url=url) from e

        if not response.is_success:
            logger.error(f"HTTP error for {url}: {response.status_code}")
            raise RetrievalError(response.reason_phrase, status_code=response.status_code, url=url)
        return response

    def fetch_collection_metadata(self, entity: EntityRef) -> TechDocsMetadata:
        """Fetch the TechDocs site metadata for an entity."""
        url = self.metadata_url(self.resolve_entity_uri(entity))
        response = self._get(url, accept="application/json")
        return TechDocsMetadata.model_validate(response.json())

    def fetch_raw_document(self, entity: EntityRef, file_path: str) -> str:
        """Fetch the raw HTML of one TechDocs page."""
        url = self.static_url(f"{self.resolve_entity_uri(entity)}/{file_path}")
        response = self._get(url, accept="text/plain")
        return response.text

    def fetch_techdocs_entities(self) -> list[EntityRef]:
        """List every catalog entity with published TechDocs."""
        if not self.catalog_base_url:
            raise ValueError("catalog_base_url is not configured")

        url = f"{self.catalog_base_url}/entities"
        response = self._get(
            url,
            accept="application/json",
            params={"filter": f"metadata.annotations.{TECHDOCS_REF_ANNOTATION}"},
        )
        payload = response.json()
        items = payload.get("items", []) if isinstance(payload, dict) else payload
        entities = []
        for item in items:
            try:
                entities.append(EntityRef.from_catalog_entity(item))
            except ValueError as e:
                logger.warning(f"Skipping catalog entity: {e}")
        logger.info(f"Found {len(entities)} TechDocs entities in the catalog")
        return entities

    def extract_updated_at(self, html: str) -> datetime:
        return parse_html.extract_updated_at(html)

    def extract_title(self, html: str) -> Optional[str]:
        return parse_html.extract_title(html)

    def close(self) -> None:
        """Close HTTP client."""
        if self._owns_client:
            self.client.close()


def create_techdocs_client(client: Optional[httpx.Client] = None) -> TechDocsClient:
    """Create a client configured from settings."""
    return TechDocsClient(
        techdocs_base_url=settings.techdocs_base_url,
        app_base_url=settings.app_base_url,
        catalog_base_url=settings.catalog_base_url,
        token_provider=static_token(settings.techdocs_token),
        client=client,
        timeout=settings.http_timeout_seconds,
    )
