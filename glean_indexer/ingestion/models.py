"""Data models for the indexing pipeline."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from glean_indexer.core.constants import BODY_MIME_TYPE, DEFAULT_NAMESPACE


class EntityRef(BaseModel):
    """Reference to a catalog entity that publishes TechDocs."""

    model_config = ConfigDict(frozen=True)

    namespace: str = DEFAULT_NAMESPACE
    kind: str
    name: str

    @property
    def uri(self) -> str:
        """Lowercase ``namespace/kind/name``."""
        return f"{self.namespace}/{self.kind}/{self.name}".lower()

    @classmethod
    def parse(cls, ref: str) -> "EntityRef":
        """Parse a ``namespace/kind/name`` string."""
        parts = ref.strip().split("/")
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Invalid entity ref: {ref!r}")
        namespace, kind, name = parts
        return cls(namespace=namespace, kind=kind, name=name)

    @classmethod
    def from_catalog_entity(cls, entity: dict[str, Any]) -> "EntityRef":
        """Build a ref from a catalog entity payload."""
        metadata = entity.get("metadata") or {}
        if not entity.get("kind") or not metadata.get("name"):
            raise ValueError(f"Catalog entity is missing kind or metadata.name: {entity!r}")
        return cls(
            namespace=metadata.get("namespace") or DEFAULT_NAMESPACE,
            kind=entity["kind"],
            name=metadata["name"],
        )


class TechDocsMetadata(BaseModel):
    """Metadata describing one entity's published TechDocs site."""

    model_config = ConfigDict(extra="ignore")

    site_name: Optional[str] = None
    site_description: Optional[str] = None
    build_timestamp: Optional[int] = None
    etag: Optional[str] = None
    files: Optional[list[str]] = None


class DocumentBody(BaseModel):
    """Body of a Glean document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    mime_type: str = Field(BODY_MIME_TYPE, alias="mimeType")
    text_content: str = Field(..., alias="textContent")


class DocumentPermissions(BaseModel):
    """Visibility of a Glean document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    allow_anonymous_access: bool = Field(True, alias="allowAnonymousAccess")


class GleanDocument(BaseModel):
    """Document as accepted by Glean's bulk index endpoint.

    Serialize with ``by_alias=True`` to get Glean's field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    container: str
    datasource: str
    view_url: str = Field(..., alias="viewURL")
    body: DocumentBody
    updated_at: int = Field(..., alias="updatedAt", description="Epoch seconds")
    permissions: DocumentPermissions = DocumentPermissions()
