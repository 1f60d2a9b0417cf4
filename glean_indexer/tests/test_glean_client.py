"""Tests for the Glean bulk index client."""

import json

import httpx
import pytest

from glean_indexer.core.errors import NetworkError, RetrievalError
from glean_indexer.ingestion.models import DocumentBody, GleanDocument
from glean_indexer.search.glean_client import GleanClient

GLEAN_BASE_URL = "https://example-be.glean.com/api/index/v1"

DOCUMENT = GleanDocument(
    id="some-handbook/index.html",
    title="I am a document",
    container="some-handbook",
    datasource="backstage",
    view_url="http://localhost/docs/default/component/some-handbook",
    body=DocumentBody(text_content="I am some text content"),
    updated_at=1652818028,
)


def _client(handler) -> GleanClient:
    return GleanClient(
        api_base_url=GLEAN_BASE_URL,
        token="I-am-a-token",
        datasource="backstage",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_bulk_index_batch_payload():
    """The bulk index request carries the batch and its page flags."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    _client(handler).bulk_index_batch([DOCUMENT], True, False, "upload-123")

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == f"{GLEAN_BASE_URL}/bulkindexdocuments"
    assert request.headers["Authorization"] == "Bearer I-am-a-token"
    assert request.headers["Content-Type"] == "application/json"

    body = json.loads(request.content)
    assert body == {
        "datasource": "backstage",
        "documents": [DOCUMENT.model_dump(by_alias=True)],
        "isFirstPage": True,
        "isLastPage": False,
        "forceRestartUpload": True,
        "uploadId": "upload-123",
    }


def test_force_restart_follows_first_page():
    """Only the first page forces a restart of the upload."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200)

    _client(handler).bulk_index_batch([DOCUMENT], False, True, "upload-123")

    assert seen[0]["forceRestartUpload"] is False
    assert seen[0]["isLastPage"] is True


def test_bulk_index_batch_error():
    """A rejected upload raises RetrievalError with the status text."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401)

    with pytest.raises(RetrievalError, match="Unauthorized") as exc_info:
        _client(handler).bulk_index_batch([DOCUMENT], True, True, "upload-123")

    assert exc_info.value.status_code == 401


def test_bulk_index_batch_network_error():
    """Transport failures raise NetworkError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkError):
        _client(handler).bulk_index_batch([DOCUMENT], True, True, "upload-123")


def test_documents_use_glean_field_names():
    """Uploaded documents carry Glean's camelCase field names."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200)

    _client(handler).bulk_index_batch([DOCUMENT], True, True, "upload-123")

    document = seen[0]["documents"][0]
    assert document["viewURL"] == "http://localhost/docs/default/component/some-handbook"
    assert document["updatedAt"] == 1652818028
    assert document["body"] == {"mimeType": "HTML", "textContent": "I am some text content"}
    assert document["permissions"] == {"allowAnonymousAccess": True}


def test_owned_client_is_closed():
    """A client created by GleanClient is closed with it."""
    with GleanClient(GLEAN_BASE_URL, "I-am-a-token", "backstage") as client:
        inner = client.client
    assert inner.is_closed
