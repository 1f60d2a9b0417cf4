"""Shared test fixtures."""

from typing import Callable

import httpx
import pytest

from glean_indexer.ingestion.models import EntityRef
from glean_indexer.ingestion.techdocs_client import TechDocsClient, static_token

TECHDOCS_BASE_URL = "http://localhost/api/techdocs"
CATALOG_BASE_URL = "http://localhost/api/catalog"
APP_BASE_URL = "http://localhost"

HTML_FIXTURE = """<!doctype html>
<html lang="en">
  <head><title>Engineering Handbook</title></head>
  <body>
    <nav class="md-header__inner md-grid" aria-label="Header">
      <a href="/" title="Handbook">Home</a>
    </nav>
    <div class="md-container">
      <nav class="md-nav md-nav--primary" aria-label="Navigation">
        <ul class="md-nav__list"><li><a href="onboarding/">Onboarding</a></li></ul>
      </nav>
      <article class="md-content__inner md-typeset">
        <h1 id="engineering-handbook">Engineering Handbook<a class="headerlink" href="#engineering-handbook" title="Permanent link">&para;</a></h1>
        <p>Welcome to the Engineering Handbook!</p>
        <hr>
        <div class="md-source-file">
          <small>
            Last update:
            <span class="git-revision-date-localized-plugin git-revision-date-localized-plugin-date">April 6, 2022</span>
          </small>
        </div>
      </article>
    </div>
  </body>
</html>
"""


@pytest.fixture
def entity() -> EntityRef:
    return EntityRef(namespace="default", kind="component", name="some-handbook")


@pytest.fixture
def html_fixture() -> str:
    return HTML_FIXTURE


@pytest.fixture
def make_techdocs_client() -> Callable[..., TechDocsClient]:
    """Build a TechDocs client whose requests are answered by ``handler``."""
    clients = []

    def _make(handler, token: str = "techdocs-token") -> TechDocsClient:
        client = TechDocsClient(
            techdocs_base_url=TECHDOCS_BASE_URL,
            app_base_url=APP_BASE_URL,
            catalog_base_url=CATALOG_BASE_URL,
            token_provider=static_token(token),
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.client.close()
