"""Integration test fixtures — Docker-based OpenSearch node.

Expects a single-node cluster to be running, e.g.:
    docker run -d -p 9201:9200 -e discovery.type=single-node \
        -e DISABLE_SECURITY_PLUGIN=true -e cluster.name=yoruba_name_dictionary \
        opensearchproject/opensearch:2

Each test gets a fresh, uniquely named index that is dropped afterwards.
"""

from __future__ import annotations

import time
import uuid

import httpx
import pytest

OPENSEARCH_HOST = "http://localhost:9201"


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Poll ``url`` until it answers 200 or ``timeout`` elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


@pytest.fixture(scope="session")
def opensearch_ready() -> str:
    """Ensure OpenSearch is running."""
    if not _wait_for_service(OPENSEARCH_HOST):
        pytest.skip(f"OpenSearch not available at {OPENSEARCH_HOST}")
    return OPENSEARCH_HOST


@pytest.fixture
def index_name(opensearch_ready: str):
    """A throwaway index name, removed after the test."""
    name = f"nameentry-{uuid.uuid4().hex[:8]}"
    yield name
    httpx.delete(f"{opensearch_ready}/{name}", params={"ignore_unavailable": "true"}, timeout=30)


@pytest.fixture
def fetch_document(opensearch_ready: str):
    """Read a document straight from the cluster, bypassing IndexSync."""

    async def _fetch(index: str, doc_id: str) -> dict | None:
        async with httpx.AsyncClient(base_url=opensearch_ready, timeout=30) as client:
            resp = await client.get(f"/{index}/_doc/{doc_id}")
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            return resp.json()

    return _fetch
