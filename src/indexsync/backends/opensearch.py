"""OpenSearch backend — Index maintenance for OpenSearch (v2+).

Uses ``opensearch-py`` (async). The client is created lazily on the first
call, normally the startup probe, and shared afterwards.

OpenSearch dropped mapping types in 2.0, so ``doc_type`` is accepted for
interface compatibility and only appears in log lines.

The client package is a core dependency of IndexSync::

    pip install "opensearch-py[async]"
"""

from __future__ import annotations

import logging
from typing import Any

from indexsync.backends.base import IndexBackend
from indexsync.config.settings import BackendSettings
from indexsync.core.exceptions import BackendConnectionError, BackendRequestError, ConfigurationError

logger = logging.getLogger(__name__)

# Gateway statuses mean no healthy node answered.
_UNREACHABLE_STATUSES = frozenset({502, 503, 504})


def _request_error(message: str, error: Exception) -> BackendRequestError:
    """Wrap a client exception, separating connection failures from rejected requests."""
    from opensearchpy.exceptions import ConnectionError as ClientConnectionError

    # ConnectionTimeout subclasses ConnectionError.
    if isinstance(error, ClientConnectionError) or getattr(error, "status_code", None) in _UNREACHABLE_STATUSES:
        return BackendConnectionError(f"{message}: {error}")
    return BackendRequestError(f"{message}: {error}")


class OpenSearchBackend(IndexBackend):
    """Index backend for OpenSearch.

    Args:
        settings: Connection and index settings.
        client: Pre-built ``AsyncOpenSearch`` client (mainly for tests).
        **kwargs: Additional keyword arguments forwarded to ``AsyncOpenSearch``.
    """

    def __init__(
        self,
        settings: BackendSettings | None = None,
        client: Any = None,
        **kwargs: Any,
    ) -> None:
        self._settings = settings or BackendSettings()
        self._client: Any = client
        self._extra_kwargs = kwargs

    @property
    def name(self) -> str:
        return "opensearch"

    def _get_client(self) -> Any:
        """Return the shared client, creating it on first use."""
        if self._client is not None:
            return self._client

        try:
            from opensearchpy import AsyncOpenSearch
        except ImportError as e:
            raise ConfigurationError(
                "opensearch-py package is required.  Install with: pip install 'opensearch-py[async]'"
            ) from e

        client_kwargs: dict[str, Any] = {
            "hosts": [self._settings.url],
            "verify_certs": self._settings.verify_certs,
            "ssl_show_warn": False,
            "timeout": self._settings.request_timeout,
        }
        if self._settings.username and self._settings.password:
            client_kwargs["http_auth"] = (self._settings.username, self._settings.password)

        client_kwargs.update(self._extra_kwargs)

        self._client = AsyncOpenSearch(**client_kwargs)
        return self._client

    # ── Probe ────────────────────────────────────────────────────────────

    async def probe(self) -> set[str]:
        """Return the names of reachable nodes; empty when the cluster is down."""
        client = self._get_client()
        try:
            info = await client.nodes.info()
        except Exception as e:
            logger.warning("OpenSearch probe of %s failed: %s", self._settings.url, e)
            return set()

        cluster = info.get("cluster_name")
        if cluster and cluster != self._settings.cluster_name:
            logger.warning(
                "Connected to cluster '%s' but '%s' is configured",
                cluster,
                self._settings.cluster_name,
            )

        nodes = info.get("nodes") or {}
        return {str(node.get("name") or node_id) for node_id, node in nodes.items()}

    # ── Index administration ─────────────────────────────────────────────

    async def index_exists(self, index: str) -> bool:
        try:
            return bool(await self._get_client().indices.exists(index=index))
        except Exception as e:
            raise _request_error(f"Failed to check index '{index}'", e) from e

    async def create_index(self, index: str) -> bool:
        try:
            response = await self._get_client().indices.create(index=index)
        except Exception as e:
            raise _request_error(f"Failed to create index '{index}'", e) from e
        return bool(response.get("acknowledged", False))

    async def put_mapping(self, index: str, doc_type: str, mapping: bytes) -> bool:
        try:
            response = await self._get_client().indices.put_mapping(
                index=index,
                body=mapping.decode("utf-8"),
            )
        except Exception as e:
            raise _request_error(f"Failed to put mapping for '{doc_type}' on '{index}'", e) from e
        return bool(response.get("acknowledged", False))

    # ── Documents ────────────────────────────────────────────────────────

    async def upsert_document(self, index: str, doc_type: str, doc_id: str, payload: bytes) -> bool:
        try:
            response = await self._get_client().index(
                index=index,
                id=doc_id,
                body=payload.decode("utf-8"),
            )
        except Exception as e:
            raise _request_error(f"Failed to index {doc_type} '{doc_id}'", e) from e
        logger.debug("Indexed %s '%s' in '%s': %s", doc_type, doc_id, index, response.get("result"))
        return True

    async def delete_document(self, index: str, doc_type: str, doc_id: str) -> bool:
        try:
            response = await self._get_client().delete(index=index, id=doc_id)
        except Exception as e:
            if "NotFoundError" in type(e).__name__:
                return False
            raise _request_error(f"Failed to delete {doc_type} '{doc_id}'", e) from e
        return response.get("result") == "deleted"

    async def close(self) -> None:
        """Close the OpenSearch client."""
        if self._client:
            await self._client.close()
            self._client = None
