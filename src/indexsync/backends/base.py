"""Index backend interface — The capability IndexSync needs from a search engine.

A backend wraps a concrete search client and exposes only index
maintenance:
  1. Probing which nodes are reachable
  2. Checking for, and creating, the target index
  3. Applying a field mapping
  4. Writing and deleting single documents

Query execution is deliberately absent.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IndexBackend(ABC):
    """Abstract base class for index backends.

    Implementations translate client-specific failures into
    ``BackendRequestError``, using ``BackendConnectionError`` when the request
    never reached a healthy node. ``probe()`` is the one exception: an unreachable
    cluster is reported as an empty node set, not raised.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique backend name (e.g., 'opensearch')."""

    @abstractmethod
    async def probe(self) -> set[str]:
        """Return the names of the backend nodes currently reachable."""

    @abstractmethod
    async def index_exists(self, index: str) -> bool:
        """Check whether ``index`` exists."""

    @abstractmethod
    async def create_index(self, index: str) -> bool:
        """Create ``index`` and return whether the backend acknowledged it."""

    @abstractmethod
    async def put_mapping(self, index: str, doc_type: str, mapping: bytes) -> bool:
        """Apply ``mapping`` to ``index`` and return the acknowledgement flag."""

    @abstractmethod
    async def upsert_document(self, index: str, doc_type: str, doc_id: str, payload: bytes) -> bool:
        """Create or fully replace the document at ``doc_id``.

        Returns:
            True once the backend acknowledged the write, whether the document
            was created or replaced.
        """

    @abstractmethod
    async def delete_document(self, index: str, doc_type: str, doc_id: str) -> bool:
        """Delete the document at ``doc_id``.

        Returns:
            Whether the document existed before the delete.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the backend."""
