"""Index synchronizer — Gated upsert and delete of single documents.

Every operation checks the availability gate first and makes at most one
backend call. Failures never propagate: they come back as a ``SyncResult``
with the matching ``SyncErrorKind``. No retries.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from indexsync.backends.base import IndexBackend
from indexsync.core.codec import DocumentCodec, document_id
from indexsync.core.exceptions import BackendConnectionError, SerializationError
from indexsync.core.gate import AvailabilityGate
from indexsync.models.document import IndexDescriptor
from indexsync.models.record import IndexRecord
from indexsync.models.result import SyncErrorKind, SyncOperation, SyncResult

logger = logging.getLogger(__name__)


class IndexSynchronizer:
    """Mirrors record writes and deletes into the search index.

    Args:
        backend: Backend that receives the requests.
        gate: Availability gate consulted before each operation.
        descriptor: Target index and document type.
        codec: Record encoder. Defaults to ``DocumentCodec()``.
        trip_on_failure: Count connection failures toward tripping the gate.
            Rejected requests (mapping errors, bad ids) never trip it.
    """

    def __init__(
        self,
        backend: IndexBackend,
        gate: AvailabilityGate,
        descriptor: IndexDescriptor,
        codec: DocumentCodec | None = None,
        trip_on_failure: bool = True,
    ) -> None:
        self.backend = backend
        self.gate = gate
        self.descriptor = descriptor
        self.codec = codec or DocumentCodec()
        self.trip_on_failure = trip_on_failure

    def is_available(self) -> bool:
        return self.gate.is_available()

    async def upsert(self, record: IndexRecord | Mapping[str, Any]) -> SyncResult:
        """Create or fully replace the document for ``record``."""
        if not self.gate.is_available():
            logger.info("Index attempt not possible: search backend is not available")
            return SyncResult(
                operation=SyncOperation.UPSERT,
                error=SyncErrorKind.BACKEND_UNAVAILABLE,
                message=self.gate.reason,
            )

        try:
            document = self.codec.to_document(record)
        except SerializationError as e:
            logger.info("Failed to serialize record for indexing: %s", e)
            return SyncResult(operation=SyncOperation.UPSERT, error=e.kind, message=str(e))

        try:
            await self.backend.upsert_document(
                self.descriptor.index_name,
                self.descriptor.document_type,
                document.id,
                document.payload,
            )
        except Exception as e:
            return self._request_failed(SyncOperation.UPSERT, document.id, e)

        self.gate.record_success()
        return SyncResult(operation=SyncOperation.UPSERT, document_id=document.id, ok=True)

    async def delete(self, natural_key: str) -> SyncResult:
        """Delete the document addressed by ``natural_key`` (case-insensitive)."""
        if not self.gate.is_available():
            logger.info("Delete attempt not possible: search backend is not available")
            return SyncResult(
                operation=SyncOperation.DELETE,
                error=SyncErrorKind.BACKEND_UNAVAILABLE,
                message=self.gate.reason,
            )

        try:
            doc_id = document_id(natural_key)
        except SerializationError as e:
            logger.info("Invalid key for delete: %s", e)
            return SyncResult(operation=SyncOperation.DELETE, error=e.kind, message=str(e))

        try:
            found = await self.backend.delete_document(
                self.descriptor.index_name,
                self.descriptor.document_type,
                doc_id,
            )
        except Exception as e:
            return self._request_failed(SyncOperation.DELETE, doc_id, e)

        self.gate.record_success()
        if not found:
            logger.debug("Document '%s' was not in index '%s'", doc_id, self.descriptor.index_name)
        return SyncResult(operation=SyncOperation.DELETE, document_id=doc_id, ok=found)

    async def index_record(self, record: IndexRecord | Mapping[str, Any]) -> bool:
        """Upsert ``record`` and return whether it was indexed."""
        return (await self.upsert(record)).ok

    async def delete_from_index(self, natural_key: str) -> bool:
        """Delete by key and return whether a document was removed."""
        return (await self.delete(natural_key)).ok

    def _request_failed(self, operation: SyncOperation, doc_id: str, error: Exception) -> SyncResult:
        logger.warning("%s of '%s' failed", operation.value.capitalize(), doc_id, exc_info=True)
        if isinstance(error, BackendConnectionError):
            if self.trip_on_failure:
                self.gate.record_failure(f"{operation.value} request failed: {error}")
        else:
            self.gate.record_success()
        return SyncResult(
            operation=operation,
            document_id=doc_id,
            error=SyncErrorKind.BACKEND_REQUEST,
            message=str(error),
        )
