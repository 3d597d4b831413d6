"""Index sync service — Explicitly constructed entry point for the application.

``create_index_sync_service`` builds the backend, gate, bootstrapper and
synchronizer, runs bootstrap, and returns a ready service. There is no
module-level state; the application owns the returned value.

Usage::

    from indexsync.config.settings import Settings
    from indexsync.observability.logging import setup_logging

    settings = Settings()
    setup_logging(settings.observability)
    service = await create_index_sync_service(settings)
    await service.index_record(NameEntry(name="Adewale", meaning="The crown has come home"))
    await service.delete_from_index("ADEWALE")
    await service.shutdown()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from indexsync.backends.base import IndexBackend
from indexsync.core.bootstrap import BootstrapReport, SchemaBootstrapper, load_mapping
from indexsync.core.codec import DocumentCodec
from indexsync.core.gate import AvailabilityGate, GateState
from indexsync.core.synchronizer import IndexSynchronizer
from indexsync.models.document import IndexDescriptor
from indexsync.models.record import IndexRecord
from indexsync.models.result import SyncResult

if TYPE_CHECKING:
    from indexsync.config.settings import Settings

logger = logging.getLogger(__name__)


class IndexSyncService:
    """Public surface used by the rest of the application.

    Attributes:
        backend: The index backend shared by all operations.
        gate: Availability gate.
        synchronizer: Gated upsert/delete implementation.
        bootstrapper: Runs index setup at startup and again on recovery.
        bootstrap_report: Outcome of the most recent bootstrap run.
    """

    def __init__(
        self,
        backend: IndexBackend,
        gate: AvailabilityGate,
        synchronizer: IndexSynchronizer,
        bootstrapper: SchemaBootstrapper,
        bootstrap_report: BootstrapReport,
    ) -> None:
        self.backend = backend
        self.gate = gate
        self.synchronizer = synchronizer
        self.bootstrapper = bootstrapper
        self.bootstrap_report = bootstrap_report
        self._closed = False

    def is_available(self) -> bool:
        """Return the cached gate value. Never touches the network."""
        return self.gate.is_available()

    async def index_record(self, record: IndexRecord | Mapping[str, Any]) -> bool:
        """Upsert ``record``; True only when the backend accepted it."""
        return await self.synchronizer.index_record(record)

    async def delete_from_index(self, natural_key: str) -> bool:
        """Delete the document for ``natural_key``; True only when one was removed."""
        return await self.synchronizer.delete_from_index(natural_key)

    async def upsert(self, record: IndexRecord | Mapping[str, Any]) -> SyncResult:
        """Like ``index_record`` but returns the full ``SyncResult``."""
        return await self.synchronizer.upsert(record)

    async def delete(self, natural_key: str) -> SyncResult:
        """Like ``delete_from_index`` but returns the full ``SyncResult``."""
        return await self.synchronizer.delete(natural_key)

    async def refresh_availability(self) -> bool:
        """Re-probe the backend on demand and return the new availability.

        When the gate is not open, the full bootstrap runs again so an index
        that was never created (or was lost with the cluster) is recreated
        and gets its mapping before writes resume.
        """
        if self._closed:
            return False
        if self.gate.state is GateState.AVAILABLE:
            return await self.gate.refresh(self.backend)

        self.bootstrap_report = await self.bootstrapper.run()
        return self.gate.is_available()

    async def shutdown(self) -> None:
        """Close the backend connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.gate.mark_unavailable("service shut down")
        await self.backend.close()
        logger.info("Index sync service shut down")


async def create_index_sync_service(
    settings: Settings,
    backend: IndexBackend | None = None,
    codec: DocumentCodec | None = None,
) -> IndexSyncService:
    """Build and bootstrap an ``IndexSyncService``.

    Never raises because the backend is down: the service comes back with
    its gate closed and every operation reports ``BACKEND_UNAVAILABLE``.

    Logging is not configured here. Hosts call
    ``indexsync.observability.logging.setup_logging(settings.observability)``
    once at startup, before building the service.

    Args:
        settings: Application settings.
        backend: Backend to use. Defaults to ``OpenSearchBackend`` built from
            ``settings.backend``.
        codec: Record encoder. Defaults to ``DocumentCodec()``.

    Returns:
        A bootstrapped service.
    """
    backend_settings = settings.backend

    if backend is None:
        from indexsync.backends.opensearch import OpenSearchBackend

        backend = OpenSearchBackend(backend_settings)

    descriptor = IndexDescriptor(
        index_name=backend_settings.index_name,
        document_type=backend_settings.document_type,
        mapping=load_mapping(backend_settings.mapping_resource),
    )
    gate = AvailabilityGate(
        failure_threshold=backend_settings.failure_threshold,
        reset_timeout=backend_settings.reset_timeout,
    )

    bootstrapper = SchemaBootstrapper(backend, gate, descriptor)
    report = await bootstrapper.run()

    synchronizer = IndexSynchronizer(
        backend,
        gate,
        descriptor,
        codec=codec,
        trip_on_failure=backend_settings.trip_on_failure,
    )
    logger.info(
        "Index sync service ready (index=%s, type=%s, available=%s)",
        descriptor.index_name,
        descriptor.document_type,
        gate.is_available(),
    )
    return IndexSyncService(backend, gate, synchronizer, bootstrapper, report)
