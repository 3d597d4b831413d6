"""Core synchronization logic — Availability gate, bootstrap, upsert and delete."""

from indexsync.core.service import IndexSyncService, create_index_sync_service

__all__ = ["IndexSyncService", "create_index_sync_service"]
