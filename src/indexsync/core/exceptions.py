"""Synchronization exceptions.

None of these are fatal to the hosting process. The synchronizer catches
them and reports a ``SyncResult`` carrying the matching ``SyncErrorKind``.
"""

from indexsync.models.result import SyncErrorKind


class IndexSyncError(Exception):
    """Base exception for index synchronization errors."""

    kind: SyncErrorKind | None = None


class BackendUnavailableError(IndexSyncError):
    """Raised when the availability gate is closed."""

    kind = SyncErrorKind.BACKEND_UNAVAILABLE


class SerializationError(IndexSyncError):
    """Raised when a record cannot be turned into an index document."""

    kind = SyncErrorKind.SERIALIZATION


class BackendRequestError(IndexSyncError):
    """Raised when a request to a reachable backend fails."""

    kind = SyncErrorKind.BACKEND_REQUEST


class ConfigurationError(IndexSyncError):
    """Raised when the backend cannot be configured (e.g. missing client package)."""


class BackendConnectionError(BackendRequestError):
    """Raised when a request never reached a healthy node (connection refused, timeout, 502/503/504)."""
