"""Data models — Records, index documents and synchronization results."""

from indexsync.models.document import IndexDescriptor, IndexDocument
from indexsync.models.record import IndexRecord, NameEntry
from indexsync.models.result import SyncErrorKind, SyncOperation, SyncResult

__all__ = [
    "IndexDescriptor",
    "IndexDocument",
    "IndexRecord",
    "NameEntry",
    "SyncErrorKind",
    "SyncOperation",
    "SyncResult",
]
