"""Synchronization result models.

Both upsert and delete report through ``SyncResult`` so the caller decides
how to log or propagate a failure.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SyncOperation(str, Enum):
    """Mutating operation performed against the index."""

    UPSERT = "upsert"
    DELETE = "delete"


class SyncErrorKind(str, Enum):
    """Why an operation did not reach or complete on the backend.

    - BACKEND_UNAVAILABLE: the availability gate was closed; nothing was sent
    - SERIALIZATION: the record (or key) could not be encoded; nothing was sent
    - BACKEND_REQUEST: the backend call itself failed
    """

    BACKEND_UNAVAILABLE = "backend_unavailable"
    SERIALIZATION = "serialization"
    BACKEND_REQUEST = "backend_request"


class SyncResult(BaseModel):
    """Outcome of a single upsert or delete.

    For upserts ``ok`` means the backend acknowledged the write. For deletes
    it means the document existed and was removed; a missing document gives
    ``ok=False`` with no error.
    """

    operation: SyncOperation = Field(description="Operation that produced this result")
    document_id: str | None = Field(default=None, description="Document id addressed, when known")
    ok: bool = Field(default=False, description="Whether the operation took effect")
    error: SyncErrorKind | None = Field(default=None, description="Failure category, if any")
    message: str | None = Field(default=None, description="Human-readable failure detail")

    @property
    def failed(self) -> bool:
        """True when the operation hit an error (as opposed to a clean miss)."""
        return self.error is not None
