"""Index document and descriptor models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IndexDocument(BaseModel):
    """A record serialized for the index.

    Regenerated from the record on every upsert; never patched in place.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Document identifier (lowercased natural key)")
    payload: bytes = Field(description="UTF-8 JSON body sent to the backend")


class IndexDescriptor(BaseModel):
    """Where documents live and what field mapping the index should carry.

    ``mapping`` is ``None`` when the bundled mapping could not be loaded;
    bootstrap then skips the mapping step.
    """

    model_config = ConfigDict(frozen=True)

    index_name: str = Field(description="Target index name")
    document_type: str = Field(description="Logical document type name")
    mapping: bytes | None = Field(default=None, description="Field mapping as raw JSON bytes")
