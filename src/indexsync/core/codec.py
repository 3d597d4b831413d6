"""Document codec — Turns a record into the payload and id stored in the index."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from indexsync.core.exceptions import SerializationError
from indexsync.models.document import IndexDocument
from indexsync.models.record import IndexRecord


def document_id(natural_key: Any) -> str:
    """Normalize a natural key into a document id.

    Raises:
        SerializationError: If the key is not a non-blank string.
    """
    if not isinstance(natural_key, str) or not natural_key.strip():
        raise SerializationError(f"Natural key must be a non-empty string, got {natural_key!r}")
    return natural_key.lower()


class DocumentCodec:
    """Encodes records as JSON documents.

    Accepts ``IndexRecord`` models and plain mappings. For mappings the
    natural key is read from ``natural_key_field``.

    Args:
        natural_key_field: Key used for mapping records.
    """

    def __init__(self, natural_key_field: str = "name") -> None:
        self.natural_key_field = natural_key_field

    def to_document(self, record: IndexRecord | Mapping[str, Any]) -> IndexDocument:
        """Serialize ``record`` and derive its document id.

        Raises:
            SerializationError: If the key is missing or a field cannot be
                represented as JSON.
        """
        if isinstance(record, BaseModel):
            key = getattr(record, "natural_key", None)
            try:
                body = record.model_dump(mode="json")
            except Exception as e:
                raise SerializationError(f"Failed to serialize {type(record).__name__}: {e}") from e
        elif isinstance(record, Mapping):
            key = record.get(self.natural_key_field)
            body = dict(record)
        else:
            raise SerializationError(f"Unsupported record type: {type(record).__name__}")

        doc_id = document_id(key)

        try:
            payload = json.dumps(body, ensure_ascii=False, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to encode record '{key}' as JSON: {e}") from e

        return IndexDocument(id=doc_id, payload=payload)
