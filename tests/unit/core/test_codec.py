"""Tests for the document codec."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from indexsync.core.codec import DocumentCodec, document_id
from indexsync.core.exceptions import SerializationError
from indexsync.models.record import IndexRecord, NameEntry
from indexsync.models.result import SyncErrorKind


class Product(IndexRecord):
    natural_key_field = "sku"

    sku: str


@pytest.fixture
def codec() -> DocumentCodec:
    return DocumentCodec()


class TestDocumentId:
    def test_lowercases(self) -> None:
        assert document_id("AdeWale") == "adewale"

    def test_keeps_non_ascii(self) -> None:
        assert document_id("Àdìgún") == "àdìgún"

    @pytest.mark.parametrize("key", [None, "", "   ", 42])
    def test_invalid_key_raises(self, key: object) -> None:
        with pytest.raises(SerializationError):
            document_id(key)


class TestModelRecords:
    def test_id_is_lowercased_name(self, codec: DocumentCodec, sample_entry: NameEntry) -> None:
        doc = codec.to_document(sample_entry)
        assert doc.id == "adewale"

    def test_payload_contains_all_fields(self, codec: DocumentCodec, sample_entry: NameEntry) -> None:
        body = json.loads(codec.to_document(sample_entry).payload)
        assert body["name"] == "Adewale"
        assert body["meaning"] == "The crown has come home"
        assert body["geo_location"] == ["Oyo", "Lagos"]
        assert body["etymology"][0] == {"part": "adé", "meaning": "crown"}

    def test_payload_is_utf8_without_escapes(self, codec: DocumentCodec, sample_entry: NameEntry) -> None:
        assert "adé".encode() in codec.to_document(sample_entry).payload

    def test_datetimes_serialized_as_iso(self, codec: DocumentCodec) -> None:
        entry = NameEntry(name="Bola", created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC))
        body = json.loads(codec.to_document(entry).payload)
        assert body["created_at"].startswith("2024-01-02T03:04:05")

    def test_extra_fields_kept_verbatim(self, codec: DocumentCodec) -> None:
        entry = NameEntry(name="Bola", popularity=7)
        body = json.loads(codec.to_document(entry).payload)
        assert body["popularity"] == 7

    def test_custom_natural_key_field(self, codec: DocumentCodec) -> None:
        doc = codec.to_document(Product(sku="WID-9"))
        assert doc.id == "wid-9"

    def test_blank_name_raises(self, codec: DocumentCodec) -> None:
        with pytest.raises(SerializationError) as exc_info:
            codec.to_document(NameEntry(name="  "))
        assert exc_info.value.kind is SyncErrorKind.SERIALIZATION

    def test_record_is_not_mutated(self, codec: DocumentCodec, sample_entry: NameEntry) -> None:
        before = sample_entry.model_dump()
        codec.to_document(sample_entry)
        assert sample_entry.model_dump() == before


class TestMappingRecords:
    def test_dict_record(self, codec: DocumentCodec) -> None:
        doc = codec.to_document({"name": "Acme", "color": "red"})
        assert doc.id == "acme"
        assert json.loads(doc.payload) == {"name": "Acme", "color": "red"}

    def test_custom_key_field(self) -> None:
        doc = DocumentCodec(natural_key_field="slug").to_document({"slug": "Blue-Widget"})
        assert doc.id == "blue-widget"

    def test_missing_key_raises(self, codec: DocumentCodec) -> None:
        with pytest.raises(SerializationError):
            codec.to_document({"color": "red"})

    def test_unserializable_value_raises(self, codec: DocumentCodec) -> None:
        with pytest.raises(SerializationError, match="Acme"):
            codec.to_document({"name": "Acme", "handle": object()})

    def test_unsupported_type_raises(self, codec: DocumentCodec) -> None:
        with pytest.raises(SerializationError, match="Unsupported"):
            codec.to_document(["name", "Acme"])  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_float_raises(self, codec: DocumentCodec, value: float) -> None:
        with pytest.raises(SerializationError, match="Acme"):
            codec.to_document({"name": "Acme", "score": value})
