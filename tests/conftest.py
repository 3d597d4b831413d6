"""Shared test fixtures and configuration."""

from __future__ import annotations

import json
from collections import Counter

import pytest

from indexsync.backends.base import IndexBackend
from indexsync.config.settings import BackendSettings, Settings
from indexsync.core.gate import AvailabilityGate
from indexsync.core.synchronizer import IndexSynchronizer
from indexsync.models.document import IndexDescriptor
from indexsync.models.record import NameEntry


class FakeIndexBackend(IndexBackend):
    """In-memory backend that records how often each operation was called.

    ``documents`` maps ``(index, doc_id)`` to the decoded JSON body.
    Set ``fail_on`` to an operation name to make that call raise ``fail_with``.
    """

    def __init__(self, nodes: set[str] | None = None, indices: set[str] | None = None) -> None:
        self.nodes = set(nodes) if nodes is not None else {"node-1"}
        self.indices = set(indices or ())
        self.mappings: dict[str, bytes] = {}
        self.documents: dict[tuple[str, str], dict] = {}
        self.calls: Counter[str] = Counter()
        self.fail_on: str | None = None
        self.fail_with: type[Exception] = RuntimeError
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    def _record(self, operation: str) -> None:
        self.calls[operation] += 1
        if self.fail_on == operation:
            raise self.fail_with(f"{operation} exploded")

    @property
    def request_calls(self) -> int:
        return sum(n for op, n in self.calls.items() if op not in ("probe", "close"))

    async def probe(self) -> set[str]:
        self._record("probe")
        return set(self.nodes)

    async def index_exists(self, index: str) -> bool:
        self._record("index_exists")
        return index in self.indices

    async def create_index(self, index: str) -> bool:
        self._record("create_index")
        self.indices.add(index)
        return True

    async def put_mapping(self, index: str, doc_type: str, mapping: bytes) -> bool:
        self._record("put_mapping")
        self.mappings[index] = mapping
        return True

    async def upsert_document(self, index: str, doc_type: str, doc_id: str, payload: bytes) -> bool:
        self._record("upsert_document")
        self.documents[(index, doc_id)] = json.loads(payload)
        return True

    async def delete_document(self, index: str, doc_type: str, doc_id: str) -> bool:
        self._record("delete_document")
        return self.documents.pop((index, doc_id), None) is not None

    async def close(self) -> None:
        self.calls["close"] += 1
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        backend=BackendSettings(index_name="widgets", document_type="widget"),
    )


@pytest.fixture
def fake_backend() -> FakeIndexBackend:
    return FakeIndexBackend()


@pytest.fixture
def descriptor() -> IndexDescriptor:
    return IndexDescriptor(index_name="widgets", document_type="widget", mapping=b'{"properties": {}}')


@pytest.fixture
def open_gate() -> AvailabilityGate:
    gate = AvailabilityGate()
    gate.mark_available({"node-1"})
    return gate


@pytest.fixture
def synchronizer(
    fake_backend: FakeIndexBackend,
    open_gate: AvailabilityGate,
    descriptor: IndexDescriptor,
) -> IndexSynchronizer:
    return IndexSynchronizer(fake_backend, open_gate, descriptor)


@pytest.fixture
def sample_entry() -> NameEntry:
    """Create a sample dictionary entry."""
    return NameEntry(
        name="Adewale",
        meaning="The crown has come home",
        morphology="adé-wá-ilé",
        etymology=[{"part": "adé", "meaning": "crown"}, {"part": "wálé", "meaning": "come home"}],
        geo_location=["Oyo", "Lagos"],
        variants=["Wale"],
    )


@pytest.fixture
def make_backend():
    """Factory for fake backends with a chosen node set and existing indices."""

    def _make(nodes: set[str] | None = None, indices: set[str] | None = None) -> FakeIndexBackend:
        return FakeIndexBackend(nodes=nodes, indices=indices)

    return _make
