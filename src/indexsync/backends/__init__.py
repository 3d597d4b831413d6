"""Index backends — Connectors that apply index maintenance to a search engine.

Built-in backends:
  - opensearch: OpenSearch v2+ via opensearch-py (async)

Implement ``IndexBackend`` to connect another engine.
"""

from indexsync.backends.base import IndexBackend

__all__ = ["IndexBackend"]
