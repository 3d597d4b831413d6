"""IndexSync — Keeps a full-text search index in step with an application's record store."""

__version__ = "0.1.0"
