"""Configuration — Pydantic settings for the search backend and logging."""

from indexsync.config.settings import BackendSettings, ObservabilitySettings, Settings

__all__ = ["BackendSettings", "ObservabilitySettings", "Settings"]
