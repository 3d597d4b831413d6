"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (when loaded through ``Settings.from_yaml``)
  2. Environment variables (INDEXSYNC_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class BackendSettings(BaseModel):
    """Search backend connection and index configuration.

    The defaults match a single-node development cluster holding the
    name dictionary index.
    """

    cluster_name: str = Field(default="yoruba_name_dictionary", description="Expected backend cluster name")
    host: str = Field(default="localhost", description="Backend host name")
    port: int = Field(default=9200, ge=1, le=65535, description="Backend HTTP port")
    scheme: Literal["http", "https"] = Field(default="http", description="URL scheme used to reach the backend")
    index_name: str = Field(default="nameentry", description="Target index name")
    document_type: str = Field(default="nameentry", description="Logical document type stored in the index")
    mapping_resource: str = Field(
        default="nameentry_mapping.json",
        description="Bundled mapping file under indexsync/resources",
    )
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    verify_certs: bool = Field(default=False, description="Verify TLS certificates")
    request_timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")
    trip_on_failure: bool = Field(
        default=True,
        description="Trip the availability gate when requests cannot reach the backend",
    )
    failure_threshold: int = Field(
        default=3,
        ge=1,
        description="Consecutive connection failures that trip the availability gate",
    )
    reset_timeout: float = Field(
        default=30.0,
        ge=0,
        description="Seconds a tripped gate waits before letting a trial request through",
    )

    @field_validator("index_name", "document_type")
    @classmethod
    def _lowercase_names(cls, v: str) -> str:
        """OpenSearch rejects index names containing uppercase letters."""
        v = v.strip().lower()
        if not v:
            raise ValueError("must not be empty")
        return v

    @property
    def url(self) -> str:
        """Node URL built from scheme, host and port."""
        return f"{self.scheme}://{self.host}:{self.port}"


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the INDEXSYNC_ prefix.
    Nested settings use double underscores: INDEXSYNC_BACKEND__PORT=9201

    Example:
        INDEXSYNC_BACKEND__HOST=search.internal
        INDEXSYNC_BACKEND__INDEX_NAME=nameentry
        INDEXSYNC_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "INDEXSYNC_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="IndexSync", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    backend: BackendSettings = Field(default_factory=BackendSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys set in the YAML file win over environment variables; anything
        the file leaves out still comes from the environment or defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
