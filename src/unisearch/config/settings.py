"""Application settings: Pydantic-based configuration with YAML and env var support.

Configuration is loaded from environment variables (UNISEARCH_ prefix), an
optional .env file and defaults. ``Settings.from_yaml`` layers a YAML file
on top; values present in the file take precedence over the environment.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from unisearch.capabilities.matrix import resolve_provider
from unisearch.capabilities.support import DegradationStrategy
from unisearch.exceptions import InvalidQueryError


class StreamingSettings(BaseModel):
    """Pagination parameters for emulated streaming."""

    page_size: int = Field(default=100, ge=1, description="Hits per emulated page")
    max_pages: int | None = Field(default=None, ge=1, description="Page cap (None = built-in default of 10)")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the UNISEARCH_ prefix.
    Nested settings use double underscores.

    Example:
        UNISEARCH_PROVIDER=typesense
        UNISEARCH_DEGRADATION__FACET_FALLBACK=empty
        UNISEARCH_DEGRADATION__STRICT_MODE=true
        UNISEARCH_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "UNISEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    provider: str = Field(default="elasticsearch", description="Default search provider")
    degradation: DegradationStrategy = Field(default_factory=DegradationStrategy)
    streaming: StreamingSettings = Field(default_factory=StreamingSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("provider")
    @classmethod
    def _check_provider(cls, v: str) -> str:
        try:
            return resolve_provider(v)
        except InvalidQueryError as e:
            raise ValueError(str(e)) from e

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values given in the file are passed as init arguments, so they win
        over environment variables; anything the file omits is still read
        from the environment.

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
