import os

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Ensure we pick up legacy environment variable aliases."""

        super().model_post_init(__context)

        if not self.layerswap_api_key:
            fallback = os.getenv("LS_API_KEY") or os.getenv("LAYERSWAP_KEY")
            if fallback:
                object.__setattr__(self, "layerswap_api_key", fallback)

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Token metadata source
    layerswap_api_key: str = Field(default="", description="LayerSwap API key sent as X-LS-APIKEY")
    layerswap_base_url: str = Field(
        default="https://api.layerswap.io",
        description="Base URL of the LayerSwap networks API",
    )
    token_registry_timeout_seconds: int = Field(
        default=15,
        ge=1,
        description="Timeout for the one-off token metadata fetch",
    )
    enable_token_registry: bool = Field(
        default=True,
        description="Fetch token metadata; when disabled every lookup reports not found",
    )

    # Formatting
    default_network_id: str = Field(
        default="1",
        description="Network selected when the caller does not choose one",
    )
    max_parameter_concurrency: int = Field(
        default=8,
        ge=1,
        description="Maximum parameters of one command formatted concurrently",
    )

    def has_layerswap_key(self) -> bool:
        return bool(self.layerswap_api_key)


# Global settings instance
settings = Settings()
