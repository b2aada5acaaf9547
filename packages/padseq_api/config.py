"""Centralized configuration using Pydantic Settings

All environment variables are managed here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OSC Configuration (SuperDirt-style sampler)
    osc_host: str = "127.0.0.1"
    osc_port: int = 57120
    osc_address: str = "/dirt/play"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Public address share links point at
    public_url: str = "http://localhost:8000/"

    # Address bar sync
    url_sync_debounce_ms: int = 500

    # Idle seconds between SSE heartbeats
    sse_heartbeat_interval: float = 15.0

    # Timing
    frame_rate: float = 60.0
    clock_lookahead: float = 0.05

    debug: bool = False

    @property
    def url_sync_debounce(self) -> float:
        """Debounce delay in seconds"""
        return self.url_sync_debounce_ms / 1000


# Global settings instance
settings = Settings()
