"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / ".learnfolio"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEARNFOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Learnfolio"
    app_version: str = "0.1.0"

    # Data directory (all app data lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Quote source
    quote_provider: Literal["stub", "alphavantage", "yahoo"] = "stub"
    alpha_vantage_api_key: Optional[str] = None
    quote_timeout_seconds: float = 15.0
    market_data_cache_ttl_seconds: int = 60

    # Batch refresh pacing (free Alpha Vantage tier allows 5 calls per minute)
    refresh_limiter: Literal["fixed", "sliding_window"] = "fixed"
    refresh_delay_seconds: float = 15.0
    quote_calls_per_minute: int = 5

    # Default seed used when nothing has been saved yet
    default_cash: Decimal = Decimal("2.66")
    seed_symbol: str = "AAPL"
    seed_name: str = "Apple"
    seed_shares: Decimal = Decimal("5")
    seed_buy_price: Decimal = Decimal("150")
    seed_current_price: Decimal = Decimal("180")

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "learnfolio.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
