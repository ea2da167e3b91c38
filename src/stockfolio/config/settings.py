"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".stockfolio"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Stockfolio"
    app_version: str = "0.1.0"

    # Data directory (cache and portfolio files live here unless overridden)
    data_dir: Optional[Path] = None
    price_cache_file: Optional[Path] = None
    portfolio_file: Optional[Path] = None
    portfolio_type: str = "flexible"

    # Price source: "stub", "alphavantage" or "yfinance"
    price_source: str = "stub"
    alpha_vantage_api_key: Optional[str] = None
    alpha_vantage_base_url: str = "https://www.alphavantage.co/query"
    request_timeout_seconds: float = 30.0

    # Lookup behavior
    price_lookback_days: int = 4
    price_cache_max_entries: Optional[int] = None
    prefetch_max_workers: int = 4

    log_level: str = "INFO"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_price_cache_path(self) -> Path:
        """Get the price cache file path, deriving from data_dir if not set."""
        if self.price_cache_file:
            return self.price_cache_file
        return self.get_data_dir() / "price_cache.csv"

    def get_portfolio_path(self) -> Path:
        """Get the portfolio file path, deriving from data_dir if not set."""
        if self.portfolio_file:
            return self.portfolio_file
        return self.get_data_dir() / "portfolios.csv"


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
