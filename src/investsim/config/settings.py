"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory."""
    return Path.home() / ".investsim"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INVESTSIM_",
    )

    app_name: str = "InvestSim"
    app_version: str = "0.1.0"

    # Data directory (SQLite database lives here unless database_url is set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None

    log_level: str = "INFO"
    # Optional file that receives a copy of the application log
    log_file: Optional[Path] = None

    # Quote lookup
    quote_provider: Literal["listings", "stub", "yahoo"] = "listings"
    quote_cache_ttl_seconds: int = 60
    quote_fetch_timeout_seconds: float = 10.0

    # Populate market listings on startup when the table is empty
    seed_market_listings: bool = True

    market_timezone: str = "Asia/Kolkata"

    # Symbol recorded on deposit trades
    cash_symbol: str = "CASH"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "investsim.db"
        return f"sqlite:///{db_path}"

    def get_export_dir(self) -> Path:
        """Get the export directory for CSV reports."""
        export_dir = self.get_data_dir() / "exports"
        export_dir.mkdir(parents=True, exist_ok=True)
        return export_dir


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
