"""Configuration management for AVD Business Case."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Database
    database_path: str = Field(
        default="~/.avd-business-case/scenarios.db",
        description="Path to SQLite database file for saved scenarios",
    )

    # Rate table
    rate_table_path: str = Field(
        default="",
        description="JSON file overriding the built-in rate table (empty = defaults)",
    )

    # Business case defaults
    default_time_horizon: int = Field(
        default=3,
        description="Default TCO/ROI analysis period in years (1, 3 or 5)",
    )
    default_user_profile: str = Field(
        default="medium",
        description="Default workload profile (light, medium, heavy, power)",
    )
    default_storage_type: str = Field(
        default="premiumSSD",
        description="Default storage type (standardSSD, premiumSSD)",
    )
    default_storage_per_user_gb: float = Field(
        default=100,
        description="Default profile storage per user in GB",
    )

    @property
    def db_path(self) -> Path:
        """Get resolved database path."""
        path = Path(self.database_path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def rate_table_file(self) -> Path | None:
        """Get resolved rate table override path, if one is configured."""
        if not self.rate_table_path or not self.rate_table_path.strip():
            return None
        return Path(self.rate_table_path).expanduser()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
