"""
Configuration Management for Budget Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see where data is written and which
defaults the application starts with.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Storage backend: 'json' files on disk or 'memory'"
    )
    data_dir: str = Field(
        default=".budget_data",
        description="Directory holding one JSON file per storage key"
    )
    key_prefix: str = Field(
        default="budget-app",
        min_length=1,
        description="Prefix for all storage keys"
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for a file write before giving up"
    )


class IdentitySettings(BaseSettings):
    """Mock identity provider configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_IDENTITY_",
        extra="ignore"
    )

    mock_provider_name: str = Field(
        default="Google User",
        description="Display name returned by the mock provider sign-in"
    )
    mock_provider_email: str = Field(
        default="user@gmail.com",
        description="Email returned by the mock provider sign-in"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    currency_symbol: str = Field(
        default="৳",
        max_length=5,
        description="Symbol prefixed to formatted amounts"
    )
    extra_years: str = Field(
        default="2026,2027,2028,2029,2030",
        description="Comma-separated years offered besides the current year"
    )

    # Sanity limits
    max_expense_amount: float = Field(
        default=10000000.0,
        gt=0,
        description="Largest single expense accepted (for sanity checking)"
    )

    @field_validator('extra_years')
    @classmethod
    def validate_extra_years(cls, v: str) -> str:
        """Every entry must be a four digit year."""
        for part in v.split(","):
            part = part.strip()
            if part and not (part.isdigit() and len(part) == 4):
                raise ValueError(f"Invalid year in extra_years: {part!r}")
        return v

    @property
    def extra_years_list(self) -> list[int]:
        """Get extra years as a list of ints."""
        return [int(part) for part in self.extra_years.split(",") if part.strip()]


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def identity(self) -> IdentitySettings:
        return IdentitySettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "identity", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
