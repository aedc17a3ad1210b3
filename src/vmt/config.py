"""Configuration management using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Console configuration loaded from environment variables.

    Values can also be placed in a `.env` file next to the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # REST backend
    api_base_url: str = Field(default="http://localhost:9000", validation_alias="VMT_API_URL")
    request_timeout: float = Field(default=30.0, validation_alias="VMT_REQUEST_TIMEOUT")

    # Search Configuration
    search_strategy: Literal["fuzzy_range_or", "flat_equality"] = Field(
        default="fuzzy_range_or", validation_alias="VMT_SEARCH_STRATEGY"
    )
    # Total width of the numeric proximity window, centered on the input value
    range_span: float = Field(default=2.0, gt=0, validation_alias="VMT_RANGE_SPAN")
    min_search_name_length: int = Field(
        default=3, ge=1, validation_alias="VMT_MIN_SEARCH_NAME_LENGTH"
    )

    # Form defaults shown before the user touches anything
    default_width: float = Field(default=10, validation_alias="VMT_DEFAULT_WIDTH")
    default_length: float = Field(default=50, validation_alias="VMT_DEFAULT_LENGTH")
    default_draft: float = Field(default=10, validation_alias="VMT_DEFAULT_DRAFT")

    # When False, a new operation is refused while another one is in flight
    allow_concurrent_operations: bool = Field(
        default=False, validation_alias="VMT_ALLOW_CONCURRENT_OPERATIONS"
    )

    log_level: str = Field(default="WARNING", validation_alias="VMT_LOG_LEVEL")

    @computed_field
    @property
    def form_defaults(self) -> dict:
        """Initial values of the search/create form."""
        return {
            "width": self.default_width,
            "length": self.default_length,
            "draft": self.default_draft,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
