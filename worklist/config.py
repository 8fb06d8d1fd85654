"""
Configuration settings for the worklist package.

Uses Pydantic Settings to load environment variables for logging, the
worklist query defaults, the remote data source, and the email notification
service used by the segment calculator.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Worklist defaults
    page_size: int = Field(10, alias="WORKLIST_PAGE_SIZE", gt=0)
    api_endpoint: Optional[str] = Field(None, alias="WORKLIST_API_ENDPOINT")
    fetch_timeout_seconds: float = Field(10.0, alias="WORKLIST_FETCH_TIMEOUT_SECONDS", gt=0)
    fetch_retries: int = Field(3, alias="WORKLIST_FETCH_RETRIES", ge=1)

    # Email notification (EmailJS)
    emailjs_service_id: Optional[str] = Field(None, alias="EMAILJS_SERVICE_ID")
    emailjs_template_id: Optional[str] = Field(None, alias="EMAILJS_TEMPLATE_ID")
    emailjs_public_key: Optional[str] = Field(None, alias="EMAILJS_PUBLIC_KEY")
    emailjs_api_url: str = Field(
        "https://api.emailjs.com/api/v1.0/email/send", alias="EMAILJS_API_URL"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def email_configured(self) -> bool:
        return bool(
            self.emailjs_service_id and self.emailjs_template_id and self.emailjs_public_key
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
