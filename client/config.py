"""Client configuration, read from ``NOTES_CLIENT_*`` environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NOTES_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(default="http://localhost:3001", description="Base URL of the API")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    error_auto_close_delay: float = Field(
        default=5.0, ge=0, description="Seconds before an error banner hides itself"
    )
    page_limit: int = Field(default=50, ge=1, description="Page size used when loading lists")


client_settings = ClientSettings()

__all__ = ["ClientSettings", "client_settings"]
