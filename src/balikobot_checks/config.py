"""Configuration for talking to the Balikobot API.

Settings are read from the environment (and an optional .env file) once,
then turned into an explicit BalikobotApiConfig that callers pass around.
Nothing below the CLI reads the environment directly.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://apiv2.balikobot.cz"
DEFAULT_PARTNER = "cp"
DEFAULT_API_KEY = "YOUR_API_KEY"
DEFAULT_TIMEOUT = 10.0


class BalikobotSettings(BaseSettings):
    """Process environment: API_KEY, PARTNER, BASE_URL, REQUEST_TIMEOUT."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    api_key: str = DEFAULT_API_KEY
    partner: str = DEFAULT_PARTNER
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_TIMEOUT


class BalikobotApiConfig(BaseModel):
    """Resolved connection settings for one test run."""
    model_config = ConfigDict(frozen=True)

    partner: str
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def add_url(self) -> str:
        return f"{self.base_url}/{self.partner}/add"


def create_balikobot_config(
    partner: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    settings: Optional[BalikobotSettings] = None,
) -> BalikobotApiConfig:
    """
    Build the API config.

    Explicit arguments win over settings; settings are loaded from the
    environment only when not supplied.
    """
    if settings is None:
        settings = BalikobotSettings()

    return BalikobotApiConfig(
        partner=partner or settings.partner,
        api_key=api_key or settings.api_key,
        base_url=base_url or settings.base_url,
        timeout=settings.request_timeout,
    )
