"""Configuration using pydantic-settings.

Settings are read from ``FEEDSHEET_*`` environment variables or a ``.env``
file. Only the CLI reads them; library classes take explicit arguments.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from feedsheet.feed import FEED_URL
from feedsheet.transport import DEFAULT_TIMEOUT


class Settings(BaseSettings):
    """CLI settings loaded from environment variables.

    - FEEDSHEET_AUTH: GoogleLogin token; empty means anonymous access
    - FEEDSHEET_ALT: "atom" (XML) or "json" feed format
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDSHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    feed_url: str = FEED_URL
    timeout: int = DEFAULT_TIMEOUT
    log_level: str = "WARNING"
    auth: str = ""
    alt: Literal["atom", "json"] = "atom"


@lru_cache
def get_settings() -> Settings:
    return Settings()
