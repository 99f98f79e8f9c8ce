from datetime import datetime, timezone
from typing import List, Literal

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from miniblog.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required: there is no sensible default store to fall back to.
    DATABASE_URL: str

    FRONTEND_URL: str = "http://localhost:3000"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    ENVIRONMENT: str = "development"

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["console", "json"] = "console"

    PROJECT_NAME: str = "Blog API"
    PROJECT_INFO: str = "REST API for creating, listing, editing and deleting posts"
    PROJECT_VERSION: str = "1.0.0"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def frontend_origins(self) -> List[str]:
        """Raw comma separated FRONTEND_URL entries, unfiltered."""
        return self.FRONTEND_URL.split(",")

    def get_now(self) -> datetime:
        """Get the current time in UTC."""
        return datetime.now(timezone.utc)


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    BLOG_API_URL: str = "http://localhost:5000/api"


def load_settings(**overrides) -> Settings:
    """Build the server settings, failing loudly when the store is not configured."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [
            ".".join(str(part) for part in error["loc"])
            for error in e.errors()
            if error["type"] == "missing"
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            ) from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e
