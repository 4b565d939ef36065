from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """GGLeap API environments."""

    PRODUCTION = "production"
    BETA = "beta"


BASE_URLS: dict[Environment, str] = {
    Environment.PRODUCTION: "https://api.ggleap.com/production",
    Environment.BETA: "https://api.ggleap.com/beta",
}


def base_url_for(environment: Environment | str) -> str:
    """Resolve the API base URL for an environment name.

    Raises:
        ValueError: If the environment is not one of the known values.
    """
    return BASE_URLS[Environment(environment)]


class Settings(BaseSettings):
    # App
    APP_NAME: str = "ggleap-mcp-server"
    APP_VERSION: str = "1.0.0"

    # GGLeap (optional, enables configuration at startup)
    GGLEAP_AUTH_TOKEN: str = ""
    GGLEAP_ENVIRONMENT: Environment = Environment.PRODUCTION

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

@lru_cache()
def get_settings() -> Settings:
    return Settings()
