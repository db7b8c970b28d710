from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="COOKIE_STORE_",
        extra="ignore",
    )

    redis_url: str = "redis://localhost:6379/0"
    store_id: str = "cookie"
    redis_socket_timeout: Optional[float] = None


@lru_cache
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()
