# app/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    APP_NAME: str = "Product API"
    APP_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # shared secret expected in the x-api-key header on mutating routes
    API_KEY: str = "mysecretapikey"

    CORS_ORIGINS: List[str] = ["*"]
    DEFAULT_PAGE_SIZE: int = 10


@lru_cache()
def get_settings() -> Settings:
    return Settings()
