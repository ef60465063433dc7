# app/config.py
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "product-inventory"
    host: str = "127.0.0.1"
    port: int = 8085
    api_base_url: str = "http://127.0.0.1:8085"
    request_timeout: float = 10.0
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    currency_symbol: str = "₱"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
