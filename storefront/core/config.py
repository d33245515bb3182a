"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "TinyPaws Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Auth tokens
    secret_key: str = "change-me-in-production"
    token_algorithm: str = "HS256"
    token_ttl_minutes: int = 60 * 24 * 7

    # Cart limits
    default_max_quantity: int = 999

    # Seed data
    seed_catalog: bool = True
    seed_promotions: bool = True

    # CORS
    allowed_origins: list[str] = ["*"]

    # Optional admin bootstrap
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
