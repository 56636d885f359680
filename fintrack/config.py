"""Configuration settings for the application."""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_name: str = "Finance Tracker API"
    debug: bool = False
    log_level: str = "INFO"

    # Bearer token signing
    jwt_secret: str = "your-super-secret-jwt-key-change-in-production"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 24 * 60

    # Verified-token cache
    token_cache_ttl_seconds: float = 5 * 60
    token_cache_sweep_interval_seconds: float = 60

    # Load the demo user and sample ledger on startup
    seed_demo_data: bool = True

    cors_origins: List[str] = ["*"]


settings = Settings()
