"""
Configuration settings for the Package Tracking Service.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings
from typing import Dict


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Package Tracking Service"
    api_version: str = "v1"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # Database Configuration
    database_url: str = "sqlite+aiosqlite:///./logistics.db"
    db_echo: bool = False
    # Pool sizing only applies to server databases (PostgreSQL etc.)
    db_pool_size: int = 20
    db_max_overflow: int = 10

    # Token signing for the placeholder login endpoint
    secret_key: str = "your-secret-key-change-this-in-production-min-32-chars"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # email -> password, consumed by InMemoryCredentialStore
    demo_credentials: Dict[str, str] = {"user@example.com": "password123"}

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
