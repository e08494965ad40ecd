"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseConfig(BaseSettings):
    """Database connection configuration."""

    model_config = {"env_prefix": "LANDSCORE_DB_"}

    database_url: str | None = None
    echo: bool = False
    pool_size: int = 5


class QueryConfig(BaseSettings):
    """Parcel query engine limits and defaults."""

    model_config = {"env_prefix": "LANDSCORE_QUERY_"}

    admission_cap: int = 500
    default_search_limit: int = 100
    max_search_limit: int = 500
    default_radius_meters: float = 1000.0
    default_nearby_limit: int = 20
    srid: int = 4326


class AuthConfig(BaseSettings):
    """Authentication configuration."""

    model_config = {"env_prefix": "LANDSCORE_AUTH_"}

    fixtures_path: str = "config/auth_fixtures.yml"


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "LANDSCORE_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:3001"]
    )

    db: DatabaseConfig = Field(default_factory=DatabaseConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
