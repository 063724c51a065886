"""
Readly Backend: Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types and ranges, and exposes a singleton `settings` object.
Who:   Imported by the app factory, the database layer and the entry point.
When:  Loaded once at module import time; checked again during startup.

Connection string:
    The hosted cluster is reached through an SRV URL assembled from two
    credentials (DB_USER, DB_PASS) and the cluster host. MONGODB_URI, when
    set, is used verbatim instead (local development, tests, replica sets).
"""

from typing import List
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments must
    provide the database credentials (or MONGODB_URI).
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_user: str = Field(default="", description="Database user name")
    db_pass: str = Field(default="", description="Database user password")
    db_host: str = Field(
        default="cluster0.mongodb.net",
        description="SRV host name of the hosted MongoDB cluster",
    )
    db_name: str = Field(default="readly", description="Database holding the collections")

    # Full connection string; takes precedence over the credential fields
    mongodb_uri: str = Field(default="", description="Explicit MongoDB connection URL")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated; "*" opens the API to every origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_USER and db_user both work
        "extra": "ignore",
    }

    @property
    def database_url(self) -> str:
        """
        What:  The connection string handed to AsyncMongoClient.
        How:   MONGODB_URI if present, otherwise an SRV URL with the
               credentials percent-encoded (RFC 3986), as pymongo requires
               for user names and passwords containing ':', '/', '@' or '%'.
        """
        if self.mongodb_uri:
            return self.mongodb_uri
        return (
            f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
            f"@{self.db_host}/?retryWrites=true&w=majority"
        )

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the database can be addressed.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises one ValueError listing them.
        """
        errors = []
        if not self.mongodb_uri:
            if not self.db_user:
                errors.append("DB_USER is not set (or provide MONGODB_URI).")
            if not self.db_pass:
                errors.append("DB_PASS is not set (or provide MONGODB_URI).")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
