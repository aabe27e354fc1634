"""
Settings for the book catalog.

All values can be overridden via environment variables prefixed with
``BOOKS_`` (``BOOKS_BOOKS_TABLE``, ``BOOKS_STORE_BACKEND``, ...) or a
``.env`` file.

Order of precedence (highest → lowest):
    1. Explicit keyword arguments (tests)
    2. Environment variables
    3. ``.env`` file
    4. Defaults below
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BookCatalogSettings(BaseSettings):
    """Settings shared by the API, the CLI and the service wiring."""

    model_config = SettingsConfigDict(
        env_prefix="BOOKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Server ───────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    debug: bool = Field(default=False, description="Expose exception text in 500 responses")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool | None = Field(default=None, description="JSON logs; None = auto (JSON when not a TTY)")

    # ── API ──────────────────────────────────────────────────────────────
    api_title: str = Field(default="book-catalog API", description="OpenAPI title")
    api_version: str = Field(default="0.3.0", description="OpenAPI version string")
    api_prefix: str = Field(default="", description="URL prefix for all endpoints")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # ── Record store ─────────────────────────────────────────────────────
    store_backend: Literal["dynamodb", "memory"] = "dynamodb"
    region: str = Field(default="eu-west-1", description="AWS region for DynamoDB and Translate")
    dynamodb_endpoint_url: str | None = Field(default=None, description="DynamoDB Local / LocalStack URL")
    books_table: str = "Books"
    cast_table: str = "BookCast"
    cast_role_index: str = Field(default="roleIx", description="Cast index sorted on roleName")

    # ── Identity ─────────────────────────────────────────────────────────
    token_cookie: str = Field(default="token", description="Cookie holding the identity token")

    # ── Translation ──────────────────────────────────────────────────────
    translate_endpoint_url: str | None = Field(default=None, description="Override for AWS Translate")


@lru_cache(maxsize=1)
def get_settings() -> BookCatalogSettings:
    """Cached settings — loaded once per process."""
    return BookCatalogSettings()
