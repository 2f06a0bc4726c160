"""
openapi_mock.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Select the OpenAPI document and the data store backing the mock.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (`OPENAPI_MOCK_*`), defaults safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="OPENAPI_MOCK_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "openapi-mock"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # The API being mocked (JSON or YAML).
    openapi_document: str = "openapi.yaml"

    # Persistence
    data_store: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./openapi_mock.db"
    database_echo: bool = False

    # Routing: mirrors how resource keys are normalized in the data store.
    case_sensitive_routing: bool = False
    strict_routing: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Routing flags are shared by path matching and data store keys so that
# `/Pets/1/` and `/pets/1` address the same resource unless configured otherwise.
