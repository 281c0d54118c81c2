import os
from enum import StrEnum
from functools import lru_cache

import httpx
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"
    STAGING = "staging"


ENVIRONMENT = os.getenv("MOVIEREVIEWS_ENV", Environment.DEVELOPMENT)


class Settings(BaseSettings):
    app_name: str = "Movie Reviews"
    backend_url: str = "http://localhost:8000"
    # seconds
    request_timeout: float = 10.0
    # path to the firebase service account json
    firebase_credentials: str | None = None
    # firebase ID token of the signed in viewer
    session_token: str | None = None
    testing: str | None = None
    environment: str = ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="MOVIEREVIEWS_",
        env_file=".env" if ENVIRONMENT != Environment.PRODUCTION else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def create_http_client(
    settings: Settings, token: str | None = None, **kwargs
) -> httpx.AsyncClient:
    """
    Builds the async client used by every backend client.
    Requests carry the viewer's bearer token when one is given.
    """
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(
        base_url=settings.backend_url,
        timeout=settings.request_timeout,
        headers=headers,
        **kwargs,
    )
