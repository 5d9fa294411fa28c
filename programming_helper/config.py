from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central configuration for the helper service.

    Values are read from environment variables prefixed with PH_*, e.g.:
      PH_MODEL_NAME, PH_API_BASE_URL, PH_REQUEST_TIMEOUT, PH_MAX_SESSIONS,
      PH_HOST, PH_PORT, PH_LOG_LEVEL

    The model credential is also accepted as plain GEMINI_API_KEY. Leaving it
    unset is not an error: the app starts with every tool disabled.
    """

    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("PH_GEMINI_API_KEY", "GEMINI_API_KEY", "gemini_api_key"),
        description="API key for the hosted Gemini model",
    )
    model_name: str = Field(
        default="gemini-2.0-flash",
        description="Model id used for every generateContent call",
    )
    api_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Generative Language REST API",
    )
    request_timeout: float = Field(
        default=60.0,
        description="Seconds to wait for a single model response",
    )
    session_cookie: str = Field(
        default="ph_session",
        description="Cookie holding the browser session id (one tool shell per session)",
    )
    max_sessions: int = Field(
        default=500,
        ge=1,
        description="Tool shells kept in memory; the least recently used one is dropped past this",
    )
    host: str = Field(default="127.0.0.1", description="Interface scripts/run_server.py binds to")
    port: int = Field(default=8000, ge=1, le=65535, description="Port scripts/run_server.py listens on")
    log_level: str = Field(default="info", description="uvicorn log level for scripts/run_server.py")

    class Config:
        env_prefix = "PH_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
