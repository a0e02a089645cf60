from pathlib import Path
from typing import ClassVar, Literal

from fastapi import Request
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False

    # Listener settings
    HOST: str = "127.0.0.1"
    PORT: int = Field(default=3000, ge=1, le=65535)

    # Fixed route the OAuth provider redirects to (not read from the environment)
    CALLBACK_PATH: ClassVar[str] = "/auth/callback"

    # Page copy
    SERVICE_NAME: str = "Google MCP Server"
    COMPLETION_TOOL: str = "oauth_complete"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_JSON: bool = True

    # Time allowed for in-flight responses after an interrupt
    SHUTDOWN_TIMEOUT_SECONDS: float = 5.0

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalise_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    def base_url(self) -> str:
        """URL the operator's browser reaches the server on."""
        return f"http://localhost:{self.PORT}"

    def callback_url(self) -> str:
        """Redirect URI to register with the OAuth provider."""
        return f"{self.base_url()}{self.CALLBACK_PATH}"


settings = Settings()


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the app was created with."""
    return request.app.state.settings
