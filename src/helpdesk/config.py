from typing import Literal

from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 3100
    debug: bool = False
    auth_secret: str  # Symmetric key for signing session tokens, never logged
    environment: Literal["development", "production"] = "development"
    ticket_scope: Literal["user", "global"] = "user"  # "user": tickets require login and are listed per owner
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "HELPDESK_",
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
