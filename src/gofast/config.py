"""Configuration settings for the GoFast run draft service."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/gofast/config.py
# .parent.parent.parent = repository root
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Run club store
    database_path: Path | None = None

    # ID token verification. When firebase_project_id is set, tokens are
    # verified as Firebase ID tokens (RS256); otherwise as locally issued HS256 tokens.
    jwt_secret_key: str = "gofast-local-development-secret-change-me"
    jwt_algorithm: str = "HS256"
    firebase_project_id: str = ""
    firebase_jwks_url: str = (
        "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"
    )

    # Extraction endpoint
    ai_generate_rate_limit: str = "30/minute"
    max_source_chars: int = 20000

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.database_path is None:
            self.database_path = PROJECT_ROOT / "data" / "gofast.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
