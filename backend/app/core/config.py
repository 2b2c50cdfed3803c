import json
from typing import Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _parse_cors_origins(v: Union[str, list[str]]) -> list[str]:
    """Parse CORS_ORIGINS from env: JSON array, comma-separated, or single URL."""
    if isinstance(v, list):
        return [str(x).strip() for x in v if x]
    s = str(v).strip()
    if not s:
        return []
    if s.startswith("["):
        try:
            return [x.strip() for x in json.loads(s) if x]
        except json.JSONDecodeError:
            pass
    return [x.strip() for x in s.split(",") if x.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Firebase ──────────────────────────────────────────────────────────────
    # Service-account JSON. If empty, application default credentials are used.
    FIREBASE_PROJECT_ID: str | None = None
    FIREBASE_CREDENTIALS_FILE: str | None = None
    CHECK_REVOKED_TOKENS: bool = False

    # ── Password sign-in (Identity Toolkit REST) ──────────────────────────────
    # If empty, POST /login always fails with 400.
    FIREBASE_WEB_API_KEY: str = ""
    IDENTITY_TOOLKIT_URL: str = "https://identitytoolkit.googleapis.com/v1"
    IDENTITY_TIMEOUT_SECONDS: float = 10.0

    # ── Watchlist ─────────────────────────────────────────────────────────────
    WATCHLIST_SEED_SIZE: int = 2
    WATCHLIST_SEED_BOOKMARK: int = 0
    # Keep entries whose movie no longer exists (returned with movie=null)
    WATCHLIST_KEEP_UNRESOLVED: bool = False

    # ── Server ────────────────────────────────────────────────────────────────
    PORT: int = 8000  # App Runner / Cloud Run inject $PORT

    # ── CORS ──────────────────────────────────────────────────────────────────
    # Env: comma-separated (https://a.com,https://b.com) or JSON ["https://a.com"]
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors(cls, v: object) -> list[str]:
        if v is None:
            return []
        return _parse_cors_origins(v)

    # ── App ───────────────────────────────────────────────────────────────────
    APP_ENV: str = "development"  # development | production
    ENABLE_DOCS: bool = True  # Set to False to disable /docs in production
    LOG_LEVEL: str = "INFO"

    @property
    def is_dev(self) -> bool:
        return self.APP_ENV == "development"


settings = Settings()
