"""Application configuration loaded from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Application settings."""

    # GenAI
    genai_api_key: str | None = None
    analysis_model: str = "gemini-2.5-flash"
    image_model: str = "gemini-2.5-flash-image"
    analysis_max_attempts: int = 2
    image_concurrency: int = 3

    # Uploads
    max_upload_mb: int = 25

    # HTTP
    port: int = 4000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/app.log"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            genai_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GENAI_API_KEY"),
            analysis_model=os.getenv("GEMINI_ANALYSIS_MODEL", "gemini-2.5-flash"),
            image_model=os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
            analysis_max_attempts=_int_env("ANALYSIS_MAX_ATTEMPTS", 2),
            image_concurrency=_int_env("IMAGE_CONCURRENCY", 3),
            max_upload_mb=_int_env("MAX_UPLOAD_MB", 25),
            port=_int_env("PORT", 4000),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE", "logs/app.log"),
        )

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def genai_configured(self) -> bool:
        """Check if a GenAI API key is available."""
        return bool(self.genai_api_key)


# Global settings instance
settings = Settings.from_env()
