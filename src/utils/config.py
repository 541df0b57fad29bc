"""Configuration management for the Pantry Chef recipe service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from pathlib import Path

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API Key: optional. Present -> AI generator, absent -> deterministic fallback recipe
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "").strip()
        # Default: gemini-2.5-flash (fast, cost-effective, good at structured JSON)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Temperature for dishes classified as complex (lower = less drift from technique)
        self.TEMPERATURE_COMPLEX: float = float(os.getenv("TEMPERATURE_COMPLEX", "0.5"))
        # Temperature for everything else
        self.TEMPERATURE_DEFAULT: float = float(os.getenv("TEMPERATURE_DEFAULT", "0.6"))
        # Max Output Tokens: 20-40 step recipes need room, 4096 is sufficient
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "4096"))

        # Share links: origin used when the caller has no runtime origin of its own
        self.BASE_URL: str = os.getenv("BASE_URL", "").rstrip("/")
        # Query parameter carrying the compressed id-list token (scheme A)
        self.SHARE_PARAM: str = os.getenv("SHARE_PARAM", "pantry")
        # Query parameter carrying the url-encoded boolean map (scheme B, legacy links)
        self.LEGACY_SHARE_PARAM: str = os.getenv("LEGACY_SHARE_PARAM", "share")

        # Local pantry slot (one JSON file, one key)
        self.PANTRY_STORE_PATH: Path = Path(
            os.getenv("PANTRY_STORE_PATH", str(Path.home() / ".pantry_chef" / "pantry.json"))
        ).expanduser()
        self.PANTRY_STORE_KEY: str = os.getenv("PANTRY_STORE_KEY", "pantry")

        # Server Port
        self.PORT: int = int(os.getenv("PORT", "7777"))
        # CORS: comma-separated list of UI origins allowed to call the API
        self.CORS_ORIGINS: list[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ]

        # Logging (read again by the logger itself; kept here for validation)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_TYPE: str = os.getenv("LOG_TYPE", "text").lower()

    @property
    def has_ai_credentials(self) -> bool:
        """True when a Gemini credential is configured."""
        return bool(self.GEMINI_API_KEY)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of range or inconsistent.
        """
        for name in ("TEMPERATURE_COMPLEX", "TEMPERATURE_DEFAULT"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ValueError(f"{name} must be between 0.0 and 1.0, got: {value}")
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if not (1 <= self.PORT <= 65535):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")
        if self.LOG_TYPE not in ("text", "json"):
            raise ValueError(f"LOG_TYPE must be 'text' or 'json', got: {self.LOG_TYPE}")
        if not self.SHARE_PARAM:
            raise ValueError("SHARE_PARAM must not be empty")
        if self.SHARE_PARAM == self.LEGACY_SHARE_PARAM:
            raise ValueError(
                f"SHARE_PARAM and LEGACY_SHARE_PARAM must differ, both are: {self.SHARE_PARAM}"
            )


# Create module-level config instance and validate immediately
config = Config()
config.validate()
