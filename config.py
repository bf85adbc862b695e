import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Settings:
    """Application settings loaded from environment variables."""

    # OpenAI-compatible classifier
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY") or None
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o")
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "15"))

    # Sample datasets (fake.csv, real.csv, manual_testing.csv)
    DATA_DIR: str = os.getenv("DATA_DIR", os.getcwd())

    # Guards /update-credential when set
    SERVICE_API_KEY: Optional[str] = os.getenv("SERVICE_API_KEY") or None

    # Rate Limiting
    RATE_LIMIT_PER_MINUTE: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "30"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "console")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")

    # CORS Configuration
    ALLOWED_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv(
            "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000"
        ).split(",")
        if origin.strip()
    ]


class CredentialStore:
    """Holds the classifier credential that /update-credential can replace.

    Lives on ``app.state``; request handlers resolve the credential through a
    dependency and hand it to the detector explicitly.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key or None

    def get(self) -> Optional[str]:
        return self._api_key

    def set(self, api_key: str) -> None:
        self._api_key = api_key or None

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

# Global settings instance
settings = Settings()
