"""
dictagger Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    VERSION: str = "0.3.0"
    API_VERSION: str = "1"

    # --- Dictionary ---
    # Comma-separated glob patterns, e.g. "dicts/*.tsv,extra/genes.tsv"
    DICTIONARIES: str = os.getenv("DICTAGGER_DICTIONARIES", "")
    MIN_TERM_LENGTH: int = int(os.getenv("DICTAGGER_MIN_TERM_LENGTH", "8"))

    # --- Tagger ---
    CASE_SENSITIVE: bool = _env_bool("DICTAGGER_CASE_SENSITIVE", "false")
    WORD_MATCHING: bool = _env_bool("DICTAGGER_WORD_MATCHING", "true")
    MATCH_KIND: str = os.getenv("DICTAGGER_MATCH_KIND", "leftmostlongest")
    FORMAT: str = os.getenv("DICTAGGER_FORMAT", "iob")

    # --- Server ---
    HOST: str = os.getenv("DICTAGGER_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("DICTAGGER_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("DICTAGGER_CORS_ORIGINS", "*")

    @property
    def dictionary_patterns(self) -> list[str]:
        return [p.strip() for p in self.DICTIONARIES.split(",") if p.strip()]


settings = Settings()
