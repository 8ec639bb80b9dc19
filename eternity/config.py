"""
Eternity - Configuration
========================
Settings for the Gemini credential, model and timeouts.
Loads secrets from the project-level .env file.

The orchestrator never reads the environment itself: build an
AnalysisSettings (from_env() or explicitly) and pass it in.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Credential value shipped in sample .env files
PLACEHOLDER_API_KEY = "YOUR_API_KEY"

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 30.0


def is_configured_api_key(api_key: Optional[str]) -> bool:
    """An empty or placeholder key counts as absent."""
    if api_key is None:
        return False
    api_key = api_key.strip()
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY


@dataclass(frozen=True)
class AnalysisSettings:
    """Everything the analysis pipeline needs from its environment."""
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    temperature: float = 0.4
    demo_delay_seconds: float = 0.0
    log_level: str = "INFO"

    @property
    def gemini_configured(self) -> bool:
        return is_configured_api_key(self.gemini_api_key)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "AnalysisSettings":
        """Read settings from the process environment (after loading .env)."""
        load_dotenv(env_file or PROJECT_ROOT / ".env")
        return cls(
            gemini_api_key=(
                os.getenv("GEMINI_API_KEY")
                or os.getenv("API_KEY")
                or os.getenv("GOOGLE_API_KEY")
            ),
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            request_timeout_seconds=float(os.getenv("GEMINI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
            temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.4")),
            demo_delay_seconds=float(os.getenv("DEMO_DELAY_SECONDS", "0")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
