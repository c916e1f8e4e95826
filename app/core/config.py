"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Server
HOST: str = os.getenv("HOST", "0.0.0.0").strip() or "0.0.0.0"
PORT: int = int(os.getenv("PORT", "3000").strip() or "3000")

# Static front end served at "/"
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
STATIC_DIR: str = os.getenv("STATIC_DIR", "").strip() or str(_PROJECT_ROOT / "public")

# CPSC SaferProducts recall REST API (no key required)
CPSC_ROOT: str = "https://www.saferproducts.gov/RestWebServices/Recall"

# Per-request timeout for each upstream recall query (seconds)
UPSTREAM_TIMEOUT: float = 15.0

# Result paging (single capped page)
DEFAULT_LIMIT: int = 20
MAX_LIMIT: int = 100

# Keywords used when the caller sends no q
DEFAULT_KEYWORD: str = "toy"
DEFAULT_HAZARD_KEYWORD: str = "choking"

# OpenAI (primary summarizer)
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
)

# Gemini (secondary summarizer, used only when OPENAI_API_KEY is not set)
GEMINI_LLM_MODEL: str = (
    os.getenv("GEMINI_LLM_MODEL", "gemini-1.5-flash").strip() or "gemini-1.5-flash"
)
GEMINI_API_ROOT: str = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass(frozen=True)
class LLMCredentials:
    """LLM keys read from the environment. Re-read per request so key changes apply without a restart."""

    openai_api_key: str = ""
    gemini_api_key: str = ""

    @classmethod
    def from_env(cls) -> "LLMCredentials":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
            gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        )

    @property
    def configured(self) -> bool:
        return bool(self.openai_api_key or self.gemini_api_key)
