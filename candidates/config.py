"""
Runtime configuration for candidate generation.

Values come from the environment; a .env file at the project root is loaded
on import.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / ".env")

from pydantic import BaseModel, Field


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> List[str]:
    """Comma-separated values, blanks dropped"""
    return [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]


class Settings(BaseModel):
    # Enhancement adapter (LLM)
    enhancer_model: str = "claude-sonnet-4-20250514"
    enhancer_temperature: float = 0.6
    enhancer_max_tokens: int = 2048
    enhancer_timeout_seconds: float = Field(default=30.0, gt=0)
    enhancement_enabled: bool = False

    # Batch generation
    batch_max_workers: int = Field(default=4, ge=1)

    # Logging
    log_level: str = "INFO"

    # HTTP API; an empty list disables CORS
    cors_origins: List[str] = Field(default_factory=list)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings from environment variables (cached)"""
    return Settings(
        enhancer_model=os.getenv("CANDIDATE_ENHANCER_MODEL", "claude-sonnet-4-20250514"),
        enhancer_temperature=float(os.getenv("CANDIDATE_ENHANCER_TEMPERATURE", "0.6")),
        enhancer_max_tokens=int(os.getenv("CANDIDATE_ENHANCER_MAX_TOKENS", "2048")),
        enhancer_timeout_seconds=float(os.getenv("CANDIDATE_ENHANCER_TIMEOUT", "30")),
        enhancement_enabled=_env_bool("CANDIDATE_ENHANCEMENT_ENABLED", False),
        batch_max_workers=int(os.getenv("CANDIDATE_BATCH_MAX_WORKERS", "4")),
        log_level=os.getenv("CANDIDATE_LOG_LEVEL", "INFO").upper(),
        cors_origins=_env_list("CANDIDATE_CORS_ORIGINS"),
    )
