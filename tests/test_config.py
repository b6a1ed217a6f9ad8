"""
Configuration Tests

Run with: pytest tests/test_config.py -v
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from pydantic import ValidationError

from candidates.config import Settings, get_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch, fresh_settings):
    for name in (
        "CANDIDATE_ENHANCER_MODEL", "CANDIDATE_ENHANCER_TIMEOUT",
        "CANDIDATE_ENHANCEMENT_ENABLED", "CANDIDATE_BATCH_MAX_WORKERS", "CANDIDATE_LOG_LEVEL",
        "CANDIDATE_CORS_ORIGINS",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.enhancement_enabled is False
    assert settings.batch_max_workers == 4
    assert settings.enhancer_timeout_seconds == 30.0
    assert settings.log_level == "INFO"
    assert settings.cors_origins == []


def test_environment_overrides(monkeypatch, fresh_settings):
    monkeypatch.setenv("CANDIDATE_ENHANCEMENT_ENABLED", "yes")
    monkeypatch.setenv("CANDIDATE_BATCH_MAX_WORKERS", "8")
    monkeypatch.setenv("CANDIDATE_ENHANCER_TIMEOUT", "2.5")
    monkeypatch.setenv("CANDIDATE_LOG_LEVEL", "debug")
    monkeypatch.setenv("CANDIDATE_CORS_ORIGINS", "http://localhost:8080, https://hr.example.com,,")

    settings = get_settings()

    assert settings.enhancement_enabled is True
    assert settings.batch_max_workers == 8
    assert settings.enhancer_timeout_seconds == 2.5
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://localhost:8080", "https://hr.example.com"]


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        Settings(batch_max_workers=0)
    with pytest.raises(ValidationError):
        Settings(enhancer_timeout_seconds=0)
