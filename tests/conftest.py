"""Shared fixtures for the GoFast test suite."""

from unittest.mock import MagicMock, patch

import pytest

from gofast.config import get_settings
from gofast.api.middleware.rate_limit import limiter
from gofast.services.auth_service import AuthService, get_auth_service
from gofast.services.run_generation import get_run_generation_service


SCENARIO_POST = (
    "Saturday Morning Run\n"
    "We meet at Riverside Park in the Back Bay neighborhood. "
    "The route covers 4.5 miles on neighborhood streets. "
    "All paces welcome. "
    "This run finishes with coffee at Tatte Bakery."
)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a throwaway database and reset cached singletons."""
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "gofast.db"))
    monkeypatch.setenv("FIREBASE_PROJECT_ID", "")
    get_settings.cache_clear()
    get_auth_service.cache_clear()
    get_run_generation_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_auth_service.cache_clear()
    get_run_generation_service.cache_clear()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate limit counters."""
    limiter.reset()
    yield


@pytest.fixture
def mock_settings():
    """Create mock settings for token tests."""
    settings = MagicMock()
    settings.jwt_secret_key = "test-secret-key-for-unit-testing-only-32chars"
    settings.jwt_algorithm = "HS256"
    settings.firebase_project_id = ""
    settings.firebase_jwks_url = "https://example.invalid/jwks"
    return settings


@pytest.fixture
def auth_service(mock_settings):
    """Create AuthService with mock settings."""
    with patch("gofast.services.auth_service.get_settings", return_value=mock_settings):
        return AuthService()


@pytest.fixture
def scenario_post():
    return SCENARIO_POST
