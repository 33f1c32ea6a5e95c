"""Root test fixtures shared across all test types.

Environment variables are set before any app import so Settings validates.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
# Lowest bcrypt cost keeps password hashing fast in tests
os.environ.setdefault("BCRYPT_ROUNDS", "4")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.billing.core.config import get_settings
from src.billing.core.logging import clear_request_context

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Request-scoped log context must not leak between tests."""
    clear_request_context()
    yield
    clear_request_context()
