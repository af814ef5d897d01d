"""Root conftest — shared test configuration."""

import os

# Ensure tests never talk to a real database or geocoder
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GEOCODER_API_KEY", "test-geocoder-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-0123456789abcdef0123456")
os.environ.setdefault("LOG_FORMAT", "text")
