# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides sample documents, tokens and a TestClient
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB", "restaurants_test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

RESTAURANT_ID = "5f8d0d55b54764421b7156c3"
MISSING_ID = "5f8d0d55b54764421b7156ff"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """
    TestClient for the app.

    Not used as a context manager, so the lifespan (MongoDB init) never runs.
    """
    from app.main import app
    return TestClient(app)


@pytest.fixture
def restaurant_body():
    """A valid create body."""
    return {
        "name": "Fratelli Fresh",
        "suburb": "Sydney",
        "cuisine": ["Italian", "Pizza"],
        "location": {"type": "Point", "coordinates": [151.207, -33.873]},
        "address": "11 Bridge St, Sydney NSW 2000",
    }


@pytest.fixture
def sample_restaurant(restaurant_body):
    """A restaurant as the service layer returns it."""
    return {
        "id": RESTAURANT_ID,
        **restaurant_body,
        "description": None,
        "ratingsAverage": 4.5,
        "ratingsQuantity": 0,
        "owner": "user-staff",
        "createdAt": "2024-01-15T10:30:00Z",
    }


@pytest.fixture
def make_token():
    """Factory for signed access tokens."""
    from app.auth import create_access_token

    def _make(role: str = "user", user_id: str | None = None, **kwargs) -> str:
        return create_access_token(user_id or f"user-{role}", role=role, **kwargs)

    return _make


@pytest.fixture
def auth_header(make_token):
    """Factory for Authorization headers."""
    def _header(role: str = "user", **kwargs) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(role, **kwargs)}"}

    return _header


@pytest.fixture
def mock_restaurant_service():
    """RestaurantService as seen by the restaurant router, every method an AsyncMock."""
    with patch("app.routers.restaurants.RestaurantService") as mock:
        for name in (
            "list_restaurants",
            "get_restaurant",
            "create_restaurant",
            "update_restaurant",
            "delete_restaurant",
            "find_within",
            "get_distances",
            "stats_by_suburb",
            "stats_by_cuisine",
        ):
            setattr(mock, name, AsyncMock())
        yield mock


@pytest.fixture
def mock_review_service():
    """ReviewService as seen by the review router."""
    with patch("app.routers.reviews.ReviewService") as mock:
        mock.list_reviews = AsyncMock()
        mock.create_review = AsyncMock()
        yield mock
