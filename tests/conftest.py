"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Test settings (no .env, static token, shared secret)
- Test client (FastAPI TestClient) with the feed service overridable
- Sample task data

Builders and fakes live in fakes.py.
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fakes import make_settings, make_task
from todo_ics.core.config import Settings
from todo_ics.main import create_app


# ---------------------------------------------------------------------------
# SETTINGS FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def test_settings() -> Settings:
    """Settings with a shared secret and a static access token."""
    return make_settings()


@pytest.fixture
def open_settings() -> Settings:
    """Settings with no shared secret (feed is unauthenticated)."""
    return make_settings(ICS_TOKEN="")


# ---------------------------------------------------------------------------
# APP FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Create a test client for the secret-protected app.

    Tests override todo_ics.deps.get_feed_service on client.app to control
    what the pipeline does.
    """
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def open_client(open_settings: Settings) -> Generator[TestClient, None, None]:
    """Test client for an app with no shared secret configured."""
    open_app = create_app(open_settings)
    with TestClient(open_app) as test_client:
        yield test_client

    open_app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# TASK FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def rent_task() -> dict:
    return make_task(
        "abc",
        title="Pay rent",
        due="2024-01-01T00:00:00",
        categories=["bills"],
    )
