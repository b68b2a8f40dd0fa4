"""Shared test fixtures.

Provides Supabase table mocks, a ``SessionContext`` backed by a mock
Supabase client, and a ``test_client`` for FastAPI whose lifespan uses
that context.
"""

import os
from collections.abc import Generator
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

from services_finder.models.auth import Session  # noqa: E402
from services_finder.services.session import SessionContext  # noqa: E402


def chainable_table_mock(data: list[dict[str, Any]] | None = None) -> MagicMock:
    """Return a table mock that supports fluent chaining."""
    m = MagicMock()
    for method in ("select", "insert", "eq", "limit", "order"):
        getattr(m, method).return_value = m
    m.execute.return_value = MagicMock(data=data if data is not None else [])
    return m


def worker_row(**overrides: Any) -> dict[str, Any]:
    """A raw ``workers`` row as PostgREST returns it."""
    row: dict[str, Any] = {
        "id": "w-1",
        "user_id": "u-1",
        "full_name": "Raj Kumar",
        "email": "raj@example.com",
        "phone": "+91 90000 00001",
        "city": "Guntur",
        "occupation": "plumber",
        "experience": 5,
        "description": "Leak repairs and bathroom fittings",
        "average_rating": 4.5,
        "total_ratings": 12,
        "is_active": True,
    }
    row.update(overrides)
    return row


def auth_session(user_id: str = "user-123", email: str = "raj@example.com") -> SimpleNamespace:
    """Shape of a Supabase auth session."""
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email),
        access_token="jwt-token",
        refresh_token="refresh-token",
    )


@pytest.fixture()
def mock_supabase() -> Generator[MagicMock, None, None]:
    """Patch the provider service's shared and per-user clients with one mock."""
    mock_client = MagicMock()
    mock_client.table.return_value = chainable_table_mock()
    with patch(
        "services_finder.services.providers.get_supabase", return_value=mock_client
    ), patch(
        "services_finder.services.providers.create_user_client", return_value=mock_client
    ):
        yield mock_client


@pytest.fixture()
def auth_client() -> Generator[MagicMock, None, None]:
    """Mock Supabase client that rejects every bearer token.

    The auth flows' throwaway clients are patched to the same mock.
    """
    client = MagicMock()
    client.auth.get_user.return_value = None
    with patch("services_finder.services.auth.create_auth_client", return_value=client):
        yield client


@pytest.fixture()
def session_context(auth_client: MagicMock) -> SessionContext:
    return SessionContext(client=auth_client)


@pytest.fixture()
def signed_in() -> Session:
    return Session(user_id="user-123", email="raj@example.com", access_token="jwt-token")


@pytest.fixture()
def test_client(session_context: SessionContext) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient wired to ``session_context``."""
    from services_finder.main import app

    with patch("services_finder.main.SessionContext", return_value=session_context):
        with TestClient(app) as client:
            yield client
    app.dependency_overrides.clear()


@pytest.fixture()
def authenticated_client(
    test_client: TestClient, signed_in: Session
) -> Generator[TestClient, None, None]:
    """TestClient whose requests resolve to ``signed_in``."""
    from services_finder.main import app
    from services_finder.routers.deps import get_current_session

    app.dependency_overrides[get_current_session] = lambda: signed_in
    yield test_client
    app.dependency_overrides.pop(get_current_session, None)
