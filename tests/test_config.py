"""Unit tests for configuration, Supabase client, /health and logging."""

import os
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from services_finder.models.enums import OccupationMatch


class TestSettings:
    """Settings loading via pydantic-settings."""

    def test_settings_loads_required_fields(self) -> None:
        """Given env vars are set, settings loads without error."""
        env_overrides = {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_KEY": "test-key-123",
            "OCCUPATION_MATCH": "exact",
        }
        with patch.dict("os.environ", env_overrides, clear=False):
            from services_finder.core.config import Settings

            s = Settings()  # type: ignore[call-arg]
            assert s.SUPABASE_URL == "https://test.supabase.co"
            assert s.SUPABASE_KEY == "test-key-123"
            assert s.OCCUPATION_MATCH is OccupationMatch.exact

    def test_settings_defaults(self) -> None:
        """Given minimal env vars, defaults are applied correctly."""
        env_overrides = {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_KEY": "test-key",
        }
        with patch.dict("os.environ", env_overrides, clear=False):
            from services_finder.core.config import Settings

            s = Settings(_env_file=None)  # type: ignore[call-arg]
            assert s.PROVIDERS_TABLE == "workers"
            assert s.PROFILES_TABLE == "profiles"
            assert s.OCCUPATION_MATCH is OccupationMatch.case_insensitive
            assert s.ALLOWED_ORIGINS == "*"
            assert s.LOG_LEVEL == "INFO"

    def test_missing_backend_credentials_is_fatal(self) -> None:
        """Without the Supabase URL and key the settings cannot load."""
        env = {k: v for k, v in os.environ.items() if k not in ("SUPABASE_URL", "SUPABASE_KEY")}
        with patch.dict("os.environ", env, clear=True):
            from services_finder.core.config import Settings

            with pytest.raises(ValidationError):
                Settings(_env_file=None)  # type: ignore[call-arg]


class TestSupabaseClient:
    """Supabase singleton client."""

    def test_get_supabase_returns_client(self) -> None:
        """Given valid settings, get_supabase returns a Client."""
        mock_client = MagicMock()
        with patch("services_finder.db.supabase.create_client", return_value=mock_client):
            import services_finder.db.supabase as supa_mod

            supa_mod._client = None
            client = supa_mod.get_supabase()
            assert client is mock_client
            supa_mod._client = None

    def test_get_supabase_is_singleton(self) -> None:
        """Given multiple calls, get_supabase returns the same instance."""
        mock_client = MagicMock()
        with patch("services_finder.db.supabase.create_client", return_value=mock_client) as mock_create:
            import services_finder.db.supabase as supa_mod

            supa_mod._client = None
            first = supa_mod.get_supabase()
            second = supa_mod.get_supabase()
            assert first is second
            mock_create.assert_called_once()
            supa_mod._client = None

    def test_user_client_carries_access_token(self) -> None:
        """Given a token, the per-user client authorizes PostgREST with it."""
        mock_client = MagicMock()
        with patch("services_finder.db.supabase.create_client", return_value=mock_client) as mock_create:
            import services_finder.db.supabase as supa_mod

            supa_mod._client = None
            client = supa_mod.create_user_client("token-abc")

            assert client is mock_client
            mock_client.postgrest.auth.assert_called_once_with("token-abc")
            options = mock_create.call_args.args[2]
            assert options.persist_session is False
            assert options.auto_refresh_token is False
            assert supa_mod._client is None

    def test_auth_client_is_not_the_singleton(self) -> None:
        """Given an auth flow, it gets a fresh client every time."""
        with patch("services_finder.db.supabase.create_client", side_effect=[MagicMock(), MagicMock()]):
            import services_finder.db.supabase as supa_mod

            assert supa_mod.create_auth_client() is not supa_mod.create_auth_client()


class TestStoreErrorMessage:
    """Message extraction from Supabase errors."""

    def test_prefers_message_attribute(self) -> None:
        from services_finder.core.errors import store_error_message

        exc = RuntimeError("APIError(code=42501)")
        exc.message = "permission denied"  # type: ignore[attr-defined]
        assert store_error_message(exc) == "permission denied"

    def test_falls_back_to_text_then_default(self) -> None:
        from services_finder.core.errors import store_error_message

        assert store_error_message(RuntimeError("boom"), "fallback") == "boom"
        assert store_error_message(RuntimeError(), "fallback") == "fallback"
        assert store_error_message(RuntimeError()) is None


class TestHealthEndpoint:
    """GET /health returns proper payload."""

    def test_health_connected(self, test_client: TestClient) -> None:
        """Given Supabase is reachable, /health returns database=connected."""
        mock_client = MagicMock()
        with patch("services_finder.routers.health.get_supabase", return_value=mock_client):
            response = test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "connected"
        mock_client.table.assert_called_once_with("workers")

    def test_health_disconnected(self, test_client: TestClient) -> None:
        """Given Supabase is unreachable, /health returns 503 with database=disconnected."""
        with patch(
            "services_finder.routers.health.get_supabase",
            side_effect=Exception("Connection refused"),
        ):
            response = test_client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "degraded"
        assert body["database"] == "disconnected"


class TestLogging:
    """Structured logging configuration."""

    def test_setup_logging_configures_root_logger(self) -> None:
        """Given setup_logging is called, root logger has one structured handler."""
        import logging

        from services_finder.core.logging import setup_logging

        setup_logging()
        setup_logging()
        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert handler.formatter is not None
        fmt = handler.formatter._fmt
        assert "%(levelname)" in fmt
        assert "%(asctime)" in fmt
        assert "%(name)" in fmt
        assert logging.getLogger("httpx").level == logging.WARNING


class TestLifespan:
    """The session context lives exactly as long as the application."""

    def test_session_context_started_and_closed(self, session_context, auth_client) -> None:
        from services_finder.main import app

        subscription = MagicMock()
        auth_client.auth.on_auth_state_change.return_value = subscription

        with patch("services_finder.main.SessionContext", return_value=session_context):
            with TestClient(app):
                assert app.state.session_context is session_context
                auth_client.auth.on_auth_state_change.assert_called_once()
                subscription.unsubscribe.assert_not_called()

        subscription.unsubscribe.assert_called_once()
