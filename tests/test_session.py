"""Unit tests for per-request session resolution and auth events."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

from conftest import auth_session
from services_finder.models.auth import Session
from services_finder.services.session import SessionContext, to_session


class TestToSession:
    def test_none(self) -> None:
        assert to_session(None) is None

    def test_session_without_user(self) -> None:
        assert to_session(SimpleNamespace(user=None)) is None

    def test_maps_user_and_tokens(self) -> None:
        session = to_session(auth_session())
        assert session == Session(
            user_id="user-123",
            email="raj@example.com",
            access_token="jwt-token",
            refresh_token="refresh-token",
        )


class TestLifecycle:
    def test_start_subscribes_without_reading_a_session(self, auth_client: MagicMock) -> None:
        context = SessionContext(client=auth_client)

        context.start()

        auth_client.auth.on_auth_state_change.assert_called_once()
        auth_client.auth.get_session.assert_not_called()

    def test_close_unsubscribes(self, auth_client: MagicMock) -> None:
        subscription = MagicMock()
        auth_client.auth.on_auth_state_change.return_value = subscription
        context = SessionContext(client=auth_client)
        context.start()

        context.close()
        context.close()

        subscription.unsubscribe.assert_called_once()


class TestChangeNotifications:
    def _start(self, auth_client: MagicMock) -> tuple[SessionContext, object]:
        context = SessionContext(client=auth_client)
        context.start()
        callback = auth_client.auth.on_auth_state_change.call_args.args[0]
        return context, callback

    def test_sign_in_event_reaches_listeners(self, auth_client: MagicMock) -> None:
        context, callback = self._start(auth_client)
        seen: list[Session | None] = []
        context.subscribe(seen.append)

        callback("SIGNED_IN", auth_session())

        assert [s.user_id if s else None for s in seen] == ["user-123"]

    def test_sign_out_event(self, auth_client: MagicMock) -> None:
        context, callback = self._start(auth_client)
        seen: list[Session | None] = []
        context.subscribe(seen.append)

        callback("SIGNED_OUT", None)

        assert seen == [None]

    def test_token_refresh_does_not_notify(self, auth_client: MagicMock) -> None:
        context, callback = self._start(auth_client)
        seen: list[Session | None] = []
        context.subscribe(seen.append)

        callback("TOKEN_REFRESHED", auth_session())

        assert seen == []

    def test_publish_fans_out(self, session_context: SessionContext, signed_in: Session) -> None:
        first: list[Session | None] = []
        second: list[Session | None] = []
        session_context.subscribe(first.append)
        session_context.subscribe(second.append)

        session_context.publish("SIGNED_IN", signed_in)

        assert first == [signed_in]
        assert second == [signed_in]

    def test_unsubscribed_listener_not_called(self, auth_client: MagicMock) -> None:
        context, callback = self._start(auth_client)
        seen: list[Session | None] = []
        unsubscribe = context.subscribe(seen.append)

        unsubscribe()
        unsubscribe()
        callback("SIGNED_IN", auth_session())

        assert seen == []

    def test_close_drops_listeners(self, auth_client: MagicMock) -> None:
        context, callback = self._start(auth_client)
        seen: list[Session | None] = []
        context.subscribe(seen.append)

        context.close()
        callback("SIGNED_IN", auth_session())

        assert seen == []


class TestResolve:
    def test_without_token_is_anonymous(self, auth_client: MagicMock) -> None:
        context = SessionContext(client=auth_client)
        context.start()
        callback = auth_client.auth.on_auth_state_change.call_args.args[0]
        callback("SIGNED_IN", auth_session())

        assert context.resolve(None) is None
        assert context.resolve("") is None
        auth_client.auth.get_user.assert_not_called()

    def test_valid_bearer_token(self, session_context: SessionContext, auth_client: MagicMock) -> None:
        auth_client.auth.get_user.return_value = SimpleNamespace(
            user=SimpleNamespace(id="other-user", email="lee@example.com")
        )

        session = session_context.resolve("token-abc")

        auth_client.auth.get_user.assert_called_once_with("token-abc")
        assert session == Session(
            user_id="other-user", email="lee@example.com", access_token="token-abc"
        )

    def test_each_token_resolves_to_its_own_user(
        self, session_context: SessionContext, auth_client: MagicMock
    ) -> None:
        users = {
            "token-raj": SimpleNamespace(user=SimpleNamespace(id="raj", email=None)),
            "token-lee": SimpleNamespace(user=SimpleNamespace(id="lee", email=None)),
        }
        auth_client.auth.get_user.side_effect = users.get

        assert session_context.resolve("token-raj").user_id == "raj"
        assert session_context.resolve("token-lee").user_id == "lee"

    def test_rejected_bearer_token(self, session_context: SessionContext, auth_client: MagicMock) -> None:
        auth_client.auth.get_user.side_effect = RuntimeError("invalid JWT")
        assert session_context.resolve("bad") is None

    def test_bearer_token_without_user(self, session_context: SessionContext) -> None:
        assert session_context.resolve("token-abc") is None
