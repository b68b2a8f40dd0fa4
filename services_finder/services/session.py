"""Per-request sessions and a process-wide auth-event fan-out.

One ``SessionContext`` is created in the application lifespan.  It never
holds a user session: each request is resolved from its own
``Authorization: Bearer <jwt>`` header, verified against Supabase
(``auth.get_user``).  A request without a token is anonymous, whatever
other clients have done.

The context also fans auth events out to in-process listeners.  Events
come from the auth flows in this service (``publish``) and from the
shared client's auth-state stream, followed between ``start()`` and
``close()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from supabase import Client

from services_finder.db.supabase import get_supabase
from services_finder.models.auth import Session

logger = logging.getLogger(__name__)

SessionListener = Callable[[Session | None], None]

# Events that do not change who is signed in.
_QUIET_EVENTS = frozenset({"INITIAL_SESSION", "TOKEN_REFRESHED"})


def to_session(raw: Any) -> Session | None:
    """Convert a Supabase auth session (or ``None``) into a ``Session``."""
    if raw is None or getattr(raw, "user", None) is None:
        return None
    return Session(
        user_id=str(raw.user.id),
        email=getattr(raw.user, "email", None),
        access_token=getattr(raw, "access_token", None),
        refresh_token=getattr(raw, "refresh_token", None),
    )


class SessionContext:
    """Bearer-token resolution plus auth change notifications."""

    def __init__(self, client: Client | None = None) -> None:
        self._client = client
        self._listeners: list[SessionListener] = []
        self._subscription: Any = None

    @property
    def client(self) -> Client:
        return self._client or get_supabase()

    def start(self) -> None:
        """Follow the shared client's auth-state stream."""
        self._subscription = self.client.auth.on_auth_state_change(
            self._on_auth_state_change
        )
        logger.info("session_context_started")

    def close(self) -> None:
        """Release the Supabase subscription and drop all listeners."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
            logger.info("session_context_closed")
        self._listeners.clear()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register *listener*; the returned callable unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: str, session: Session | None) -> None:
        """Tell every listener that *session* signed in or out."""
        logger.info(
            "auth_state_changed",
            extra={
                "auth_event": event,
                "user_id": session.user_id if session else None,
            },
        )
        if event in _QUIET_EVENTS:
            return
        for listener in list(self._listeners):
            listener(session)

    def resolve(self, access_token: str | None = None) -> Session | None:
        """Session for one request.

        Only the request's own bearer token counts.  No token, or one
        Supabase rejects, means "no session".
        """
        if not access_token:
            return None
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as exc:
            logger.warning(
                "bearer_token_rejected",
                extra={"error_message": str(exc)},
            )
            return None
        user = getattr(response, "user", None)
        if user is None:
            return None
        return Session(
            user_id=str(user.id),
            email=getattr(user, "email", None),
            access_token=access_token,
        )

    def _on_auth_state_change(self, event: Any, raw_session: Any) -> None:
        self.publish(str(event), to_session(raw_session))
