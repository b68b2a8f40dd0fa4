"""Supabase client factories.

``get_supabase()`` returns a lazily-initialized, process-wide client that
only ever carries the public anon key: it serves public reads and token
verification and never holds a user session.

User-bound work gets its own short-lived client:

- ``create_auth_client()`` for sign-in / sign-up / sign-out / password
  reset, so a login never lands on the shared client;
- ``create_user_client(access_token)`` for queries that row-level security
  must see as the calling user.
"""

from supabase import Client, create_client
from supabase.client import ClientOptions

from services_finder.core.config import settings

_client: Client | None = None


def _request_options() -> ClientOptions:
    return ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
    )


def get_supabase() -> Client:
    """Return the singleton Supabase client, creating it on first call."""
    global _client
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def create_auth_client() -> Client:
    """A throwaway client for one auth call; its session is never shared."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY, _request_options())


def create_user_client(access_token: str) -> Client:
    """A client whose database requests are authorized as the token's user."""
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY, _request_options())
    client.postgrest.auth(access_token)
    return client
