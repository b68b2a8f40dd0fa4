"""Provider store access: fetch-and-normalize, listing creation, prefill.

``ProviderDirectory`` holds the in-memory snapshot a browse page filters.
Each page request builds its own directory and refreshes it once; the
snapshot is never synchronized incrementally with the store.

Store calls go through the synchronous Supabase client and are run in a
worker thread so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from supabase import Client

from services_finder.core.config import settings
from services_finder.core.constants import (
    FETCH_FAILED_MESSAGE,
    LISTING_CREATED_MESSAGE,
    LISTING_FAILED_MESSAGE,
    LOGIN_PATH,
    NEGATIVE_EXPERIENCE_MESSAGE,
    SESSION_EXPIRED_MESSAGE,
)
from pydantic import ValidationError

from services_finder.core.errors import (
    AuthRequiredError,
    ListingSubmissionError,
    ListingValidationError,
    store_error_message,
)
from services_finder.db.supabase import create_user_client, get_supabase
from services_finder.models.auth import Session
from services_finder.models.notification import Notification
from services_finder.models.provider import (
    ContactInfo,
    ListingForm,
    Provider,
    ProviderCreate,
)
from services_finder.services.filtering import FilterCriteria, filter_providers

logger = logging.getLogger(__name__)


def _or_default(row: dict[str, Any], key: str, default: Any) -> Any:
    value = row.get(key)
    return default if value is None else value


def normalize_provider_row(row: dict[str, Any]) -> Provider:
    """Map a raw ``workers`` row to a fully-defaulted ``Provider``.

    Nullable columns get type-appropriate defaults: 0 experience, empty
    description, 0.0 rating, 0 ratings, inactive.
    A row missing a required column raises ``KeyError`` or
    ``ValidationError``; ``ProviderDirectory.refresh`` skips such rows.
    """
    return Provider(
        id=str(row["id"]),
        full_name=row["full_name"],
        email=row["email"],
        phone=row["phone"],
        city=row["city"],
        occupation=row["occupation"],
        experience=_or_default(row, "experience", 0),
        description=_or_default(row, "description", ""),
        average_rating=float(_or_default(row, "average_rating", 0.0)),
        total_ratings=_or_default(row, "total_ratings", 0),
        is_active=_or_default(row, "is_active", False),
    )


class ProviderDirectory:
    """In-memory snapshot of the providers for one browse page.

    ``refresh`` replaces the snapshot wholesale.  Every call takes a
    sequence number; a response is applied only while its number is still
    the latest issued, so a slow earlier fetch can never overwrite a newer
    one.
    """

    def __init__(self, client: Client | None = None, table: str | None = None) -> None:
        self._client = client
        self._table = table or settings.PROVIDERS_TABLE
        self.providers: list[Provider] = []
        self.notifications: list[Notification] = []
        self._issued = 0
        self._in_flight = 0

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def _fetch_rows(self) -> list[dict[str, Any]]:
        client = self._client or get_supabase()
        result = (
            client.table(self._table)
            .select("*")
            .order("average_rating", desc=True)
            .execute()
        )
        return result.data or []

    def _normalize(self, rows: list[dict[str, Any]]) -> list[Provider]:
        providers: list[Provider] = []
        for row in rows:
            try:
                providers.append(normalize_provider_row(row))
            except (KeyError, ValidationError) as exc:
                logger.warning(
                    "provider_row_skipped",
                    extra={
                        "table": self._table,
                        "provider_id": row.get("id"),
                        "error_message": str(exc),
                    },
                )
        return providers

    async def refresh(self) -> bool:
        """Fetch all providers, best rated first, and replace the snapshot.

        Returns True when this call's result was applied.  On failure the
        previous snapshot is kept and one failure notification is queued.
        Malformed rows are skipped and logged; the rest still load.
        """
        self._issued += 1
        sequence = self._issued
        self._in_flight += 1
        try:
            rows = await asyncio.to_thread(self._fetch_rows)
            providers = self._normalize(rows)
        except Exception as exc:
            logger.error(
                "provider_fetch_failed",
                extra={
                    "table": self._table,
                    "sequence": sequence,
                    "error_message": str(exc),
                },
            )
            if sequence == self._issued:
                self.notifications.append(Notification.error(FETCH_FAILED_MESSAGE))
            return False
        finally:
            self._in_flight -= 1

        if sequence != self._issued:
            logger.debug(
                "provider_fetch_superseded",
                extra={"sequence": sequence, "latest": self._issued},
            )
            return False

        self.providers = providers
        logger.info(
            "provider_fetch_complete",
            extra={"table": self._table, "count": len(providers)},
        )
        return True

    def visible(self, criteria: FilterCriteria) -> list[Provider]:
        """Providers shown under *criteria*; recomputed on every call."""
        return filter_providers(self.providers, criteria)

    def contact_info(self, provider_id: str) -> ContactInfo | None:
        """Contact details of an active provider in the snapshot."""
        for provider in self.providers:
            if provider.id == provider_id and provider.is_active:
                return ContactInfo(
                    provider_id=provider.id,
                    full_name=provider.full_name,
                    phone=provider.phone,
                    email=provider.email,
                )
        return None


def validate_listing(form: ListingForm) -> None:
    """Reject a listing before anything is sent to the store."""
    if form.experience < 0:
        raise ListingValidationError(
            Notification.error(NEGATIVE_EXPERIENCE_MESSAGE, title="Invalid Experience")
        )


async def create_listing(
    form: ListingForm,
    session: Session | None,
    client: Client | None = None,
) -> Notification:
    """Insert one listing owned by the session user.

    The insert runs as the user (their access token), so row-level
    security on the table applies to them.

    Raises
    ------
    AuthRequiredError
        No session, or one without an access token: nothing is validated
        or sent.
    ListingValidationError
        Negative experience: nothing is sent.
    ListingSubmissionError
        The store rejected the insert.  Carries the store's message when it
        supplied one.
    """
    if session is None or not session.access_token:
        raise AuthRequiredError(
            Notification.error(SESSION_EXPIRED_MESSAGE),
            redirect_to=LOGIN_PATH,
        )

    validate_listing(form)

    payload = ProviderCreate(
        user_id=session.user_id,
        full_name=form.full_name,
        email=form.email,
        phone=form.phone,
        city=form.city,
        occupation=form.occupation,
        experience=form.experience,
        description=form.description or None,
    )

    def _insert() -> None:
        store = client or create_user_client(session.access_token)
        store.table(settings.PROVIDERS_TABLE).insert(
            [payload.model_dump(mode="json")]
        ).execute()

    try:
        await asyncio.to_thread(_insert)
    except Exception as exc:
        message = store_error_message(exc)
        logger.error(
            "listing_insert_failed",
            extra={"user_id": session.user_id, "error_message": message},
        )
        raise ListingSubmissionError(
            Notification.error(message or LISTING_FAILED_MESSAGE)
        ) from exc

    logger.info(
        "listing_created",
        extra={
            "user_id": session.user_id,
            "occupation": payload.occupation.value,
            "city": payload.city,
        },
    )
    return Notification(title="Success", description=LISTING_CREATED_MESSAGE)


async def fetch_profile_prefill(session: Session, client: Client | None = None) -> dict[str, str]:
    """Return ``email`` / ``full_name`` from the user's profile for the form.

    The profile is read as the user.  Any failure leaves the form empty.
    """
    user_id = session.user_id
    if client is None and not session.access_token:
        return {}

    def _select() -> dict[str, Any] | None:
        store = client or create_user_client(session.access_token)
        result = (
            store.table(settings.PROFILES_TABLE)
            .select("email, full_name")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        rows = result.data or []
        return rows[0] if rows else None

    try:
        profile = await asyncio.to_thread(_select)
    except Exception as exc:
        logger.warning(
            "profile_prefill_failed",
            extra={"user_id": user_id, "error_message": str(exc)},
        )
        return {}

    if not profile:
        return {}
    return {
        "email": profile.get("email") or "",
        "full_name": profile.get("full_name") or "",
    }
