"""Presentation state for each page.

Builds the response models the routers return: navbar links derived from
the session, the landing city picker, the browse page (fetch, filter,
empty state) and the add-listing form.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from services_finder.core.config import settings
from services_finder.core.constants import (
    ADD_LISTING_PATH,
    AUTH_REQUIRED_MESSAGE,
    CITIES,
    CITY_FILTER_OPTIONS,
    DASHBOARD_PATH,
    EMPTY_STATE_HINT,
    EMPTY_STATE_TITLE,
    HOME_PATH,
    LOGIN_PATH,
    OCCUPATION_FILTER_OPTIONS,
)
from services_finder.core.errors import AuthRequiredError
from services_finder.models.auth import Session
from services_finder.models.enums import Occupation
from services_finder.models.notification import Notification
from services_finder.models.views import (
    ContactView,
    DashboardView,
    EmptyState,
    FilterState,
    HomeView,
    ListingFormView,
    NavLink,
)
from services_finder.services.filtering import FilterCriteria
from services_finder.services.providers import ProviderDirectory, fetch_profile_prefill

logger = logging.getLogger(__name__)


def nav_links(is_authenticated: bool) -> list[NavLink]:
    """Navbar entries for the current authentication state."""
    links = [NavLink(label="Home", href=HOME_PATH)]
    if is_authenticated:
        links += [
            NavLink(label="Dashboard", href=DASHBOARD_PATH),
            NavLink(label="Add Service", href=ADD_LISTING_PATH),
            NavLink(label="Logout", href="/logout", method="POST"),
        ]
    else:
        links += [
            NavLink(label="Login", href=LOGIN_PATH),
            NavLink(label="Register", href="/register"),
        ]
    return links


def dashboard_href(city: str | None = None) -> str:
    """Link to the browse page, pre-selecting *city* when given."""
    if not city:
        return DASHBOARD_PATH
    return f"{DASHBOARD_PATH}?{urlencode({'city': city})}"


def build_home(session: Session | None, city: str | None = None) -> HomeView:
    authenticated = session is not None
    return HomeView(
        is_authenticated=authenticated,
        nav_links=nav_links(authenticated),
        cities=list(CITIES),
        selected_city=city or None,
        find_services_href=dashboard_href(city),
    )


def build_criteria(
    city: str | None = None,
    occupation: str | None = None,
    query: str | None = None,
) -> FilterCriteria:
    """Criteria from query parameters, with the configured occupation mode."""
    return FilterCriteria(
        city=city or "",
        occupation=occupation or "",
        query=query or "",
        occupation_match=settings.OCCUPATION_MATCH,
    )


async def build_dashboard(
    session: Session | None,
    criteria: FilterCriteria,
    directory: ProviderDirectory | None = None,
) -> DashboardView:
    """Fetch the providers and render the browse page for *criteria*."""
    directory = directory or ProviderDirectory()
    await directory.refresh()
    visible = directory.visible(criteria)

    empty_state = None
    if not directory.is_loading and not visible:
        empty_state = EmptyState(title=EMPTY_STATE_TITLE, hint=EMPTY_STATE_HINT)

    authenticated = session is not None
    return DashboardView(
        is_authenticated=authenticated,
        nav_links=nav_links(authenticated),
        notifications=list(directory.notifications),
        providers=visible,
        criteria=FilterState(
            city=criteria.city,
            occupation=criteria.occupation,
            query=criteria.query,
        ),
        city_options=list(CITY_FILTER_OPTIONS),
        occupation_options=list(OCCUPATION_FILTER_OPTIONS),
        is_loading=directory.is_loading,
        empty_state=empty_state,
    )


async def build_contact(
    session: Session | None,
    provider_id: str,
    directory: ProviderDirectory | None = None,
) -> ContactView:
    """Booking details for *provider_id*; ``contact`` is None when unknown."""
    directory = directory or ProviderDirectory()
    await directory.refresh()
    contact = directory.contact_info(provider_id)

    notifications = list(directory.notifications)
    if contact is not None:
        notifications.append(
            Notification(
                title="Contact Information",
                description=(
                    f"Call {contact.phone} or email {contact.email} "
                    "to book this service."
                ),
            )
        )

    authenticated = session is not None
    return ContactView(
        is_authenticated=authenticated,
        nav_links=nav_links(authenticated),
        notifications=notifications,
        contact=contact,
    )


def require_session(session: Session | None) -> Session:
    """Gate for protected pages: no session means a redirect to login."""
    if session is None:
        raise AuthRequiredError(
            Notification.error(AUTH_REQUIRED_MESSAGE, title="Authentication Required"),
            redirect_to=LOGIN_PATH,
        )
    return session


async def build_listing_form(session: Session | None) -> ListingFormView:
    """Add-listing form, pre-filled from the user's profile."""
    session = require_session(session)
    prefill = await fetch_profile_prefill(session)
    return ListingFormView(
        is_authenticated=True,
        nav_links=nav_links(True),
        full_name=prefill.get("full_name", ""),
        email=prefill.get("email", ""),
        city_options=list(CITIES),
        occupation_options=[occupation.value for occupation in Occupation],
    )
