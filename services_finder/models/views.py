"""Response models for the page endpoints.

These are presentation-state schemas, not table mappings: each endpoint
returns what its page needs to render (cards, choices, flags) plus the
notifications to display and an optional redirect target.
"""

from pydantic import BaseModel

from services_finder.models.notification import Notification
from services_finder.models.provider import ContactInfo, Provider


class NavLink(BaseModel):
    """A navbar entry."""
    label: str
    href: str
    method: str = "GET"


class ViewResponse(BaseModel):
    """Fields shared by every page."""
    is_authenticated: bool = False
    nav_links: list[NavLink] = []
    notifications: list[Notification] = []
    redirect_to: str | None = None


# --- Landing ---

class HomeView(ViewResponse):
    """Landing page with the city picker."""
    cities: list[str] = []
    selected_city: str | None = None
    find_services_href: str = "/dashboard"


# --- Browse ---

class FilterState(BaseModel):
    """Criteria currently applied on the browse page."""
    city: str = ""
    occupation: str = ""
    query: str = ""


class EmptyState(BaseModel):
    """Shown when no provider survives the filters."""
    title: str
    hint: str


class DashboardView(ViewResponse):
    """Browse page: filtered provider cards."""
    providers: list[Provider] = []
    criteria: FilterState = FilterState()
    city_options: list[str] = []
    occupation_options: list[str] = []
    is_loading: bool = False
    empty_state: EmptyState | None = None


# --- Listing creation ---

class ListingFormView(ViewResponse):
    """Add-listing form with choices and profile prefill."""
    full_name: str = ""
    email: str = ""
    city_options: list[str] = []
    occupation_options: list[str] = []


# --- Auth pages ---

class ForgotPasswordView(ViewResponse):
    """Outcome of a password-reset request."""
    email_sent: bool = False


class NotFoundView(ViewResponse):
    """Fallback for unknown routes."""
    path: str
    message: str
    home_href: str = "/"


class ContactView(ViewResponse):
    """Booking details for one provider card."""
    contact: ContactInfo | None = None


class AuthView(ViewResponse):
    """Outcome of a sign-in, sign-up or sign-out."""
    access_token: str | None = None
    refresh_token: str | None = None
