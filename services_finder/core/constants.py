"""Application constants.

Contains filter sentinels, the reference city list, and user-facing
notification texts.
"""

from services_finder.models.enums import Occupation

# ---------------------------------------------------------------------------
# Filter sentinels ("no constraint")
# ---------------------------------------------------------------------------
ALL_CITIES: str = "All Cities"
ALL_SERVICES: str = "All Services"

# ---------------------------------------------------------------------------
# Reference cities offered in the city selectors
# A provider's city is free text; this list only feeds the choices.
# ---------------------------------------------------------------------------
CITIES: list[str] = [
    "Kurnool",
    "Nellore",
    "Visakhapatnam",
    "Vijayawada",
    "Guntur",
    "Eluru",
    "Ongole",
    "Tirumala",
    "Rajahmundry",
    "Kakinada",
]

CITY_FILTER_OPTIONS: list[str] = [ALL_CITIES, *CITIES]

OCCUPATION_FILTER_OPTIONS: list[str] = [
    ALL_SERVICES,
    *(occupation.value for occupation in Occupation),
]

# ---------------------------------------------------------------------------
# Routes used as redirect targets
# ---------------------------------------------------------------------------
HOME_PATH: str = "/"
LOGIN_PATH: str = "/login"
DASHBOARD_PATH: str = "/dashboard"
ADD_LISTING_PATH: str = "/add-listing"

# ---------------------------------------------------------------------------
# Notification texts
# ---------------------------------------------------------------------------
FETCH_FAILED_MESSAGE: str = "Failed to load service providers. Please try again."
LISTING_FAILED_MESSAGE: str = "Failed to create listing. Please try again."
LISTING_CREATED_MESSAGE: str = "Your service listing has been created!"
NEGATIVE_EXPERIENCE_MESSAGE: str = "Experience cannot be negative."
AUTH_REQUIRED_MESSAGE: str = "Please log in to add a service listing."
SESSION_EXPIRED_MESSAGE: str = "User not authenticated. Please log in again."
PASSWORD_MISMATCH_MESSAGE: str = "Passwords do not match!"
WELCOME_BACK_MESSAGE: str = "Welcome back!"
ACCOUNT_CREATED_MESSAGE: str = "Account created successfully!"
RESET_EMAIL_SENT_MESSAGE: str = "Check your email for a password reset link."
UNEXPECTED_ERROR_MESSAGE: str = "An unexpected error occurred. Please try again."
LOGOUT_FAILED_MESSAGE: str = "Failed to log out. Please try again."
LOGOUT_SUCCESS_MESSAGE: str = "Logged out successfully"
EMPTY_STATE_TITLE: str = "No service providers found"
EMPTY_STATE_HINT: str = "Try adjusting your filters or search criteria"
NOT_FOUND_MESSAGE: str = "Oops! The page you're looking for doesn't exist."
