"""Error handling utilities.

Every error that reaches a page carries the notification to show and,
where the page navigates away, the path to redirect to.
"""

from services_finder.models.notification import Notification


class ServicesFinderError(Exception):
    """Base exception for the services finder backend."""

    status_code: int = 500

    def __init__(
        self,
        notification: Notification,
        redirect_to: str | None = None,
    ) -> None:
        super().__init__(notification.description)
        self.notification = notification
        self.redirect_to = redirect_to


class AuthRequiredError(ServicesFinderError):
    """A protected page was requested without a session."""
    status_code = 401


class ListingValidationError(ServicesFinderError):
    """The listing form failed client-side validation; nothing was sent."""
    status_code = 400


class ListingSubmissionError(ServicesFinderError):
    """The store rejected the listing insert."""
    status_code = 502


class AuthFlowError(ServicesFinderError):
    """Sign-in, sign-up, sign-out or password reset failed."""
    status_code = 400


def store_error_message(exc: Exception, fallback: str | None = None) -> str | None:
    """The message Supabase attached to *exc*, else ``str(exc)``, else *fallback*.

    PostgREST ``APIError`` and GoTrue auth errors both expose ``message``.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or fallback
