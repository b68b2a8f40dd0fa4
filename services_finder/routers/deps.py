"""Shared router dependencies and error rendering."""

from __future__ import annotations

from fastapi import Header, Request
from starlette.responses import JSONResponse

from services_finder.core.errors import ServicesFinderError
from services_finder.models.auth import Session
from services_finder.models.views import ViewResponse
from services_finder.services.pages import nav_links
from services_finder.services.session import SessionContext


def get_session_context(request: Request) -> SessionContext:
    """The process-wide ``SessionContext`` created in the lifespan."""
    return request.app.state.session_context


def get_current_session(
    request: Request,
    authorization: str | None = Header(default=None),
) -> Session | None:
    """Resolve the session for this request from its bearer token alone."""
    token: str | None = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer "):].strip()
    return get_session_context(request).resolve(token)


def view_error(exc: ServicesFinderError, session: Session | None) -> JSONResponse:
    """Render *exc* as a page payload with its notification and redirect."""
    authenticated = session is not None
    payload = ViewResponse(
        is_authenticated=authenticated,
        nav_links=nav_links(authenticated),
        notifications=[exc.notification],
        redirect_to=exc.redirect_to,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=payload.model_dump(mode="json"),
    )
