"""Login, registration, password reset and logout pages.

Email / password accounts are managed entirely by Supabase Auth;
these endpoints only relay the outcome as notifications and redirects.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from services_finder.core.constants import DASHBOARD_PATH, HOME_PATH, LOGIN_PATH
from services_finder.core.errors import ServicesFinderError
from services_finder.models.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    Session,
)
from services_finder.models.views import AuthView, ForgotPasswordView
from services_finder.routers.deps import get_current_session, get_session_context, view_error
from services_finder.services import auth as auth_service
from services_finder.services.pages import nav_links
from services_finder.services.session import SessionContext

logger = logging.getLogger(__name__)

router = APIRouter()


def _signed_in_redirect(session: Session | None) -> AuthView:
    """Login and register pages send signed-in users to the dashboard."""
    authenticated = session is not None
    return AuthView(
        is_authenticated=authenticated,
        nav_links=nav_links(authenticated),
        redirect_to=DASHBOARD_PATH if authenticated else None,
    )


@router.get("/login", response_model=AuthView)
async def login_page(session: Session | None = Depends(get_current_session)) -> AuthView:
    return _signed_in_redirect(session)


@router.post("/login", response_model=AuthView)
async def login(
    body: LoginRequest,
    context: SessionContext = Depends(get_session_context),
) -> Any:
    """Sign in; on success the client is sent to the dashboard."""
    try:
        session, notification = await auth_service.sign_in(body, context)
    except ServicesFinderError as exc:
        return view_error(exc, None)

    return AuthView(
        is_authenticated=True,
        nav_links=nav_links(True),
        notifications=[notification],
        redirect_to=DASHBOARD_PATH,
        access_token=session.access_token if session else None,
        refresh_token=session.refresh_token if session else None,
    )


@router.get("/register", response_model=AuthView)
async def register_page(session: Session | None = Depends(get_current_session)) -> AuthView:
    return _signed_in_redirect(session)


@router.post("/register", response_model=AuthView, status_code=201)
async def register(
    body: RegisterRequest,
    context: SessionContext = Depends(get_session_context),
) -> Any:
    """Create an account; the client continues at the login page."""
    try:
        notification = await auth_service.sign_up(body, context)
    except ServicesFinderError as exc:
        return view_error(exc, None)

    return AuthView(
        nav_links=nav_links(False),
        notifications=[notification],
        redirect_to=LOGIN_PATH,
    )


@router.post("/forgot-password", response_model=ForgotPasswordView)
async def forgot_password(
    body: ForgotPasswordRequest,
    context: SessionContext = Depends(get_session_context),
    session: Session | None = Depends(get_current_session),
) -> Any:
    """Send a password-reset e-mail."""
    try:
        notification = await auth_service.request_password_reset(body, context)
    except ServicesFinderError as exc:
        return view_error(exc, session)

    authenticated = session is not None
    return ForgotPasswordView(
        is_authenticated=authenticated,
        nav_links=nav_links(authenticated),
        notifications=[notification],
        email_sent=True,
    )


@router.post("/logout", response_model=AuthView)
async def logout(
    context: SessionContext = Depends(get_session_context),
    session: Session | None = Depends(get_current_session),
) -> Any:
    """Revoke the caller's token and go back to the landing page."""
    try:
        notification = await auth_service.sign_out(context, session)
    except ServicesFinderError as exc:
        return view_error(exc, session)

    return AuthView(
        nav_links=nav_links(False),
        notifications=[notification],
        redirect_to=HOME_PATH,
    )
