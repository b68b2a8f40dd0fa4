"""Email / password authentication flows delegated to Supabase Auth.

Every flow runs on its own throwaway Supabase client, so one user's
sign-in never becomes anyone else's session.  The caller gets the tokens
back and presents the access token as a bearer header afterwards.

Each flow raises ``AuthFlowError`` carrying the message Supabase returned,
verbatim, or a generic one when the failure carried no message.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from services_finder.core.config import settings
from services_finder.core.constants import (
    ACCOUNT_CREATED_MESSAGE,
    LOGOUT_FAILED_MESSAGE,
    LOGOUT_SUCCESS_MESSAGE,
    PASSWORD_MISMATCH_MESSAGE,
    RESET_EMAIL_SENT_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    WELCOME_BACK_MESSAGE,
)
from services_finder.core.errors import AuthFlowError, store_error_message
from services_finder.db.supabase import create_auth_client
from services_finder.models.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    Session,
)
from services_finder.models.notification import Notification
from services_finder.services.session import SessionContext, to_session

logger = logging.getLogger(__name__)


def _auth_error(exc: Exception) -> AuthFlowError:
    return AuthFlowError(Notification.error(store_error_message(exc, UNEXPECTED_ERROR_MESSAGE)))


async def sign_in(
    request: LoginRequest,
    context: SessionContext,
) -> tuple[Session | None, Notification]:
    """Sign in with email and password and return the new session."""
    auth = create_auth_client().auth
    try:
        response: Any = await asyncio.to_thread(
            auth.sign_in_with_password,
            {"email": request.email, "password": request.password},
        )
    except Exception as exc:
        logger.warning("sign_in_failed", extra={"error_message": str(exc)})
        raise _auth_error(exc) from exc

    session = to_session(getattr(response, "session", None))
    logger.info("sign_in_succeeded", extra={"user_id": session.user_id if session else None})
    context.publish("SIGNED_IN", session)
    return session, Notification(title="Success", description=WELCOME_BACK_MESSAGE)


async def sign_up(request: RegisterRequest, context: SessionContext) -> Notification:
    """Create an account after checking the password confirmation.

    A mismatch is rejected without contacting Supabase.
    """
    if request.password != request.confirm_password:
        raise AuthFlowError(Notification.error(PASSWORD_MISMATCH_MESSAGE))

    credentials = {
        "email": request.email,
        "password": request.password,
        "options": {
            "data": {"full_name": request.full_name, "phone": request.phone},
            "email_redirect_to": f"{settings.SITE_URL.rstrip('/')}/",
        },
    }
    try:
        response: Any = await asyncio.to_thread(create_auth_client().auth.sign_up, credentials)
    except Exception as exc:
        logger.warning("sign_up_failed", extra={"error_message": str(exc)})
        raise _auth_error(exc) from exc

    if getattr(response, "user", None) is None:
        raise AuthFlowError(Notification.error(UNEXPECTED_ERROR_MESSAGE))

    logger.info("sign_up_succeeded", extra={"user_id": str(response.user.id)})
    return Notification(title="Success", description=ACCOUNT_CREATED_MESSAGE)


async def request_password_reset(
    request: ForgotPasswordRequest,
    context: SessionContext,
) -> Notification:
    """Send a password-reset link to *request.email*."""
    try:
        await asyncio.to_thread(
            create_auth_client().auth.reset_password_for_email,
            request.email,
            {"redirect_to": f"{settings.SITE_URL.rstrip('/')}/reset-password"},
        )
    except Exception as exc:
        logger.warning("password_reset_failed", extra={"error_message": str(exc)})
        raise _auth_error(exc) from exc

    return Notification(title="Email Sent", description=RESET_EMAIL_SENT_MESSAGE)


async def sign_out(context: SessionContext, session: Session | None) -> Notification:
    """Revoke the caller's access token.

    Without a session there is nothing to revoke and the call succeeds.
    """
    if session is not None and session.access_token:
        try:
            await asyncio.to_thread(
                create_auth_client().auth.admin.sign_out,
                session.access_token,
            )
        except Exception as exc:
            logger.warning("sign_out_failed", extra={"error_message": str(exc)})
            raise AuthFlowError(Notification.error(LOGOUT_FAILED_MESSAGE)) from exc

    context.publish("SIGNED_OUT", None)
    return Notification(title="Success", description=LOGOUT_SUCCESS_MESSAGE)
