"""Add-listing page (provider onboarding). Requires a session."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends

from services_finder.core.constants import DASHBOARD_PATH
from services_finder.core.errors import ServicesFinderError
from services_finder.models.auth import Session
from services_finder.models.provider import ListingForm
from services_finder.models.views import ListingFormView, ViewResponse
from services_finder.routers.deps import get_current_session, view_error
from services_finder.services.pages import build_listing_form, nav_links, require_session
from services_finder.services.providers import create_listing

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ListingFormView)
async def listing_form(
    session: Session | None = Depends(get_current_session),
) -> Any:
    """Form choices and profile prefill; 401 + redirect when signed out."""
    try:
        return await build_listing_form(session)
    except ServicesFinderError as exc:
        logger.info("listing_form_unauthenticated")
        return view_error(exc, session)


@router.post("", response_model=ViewResponse, status_code=201)
async def submit_listing(
    form: ListingForm,
    session: Session | None = Depends(get_current_session),
) -> Any:
    """Create a listing owned by the current user.

    The new provider shows up on the browse page at its next fetch.
    """
    try:
        require_session(session)
        notification = await create_listing(form, session)
    except ServicesFinderError as exc:
        logger.warning(
            "submit_listing_failed",
            extra={"error_message": exc.notification.description},
        )
        return view_error(exc, session)

    return ViewResponse(
        is_authenticated=True,
        nav_links=nav_links(True),
        notifications=[notification],
        redirect_to=DASHBOARD_PATH,
    )
