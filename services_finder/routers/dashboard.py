"""Browse page: filtered provider cards and booking contact details."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from services_finder.models.auth import Session
from services_finder.models.views import ContactView, DashboardView
from services_finder.routers.deps import get_current_session
from services_finder.services.pages import build_contact, build_criteria, build_dashboard

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DashboardView)
async def dashboard(
    city: str | None = Query(default=None, description="City, or 'All Cities'"),
    occupation: str | None = Query(default=None, description="Service type, or 'All Services'"),
    q: str | None = Query(default=None, description="Text searched in name and description"),
    session: Session | None = Depends(get_current_session),
) -> DashboardView:
    """Return the active providers matching every given criterion.

    A failed fetch still returns 200 with an empty list and a failure
    notification.
    """
    criteria = build_criteria(city=city, occupation=occupation, query=q)
    return await build_dashboard(session, criteria)


@router.get("/providers/{provider_id}/contact", response_model=ContactView)
async def provider_contact(
    provider_id: str,
    session: Session | None = Depends(get_current_session),
) -> ContactView:
    """Phone and e-mail to book *provider_id*."""
    view = await build_contact(session, provider_id)
    if view.contact is None and not view.notifications:
        logger.info("provider_contact_not_found", extra={"provider_id": provider_id})
        raise HTTPException(status_code=404, detail="Provider not found")
    return view
