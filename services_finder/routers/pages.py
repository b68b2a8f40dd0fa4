"""Landing page."""

from fastapi import APIRouter, Depends, Query

from services_finder.models.auth import Session
from services_finder.models.views import HomeView
from services_finder.routers.deps import get_current_session
from services_finder.services.pages import build_home

router = APIRouter()


@router.get("/", response_model=HomeView)
async def home(
    city: str | None = Query(default=None, description="City chosen in the picker"),
    session: Session | None = Depends(get_current_session),
) -> HomeView:
    """Landing page: navbar, city picker and the "Find Services" link."""
    return build_home(session, city)
