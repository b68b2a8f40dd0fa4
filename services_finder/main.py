"""FastAPI application entry point.

Configures CORS, structured logging, lifespan events (the process-wide
session context), router registration and the not-found page.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse, Response

from services_finder.core.config import settings
from services_finder.core.constants import HOME_PATH, NOT_FOUND_MESSAGE
from services_finder.core.logging import setup_logging
from services_finder.models.auth import Session
from services_finder.models.views import NotFoundView
from services_finder.routers import auth, dashboard, health, listings, pages
from services_finder.services.pages import nav_links
from services_finder.services.session import SessionContext

logger = logging.getLogger(__name__)


def _log_session_change(session: Session | None) -> None:
    logger.info(
        "session_changed",
        extra={"user_id": session.user_id if session else None},
    )


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks.

    Starts the session context on startup and releases its Supabase
    subscription on exit.
    """
    setup_logging()
    logger.info("Application starting up")
    session_context = SessionContext()
    session_context.start()
    unsubscribe = session_context.subscribe(_log_session_change)
    application.state.session_context = session_context
    yield
    unsubscribe()
    session_context.close()
    logger.info("Application shutting down")


app = FastAPI(
    title="Services Finder API",
    description="Find local service providers by city and occupation",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS Configuration
# ---------------------------------------------------------------------------
_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(pages.router, tags=["Pages"])
app.include_router(auth.router, tags=["Auth"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
app.include_router(listings.router, prefix="/add-listing", tags=["Listings"])


# ---------------------------------------------------------------------------
# Not-found page
# ---------------------------------------------------------------------------
@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Unknown routes get the not-found page; the path is logged."""
    if exc.status_code != 404 or exc.detail != "Not Found":
        return await http_exception_handler(request, exc)

    logger.error("page_not_found", extra={"path": request.url.path})
    view = NotFoundView(
        nav_links=nav_links(False),
        path=request.url.path,
        message=NOT_FOUND_MESSAGE,
        home_href=HOME_PATH,
    )
    return JSONResponse(status_code=404, content=view.model_dump(mode="json"))
