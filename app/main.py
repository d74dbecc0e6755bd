# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the UdyomX site.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from app import __version__
from app.auth import SESSION_COOKIE_NAME, resolve_admin_redirect
from app.auth import routes as auth_routes
from app.config import settings
from app.dependencies import page_cache
from app.exceptions import (
    SiteException,
    site_exception_handler,
    validation_exception_handler,
)
from app.routers import content, dashboard, health, pages, revalidate, sitemaps

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: log the effective configuration
    - Shutdown: drop every cached page
    """
    logger.info(f"Starting UdyomX site in {settings.ENVIRONMENT} mode")
    logger.info(f"Site URL: {settings.site_url}, page TTL: {settings.PAGE_REVALIDATE_SECONDS}s")
    if not settings.GOOGLE_CLIENT_ID:
        logger.warning("GOOGLE_CLIENT_ID is not set; admin sign-in will fail")

    yield

    logger.info("Shutting down UdyomX site")
    page_cache.clear()


# Create FastAPI application
app = FastAPI(
    title="UdyomX Site",
    description="""
## UdyomX Content Site

Public site and content API for blog posts, portfolio projects and services.

### Content API

| Endpoint | Description |
|----------|-------------|
| `GET /api/blogs` | Published posts (`?slug=`, `?fields=card`, `?admin=true`, `?category=`) |
| `GET /api/projects` | Published projects (also `?featured=true`) |
| `GET /api/services` | Published services |
| `POST` / `PUT` / `DELETE` | Create, update (body `id`), delete (`?id=`) |
| `POST /api/revalidate` | Drop cached pages for a path |

### Admin

The dashboard under `/dashboard/admin` is restricted to the configured admin
Google account. Sign in at `/auth/google?admin=true`.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Blogs",
            "description": "Blog post CRUD",
        },
        {
            "name": "Projects",
            "description": "Portfolio project CRUD",
        },
        {
            "name": "Services",
            "description": "Service offering CRUD",
        },
        {
            "name": "Revalidate",
            "description": "Invalidate cached pages",
        },
        {
            "name": "Auth",
            "description": "Google sign-in and admin session",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def admin_gate(request: Request, call_next):
    """Redirect requests for admin pages that lack a valid admin session."""
    redirect = resolve_admin_redirect(
        request.url.path,
        request.cookies.get(SESSION_COOKIE_NAME),
        settings.ADMIN_EMAIL,
    )
    if redirect:
        logger.info(f"Admin gate: {request.url.path} -> {redirect}")
        return RedirectResponse(url=redirect, status_code=307)
    return await call_next(request)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SiteException)
async def handle_site_exception(request: Request, exc: SiteException):
    """Handle custom site exceptions."""
    return await site_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and query parameters."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "An unexpected error occurred"}
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Content CRUD endpoints
app.include_router(
    content.blogs,
    prefix="/api/blogs",
    tags=["Blogs"]
)

app.include_router(
    content.projects,
    prefix="/api/projects",
    tags=["Projects"]
)

app.include_router(
    content.services,
    prefix="/api/services",
    tags=["Services"]
)

# Page revalidation
app.include_router(
    revalidate.router,
    prefix="/api",
    tags=["Revalidate"]
)

# Session inspection and sign-out
app.include_router(
    auth_routes.api_router,
    prefix="/api"
)

# Google sign-in flow
app.include_router(auth_routes.router)

# Sitemaps and robots.txt
app.include_router(
    sitemaps.router,
    include_in_schema=False
)

# Admin dashboard pages
app.include_router(
    dashboard.router,
    include_in_schema=False
)

# Public pages (last: owns "/")
app.include_router(
    pages.router,
    include_in_schema=False
)
