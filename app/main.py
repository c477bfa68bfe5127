# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Onboarding Platform API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
#   poetry run python -m app.main          (binds API_HOST:API_PORT)
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    OnboardingException,
    onboarding_exception_handler,
    supabase_exception_handler,
)
from app.routers import health, brands, assets, clients, workflows, dashboard
from app.auth import routes as auth_routes
from core.services.auth_service import auth_service
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def log_auth_event(event: str, session) -> None:
    """Auth state listener registered for the lifetime of the app."""
    user = getattr(session, "user", None)
    logger.info(f"Auth state changed: {event} (user={getattr(user, 'email', None)})")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log configuration, subscribe to auth state changes
    - Shutdown: drop the auth subscription
    """
    logger.info(f"Starting Onboarding Platform API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Asset bucket: {settings.ASSET_BUCKET}")

    unsubscribe = auth_service.subscribe(log_auth_event)

    yield

    logger.info("Shutting down Onboarding Platform API")
    unsubscribe()


# Create FastAPI application
app = FastAPI(
    title="Onboarding Platform API",
    description="""
## Client Onboarding Platform API

Manage clients, onboarding workflows and brand-specific digital assets
(logos, images, fonts, templates).

### Brand Assets

1. **Create a Brand** - `POST /api/v1/brands` (slug derived from the name)
2. **Upload Assets** - `POST /api/v1/brands/{id}/assets` with one or more files
3. **Browse** - `GET /api/v1/brands/{id}/assets` (newest first)
4. **Export** - `GET /api/v1/brands/{id}/export` downloads `<slug>-assets.json`

### Quick Start

```bash
# 1. Sign in
curl -X POST http://localhost:8000/api/v1/auth/login \\
  -H "Content-Type: application/json" \\
  -d '{"email": "me@example.com", "password": "secret123"}'

# 2. Create a brand
curl -X POST http://localhost:8000/api/v1/brands \\
  -H "Authorization: Bearer $TOKEN" -H "Content-Type: application/json" \\
  -d '{"name": "FastTrack Hub", "description": "Community platform"}'

# 3. Upload logos
curl -X POST http://localhost:8000/api/v1/brands/{id}/assets \\
  -H "Authorization: Bearer $TOKEN" \\
  -F "category=logo" -F "files=@logo.svg" -F "files=@logo-dark.svg"
```
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Sign-up, sign-in, sign-out and token checks"},
        {"name": "Brands", "description": "Brand directory"},
        {"name": "Assets", "description": "Brand asset upload, listing, deletion and export"},
        {"name": "Clients", "description": "Client CRUD"},
        {"name": "Workflows", "description": "Onboarding workflow CRUD"},
        {"name": "Dashboard", "description": "Summary counters"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(OnboardingException)
async def handle_onboarding_exception(request: Request, exc: OnboardingException):
    """Handle domain exceptions."""
    return await onboarding_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_supabase_exception(request: Request, exc: SupabaseClientError):
    """Handle record store failures."""
    return await supabase_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(auth_routes.router, prefix="/api/v1/auth", tags=["Auth"])
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(brands.router, prefix="/api/v1/brands", tags=["Brands"])
app.include_router(assets.router, prefix="/api/v1", tags=["Assets"])
app.include_router(clients.router, prefix="/api/v1/clients", tags=["Clients"])
app.include_router(workflows.router, prefix="/api/v1/workflows", tags=["Workflows"])
app.include_router(dashboard.router, prefix="/api/v1", tags=["Dashboard"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Onboarding Platform API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }


# =============================================================================
# Entry Point
# =============================================================================

def run() -> None:
    """Serve the API with uvicorn on API_HOST:API_PORT."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development and settings.DEBUG,
    )


if __name__ == "__main__":
    run()
