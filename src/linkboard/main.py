# src/linkboard/main.py
"""Main entry point for the Linkboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linkboard.api.v1 import (
    auth_router,
    comments_router,
    notifications_router,
    posts_router,
    users_router,
    votes_router,
)
from linkboard.core.errors import AuthenticationError, LinkboardError
from linkboard.core.settings import settings
from linkboard.services.tokens import TokenCodec

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Linkboard API",
    description="Link sharing with threaded discussion and voting",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


@app.exception_handler(LinkboardError)
async def handle_linkboard_error(request: Request, exc: LinkboardError) -> JSONResponse:
    """Translate typed service errors into JSON responses."""
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


@app.on_event("startup")
async def on_startup() -> None:
    # A missing signing secret must stop the process here, not fail per request.
    TokenCodec(settings).ensure_configured()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Linkboard API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    uvicorn.run("linkboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
