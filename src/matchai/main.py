# src/matchai/main.py
"""Main entry point for the MatchAI application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from matchai.api import (
    auth_router,
    matches_router,
    messages_router,
    realtime_router,
    suggestions_router,
    users_router,
    video_calls_router,
)
from matchai.core.errors import MatchAIError, ValidationError
from matchai.core.settings import settings
from matchai.services.connection_registry import ConnectionRegistry
from matchai.services.relay import RealtimeRelay

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="MatchAI API",
    description="Dating backend with AI-assisted matchmaking and realtime chat",
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

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(matches_router, prefix="/api")
app.include_router(messages_router, prefix="/api")
app.include_router(video_calls_router, prefix="/api")
app.include_router(suggestions_router, prefix="/api")
app.include_router(realtime_router)


@app.exception_handler(MatchAIError)
async def handle_domain_error(request: Request, exc: MatchAIError) -> JSONResponse:
    body: dict[str, object] = {"detail": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        body["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request data",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    registry = ConnectionRegistry()
    app.state.registry = registry
    app.state.relay = RealtimeRelay(registry, require_token=settings.realtime_require_token)
    logger.info("MatchAI %s started (llm_enabled=%s)", settings.app_version, settings.llm_enabled)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    registry: ConnectionRegistry | None = getattr(app.state, "registry", None)
    if registry is not None:
        await registry.clear()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "MatchAI API",
        "version": settings.app_version,
        "description": "Dating backend with AI-assisted matchmaking and realtime chat",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("matchai.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
