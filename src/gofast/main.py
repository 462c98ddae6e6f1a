"""FastAPI application for the GoFast run draft service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .api.routes import runs
from .api.exception_handlers import register_exception_handlers
from .api.middleware.rate_limit import limiter
from .services.auth_service import get_auth_service
from .utils.log_sanitizer import install_log_sanitizer

# Must run before any request is logged
install_log_sanitizer()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logger.info(f"Starting GoFast run drafts v{__version__}")
    logger.info(f"Run club store: {settings.database_path}")

    if get_auth_service().uses_firebase:
        logger.info(f"Verifying Firebase ID tokens for project {settings.firebase_project_id}")
    else:
        logger.warning(
            "FIREBASE_PROJECT_ID is not configured. Accepting locally signed HS256 tokens only."
        )

    yield

    logger.info("Shutting down GoFast run drafts")


app = FastAPI(
    title="GoFast Run Drafts API",
    description="Pre-fill group runs from pasted Strava, web and social text",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,
)

# Rate limiting
app.state.limiter = limiter

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

register_exception_handlers(app)

# Include routers
app.include_router(runs.router, prefix="/api/runs", tags=["runs"])
app.include_router(runs.router, prefix="/api/v1/runs", tags=["runs"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "GoFast Run Drafts API",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
