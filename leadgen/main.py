"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leadgen import __version__
from leadgen.config import settings
from leadgen.database import Base, init_db
from leadgen.dependencies import get_provider_router
from leadgen.routers import (
    export_routes,
    import_routes,
    lead_routes,
    list_routes,
    sequence_routes,
)

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Lead Generation API...")
    # Misconfigured providers fail here, before any request is served
    router = get_provider_router()
    logger.info(f"Providers: {[provider.name for provider in router.providers]}")
    await init_db()
    logger.info(f"Registered {len(Base.metadata.tables)} tables: {sorted(Base.metadata.tables)}")
    yield
    logger.info("Shutting down Lead Generation API...")


# Create FastAPI app
app = FastAPI(
    title="Lead Generation API",
    description="Lead search, import, lists and outreach sequences",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================
# ROUTER REGISTRATION
# ============================================

app.include_router(lead_routes.router)
app.include_router(import_routes.router)
app.include_router(list_routes.router)
app.include_router(sequence_routes.router)
app.include_router(export_routes.router)


# ============================================
# HEALTH & ROOT ENDPOINTS
# ============================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "tables": sorted(Base.metadata.tables.keys()),
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Lead Generation API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health"
    }
