"""
Conference Top-Two Scenario Engine - FastAPI Application

Main entry point for the web API.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import conferences_router, scenarios_router
from .core.config import CORS_ORIGINS, LOG_LEVEL, VERSION


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Create FastAPI app
app = FastAPI(
    title="Conference Top-Two Scenario Engine",
    description="Enumerates remaining-game outcomes to show which teams can still finish in the top two.",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(conferences_router, prefix="/api")
app.include_router(scenarios_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Conference Top-Two Scenario Engine API",
        "version": VERSION,
        "docs": "/api/docs",
        "health": "/api/health"
    }
