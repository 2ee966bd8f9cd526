"""
SSImage Creator API - Identity-Preserving Character Image Editing
FastAPI Backend Entry Point
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.api import generate

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger("app")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info(f"Starting {settings.APP_NAME} (model: {settings.GEMINI_MODEL})")
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY is not set; generation requests will fail")
    yield
    logger.info(f"Shutting down {settings.APP_NAME}...")


app = FastAPI(
    title=settings.APP_NAME,
    description="Generate character images that keep the faces from uploaded references",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
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

# Include routers
app.include_router(generate.router, prefix="/api/v1", tags=["Image Generation"])


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint for Cloud Run and monitoring.
    Reports whether the provider is configured; does not call it.
    """
    configured = bool(settings.GEMINI_API_KEY)
    return {
        "status": "healthy" if configured else "degraded",
        "version": VERSION,
        "services": {
            "gemini": "configured" if configured else "error: GEMINI_API_KEY not set",
            "model": settings.GEMINI_MODEL,
        },
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {
        "message": f"{settings.APP_NAME} - Identity-Preserving Image Generation",
        "docs": "/docs",
        "health": "/health",
    }
