"""
Recipe Ingest API
=================

Main entry point for the recipe capture backend.

Features:
- Lenient normalization of stored and imported recipe records
- schema.org / JSON-LD extraction with an AI text fallback
- Image candidate discovery
- Review diff for AI-suggested recipe edits
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_ingest.api.routes import router as api_router
from recipe_ingest.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Extraction model: {settings.openai_model}")
    logger.info(f"AI extraction: {'ON' if settings.openai_api_key else 'OFF'}")
    logger.info(f"Page proxy: {'ON' if settings.fetch_proxy_template else 'OFF'}")

    yield

    logger.info("Shutting down Recipe Ingest.")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Recipe normalization, schema.org extraction and review diffing",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "version": settings.app_version,
        "model": settings.openai_model,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
