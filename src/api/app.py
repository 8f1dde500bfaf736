"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from src import __version__
from src.api.routes import webhooks
from src.core.config import get_settings
from src.core.logging import get_logger
from src.storage.database.base import close_db, init_db
from src.webhooks.client import WebhookClient

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    logger.info("application_starting", version=__version__)
    await init_db()
    app.state.webhook_client = WebhookClient()
    yield
    logger.info("application_shutting_down")
    await app.state.webhook_client.close()
    await close_db()


app = FastAPI(
    title="Hookshot API",
    description="Project webhook registration and event notification delivery",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.include_router(webhooks.router, prefix="/api")


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
    }
