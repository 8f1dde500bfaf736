"""Shared dependencies for FastAPI routes."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.storage.database.base import get_db
from src.storage.database.repository import WebhookRepository
from src.webhooks.client import WebhookClient
from src.webhooks.dispatcher import WebhookDispatcher
from src.webhooks.store import SubscriptionStore


async def get_subscription_store(db: AsyncSession = Depends(get_db)) -> SubscriptionStore:
    """Subscription store bound to the request's database session."""
    return WebhookRepository(db)


def get_webhook_client(request: Request) -> WebhookClient:
    """Application-wide delivery client created in the lifespan handler."""
    return request.app.state.webhook_client


def get_dispatcher(
    store: SubscriptionStore = Depends(get_subscription_store),
    client: WebhookClient = Depends(get_webhook_client),
) -> WebhookDispatcher:
    """Dispatcher sharing the application's HTTP client."""
    return WebhookDispatcher(store, client=client)
