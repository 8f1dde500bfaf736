"""Webhook registration and event ingest routes."""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from src.api.dependencies import get_dispatcher, get_subscription_store
from src.api.schemas.webhook_schemas import (
    EventAccepted,
    EventNotification,
    WebhookCreate,
    WebhookResponse,
)
from src.core.exceptions import NotFoundException, ValidationException
from src.core.logging import get_logger
from src.webhooks.dispatcher import WebhookDispatcher
from src.webhooks.filters import select_recipients
from src.webhooks.models import EventFamily, PushEvent
from src.webhooks.store import SubscriptionStore

logger = get_logger(__name__)
router = APIRouter(tags=["webhooks"])


@router.get("/projects/{project_id}/webhooks", response_model=list[WebhookResponse])
async def list_webhooks(
    project_id: int,
    store: SubscriptionStore = Depends(get_subscription_store),
) -> Any:
    """List a project's webhooks."""
    return await store.find_by_project(project_id)


@router.post("/projects/{project_id}/webhooks", response_model=WebhookResponse, status_code=201)
async def create_webhook(
    project_id: int,
    webhook_data: WebhookCreate,
    store: SubscriptionStore = Depends(get_subscription_store),
) -> Any:
    """Register a webhook on a project."""
    try:
        webhook = await store.create(
            project_id,
            webhook_data.payload_url,
            webhook_data.secret,
            webhook_data.send_all_cases,
        )
    except ValidationException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    if webhook is None:
        # Lenient registration mode dropped the request
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Payload URL is required")

    return webhook


@router.delete("/projects/{project_id}/webhooks/{webhook_id}", status_code=204)
async def delete_webhook(
    project_id: int,
    webhook_id: int,
    store: SubscriptionStore = Depends(get_subscription_store),
) -> None:
    """Delete a webhook."""
    try:
        await store.delete(webhook_id, project_id)
    except NotFoundException as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/events", response_model=EventAccepted, status_code=202)
async def notify_event(
    notification: EventNotification,
    background_tasks: BackgroundTasks,
    store: SubscriptionStore = Depends(get_subscription_store),
    dispatcher: WebhookDispatcher = Depends(get_dispatcher),
) -> Any:
    """Accept a domain event and deliver it after responding."""
    project = notification.project
    event = notification.event

    if isinstance(event, PushEvent) and not event.commits:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Push event has no commits",
        )

    # Load subscriptions now; the database session is gone once the response is sent.
    subscriptions = await store.find_by_project(project.id)
    recipients = select_recipients(
        subscriptions,
        EventFamily(event.family),
        dispatcher.enforce_scope,
    )
    background_tasks.add_task(dispatcher.deliver, project, event, recipients)

    logger.info(
        "webhook_event_accepted",
        project_id=project.id,
        event_family=event.family,
        recipients=len(recipients),
    )
    return EventAccepted(recipients=len(recipients))
