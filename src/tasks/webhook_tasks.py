"""Webhook-related Celery tasks."""

import asyncio
from typing import Any

from celery.result import AsyncResult
from pydantic import TypeAdapter, ValidationError

from src.core.logging import get_logger
from src.storage.database.base import AsyncSessionLocal
from src.storage.database.repository import WebhookRepository
from src.tasks.celery_app import celery_app
from src.webhooks.dispatcher import Event, WebhookDispatcher
from src.webhooks.models import DomainEvent, Project

logger = get_logger(__name__)

event_adapter = TypeAdapter(DomainEvent)


@celery_app.task(name="dispatch_webhook_event")
def dispatch_webhook_event_task(project: dict, event: dict) -> dict:
    """Deliver one domain event to the project's webhooks.

    Args:
        project: Project snapshot as JSON
        event: Push, issue or pull request event as JSON (tagged by "family")

    Returns:
        Dict with results
    """
    try:
        project_model = Project.model_validate(project)
        event_model = event_adapter.validate_python(event)
    except ValidationError as e:
        logger.error("webhook_event_invalid", error=str(e))
        return {"status": "invalid", "error": str(e)}

    return asyncio.run(_dispatch_async(project_model, event_model))


async def _dispatch_async(project: Project, event: Event) -> dict:
    """Async implementation of event dispatch."""
    async with AsyncSessionLocal() as session:
        try:
            async with WebhookDispatcher(WebhookRepository(session)) as dispatcher:
                attempted = await dispatcher.dispatch(project, event)

            logger.info("webhook_dispatch_completed", project_id=project.id, attempted=attempted)
            return {"status": "completed", "attempted": attempted}

        except Exception as e:
            logger.error("webhook_dispatch_failed", project_id=project.id, error=str(e), exc_info=True)
            return {"status": "failed", "error": str(e)}


def enqueue_event(project: Project, event: Event, **options: Any) -> AsyncResult:
    """Queue an event for out-of-process delivery and return immediately."""
    return dispatch_webhook_event_task.apply_async(
        args=(project.model_dump(mode="json"), event.model_dump(mode="json")),
        **options,
    )
