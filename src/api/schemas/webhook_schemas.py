"""Pydantic schemas for webhooks."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.webhooks.models import DomainEvent, Project, WebhookScope


class WebhookCreate(BaseModel):
    """Webhook creation request."""

    payload_url: str = ""
    secret: Optional[str] = None
    send_all_cases: bool = True


class WebhookResponse(BaseModel):
    """Webhook response."""

    id: int
    project_id: int
    payload_url: str
    scope: WebhookScope
    created_at: Optional[datetime]

    model_config = {"from_attributes": True}


class EventNotification(BaseModel):
    """A domain event submitted for delivery."""

    project: Project
    event: DomainEvent


class EventAccepted(BaseModel):
    """Response to an accepted event."""

    recipients: int
