"""Subscription store interface and an in-process implementation."""

from datetime import datetime, timezone
from itertools import count
from typing import Optional, Protocol

from src.core.config import get_settings
from src.core.exceptions import InvalidSubscriptionException, NotFoundException
from src.core.logging import get_logger
from src.webhooks.models import WebhookScope, WebhookSubscription

settings = get_settings()
logger = get_logger(__name__)

PAYLOAD_URL_MAX_LENGTH = 2000
SECRET_MAX_LENGTH = 250


class SubscriptionStore(Protocol):
    """Registration surface shared by every subscription backend."""

    async def create(
        self,
        project_id: int,
        payload_url: str,
        secret: Optional[str],
        send_all_cases: bool,
    ) -> Optional[WebhookSubscription]: ...

    async def delete(self, webhook_id: int, project_id: int) -> None: ...

    async def find_by_project(self, project_id: int) -> list[WebhookSubscription]: ...

    async def find_by_ids(self, webhook_id: int, project_id: int) -> Optional[WebhookSubscription]: ...


def validate_registration(
    payload_url: Optional[str],
    secret: Optional[str],
    strict: Optional[bool] = None,
) -> bool:
    """Check registration input.

    Args:
        payload_url: Destination URL
        secret: Shared secret (may be None)
        strict: Reject an empty URL instead of ignoring the registration
            (default from settings)

    Returns:
        False if the registration should be silently dropped

    Raises:
        InvalidSubscriptionException: If the input cannot be stored
    """
    strict = settings.webhook_strict_registration if strict is None else strict

    if not payload_url:
        if strict:
            raise InvalidSubscriptionException("Payload URL is required")
        logger.info("webhook_registration_ignored", reason="empty_payload_url")
        return False
    if len(payload_url) > PAYLOAD_URL_MAX_LENGTH:
        raise InvalidSubscriptionException(
            "Payload URL is too long",
            details={"max_length": PAYLOAD_URL_MAX_LENGTH},
        )
    if secret and len(secret) > SECRET_MAX_LENGTH:
        raise InvalidSubscriptionException(
            "Secret is too long",
            details={"max_length": SECRET_MAX_LENGTH},
        )
    return True


def scope_from_flag(send_all_cases: bool) -> WebhookScope:
    """Map the registration flag onto a delivery scope."""
    return WebhookScope.ALL_EVENTS if send_all_cases else WebhookScope.PUSH_ONLY


class InMemorySubscriptionStore:
    """Subscriptions kept in a dict keyed by project id."""

    def __init__(self, strict: Optional[bool] = None) -> None:
        self.strict = strict
        self._by_project: dict[int, list[WebhookSubscription]] = {}
        self._ids = count(1)

    async def create(
        self,
        project_id: int,
        payload_url: str,
        secret: Optional[str],
        send_all_cases: bool,
    ) -> Optional[WebhookSubscription]:
        if not validate_registration(payload_url, secret, self.strict):
            return None

        subscription = WebhookSubscription(
            id=next(self._ids),
            project_id=project_id,
            payload_url=payload_url,
            secret=secret or "",
            scope=scope_from_flag(send_all_cases),
            created_at=datetime.now(timezone.utc),
        )
        self._by_project.setdefault(project_id, []).append(subscription)
        logger.info("webhook_created", webhook_id=subscription.id, project_id=project_id)
        return subscription

    async def delete(self, webhook_id: int, project_id: int) -> None:
        subscriptions = self._by_project.get(project_id, [])
        remaining = [s for s in subscriptions if s.id != webhook_id]
        if len(remaining) == len(subscriptions):
            raise NotFoundException("Webhook not found", details={"webhook_id": webhook_id})
        self._by_project[project_id] = remaining
        logger.info("webhook_deleted", webhook_id=webhook_id, project_id=project_id)

    async def find_by_project(self, project_id: int) -> list[WebhookSubscription]:
        return list(self._by_project.get(project_id, []))

    async def find_by_ids(self, webhook_id: int, project_id: int) -> Optional[WebhookSubscription]:
        for subscription in self._by_project.get(project_id, []):
            if subscription.id == webhook_id:
                return subscription
        return None
