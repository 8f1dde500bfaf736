"""Database repository layer."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import DatabaseException, NotFoundException
from src.core.logging import get_logger
from src.storage.database.webhook_models import Webhook
from src.webhooks.models import WebhookSubscription
from src.webhooks.store import validate_registration

logger = get_logger(__name__)


class WebhookRepository:
    """Repository for Webhook model.

    Returns immutable WebhookSubscription snapshots rather than ORM rows so
    callers can hand them to background deliveries after the session closes.
    """

    def __init__(self, session: AsyncSession, strict: Optional[bool] = None) -> None:
        """Initialize repository with database session."""
        self.session = session
        self.strict = strict

    async def create(
        self,
        project_id: int,
        payload_url: str,
        secret: Optional[str],
        send_all_cases: bool,
    ) -> Optional[WebhookSubscription]:
        """Register a webhook on a project.

        Returns:
            The stored subscription, or None if the registration was ignored

        Raises:
            InvalidSubscriptionException: If the input cannot be stored
            DatabaseException: If the insert fails
        """
        if not validate_registration(payload_url, secret, self.strict):
            return None

        webhook = Webhook(
            project_id=project_id,
            payload_url=payload_url,
            secret=secret or "",
            send_all_cases=send_all_cases,
        )
        try:
            self.session.add(webhook)
            await self.session.flush()
            await self.session.refresh(webhook)
        except SQLAlchemyError as e:
            raise DatabaseException("Failed to store webhook", details={"error": str(e)}) from e

        logger.info("webhook_created", webhook_id=webhook.id, project_id=project_id)
        return WebhookSubscription.model_validate(webhook)

    async def delete(self, webhook_id: int, project_id: int) -> None:
        """Remove a webhook from a project.

        Raises:
            NotFoundException: If the project has no such webhook
        """
        webhook = await self._get(webhook_id, project_id)
        if webhook is None:
            raise NotFoundException("Webhook not found", details={"webhook_id": webhook_id})

        await self.session.delete(webhook)
        await self.session.flush()
        logger.info("webhook_deleted", webhook_id=webhook_id, project_id=project_id)

    async def find_by_project(self, project_id: int) -> list[WebhookSubscription]:
        """List a project's webhooks in creation order."""
        result = await self.session.execute(
            select(Webhook).where(Webhook.project_id == project_id).order_by(Webhook.id)
        )
        return [WebhookSubscription.model_validate(row) for row in result.scalars().all()]

    async def find_by_ids(self, webhook_id: int, project_id: int) -> Optional[WebhookSubscription]:
        """Get a webhook by ID within a project."""
        webhook = await self._get(webhook_id, project_id)
        return WebhookSubscription.model_validate(webhook) if webhook else None

    async def _get(self, webhook_id: int, project_id: int) -> Optional[Webhook]:
        result = await self.session.execute(
            select(Webhook).where(
                (Webhook.id == webhook_id) & (Webhook.project_id == project_id)
            )
        )
        return result.scalar_one_or_none()
