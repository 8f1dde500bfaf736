"""Webhook event dispatcher."""

import asyncio
from typing import Any, Optional, Sequence

from src.core.config import get_settings
from src.core.exceptions import ConfigurationException
from src.core.logging import dispatch_context, get_logger
from src.webhooks.client import WebhookClient
from src.webhooks.filters import select_recipients
from src.webhooks.models import (
    EventFamily,
    IssueEvent,
    Project,
    PullRequestEvent,
    PushEvent,
    WebhookSubscription,
)
from src.webhooks.payloads import PayloadBuilder, serialize
from src.webhooks.store import SubscriptionStore

settings = get_settings()
logger = get_logger(__name__)

Event = PushEvent | IssueEvent | PullRequestEvent


class WebhookDispatcher:
    """Sends notifications for project events to subscribed webhooks."""

    def __init__(
        self,
        store: Optional[SubscriptionStore] = None,
        builder: Optional[PayloadBuilder] = None,
        client: Optional[WebhookClient] = None,
        enforce_scope: Optional[bool] = None,
        max_concurrency: Optional[int] = None,
    ) -> None:
        """Initialize webhook dispatcher.

        Args:
            store: Subscription store used by dispatch()
            builder: Payload builder (default: bundled messages and settings)
            client: Delivery client; a client created here is closed by close()
            enforce_scope: Skip push-only subscriptions for non-push events
                (default from settings)
            max_concurrency: Maximum simultaneous deliveries per event
        """
        self.store = store
        self.builder = builder or PayloadBuilder()
        self._owns_client = client is None
        self.client = client or WebhookClient()
        self.enforce_scope = (
            settings.webhook_enforce_scope if enforce_scope is None else enforce_scope
        )
        self.max_concurrency = max_concurrency or settings.webhook_max_concurrency

        self._background_tasks: set[asyncio.Task] = set()

    async def __aenter__(self) -> "WebhookDispatcher":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def dispatch(self, project: Project, event: Event) -> int:
        """Deliver an event to the project's subscriptions.

        Args:
            project: Project the event happened in
            event: Push, issue or pull request event

        Returns:
            Number of delivery attempts made
        """
        if self.store is None:
            raise ConfigurationException("Dispatcher has no subscription store")

        subscriptions = await self.store.find_by_project(project.id)
        return await self.deliver(project, event, subscriptions)

    async def deliver(
        self,
        project: Project,
        event: Event,
        subscriptions: Sequence[WebhookSubscription],
    ) -> int:
        """Build the event's document once and send it to each eligible subscription.

        Args:
            project: Project the event happened in
            event: Push, issue or pull request event
            subscriptions: Candidate subscriptions, already loaded

        Returns:
            Number of delivery attempts made
        """
        family = EventFamily(event.family)
        with dispatch_context(project_id=project.id, event_family=family.value):
            recipients = select_recipients(subscriptions, family, self.enforce_scope)
            if not recipients:
                logger.debug("webhook_no_recipients", subscriptions=len(subscriptions))
                return 0

            if isinstance(event, PushEvent) and not event.commits:
                logger.warning("webhook_push_without_commits", refs=list(event.ref_names))
                return 0

            body = serialize(self.builder.build(project, event))

            logger.info("dispatching_webhook_event", recipients=len(recipients))

            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def send(subscription: WebhookSubscription) -> None:
                async with semaphore:
                    await self.client.deliver(subscription.payload_url, body)

            await asyncio.gather(*(send(subscription) for subscription in recipients))
            return len(recipients)

    def dispatch_in_background(self, project: Project, event: Event) -> asyncio.Task:
        """Start dispatch() without waiting for it.

        Must be called from a running event loop. The task is kept referenced
        until it finishes; drain() waits for all of them.
        """
        task = asyncio.create_task(self._dispatch_logged(project, event))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def _dispatch_logged(self, project: Project, event: Event) -> int:
        try:
            return await self.dispatch(project, event)
        except Exception as e:
            logger.error(
                "webhook_dispatch_failed",
                project_id=project.id,
                event_family=event.family,
                error=str(e),
                exc_info=True,
            )
            return 0

    @property
    def pending(self) -> int:
        """Number of background dispatches still running."""
        return len(self._background_tasks)

    async def drain(self) -> None:
        """Wait for all background dispatches to finish."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks))

    async def close(self) -> None:
        """Finish background work and release the HTTP client if owned."""
        await self.drain()
        if self._owns_client:
            await self.client.close()
