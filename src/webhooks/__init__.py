"""Webhook notification system."""

from src.webhooks.client import WebhookClient
from src.webhooks.dispatcher import WebhookDispatcher
from src.webhooks.filters import select_recipients
from src.webhooks.messages import MessageCatalog
from src.webhooks.models import (
    CommitInfo,
    DomainEvent,
    EventFamily,
    EventType,
    Issue,
    IssueEvent,
    IssueState,
    Project,
    PullRequest,
    PullRequestEvent,
    PushEvent,
    User,
    WebhookScope,
    WebhookSubscription,
)
from src.webhooks.payloads import PayloadBuilder
from src.webhooks.store import InMemorySubscriptionStore, SubscriptionStore

__all__ = [
    "CommitInfo",
    "DomainEvent",
    "EventFamily",
    "EventType",
    "InMemorySubscriptionStore",
    "Issue",
    "IssueEvent",
    "IssueState",
    "MessageCatalog",
    "PayloadBuilder",
    "Project",
    "PullRequest",
    "PullRequestEvent",
    "PushEvent",
    "SubscriptionStore",
    "User",
    "WebhookClient",
    "WebhookDispatcher",
    "WebhookScope",
    "WebhookSubscription",
    "select_recipients",
]
