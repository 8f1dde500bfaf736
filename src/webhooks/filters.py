"""Recipient selection for webhook dispatch."""

from typing import Iterable

from src.webhooks.models import EventFamily, WebhookScope, WebhookSubscription


def select_recipients(
    subscriptions: Iterable[WebhookSubscription],
    family: EventFamily,
    enforce_scope: bool = False,
) -> list[WebhookSubscription]:
    """Return the subscriptions that should receive an event, in input order.

    Subscriptions without a payload URL are always skipped. Pushes go to every
    subscription. Issue and pull request events go to every subscription too,
    unless ``enforce_scope`` is set, in which case push-only subscriptions are
    left out.

    Args:
        subscriptions: A project's subscriptions
        family: Classification of the event being dispatched
        enforce_scope: Honor the push-only scope for non-push events

    Returns:
        Eligible subscriptions
    """
    family = EventFamily(family)
    recipients = []
    for subscription in subscriptions:
        if not subscription.is_deliverable:
            continue
        if (
            enforce_scope
            and family is not EventFamily.PUSH
            and subscription.scope is WebhookScope.PUSH_ONLY
        ):
            continue
        recipients.append(subscription)
    return recipients
