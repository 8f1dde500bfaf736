"""Celery application configuration."""

from celery import Celery

from src.core.config import get_settings

settings = get_settings()

celery_app = Celery(
    "hookshot",
    broker=settings.broker_url,
    backend=settings.result_backend,
    include=["src.tasks.webhook_tasks"],
)

# Deliveries are best-effort: no acks_late redelivery and no retries.
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    worker_prefetch_multiplier=1,
    task_ignore_result=True,
    broker_connection_retry_on_startup=True,
)
