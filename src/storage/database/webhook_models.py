"""Webhook subscription table."""

import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.storage.database.base import Base
from src.webhooks.models import WebhookScope


class Webhook(Base):
    """Webhook registered on a project."""

    __tablename__ = "webhooks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    payload_url: Mapped[str] = mapped_column(String(2000), nullable=False)
    secret: Mapped[str] = mapped_column(String(250), nullable=False, default="")

    # True = all events, False = push only
    send_all_cases: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    @property
    def scope(self) -> WebhookScope:
        """Delivery scope derived from send_all_cases."""
        return WebhookScope.ALL_EVENTS if self.send_all_cases else WebhookScope.PUSH_ONLY

    def __repr__(self) -> str:
        return f"<Webhook(id={self.id}, project_id={self.project_id}, payload_url='{self.payload_url}')>"
