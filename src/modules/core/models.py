"""Shared model base and the transactional outbox.

Every table in the project keys its rows by a time-ordered UUIDv7, so
primary keys sort in insertion order and lock acquisition "by primary
key" is also "by age".

Reference entities are hard-deleted.  A delete is only reachable
through the referential guard, so a vanished row had no dependents.
"""

from __future__ import annotations

import uuid6
from django.db import models


class BaseModel(models.Model):
    """UUIDv7 key plus creation and modification stamps."""

    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        # auto_now is skipped when update_fields omits the column.
        fields = kwargs.get("update_fields")
        if fields is not None and "updated_at" not in fields:
            kwargs["update_fields"] = [*fields, "updated_at"]
        super().save(*args, **kwargs)


class EventStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    PUBLISHED = "PUBLISHED", "Published"
    FAILED = "FAILED", "Failed"


class OutboxEvent(BaseModel):
    """Domain event persisted in the same transaction as the aggregate.

    Rows are written by repositories while the unit of work is open, so
    an order that rolls back never leaves an ``OrderCreated`` behind.
    A relay outside this service reads ``PENDING`` rows in ``created_at``
    order and records the outcome in ``status``, ``processed_at``,
    ``error_message`` and ``retry_count``.
    """

    event_type = models.CharField(max_length=100)
    topic = models.CharField(max_length=100)
    aggregate_id = models.CharField(max_length=255)
    payload = models.JSONField()
    status = models.CharField(
        max_length=20, choices=EventStatus.choices, default=EventStatus.PENDING
    )
    processed_at = models.DateTimeField(null=True, blank=True, default=None)
    error_message = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01
    retry_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "outbox_events"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["topic", "event_type"], name="outbox_topic_type_idx"),
            models.Index(fields=["aggregate_id"], name="outbox_aggregate_idx"),
            models.Index(fields=["status", "created_at"], name="outbox_pending_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.topic}.{self.event_type} [{self.status}] ({self.aggregate_id})"
