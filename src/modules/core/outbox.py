"""Transactional outbox writer.

Aggregates collect domain events in memory (``DomainEventMixin``).
When a repository saves one, ``record_domain_events`` writes an
``OutboxEvent`` row per event in the current transaction and schedules
the in-process publish for after commit, so a rolled-back unit of work
neither leaves rows behind nor notifies handlers.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal
from functools import partial
from typing import Any, Dict
from uuid import UUID

from django.db import transaction

from modules.core.models import OutboxEvent
from shared.infrastructure.bus import event_bus


def record_domain_events(entity: Any, topic: str) -> int:
    events = entity.domain_events if hasattr(entity, "domain_events") else []
    for event in events:
        OutboxEvent.objects.create(
            event_type=event.event_name,
            aggregate_id=str(event.aggregate_id),
            payload=serialize_event_payload(event),
            topic=topic,
        )
        transaction.on_commit(partial(event_bus.publish, event))
    if hasattr(entity, "clear_domain_events"):
        entity.clear_domain_events()
    return len(events)


def serialize_event_payload(event: Any) -> Dict[str, Any]:
    data = asdict(event)
    normalized = _normalize_for_json(data)
    return json.loads(json.dumps(normalized))


def _normalize_for_json(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_for_json(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_for_json(item) for key, item in value.items()}
    return value
