"""
Sale event outbox (persistence).

Publishes sale events by inserting them into the `sale_events` table. A
separate dispatcher drains undelivered rows (dispatched_at_utc IS NULL) to
downstream subscribers; that dispatcher is not part of this codebase.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from domain.events import SaleEvent
from domain.stores import EventPublisher
from domain.time import utc_now
from repositories.serialization import rows_or_raise

_SALE_EVENTS_TABLE: str = "sale_events"


class SupabaseOutboxPublisher(EventPublisher):

    def __init__(self, client: Any = None) -> None:
        if client is None:
            from repositories.client import supabase as client
        self._client = client

    def publish(self, event: SaleEvent) -> None:
        payload: dict[str, Any] = {
            "event_id": str(uuid4()),
            "event_name": event.name,
            "sale_id": str(event.sale_id),
            "payload": event.to_payload(),
            "recorded_at_utc": utc_now().isoformat(),
            "dispatched_at_utc": None,
        }

        response = self._client.table(_SALE_EVENTS_TABLE).insert(payload).execute()
        rows_or_raise(response, f"record {event.name} event")


__all__ = ["SupabaseOutboxPublisher"]
