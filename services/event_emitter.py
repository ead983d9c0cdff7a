"""
Sale event emission.

Events are advisory. A sale or cancellation is complete once it is persisted;
a publisher failure is logged and swallowed, and never reaches the caller.
Nothing is retried here.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from domain.events import SaleCancelled, SaleCreated, SaleEvent
from domain.sale import Sale
from domain.stores import EventPublisher

logger = logging.getLogger(__name__)


class LoggingEventPublisher(EventPublisher):
    """Publishes events by writing them to the application log."""

    def __init__(self, event_logger: logging.Logger | None = None) -> None:
        self._logger = event_logger or logging.getLogger("sales.events")

    def publish(self, event: SaleEvent) -> None:
        payload = event.to_payload()
        self._logger.info(
            f"{event.name} event received - "
            + ", ".join(f"{key}: {value}" for key, value in payload.items()),
            extra={"event_name": event.name, "event_payload": payload},
        )


class CompositeEventPublisher(EventPublisher):
    """
    Fans an event out to several publishers.

    Every publisher is attempted; if any of them failed, the first error is
    re-raised afterwards.
    """

    def __init__(self, publishers: Iterable[EventPublisher]) -> None:
        self._publishers: List[EventPublisher] = list(publishers)

    def publish(self, event: SaleEvent) -> None:
        first_error: Exception | None = None
        for publisher in self._publishers:
            try:
                publisher.publish(event)
            except Exception as e:
                logger.warning(
                    f"Publisher {type(publisher).__name__} failed for {event.name}: {e}",
                    extra={"event_name": event.name, "publisher": type(publisher).__name__},
                )
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error


class SaleEventEmitter:
    """
    Builds sale events from persisted sales and hands them to a publisher.

    Returns True when the publisher accepted the event, False otherwise.
    """

    def __init__(self, publisher: EventPublisher) -> None:
        self._publisher = publisher

    def _emit(self, event: SaleEvent) -> bool:
        try:
            self._publisher.publish(event)
        except Exception:
            logger.exception(
                f"Failed to publish {event.name} for sale {event.sale_number}",
                extra={"event_name": event.name, "sale_id": str(event.sale_id)},
            )
            return False
        return True

    def sale_created(self, sale: Sale) -> bool:
        return self._emit(SaleCreated.from_sale(sale))

    def sale_cancelled(self, sale: Sale) -> bool:
        return self._emit(SaleCancelled.from_sale(sale))


__all__ = [
    "LoggingEventPublisher",
    "CompositeEventPublisher",
    "SaleEventEmitter",
]
