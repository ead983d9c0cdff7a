"""
Service wiring.

Composes the Supabase adapters, the configured event publisher and the sale
service. Registration order matters: client -> stores -> publisher -> service.
"""

from __future__ import annotations

from typing import List

from core import config
from core.logging_config import configure_logging
from domain.stores import EventPublisher
from services.event_emitter import CompositeEventPublisher, LoggingEventPublisher, SaleEventEmitter
from services.sale_service import SaleService


def build_event_publisher(mode: str, client: object) -> EventPublisher:
    """
    Publisher for EVENT_PUBLISHER mode "log", "outbox" or "both".
    """
    from repositories.event_outbox_repository import SupabaseOutboxPublisher

    publishers: List[EventPublisher] = []
    if mode in ("log", "both"):
        publishers.append(LoggingEventPublisher())
    if mode in ("outbox", "both"):
        publishers.append(SupabaseOutboxPublisher(client))

    if not publishers:
        raise ValueError(f"Unknown event publisher mode: {mode!r}")
    if len(publishers) == 1:
        return publishers[0]
    return CompositeEventPublisher(publishers)


def build_sale_service() -> SaleService:
    """Create a SaleService backed by Supabase."""
    configure_logging()

    from repositories.branch_repository import SupabaseBranchStore
    from repositories.client import supabase
    from repositories.customer_repository import SupabaseCustomerStore
    from repositories.product_repository import SupabaseProductStore
    from repositories.sale_repository import SupabaseSaleStore

    return SaleService(
        products=SupabaseProductStore(supabase),
        customers=SupabaseCustomerStore(supabase),
        branches=SupabaseBranchStore(supabase),
        sales=SupabaseSaleStore(supabase),
        events=SaleEventEmitter(build_event_publisher(config.EVENT_PUBLISHER, supabase)),
    )


# Global service instance (singleton pattern)
_sale_service: SaleService | None = None


def get_sale_service() -> SaleService:
    """
    Get the global SaleService instance, building it on first use.
    """
    global _sale_service
    if _sale_service is None:
        _sale_service = build_sale_service()
    return _sale_service


__all__ = ["build_event_publisher", "build_sale_service", "get_sale_service"]
