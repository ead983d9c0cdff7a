"""
Domain: Sale events.

Advisory notifications emitted after a sale is persisted. They are not part of
the sale transaction; losing one never undoes the sale or its cancellation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar, Dict, Union
from uuid import UUID

from .sale import Sale
from .time import require_utc_timestamp


@dataclass(frozen=True, slots=True)
class SaleCreated:
    name: ClassVar[str] = "sale.created"

    sale_id: UUID
    sale_number: str
    customer_id: UUID
    branch_id: UUID
    total_amount: Decimal
    created_at: datetime

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)

    @staticmethod
    def from_sale(sale: Sale) -> "SaleCreated":
        return SaleCreated(
            sale_id=sale.sale_id,
            sale_number=sale.sale_number,
            customer_id=sale.customer_id,
            branch_id=sale.branch_id,
            total_amount=sale.total_amount,
            created_at=sale.created_at or sale.sale_date,
        )

    def to_payload(self) -> Dict[str, Any]:
        """JSON-safe representation."""
        return {
            "sale_id": str(self.sale_id),
            "sale_number": self.sale_number,
            "customer_id": str(self.customer_id),
            "branch_id": str(self.branch_id),
            "total_amount": str(self.total_amount),
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class SaleCancelled:
    name: ClassVar[str] = "sale.cancelled"

    sale_id: UUID
    sale_number: str
    cancellation_reason: str
    cancelled_at: datetime

    def __post_init__(self) -> None:
        require_utc_timestamp("cancelled_at", self.cancelled_at)

    @staticmethod
    def from_sale(sale: Sale) -> "SaleCancelled":
        if sale.cancelled_at is None or sale.cancellation_reason is None:
            raise ValueError(f"Sale {sale.sale_number} has not been cancelled")
        return SaleCancelled(
            sale_id=sale.sale_id,
            sale_number=sale.sale_number,
            cancellation_reason=sale.cancellation_reason,
            cancelled_at=sale.cancelled_at,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sale_id": str(self.sale_id),
            "sale_number": self.sale_number,
            "cancellation_reason": self.cancellation_reason,
            "cancelled_at": self.cancelled_at.isoformat(),
        }


SaleEvent = Union[SaleCreated, SaleCancelled]
