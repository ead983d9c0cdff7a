"""
Domain: Product (external aggregate).

The sale core does not own the product lifecycle. It reads `active` and
`stock_quantity`, and writes back adjusted stock through the ProductStore.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from .errors import InvariantViolation
from .time import require_utc_timestamp


@dataclass(frozen=True, slots=True)
class Product:
    """
    Catalog product with its current stock level.

    Stock changes return a new instance; the caller persists it.
    """

    product_id: UUID
    name: str
    stock_quantity: int
    active: bool = True
    code: str = ""
    sku: str = ""
    description: str = ""
    price: Decimal = Decimal("0.00")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.created_at is not None:
            require_utc_timestamp("created_at", self.created_at)
        if self.updated_at is not None:
            require_utc_timestamp("updated_at", self.updated_at)

    def is_active(self) -> bool:
        """Only active products may be sold."""
        return self.active

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def with_stock(self, new_quantity: int, updated_at: datetime) -> "Product":
        """Return a copy carrying `new_quantity` units in stock."""

        require_utc_timestamp("updated_at", updated_at)
        if new_quantity < 0:
            raise InvariantViolation(
                f"Stock for product {self.product_id} cannot go negative ({new_quantity})"
            )
        return replace(self, stock_quantity=new_quantity, updated_at=updated_at)
