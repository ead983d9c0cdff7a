"""
Domain: Sale and SaleItem.

Rules implemented here:
- A SaleItem's discount percentage is a pure function of its quantity
  (see domain/discount.py).
- discount_amount = unit_price * quantity * discount_percentage / 100
- total_amount    = unit_price * quantity - discount_amount
- Sale.total_amount == sum(item.total_amount for item in items), recomputed
  whenever the items change.
- Status only moves Active -> Cancelled; the transition is never reversed
  or repeated.
- Sale numbers are formatted SALE-NNNNNN (zero-padded, 6 digits) and issued
  in increasing order starting at SALE-000001.

Entities are immutable. Transitions return new instances; persistence is the
caller's job. All timestamps must be UTC and passed explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple
from uuid import UUID, uuid4

from .discount import discount_for
from .errors import InvariantViolation
from .time import require_utc_timestamp

CURRENCY_PRECISION = Decimal("0.01")

SALE_NUMBER_PREFIX: str = "SALE"
_SALE_NUMBER_DIGITS: int = 6


class SaleStatus(str, Enum):
    ACTIVE = "Active"
    CANCELLED = "Cancelled"


class SaleItemStatus(str, Enum):
    ACTIVE = "Active"
    CANCELLED = "Cancelled"


def _to_money(value: Decimal) -> Decimal:
    return value.quantize(CURRENCY_PRECISION, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class SaleItem:
    """
    One product line of a sale with its quantity-tiered discount applied.

    Use SaleItem.build() to create new lines; the constructor is for
    rehydrating already-priced rows from storage.
    """

    sale_item_id: UUID
    sale_id: UUID
    product_id: UUID
    quantity: int
    unit_price: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    status: SaleItemStatus = SaleItemStatus.ACTIVE
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    def __post_init__(self) -> None:
        if self.cancelled_at is not None:
            require_utc_timestamp("cancelled_at", self.cancelled_at)

    @staticmethod
    def build(
        *,
        sale_id: UUID,
        product_id: UUID,
        quantity: int,
        unit_price: Decimal,
        sale_item_id: Optional[UUID] = None,
    ) -> "SaleItem":
        """
        Price a new line.

        Quantity bounds are re-checked by discount_for(); an out-of-range
        quantity, or a price that is non-positive or not in whole cents, means
        validation was skipped.
        """

        percentage = discount_for(quantity)
        if unit_price <= 0:
            raise InvariantViolation(f"Unit price must be positive, got {unit_price}")
        if unit_price != unit_price.quantize(CURRENCY_PRECISION):
            raise InvariantViolation(f"Unit price must be in whole cents, got {unit_price}")

        gross = unit_price * quantity
        discount_amount = _to_money(gross * percentage / Decimal(100))

        return SaleItem(
            sale_item_id=sale_item_id or uuid4(),
            sale_id=sale_id,
            product_id=product_id,
            quantity=quantity,
            unit_price=unit_price,
            discount_percentage=percentage,
            discount_amount=discount_amount,
            total_amount=gross - discount_amount,
        )

    @property
    def is_active(self) -> bool:
        return self.status is SaleItemStatus.ACTIVE

    @property
    def gross_amount(self) -> Decimal:
        """Price before discount."""
        return self.unit_price * self.quantity

    def cancelled(self, reason: str, cancelled_at: datetime) -> "SaleItem":
        require_utc_timestamp("cancelled_at", cancelled_at)
        if not self.is_active:
            raise InvariantViolation(f"Sale item {self.sale_item_id} is already cancelled")
        return replace(
            self,
            status=SaleItemStatus.CANCELLED,
            cancelled_at=cancelled_at,
            cancellation_reason=reason,
        )


def sale_total(items: Iterable[SaleItem]) -> Decimal:
    """
    Grand total of a sale.

    Sums every line regardless of status: items are only ever cancelled
    together with their sale, so the total keeps reflecting what was sold.
    """

    return sum((item.total_amount for item in items), Decimal("0.00"))


@dataclass(frozen=True, slots=True)
class Sale:
    """
    A customer transaction at a branch.

    Invariants checked on construction:
    - total_amount matches the sum of the item totals.
    - every item belongs to this sale.
    - a Cancelled sale carries its cancellation timestamp.
    """

    sale_id: UUID
    sale_number: str
    sale_date: datetime
    customer_id: UUID
    branch_id: UUID
    items: Tuple[SaleItem, ...]
    total_amount: Decimal
    status: SaleStatus = SaleStatus.ACTIVE
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

        require_utc_timestamp("sale_date", self.sale_date)
        for name in ("cancelled_at", "created_at", "updated_at"):
            value = getattr(self, name)
            if value is not None:
                require_utc_timestamp(name, value)

        for item in self.items:
            if item.sale_id != self.sale_id:
                raise InvariantViolation(
                    f"Sale item {item.sale_item_id} belongs to sale {item.sale_id}, not {self.sale_id}"
                )

        expected = sale_total(self.items)
        if self.total_amount != expected:
            raise InvariantViolation(
                f"Sale {self.sale_number} total {self.total_amount} does not match items total {expected}"
            )

        if self.status is SaleStatus.CANCELLED and self.cancelled_at is None:
            raise InvariantViolation(f"Cancelled sale {self.sale_number} has no cancellation timestamp")

    @staticmethod
    def open(
        *,
        sale_id: UUID,
        sale_number: str,
        sale_date: datetime,
        customer_id: UUID,
        branch_id: UUID,
        items: Iterable[SaleItem],
    ) -> "Sale":
        """Create a new Active sale with its total computed from `items`."""

        items = tuple(items)
        return Sale(
            sale_id=sale_id,
            sale_number=sale_number,
            sale_date=sale_date,
            customer_id=customer_id,
            branch_id=branch_id,
            items=items,
            total_amount=sale_total(items),
            status=SaleStatus.ACTIVE,
            created_at=sale_date,
            updated_at=sale_date,
        )

    @property
    def is_cancelled(self) -> bool:
        return self.status is SaleStatus.CANCELLED

    @property
    def active_items(self) -> Tuple[SaleItem, ...]:
        return tuple(item for item in self.items if item.is_active)

    def with_items(self, items: Iterable[SaleItem]) -> "Sale":
        """Return a copy holding `items`, with the total recomputed."""

        items = tuple(items)
        return replace(self, items=items, total_amount=sale_total(items))

    def cancelled(self, reason: str, cancelled_at: datetime) -> "Sale":
        """
        Return this sale moved to Cancelled, with every active item cancelled
        for the same reason and at the same instant.
        """

        require_utc_timestamp("cancelled_at", cancelled_at)
        if self.is_cancelled:
            raise InvariantViolation(f"Sale {self.sale_number} is already cancelled")

        items = tuple(
            item.cancelled(reason, cancelled_at) if item.is_active else item
            for item in self.items
        )
        return replace(
            self,
            items=items,
            total_amount=sale_total(items),
            status=SaleStatus.CANCELLED,
            cancelled_at=cancelled_at,
            cancellation_reason=reason,
            updated_at=cancelled_at,
        )


def format_sale_number(sequence: int) -> str:
    """Format a sequence value as SALE-NNNNNN."""

    if sequence < 1:
        raise ValueError("sale number sequence must be >= 1")
    return f"{SALE_NUMBER_PREFIX}-{sequence:0{_SALE_NUMBER_DIGITS}d}"


def parse_sale_number(sale_number: str) -> int:
    """Extract the sequence value from a SALE-NNNNNN number."""

    prefix, _, digits = sale_number.partition("-")
    if prefix != SALE_NUMBER_PREFIX or not digits.isdigit():
        raise ValueError(f"Malformed sale number: {sale_number!r}")
    return int(digits)


def next_sale_number(last_sale_number: Optional[str]) -> str:
    """Number following `last_sale_number`; SALE-000001 when nothing was issued yet."""

    if last_sale_number is None:
        return format_sale_number(1)
    return format_sale_number(parse_sale_number(last_sale_number) + 1)


__all__ = [
    "CURRENCY_PRECISION",
    "SALE_NUMBER_PREFIX",
    "SaleStatus",
    "SaleItemStatus",
    "SaleItem",
    "Sale",
    "sale_total",
    "format_sale_number",
    "parse_sale_number",
    "next_sale_number",
]
