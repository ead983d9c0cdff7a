"""
Domain: Quantity-tiered discount policy.

The ladder is the only pricing rule applied to a sale line:

  - NONE:            quantity ∈ [  1,  3 ]  →  0%
  - TEN_PERCENT:     quantity ∈ [  4,  9 ]  → 10%
  - TWENTY_PERCENT:  quantity ∈ [ 10, 20 ]  → 20%

Quantities outside [1, 20] are illegal. Validation rejects them before any
line is built, so reaching this module with one is a programming error and
raises InvariantViolation instead of clamping.

MIN_ITEM_QUANTITY / MAX_ITEM_QUANTITY are imported by the validators and the
line-item builder; the bounds are defined nowhere else.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from .errors import InvariantViolation

MIN_ITEM_QUANTITY: int = 1
MAX_ITEM_QUANTITY: int = 20


class DiscountTier(str, Enum):
    NONE = "NONE"
    TEN_PERCENT = "TEN_PERCENT"
    TWENTY_PERCENT = "TWENTY_PERCENT"

    @property
    def percentage(self) -> Decimal:
        return _PERCENTAGE_BY_TIER[self]

    @staticmethod
    def for_quantity(quantity: int) -> "DiscountTier":
        """
        Resolve the tier for a line quantity.

        Raises InvariantViolation for quantities outside [1, 20].
        """

        if quantity < MIN_ITEM_QUANTITY:
            raise InvariantViolation(
                f"Cannot price a sale item with quantity {quantity} (minimum is {MIN_ITEM_QUANTITY})"
            )
        if quantity > MAX_ITEM_QUANTITY:
            raise InvariantViolation(
                f"Cannot sell more than {MAX_ITEM_QUANTITY} identical items. Requested: {quantity}"
            )

        if quantity <= 3:
            return DiscountTier.NONE
        if quantity <= 9:
            return DiscountTier.TEN_PERCENT
        return DiscountTier.TWENTY_PERCENT


_PERCENTAGE_BY_TIER = {
    DiscountTier.NONE: Decimal("0"),
    DiscountTier.TEN_PERCENT: Decimal("10"),
    DiscountTier.TWENTY_PERCENT: Decimal("20"),
}


def discount_for(quantity: int) -> Decimal:
    """Discount percentage (0, 10 or 20) for a line of `quantity` identical items."""

    return DiscountTier.for_quantity(quantity).percentage


def is_legal_quantity(quantity: int) -> bool:
    return MIN_ITEM_QUANTITY <= quantity <= MAX_ITEM_QUANTITY


__all__ = [
    "MIN_ITEM_QUANTITY",
    "MAX_ITEM_QUANTITY",
    "DiscountTier",
    "discount_for",
    "is_legal_quantity",
]
