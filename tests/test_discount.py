"""
Tests for `domain/discount.py`.

Covers rules:
- Tier boundaries: 1-3 -> 0%, 4-9 -> 10%, 10-20 -> 20%.
- The ladder is monotonic over the legal range.
- Quantities outside [1, 20] are programming errors (InvariantViolation).
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from domain.discount import (
    MAX_ITEM_QUANTITY,
    MIN_ITEM_QUANTITY,
    DiscountTier,
    discount_for,
    is_legal_quantity,
)
from domain.errors import InvariantViolation


@pytest.mark.parametrize(
    "quantity, expected",
    [
        (1, Decimal("0")),
        (3, Decimal("0")),
        (4, Decimal("10")),
        (9, Decimal("10")),
        (10, Decimal("20")),
        (20, Decimal("20")),
    ],
)
def test_discount_for_tier_boundaries(quantity: int, expected: Decimal) -> None:
    """Verify quantity -> percentage mapping on every tier edge."""

    assert discount_for(quantity) == expected


def test_discount_for_is_monotonic_over_legal_range() -> None:
    """Verify a larger quantity never gets a smaller discount."""

    percentages = [discount_for(q) for q in range(MIN_ITEM_QUANTITY, MAX_ITEM_QUANTITY + 1)]

    assert percentages == sorted(percentages)


@pytest.mark.parametrize("quantity", [21, 25, 100])
def test_discount_for_above_ceiling_raises(quantity: int) -> None:
    """Verify quantities above 20 are rejected instead of clamped."""

    with pytest.raises(InvariantViolation):
        discount_for(quantity)


@pytest.mark.parametrize("quantity", [0, -1])
def test_discount_for_below_floor_raises(quantity: int) -> None:
    with pytest.raises(InvariantViolation):
        discount_for(quantity)


def test_discount_tier_for_quantity() -> None:
    assert DiscountTier.for_quantity(2) is DiscountTier.NONE
    assert DiscountTier.for_quantity(5) is DiscountTier.TEN_PERCENT
    assert DiscountTier.for_quantity(15) is DiscountTier.TWENTY_PERCENT
    assert DiscountTier.TWENTY_PERCENT.percentage == Decimal("20")


def test_is_legal_quantity() -> None:
    assert is_legal_quantity(1) is True
    assert is_legal_quantity(20) is True
    assert is_legal_quantity(0) is False
    assert is_legal_quantity(21) is False
