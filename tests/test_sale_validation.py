"""
Tests for `services/sale_validation.py`.

Covers rules:
- Every violation is collected; validation does not stop at the first one.
- Customer must exist and be active; branch must exist.
- Items: non-empty, active product, quantity in [1, 20], positive unit price.
- Cancellation: sale must exist, reason required and at most 500 characters.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from domain.errors import ValidationFailure
from services.commands import CancelSaleCommand, CreateSaleCommand, CreateSaleItemCommand
from services.sale_validation import ensure_valid, validate_cancel_sale, validate_create_sale

from sample_data import (
    BRANCH_ID,
    CUSTOMER_ID,
    INACTIVE_CUSTOMER_ID,
    INACTIVE_PRODUCT_ID,
    PRODUCT_ID,
    UNKNOWN_ID,
)


def _line(product_id=PRODUCT_ID, quantity=1, unit_price="10.00") -> CreateSaleItemCommand:
    return CreateSaleItemCommand(product_id=product_id, quantity=quantity, unit_price=Decimal(unit_price))


def test_valid_create_command_has_no_errors(customers, branches, products) -> None:
    command = CreateSaleCommand(customer_id=CUSTOMER_ID, branch_id=BRANCH_ID, items=[_line(quantity=20)])

    assert validate_create_sale(command, customers, branches, products) == []


def test_create_validation_collects_every_violation(customers, branches, products) -> None:
    """Verify all rule violations are reported together."""

    command = CreateSaleCommand(
        customer_id=INACTIVE_CUSTOMER_ID,
        branch_id=UNKNOWN_ID,
        items=[
            _line(product_id=UNKNOWN_ID),
            _line(quantity=25),
            _line(product_id=INACTIVE_PRODUCT_ID, quantity=0, unit_price="0.00"),
        ],
    )

    errors = validate_create_sale(command, customers, branches, products)

    assert errors == [
        "Customer not found or inactive",
        "Branch not found",
        "Item 1: Product not found or inactive",
        "Item 2: Quantity must be between 1 and 20",
        "Item 3: Product not found or inactive",
        "Item 3: Quantity must be between 1 and 20",
        "Item 3: Unit price must be greater than 0",
    ]


@pytest.mark.parametrize("unit_price", ["0.005", "10.001", "0.001"])
def test_create_validation_rejects_sub_cent_prices(customers, branches, products, unit_price: str) -> None:
    """Verify prices must fit the two-decimal money columns they are stored in."""

    command = CreateSaleCommand(
        customer_id=CUSTOMER_ID,
        branch_id=BRANCH_ID,
        items=[_line(), _line(unit_price=unit_price)],
    )

    errors = validate_create_sale(command, customers, branches, products)

    assert errors == ["Item 2: Unit price must have at most 2 decimal places"]


def test_create_validation_accepts_whole_cent_prices(customers, branches, products) -> None:
    command = CreateSaleCommand(
        customer_id=CUSTOMER_ID,
        branch_id=BRANCH_ID,
        items=[_line(unit_price="10"), _line(unit_price="9.5"), _line(unit_price="0.01")],
    )

    assert validate_create_sale(command, customers, branches, products) == []


def test_create_validation_requires_items(customers, branches, products) -> None:
    command = CreateSaleCommand(customer_id=CUSTOMER_ID, branch_id=BRANCH_ID, items=[])

    assert validate_create_sale(command, customers, branches, products) == ["At least one item is required"]


def test_create_validation_rejects_unknown_customer(customers, branches, products) -> None:
    command = CreateSaleCommand(customer_id=UNKNOWN_ID, branch_id=BRANCH_ID, items=[_line()])

    assert validate_create_sale(command, customers, branches, products) == ["Customer not found or inactive"]


@pytest.mark.parametrize(
    "reason, expected",
    [
        ("Customer request", []),
        ("", ["Cancellation reason is required"]),
        ("   ", ["Cancellation reason is required"]),
        ("x" * 500, []),
        ("x" * 501, ["Cancellation reason cannot exceed 500 characters"]),
    ],
)
def test_cancel_validation_reason_rules(service, reason: str, expected: list) -> None:
    sale = service.create_sale(
        CreateSaleCommand(customer_id=CUSTOMER_ID, branch_id=BRANCH_ID, items=[_line()])
    )

    errors = validate_cancel_sale(CancelSaleCommand(sale_id=sale.sale_id, reason=reason), sale)

    assert errors == expected


def test_cancel_validation_reports_missing_sale_and_reason() -> None:
    errors = validate_cancel_sale(CancelSaleCommand(sale_id=UNKNOWN_ID, reason=""), None)

    assert errors == ["Sale not found", "Cancellation reason is required"]


def test_ensure_valid_raises_with_all_errors() -> None:
    with pytest.raises(ValidationFailure) as excinfo:
        ensure_valid(["first", "second"], operation="CreateSale")

    assert excinfo.value.errors == ["first", "second"]
    assert excinfo.value.operation == "CreateSale"
    assert "first; second" in str(excinfo.value)


def test_ensure_valid_passes_on_empty_list() -> None:
    ensure_valid([], operation="CreateSale")
