"""
Validation rules for the sale use cases.

Each validator returns the full list of violations instead of stopping at the
first one. ensure_valid() turns a non-empty list into a ValidationFailure.
Validators only read from the stores; nothing is mutated here.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from domain.discount import MAX_ITEM_QUANTITY, MIN_ITEM_QUANTITY, is_legal_quantity
from domain.errors import ValidationFailure
from domain.sale import CURRENCY_PRECISION, Sale
from domain.stores import BranchStore, CustomerStore, ProductStore
from services.commands import CancelSaleCommand, CreateSaleCommand

logger = logging.getLogger(__name__)

MAX_CANCELLATION_REASON_LENGTH: int = 500


def validate_create_sale(
    command: CreateSaleCommand,
    customers: CustomerStore,
    branches: BranchStore,
    products: ProductStore,
) -> List[str]:
    """
    Check a CreateSaleCommand against input and referential rules.

    Rules:
    - Customer exists and is active
    - Branch exists
    - At least one item
    - Per item: product exists and is active, quantity in [1, 20],
      unit price greater than 0 with at most 2 decimal places

    Returns:
        List of violation messages (empty when the command is valid)
    """
    errors: List[str] = []

    customer = customers.get_by_id(command.customer_id)
    if customer is None or not customer.is_active():
        errors.append("Customer not found or inactive")

    if branches.get_by_id(command.branch_id) is None:
        errors.append("Branch not found")

    if not command.items:
        errors.append("At least one item is required")

    for index, item in enumerate(command.items, start=1):
        product = products.get_by_id(item.product_id)
        if product is None or not product.is_active():
            errors.append(f"Item {index}: Product not found or inactive")

        if not is_legal_quantity(item.quantity):
            errors.append(
                f"Item {index}: Quantity must be between {MIN_ITEM_QUANTITY} and {MAX_ITEM_QUANTITY}"
            )

        if item.unit_price <= 0:
            errors.append(f"Item {index}: Unit price must be greater than 0")
        elif item.unit_price != item.unit_price.quantize(CURRENCY_PRECISION):
            errors.append(f"Item {index}: Unit price must have at most 2 decimal places")

    return errors


def validate_cancel_sale(command: CancelSaleCommand, sale: Optional[Sale]) -> List[str]:
    """
    Check a CancelSaleCommand.

    `sale` is the current state of command.sale_id (None if it does not
    exist). An already-cancelled sale is not a validation error; the
    lifecycle engine reports it as a conflict.
    """
    errors: List[str] = []

    if sale is None:
        errors.append("Sale not found")

    reason = command.reason.strip()
    if not reason:
        errors.append("Cancellation reason is required")
    elif len(reason) > MAX_CANCELLATION_REASON_LENGTH:
        errors.append(
            f"Cancellation reason cannot exceed {MAX_CANCELLATION_REASON_LENGTH} characters"
        )

    return errors


def ensure_valid(errors: List[str], operation: str) -> None:
    """Raise ValidationFailure carrying every message in `errors`, if any."""

    if not errors:
        return

    logger.warning(
        f"Validation failed for {operation}: {', '.join(errors)}",
        extra={"operation": operation, "validation_errors": list(errors)},
    )
    raise ValidationFailure(errors, operation=operation)


__all__ = [
    "MAX_CANCELLATION_REASON_LENGTH",
    "validate_create_sale",
    "validate_cancel_sale",
    "ensure_valid",
]
