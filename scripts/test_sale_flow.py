#!/usr/bin/env python3
"""
Test script for the complete sale flow against a live Supabase project.

Demonstrates:
1. Sale creation with tiered discounts
2. Stock decrement per line
3. Cancellation and stock restore

Usage:
    python scripts/test_sale_flow.py --customer <uuid> --branch <uuid> \
        --product <uuid>:5:10.00 --product <uuid>:12:3.50
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List
from uuid import UUID

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.errors import BusinessConflict, ValidationFailure
from services.commands import CancelSaleCommand, CreateSaleCommand
from services.container import get_sale_service


def print_section(title: str) -> None:
    """Print a section header."""
    print()
    print("=" * 80)
    print(title)
    print("=" * 80)


def _parse_line(value: str) -> Dict[str, str]:
    try:
        product_id, quantity, unit_price = value.split(":")
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected <product_id>:<quantity>:<unit_price>, got {value!r}")
    return {"product_id": product_id, "quantity": quantity, "unit_price": unit_price}


def _stock_levels(product_ids: List[UUID]) -> Dict[UUID, int]:
    from repositories.product_repository import SupabaseProductStore

    store = SupabaseProductStore()
    levels: Dict[UUID, int] = {}
    for product_id in product_ids:
        product = store.get_by_id(product_id)
        levels[product_id] = product.stock_quantity if product else -1
    return levels


def main() -> int:
    parser = argparse.ArgumentParser(description="Create and cancel a sale end to end")
    parser.add_argument("--customer", required=True, help="Customer UUID")
    parser.add_argument("--branch", required=True, help="Branch UUID")
    parser.add_argument("--product", action="append", type=_parse_line, required=True,
                        help="<product_id>:<quantity>:<unit_price>, repeatable")
    parser.add_argument("--reason", default="Customer request", help="Cancellation reason")
    parser.add_argument("--keep", action="store_true", help="Do not cancel the sale afterwards")
    args = parser.parse_args()

    service = get_sale_service()

    print_section("STEP 1: Create sale")
    try:
        command = CreateSaleCommand.parse({
            "customer_id": args.customer,
            "branch_id": args.branch,
            "items": args.product,
        })
    except ValidationFailure as e:
        print(f"   Invalid input: {e.errors}")
        return 1

    product_ids = [item.product_id for item in command.items]
    before = _stock_levels(product_ids)

    try:
        sale = service.create_sale(command)
    except ValidationFailure as e:
        print("   Sale rejected:")
        for error in e.errors:
            print(f"     - {error}")
        return 1
    except BusinessConflict as e:
        print(f"   Sale conflict: {e.reason}")
        return 1

    print(f"   Sale number: {sale.sale_number}")
    print(f"   Sale ID:     {sale.sale_id}")
    for item in sale.items:
        print(
            f"     {item.product_id}  qty={item.quantity:>2}  unit={item.unit_price}  "
            f"discount={item.discount_percentage}% (-{item.discount_amount})  total={item.total_amount}"
        )
    print(f"   Total amount: {sale.total_amount}")

    after_create = _stock_levels(product_ids)
    for product_id in product_ids:
        print(f"   Stock {product_id}: {before[product_id]} -> {after_create[product_id]}")

    if args.keep:
        return 0

    print_section("STEP 2: Cancel sale")
    cancelled = service.cancel_sale(CancelSaleCommand(sale_id=sale.sale_id, reason=args.reason))
    print(f"   Status:       {cancelled.status.value}")
    print(f"   Cancelled at: {cancelled.cancelled_at}")
    print(f"   Reason:       {cancelled.cancellation_reason}")

    after_cancel = _stock_levels(product_ids)
    restored = all(after_cancel[p] == before[p] for p in product_ids)
    for product_id in product_ids:
        print(f"   Stock {product_id}: {after_create[product_id]} -> {after_cancel[product_id]}")
    print(f"\n   Stock restored: {'YES' if restored else 'NO (other sales may have run meanwhile)'}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
