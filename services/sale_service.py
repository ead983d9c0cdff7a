"""
Sale lifecycle service.

Handles:
- Sale creation: validation, execution-time stock check, tiered pricing,
  stock decrement, persistence and the "sale created" event
- Sale cancellation: Active -> Cancelled, best-effort stock restore and the
  "sale cancelled" event
- Sale lookups by id, by sale number and by customer

Known gaps, accepted for now:
- Stock is updated read-modify-write through ProductStore.update(); two
  concurrent sales of a low-stock product can both pass the stock check.
- Stock decrements are not rolled back if a later step fails; there is no
  compensation log.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Callable, Dict, List
from uuid import UUID, uuid4

from domain.errors import BusinessConflict, SaleAlreadyCancelled, SaleNotFound
from domain.product import Product
from domain.sale import Sale, SaleItem
from domain.stores import BranchStore, CustomerStore, ProductStore, SaleStore
from domain.time import utc_now
from services.commands import CancelSaleCommand, CreateSaleCommand
from services.event_emitter import SaleEventEmitter
from services.sale_validation import ensure_valid, validate_cancel_sale, validate_create_sale

logger = logging.getLogger(__name__)


class SaleService:
    """
    Orchestrates the sale lifecycle on top of the external stores.

    The service keeps no state between calls; everything durable lives in the
    stores it is given.
    """

    def __init__(
        self,
        products: ProductStore,
        customers: CustomerStore,
        branches: BranchStore,
        sales: SaleStore,
        events: SaleEventEmitter,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._products = products
        self._customers = customers
        self._branches = branches
        self._sales = sales
        self._events = events
        self._clock = clock

    # ==================== CREATE ====================

    def create_sale(self, command: CreateSaleCommand) -> Sale:
        """
        Create a sale.

        Process:
        1. Validate customer, branch and every item (all violations reported)
        2. Re-check current stock for every item; reject the whole sale if short
        3. Take the next sale number
        4. Price each line with the quantity-tiered discount
        5. Decrement stock per item, in request order
        6. Persist the sale with its items (status Active)
        7. Emit "sale created"

        Raises:
            ValidationFailure: bad input or unknown/inactive references
            BusinessConflict: stock or product state changed since validation
        """
        logger.info(
            f"Creating sale for customer {command.customer_id} at branch {command.branch_id}",
            extra={
                "customer_id": str(command.customer_id),
                "branch_id": str(command.branch_id),
                "item_count": len(command.items),
            },
        )

        ensure_valid(
            validate_create_sale(command, self._customers, self._branches, self._products),
            operation="CreateSale",
        )

        self._check_stock(command)

        sale_number = self._sales.next_sale_number()
        now = self._clock()
        sale_id = uuid4()

        items = [
            SaleItem.build(
                sale_id=sale_id,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in command.items
        ]

        for item in items:
            self._adjust_stock(item.product_id, -item.quantity, now)

        sale = Sale.open(
            sale_id=sale_id,
            sale_number=sale_number,
            sale_date=now,
            customer_id=command.customer_id,
            branch_id=command.branch_id,
            items=items,
        )
        created = self._sales.create(sale)

        self._events.sale_created(created)

        logger.info(
            f"Sale {created.sale_number} created successfully with total amount {created.total_amount}",
            extra={"sale_id": str(created.sale_id), "sale_number": created.sale_number},
        )
        return created

    def _check_stock(self, command: CreateSaleCommand) -> None:
        """
        Authoritative stock check, separate from validation.

        Quantities for the same product on several lines are added up, so a
        sale is either fully coverable by current stock or rejected whole.
        """
        requested: Dict[UUID, int] = defaultdict(int)
        for item in command.items:
            requested[item.product_id] += item.quantity

        for product_id, quantity in requested.items():
            product = self._products.get_by_id(product_id)
            if product is None or not product.is_active():
                raise BusinessConflict(
                    f"Product {product_id} is no longer available",
                    {"product_id": str(product_id)},
                )
            if not product.has_stock_for(quantity):
                raise BusinessConflict(
                    f"Insufficient stock for product {product.name}. "
                    f"Available: {product.stock_quantity}, Requested: {quantity}",
                    {
                        "product_id": str(product_id),
                        "available": product.stock_quantity,
                        "requested": quantity,
                    },
                )

    def _adjust_stock(self, product_id: UUID, delta: int, now: datetime) -> Product:
        product = self._products.get_by_id(product_id)
        if product is None:
            raise BusinessConflict(
                f"Product {product_id} is no longer available",
                {"product_id": str(product_id)},
            )
        if product.stock_quantity + delta < 0:
            raise BusinessConflict(
                f"Insufficient stock for product {product.name}. "
                f"Available: {product.stock_quantity}, Requested: {-delta}",
                {
                    "product_id": str(product_id),
                    "available": product.stock_quantity,
                    "requested": -delta,
                },
            )
        return self._products.update(product.with_stock(product.stock_quantity + delta, now))

    # ==================== CANCEL ====================

    def cancel_sale(self, command: CancelSaleCommand) -> Sale:
        """
        Cancel a sale.

        Process:
        1. Validate the sale exists and the reason is present and short enough
        2. Reject with SaleAlreadyCancelled if the sale is already cancelled
        3. Mark sale and items Cancelled, persist
        4. Give back stock for every item that was active; products that no
           longer exist are skipped
        5. Emit "sale cancelled"

        Raises:
            ValidationFailure: unknown sale or bad reason
            SaleAlreadyCancelled: the sale was cancelled before
        """
        logger.info(f"Cancelling sale with ID {command.sale_id}", extra={"sale_id": str(command.sale_id)})

        sale = self._sales.get_by_id(command.sale_id)
        ensure_valid(validate_cancel_sale(command, sale), operation="CancelSale")
        if sale is None:
            raise SaleNotFound(command.sale_id)

        if sale.is_cancelled:
            raise SaleAlreadyCancelled(sale.sale_number)

        now = self._clock()
        updated = self._sales.update(sale.cancelled(command.reason.strip(), now))

        for item in sale.active_items:
            product = self._products.get_by_id(item.product_id)
            if product is None:
                logger.warning(
                    f"Product {item.product_id} not found; stock not restored for sale {sale.sale_number}",
                    extra={"sale_id": str(sale.sale_id), "product_id": str(item.product_id), "quantity": item.quantity},
                )
                continue
            self._products.update(product.with_stock(product.stock_quantity + item.quantity, now))

        self._events.sale_cancelled(updated)

        logger.info(
            f"Sale {updated.sale_number} cancelled successfully",
            extra={"sale_id": str(updated.sale_id), "sale_number": updated.sale_number},
        )
        return updated

    # ==================== QUERIES ====================

    def get_sale(self, sale_id: UUID) -> Sale:
        sale = self._sales.get_by_id(sale_id)
        if sale is None:
            raise SaleNotFound(sale_id)
        return sale

    def get_sale_by_number(self, sale_number: str) -> Sale:
        sale = self._sales.get_by_sale_number(sale_number)
        if sale is None:
            raise SaleNotFound(sale_number)
        return sale

    def list_customer_sales(self, customer_id: UUID) -> List[Sale]:
        return self._sales.list_by_customer(customer_id)


__all__ = ["SaleService"]
