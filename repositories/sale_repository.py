"""
Sale repository (persistence).

Supabase-backed SaleStore. It only persists and fetches sales; business rules
(discounts, stock, status transitions) live in the domain and service layers.

Sales and their items are written through PostgreSQL functions so that a sale
is never stored without its items:
- create_sale_atomic(p_sale jsonb, p_items jsonb)
- update_sale_atomic(p_sale jsonb, p_items jsonb)
Both run in a single transaction and return {"success": bool, "error": ...,
"message": ...}.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from domain.errors import StoreError
from domain.sale import Sale, SaleItem, SaleItemStatus, SaleStatus, next_sale_number
from domain.stores import SaleStore
from repositories.serialization import (
    parse_optional_datetime,
    parse_utc_datetime,
    rows_or_raise,
    to_decimal,
    to_iso_utc,
)

# Keep these aligned with your database schema.
_SALES_TABLE: str = "sales"
_SALE_ITEMS_TABLE: str = "sale_items"

# Sale row with its items embedded through the sale_items foreign key.
_SALE_WITH_ITEMS: str = f"*, {_SALE_ITEMS_TABLE}(*)"


def _row_to_item(row: Mapping[str, Any]) -> SaleItem:
    """Convert a Supabase sale_items row into a SaleItem."""

    return SaleItem(
        sale_item_id=UUID(str(row["sale_item_id"])),
        sale_id=UUID(str(row["sale_id"])),
        product_id=UUID(str(row["product_id"])),
        quantity=int(row["quantity"]),
        unit_price=to_decimal(row["unit_price"]),
        discount_percentage=to_decimal(row["discount_percentage"]),
        discount_amount=to_decimal(row["discount_amount"]),
        total_amount=to_decimal(row["total_amount"]),
        status=SaleItemStatus(str(row.get("status", SaleItemStatus.ACTIVE.value))),
        cancelled_at=parse_optional_datetime(row.get("cancelled_at_utc")),
        cancellation_reason=row.get("cancellation_reason"),
    )


def _row_to_sale(row: Mapping[str, Any]) -> Sale:
    """Convert a Supabase sales row (with embedded sale_items) into a Sale."""

    item_rows = sorted(row.get(_SALE_ITEMS_TABLE) or [], key=lambda r: int(r.get("line_number", 0)))

    return Sale(
        sale_id=UUID(str(row["sale_id"])),
        sale_number=str(row["sale_number"]),
        sale_date=parse_utc_datetime(row["sale_date_utc"]),
        customer_id=UUID(str(row["customer_id"])),
        branch_id=UUID(str(row["branch_id"])),
        items=tuple(_row_to_item(r) for r in item_rows),
        total_amount=to_decimal(row["total_amount"]),
        status=SaleStatus(str(row["status"])),
        cancelled_at=parse_optional_datetime(row.get("cancelled_at_utc")),
        cancellation_reason=row.get("cancellation_reason"),
        created_at=parse_optional_datetime(row.get("created_at_utc")),
        updated_at=parse_optional_datetime(row.get("updated_at_utc")),
    )


def _sale_payload(sale: Sale) -> Dict[str, Any]:
    return {
        "sale_id": str(sale.sale_id),
        "sale_number": sale.sale_number,
        "sale_date_utc": to_iso_utc(sale.sale_date, name="sale_date"),
        "customer_id": str(sale.customer_id),
        "branch_id": str(sale.branch_id),
        "total_amount": str(sale.total_amount),
        "status": sale.status.value,
        "cancelled_at_utc": to_iso_utc(sale.cancelled_at, name="cancelled_at"),
        "cancellation_reason": sale.cancellation_reason,
        "created_at_utc": to_iso_utc(sale.created_at, name="created_at"),
        "updated_at_utc": to_iso_utc(sale.updated_at, name="updated_at"),
    }


def _item_payloads(sale: Sale) -> List[Dict[str, Any]]:
    return [
        {
            "sale_item_id": str(item.sale_item_id),
            "sale_id": str(item.sale_id),
            "line_number": line_number,
            "product_id": str(item.product_id),
            "quantity": item.quantity,
            "unit_price": str(item.unit_price),
            "discount_percentage": str(item.discount_percentage),
            "discount_amount": str(item.discount_amount),
            "total_amount": str(item.total_amount),
            "status": item.status.value,
            "cancelled_at_utc": to_iso_utc(item.cancelled_at, name="cancelled_at"),
            "cancellation_reason": item.cancellation_reason,
        }
        for line_number, item in enumerate(sale.items, start=1)
    ]


class SupabaseSaleStore(SaleStore):

    def __init__(self, client: Any = None) -> None:
        if client is None:
            from repositories.client import supabase as client
        self._client = client

    def _call_atomic(self, function: str, sale: Sale) -> None:
        """
        Run one of the sale PostgreSQL functions.

        Raises:
            StoreError: if the RPC fails or the function reports failure
        """
        from postgrest.exceptions import APIError

        params = {"p_sale": _sale_payload(sale), "p_items": _item_payloads(sale)}

        try:
            response = self._client.rpc(function, params).execute()
        except APIError as e:
            # supabase-py raises APIError for JSON bodies coming back from
            # functions, including successful ones.
            body = e.json() if callable(getattr(e, "json", None)) else {}
            if isinstance(body, dict) and body.get("success") is True:
                return
            raise StoreError(f"{function} failed for sale {sale.sale_number}: {e}") from e

        error = getattr(response, "error", None)
        if error:
            raise StoreError(f"{function} failed for sale {sale.sale_number}: {error}")

        result = getattr(response, "data", None) or {}
        if isinstance(result, dict) and result.get("success") is False:
            raise StoreError(
                f"{function} failed for sale {sale.sale_number}: "
                f"{result.get('error')} {result.get('message') or ''}".rstrip()
            )

    def create(self, sale: Sale) -> Sale:
        """Insert the sale and all of its items in one transaction."""

        self._call_atomic("create_sale_atomic", sale)
        return sale

    def update(self, sale: Sale) -> Sale:
        """Write the sale row and its item rows in one transaction."""

        self._call_atomic("update_sale_atomic", sale)
        return sale

    def get_by_id(self, sale_id: UUID) -> Optional[Sale]:
        """
        Retrieve a single sale, items included.

        Returns:
            Sale or None if not found
        """

        response = (
            self._client.table(_SALES_TABLE)
            .select(_SALE_WITH_ITEMS)
            .eq("sale_id", str(sale_id))
            .limit(1)
            .execute()
        )
        rows = rows_or_raise(response, "get sale")
        if not rows:
            return None
        return _row_to_sale(rows[0])

    def get_by_sale_number(self, sale_number: str) -> Optional[Sale]:
        response = (
            self._client.table(_SALES_TABLE)
            .select(_SALE_WITH_ITEMS)
            .eq("sale_number", sale_number)
            .limit(1)
            .execute()
        )
        rows = rows_or_raise(response, "get sale")
        if not rows:
            return None
        return _row_to_sale(rows[0])

    def list_by_customer(self, customer_id: UUID) -> List[Sale]:
        """
        Retrieve all sales for a customer (purchase history), oldest first.

        Returns:
            List[Sale] (possibly empty)
        """

        response = (
            self._client.table(_SALES_TABLE)
            .select(_SALE_WITH_ITEMS)
            .eq("customer_id", str(customer_id))
            .order("sale_number")
            .execute()
        )
        rows = rows_or_raise(response, "list sales")
        return [_row_to_sale(row) for row in rows]

    def next_sale_number(self) -> str:
        """
        Next number after the highest issued one.

        Zero padding keeps lexical order equal to numeric order.
        """

        response = (
            self._client.table(_SALES_TABLE)
            .select("sale_number")
            .order("sale_number", desc=True)
            .limit(1)
            .execute()
        )
        rows = rows_or_raise(response, "read last sale number")
        last = str(rows[0]["sale_number"]) if rows else None
        return next_sale_number(last)


__all__ = ["SupabaseSaleStore"]
