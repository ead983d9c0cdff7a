"""
Product repository (persistence).

Supabase-backed ProductStore. Reads products and writes back the whole row,
stock included. Stock updates are read-modify-write: the caller reads the
product, computes the new level and calls update().
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from uuid import UUID

from domain.product import Product
from domain.stores import ProductStore
from repositories.serialization import (
    parse_optional_datetime,
    rows_or_raise,
    to_decimal,
    to_iso_utc,
)

# Keep this aligned with your database schema.
_PRODUCTS_TABLE: str = "products"


def _row_to_product(row: Mapping[str, Any]) -> Product:
    """Convert a Supabase row into a Product."""

    return Product(
        product_id=UUID(str(row["product_id"])),
        name=str(row["name"]),
        stock_quantity=int(row["stock_quantity"]),
        active=bool(row.get("active", True)),
        code=str(row.get("code") or ""),
        sku=str(row.get("sku") or ""),
        description=str(row.get("description") or ""),
        price=to_decimal(row.get("price", "0.00")),
        created_at=parse_optional_datetime(row.get("created_at_utc")),
        updated_at=parse_optional_datetime(row.get("updated_at_utc")),
    )


class SupabaseProductStore(ProductStore):

    def __init__(self, client: Any = None) -> None:
        if client is None:
            from repositories.client import supabase as client
        self._client = client

    def get_by_id(self, product_id: UUID) -> Optional[Product]:
        """
        Retrieve a single product by its ID.

        Returns:
            Product or None if not found
        """

        response = (
            self._client.table(_PRODUCTS_TABLE)
            .select("*")
            .eq("product_id", str(product_id))
            .limit(1)
            .execute()
        )
        rows = rows_or_raise(response, "get product")
        if not rows:
            return None
        return _row_to_product(rows[0])

    def update(self, product: Product) -> Product:
        payload: dict[str, Any] = {
            "name": product.name,
            "code": product.code,
            "sku": product.sku,
            "description": product.description,
            "price": str(product.price),
            "stock_quantity": product.stock_quantity,
            "active": product.active,
            "updated_at_utc": to_iso_utc(product.updated_at, name="updated_at"),
        }

        response = (
            self._client.table(_PRODUCTS_TABLE)
            .update(payload)
            .eq("product_id", str(product.product_id))
            .execute()
        )
        rows_or_raise(response, "update product")
        return product


__all__ = ["SupabaseProductStore"]
