"""
Customer repository.

Read-only Supabase-backed CustomerStore.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from uuid import UUID

from domain.customer import Customer, CustomerType
from domain.stores import CustomerStore
from repositories.serialization import parse_optional_datetime, rows_or_raise

_CUSTOMERS_TABLE: str = "customers"


def _row_to_customer(row: Mapping[str, Any]) -> Customer:
    return Customer(
        customer_id=UUID(str(row["customer_id"])),
        name=str(row["name"]),
        active=bool(row.get("active", True)),
        email=str(row.get("email") or ""),
        phone=str(row.get("phone") or ""),
        customer_type=CustomerType(str(row.get("customer_type") or CustomerType.CPF.value)),
        document_number=str(row.get("document_number") or ""),
        created_at=parse_optional_datetime(row.get("created_at_utc")),
        updated_at=parse_optional_datetime(row.get("updated_at_utc")),
    )


class SupabaseCustomerStore(CustomerStore):

    def __init__(self, client: Any = None) -> None:
        if client is None:
            from repositories.client import supabase as client
        self._client = client

    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        """
        Get a customer by their ID.

        Returns:
            Customer domain model or None if not found
        """
        response = (
            self._client.table(_CUSTOMERS_TABLE)
            .select("*")
            .eq("customer_id", str(customer_id))
            .limit(1)
            .execute()
        )
        rows = rows_or_raise(response, "fetch customer")
        if not rows:
            return None
        return _row_to_customer(rows[0])


__all__ = ["SupabaseCustomerStore"]
