"""
Domain: Customer (external aggregate, referenced only).

A sale may only be opened for an existing, active customer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from .time import require_utc_timestamp


class CustomerType(str, Enum):
    CPF = "CPF"  # individual
    CNPJ = "CNPJ"  # company


@dataclass(frozen=True, slots=True)
class Customer:
    customer_id: UUID
    name: str
    active: bool = True
    email: str = ""
    phone: str = ""
    customer_type: CustomerType = CustomerType.CPF
    document_number: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.created_at is not None:
            require_utc_timestamp("created_at", self.created_at)
        if self.updated_at is not None:
            require_utc_timestamp("updated_at", self.updated_at)

    def is_active(self) -> bool:
        """Check if the customer can be sold to."""
        return self.active
