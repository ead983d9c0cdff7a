"""
Store Interfaces
================

Abstract contracts for the collaborators the sale core depends on.
Implementations live in the repositories layer (Supabase) and in the test
suite (in-memory fakes).

Every call is synchronous: it either completes or raises. SaleStore.create
must persist the sale together with all of its items, or nothing at all.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from .branch import Branch
from .customer import Customer
from .events import SaleEvent
from .product import Product
from .sale import Sale


class ProductStore(ABC):

    @abstractmethod
    def get_by_id(self, product_id: UUID) -> Optional[Product]:
        """Return the product, or None if it does not exist."""
        pass

    @abstractmethod
    def update(self, product: Product) -> Product:
        """Persist `product` (stock changes included) and return the stored state."""
        pass


class CustomerStore(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: UUID) -> Optional[Customer]:
        pass


class BranchStore(ABC):

    @abstractmethod
    def get_by_id(self, branch_id: UUID) -> Optional[Branch]:
        pass


class SaleStore(ABC):

    @abstractmethod
    def create(self, sale: Sale) -> Sale:
        """
        Persist a new sale together with its items, atomically.

        Args:
            sale: Sale entity with its priced items

        Returns:
            Stored sale entity
        """
        pass

    @abstractmethod
    def get_by_id(self, sale_id: UUID) -> Optional[Sale]:
        pass

    @abstractmethod
    def get_by_sale_number(self, sale_number: str) -> Optional[Sale]:
        pass

    @abstractmethod
    def update(self, sale: Sale) -> Sale:
        """Persist status/cancellation changes of the sale and its items."""
        pass

    @abstractmethod
    def next_sale_number(self) -> str:
        """
        Issue the next sale number (SALE-NNNNNN).

        Numbers increase monotonically from the last issued one; the first
        is SALE-000001.
        """
        pass

    @abstractmethod
    def list_by_customer(self, customer_id: UUID) -> List[Sale]:
        pass


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: SaleEvent) -> None:
        """Hand `event` to subscribers. At-most-once; callers never retry."""
        pass


__all__ = [
    "ProductStore",
    "CustomerStore",
    "BranchStore",
    "SaleStore",
    "EventPublisher",
]
