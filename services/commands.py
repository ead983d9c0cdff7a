"""
Sale command models.

Pydantic models for the inputs of the sale use cases. They coerce transport
payloads (UUID strings, decimal strings) into typed values; business rules
such as quantity limits and referential checks are applied afterwards by
services/sale_validation.py so every violation is reported together.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from domain.errors import ValidationFailure


def _describe(error: PydanticValidationError) -> List[str]:
    """Flatten pydantic errors into "field.path: message" strings."""

    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        messages.append(f"{location}: {detail.get('msg')}" if location else str(detail.get("msg")))
    return messages


class CreateSaleItemCommand(BaseModel):
    """One requested line: which product, how many, at what unit price."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID = Field(..., description="Product being sold")
    quantity: int = Field(..., description="Identical units on this line (1-20)")
    unit_price: Decimal = Field(..., description="Price per unit before discount")


class CreateSaleCommand(BaseModel):
    """Request to open a new sale."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "customer_id": "123e4567-e89b-12d3-a456-426614174000",
                "branch_id": "123e4567-e89b-12d3-a456-426614174001",
                "items": [
                    {
                        "product_id": "123e4567-e89b-12d3-a456-426614174002",
                        "quantity": 5,
                        "unit_price": "10.00",
                    }
                ],
            }
        },
    )

    customer_id: UUID = Field(..., description="Customer making the purchase")
    branch_id: UUID = Field(..., description="Branch where the sale happens")
    items: List[CreateSaleItemCommand] = Field(
        default_factory=list,
        description="Requested lines; must not be empty",
    )

    @classmethod
    def parse(cls, payload: Mapping[str, Any]) -> "CreateSaleCommand":
        """
        Build a command from a raw payload.

        Raises:
            ValidationFailure: if the payload cannot be coerced into a command
        """
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationFailure(_describe(e), operation="CreateSale") from e


class CancelSaleCommand(BaseModel):
    """Request to cancel an existing sale."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "sale_id": "123e4567-e89b-12d3-a456-426614174003",
                "reason": "Customer request",
            }
        },
    )

    sale_id: UUID = Field(..., description="Sale to cancel")
    reason: str = Field("", description="Why the sale is cancelled (max 500 characters)")

    @classmethod
    def parse(cls, payload: Mapping[str, Any]) -> "CancelSaleCommand":
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationFailure(_describe(e), operation="CancelSale") from e


__all__ = [
    "CreateSaleItemCommand",
    "CreateSaleCommand",
    "CancelSaleCommand",
]
