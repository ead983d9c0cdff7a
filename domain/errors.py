"""
Domain: Error taxonomy for sale order processing.

- ValidationFailure: one or more input/referential rule violations found
  before any mutation. All violations are reported together.
- BusinessConflict: input was valid but runtime state disagrees (stock drift,
  product vanished, sale already cancelled).
- InvariantViolation: an impossible state reached through a programming
  error. Never retried.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional


class SaleError(Exception):
    """Base class for every error raised by the sale core."""
    pass


class ValidationFailure(SaleError):
    """Raised when a command breaks one or more validation rules."""

    def __init__(self, errors: Iterable[str], operation: str = "operation") -> None:
        self.errors: List[str] = list(errors)
        self.operation = operation
        super().__init__(f"Validation failed for {operation}: " + "; ".join(self.errors))


class BusinessConflict(SaleError):
    """Raised when execution-time state contradicts an otherwise valid command."""

    def __init__(self, reason: str, details: Optional[Mapping[str, Any]] = None) -> None:
        self.reason = reason
        self.details: Mapping[str, Any] = dict(details or {})
        super().__init__(reason)


class SaleAlreadyCancelled(BusinessConflict):
    """Raised when cancelling a sale whose status is already Cancelled."""

    def __init__(self, sale_number: str) -> None:
        super().__init__(
            f"Sale {sale_number} is already cancelled",
            {"sale_number": sale_number},
        )


class SaleNotFound(SaleError):
    """Raised by read operations when no sale matches the lookup key."""

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Sale not found: {key}")


class InvariantViolation(SaleError):
    """Raised when code reaches a state that validation should have made impossible."""
    pass


class StoreError(RuntimeError):
    """Raised by persistence adapters when the backing store reports an error."""
    pass


__all__ = [
    "SaleError",
    "ValidationFailure",
    "BusinessConflict",
    "SaleAlreadyCancelled",
    "SaleNotFound",
    "InvariantViolation",
    "StoreError",
]
