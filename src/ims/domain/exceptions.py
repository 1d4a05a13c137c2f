"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Every concrete failure carries a stable ``code`` so callers can branch on
the reason without parsing messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DomainError"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "ValidationError"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NotFound"


class ConflictError(DomainException):
    """Competing writers touched the same data."""

    code = "Conflict"


class PermissionDeniedError(DomainException):
    """The caller's role does not grant the requested capability."""

    code = "PermissionDenied"


# --- Order placement ----------------------------------------------------------


class NoItemsError(ValidationError):
    code = "NoItems"

    def __init__(self) -> None:
        super().__init__("Order must contain at least one item")


class InvalidQuantityError(ValidationError):
    code = "InvalidQuantity"

    def __init__(self, message: str = "All quantities must be > 0.") -> None:
        super().__init__(message)


class ProductsNotFoundError(EntityNotFoundError):
    code = "ProductsNotFound"

    def __init__(self, missing_ids: list[str]) -> None:
        self.missing_ids = missing_ids
        super().__init__(f"Some product(s) not found: {', '.join(missing_ids)}")


class InsufficientStockError(ValidationError):
    code = "InsufficientStock"

    def __init__(
        self, product_id: str, product_name: str, available: int, required: int
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient stock for product '{product_name}'. "
            f"Available: {available}, required: {required}"
        )


class RetryExhaustedError(ConflictError):
    """Stock kept changing underneath the operation; the caller should try again."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            f"Stock changed concurrently {attempts} times, please try again"
        )


class ConcurrencyConflictError(ConflictError):
    """A version-guarded update found a newer row than the one it read."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' was modified concurrently")


# --- Catalog & stock ----------------------------------------------------------


class ProductNotFoundError(EntityNotFoundError):
    code = "ProductNotFound"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product with ID '{product_id}' not found")


class InvoiceRequiredError(ValidationError):
    code = "InvoiceRequired"

    def __init__(self) -> None:
        super().__init__("Invoice number required")


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order '{order_id}' not found")
