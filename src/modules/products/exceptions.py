"""Product domain exceptions.

Raised by the Service Layer when business rules are violated or when a
collaborator (database, catalog API, message broker) fails.  The API layer
(Views) catches the business errors and translates them into HTTP
responses; infrastructure errors are left to the project exception handler.
"""

from __future__ import annotations

from shared.domain.exceptions import ConflictError, InfrastructureError, NotFoundError


class ProductAlreadyExists(ConflictError):
    """A product with the same name is already stored."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Product '{name}' already exists in the database.")
        self.name = name


class ProductNotFound(NotFoundError):
    """The requested product does not exist."""


class CatalogUnavailable(InfrastructureError):
    """The external catalog could not be fetched or parsed."""


class NotificationError(InfrastructureError):
    """The outbound notification could not be handed to the broker."""
