"""Product repository interface (the persistence gateway).

Extends ``IRepository[Product]`` with the name-based look-ups the products
module relies on: ``name`` is the business identity of a product.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate.

    ``save`` must behave as an atomic insert-if-absent for new products:
    when another product already holds the name it raises
    ``ProductAlreadyExists`` instead of writing a duplicate.
    """

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Product]:
        """Retrieve a product by its exact name."""

    @abstractmethod
    def exists_by_name(self, name: str) -> bool:
        """Check whether a product with this exact name is stored."""

    @abstractmethod
    def delete_by_name(self, name: str) -> bool:
        """Delete the product with this name in a single statement.

        Returns ``True`` when a row was removed.
        """
