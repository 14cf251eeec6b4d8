"""Product service layer (Use Cases).

Single-record operations for the Product aggregate, delegating persistence
to the injected ``IProductRepository`` and representation changes to the
injected ``ProductConverter``.

Every operation has three outcomes:
- success;
- a business error decided from the service's own knowledge of state
  (``ProductAlreadyExists``, ``ProductNotFound``);
- an ``InfrastructureError`` wrapping any unexpected collaborator failure.

The gateway owns the atomicity of each individual write; the existence
check followed by the write in ``save`` is not one transaction, the unique
name index in storage closes that gap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from shared.domain.exceptions import infrastructure_guard

if TYPE_CHECKING:
    from modules.products.converters import ProductConverter
    from modules.products.dtos import ProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives its collaborators via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        converter: ProductConverter,
    ) -> None:
        self._repo = repository
        self._converter = converter

    # ------------------------------------------------------------------
    # Identity check
    # ------------------------------------------------------------------

    def exists(self, name: str) -> bool:
        """Return whether a product with this exact name is stored."""
        with infrastructure_guard(f"Error checking product by name = {name}"):
            return self._repo.exists_by_name(name)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def save(self, dto: ProductDTO) -> ProductDTO:
        """Create a new product after enforcing name uniqueness.

        Raises:
            ProductAlreadyExists: if the name is already taken.
        """
        log = logger.bind(name=dto.name)

        if self.exists(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(dto.name)

        with infrastructure_guard(f"Error saving product {dto.name}"):
            product = self._repo.save(self._converter.to_stored(dto))
            log.info("product.created", product_id=str(product.id))
            return self._converter.to_wire(product)

    def update(self, id: str, dto: UpdateProductDTO) -> ProductDTO:
        """Apply a partial update and return what storage now holds.

        The name is immutable, so the write skips the duplicate-name check.
        The record is read back by name after the write.

        Raises:
            ProductNotFound: if no product has this id.
        """
        log = logger.bind(product_id=str(id))

        with infrastructure_guard(f"Error updating product {id}"):
            existing = self._repo.get_by_id(id)
            if existing is None:
                raise ProductNotFound(f"Product {id} not found.")

            self._repo.save(self._converter.merge_for_update(existing, dto))

            stored = self._repo.get_by_name(existing.name)
            if stored is None:
                raise ProductNotFound(f"Product {id} not found.")

        log.info("product.updated", fields=sorted(dto.changes()))
        return self._converter.to_wire(stored)

    def delete_by_name(self, name: str) -> None:
        """Delete the product holding ``name``.

        Raises:
            ProductNotFound: if no product has this name.
        """
        if not self.exists(name):
            raise ProductNotFound(f"No product found with name '{name}'.")

        with infrastructure_guard(f"Error deleting product by name = {name}"):
            self._repo.delete_by_name(name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_name(self, name: str) -> ProductDTO:
        """Retrieve a single product by name.

        Raises:
            ProductNotFound: if no product has this name.
        """
        with infrastructure_guard(f"Error fetching product by name = {name}"):
            product = self._repo.get_by_name(name)
        if product is None:
            raise ProductNotFound(f"No product found with name '{name}'.")
        return self._converter.to_wire(product)

    def find_all(self) -> List[ProductDTO]:
        """Return every stored product in storage order."""
        with infrastructure_guard("Error fetching all products"):
            return self._converter.to_list_wire(self._repo.list())
