"""Mapping between the wire form (``ProductDTO``) and the stored form
(``Product``).

Identifier and timestamp generation live here so that the service layer
never touches them directly.
"""

from __future__ import annotations

import copy
import uuid
from typing import Iterable, List

from django.utils import timezone

from modules.products.dtos import ProductDTO, UpdateProductDTO
from modules.products.models import Product


class ProductConverter:
    """Stateless converter injected into the services."""

    def to_stored(self, dto: ProductDTO) -> Product:
        """Build a new, unsaved ``Product`` with a fresh identifier."""
        return Product(
            id=uuid.uuid4(),
            name=dto.name,
            category=dto.category,
            description=dto.description,
            price=dto.price,
            image=dto.image,
            created_at=timezone.now(),
        )

    def to_wire(self, product: Product) -> ProductDTO:
        return ProductDTO(
            entity_id=str(product.id),
            name=product.name,
            category=product.category,
            description=product.description,
            price=product.price,
            image=product.image,
        )

    def to_list_wire(self, products: Iterable[Product]) -> List[ProductDTO]:
        return [self.to_wire(product) for product in products]

    def merge_for_update(self, existing: Product, dto: UpdateProductDTO) -> Product:
        """Apply the fields set in ``dto`` on a copy of ``existing``.

        ``id``, ``name``, ``category`` and ``created_at`` always come from
        ``existing``; ``updated_at`` is stamped even when nothing changed.
        """
        merged = copy.copy(existing)
        for field, value in dto.changes().items():
            setattr(merged, field, value)
        merged.updated_at = timezone.now()
        return merged
