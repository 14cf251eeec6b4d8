"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: they return ``None`` instead of
raising, and the Service Layer decides how to translate a missing entity.
A unique-name violation is the only storage error translated here; every
other database error propagates to the service.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Product]:
        return Product.objects.filter(name=name).first()

    def exists_by_name(self, name: str) -> bool:
        return Product.objects.filter(name=name).exists()

    def list(self) -> List[Product]:
        return list(Product.objects.all())

    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product.

        Raises:
            ProductAlreadyExists: if the insert hits the unique name index.
        """
        is_new = entity._state.adding
        try:
            with transaction.atomic():
                entity.save()
        except IntegrityError as exc:
            if is_new and Product.objects.filter(name=entity.name).exists():
                logger.warning("product.duplicate_name_on_insert", name=entity.name)
                raise ProductAlreadyExists(entity.name) from exc
            raise
        logger.info(
            "product.saved",
            product_id=str(entity.id),
            name=entity.name,
            created=is_new,
        )
        return entity

    @transaction.atomic
    def delete_by_name(self, name: str) -> bool:
        deleted, _ = Product.objects.filter(name=name).delete()
        if deleted:
            logger.info("product.deleted", name=name)
        return bool(deleted)
