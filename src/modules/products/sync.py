"""Catalog synchronization (batch import from the external catalog).

``CatalogSyncService.synchronize`` fetches the whole catalog once, inserts
every product whose name is not stored yet and answers with the full set
of stored products, not only the ones inserted by this run.

Duplicates follow one explicit ``DuplicatePolicy`` per service instance:

- ``SKIP``: the duplicate is logged and the run continues.
- ``ABORT``: the first duplicate raises ``ProductAlreadyExists`` and stops
  the run.

Any other failure stops the run as an ``InfrastructureError``.  Products
inserted before the failure stay stored: each insert is its own unit of
work.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, List

import structlog

from modules.products.exceptions import ProductAlreadyExists
from shared.domain.exceptions import infrastructure_guard

if TYPE_CHECKING:
    from modules.products.clients import ICatalogClient
    from modules.products.converters import ProductConverter
    from modules.products.dtos import ProductDTO
    from modules.products.repositories.interfaces import IProductRepository
    from modules.products.services import ProductService

logger = structlog.get_logger(__name__)


class DuplicatePolicy(str, enum.Enum):
    SKIP = "skip"
    ABORT = "abort"


class CatalogSyncService:
    """Orchestrates fetch, dedupe and persist for a catalog batch."""

    def __init__(
        self,
        catalog_client: ICatalogClient,
        repository: IProductRepository,
        converter: ProductConverter,
        product_service: ProductService,
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.SKIP,
    ) -> None:
        self._client = catalog_client
        self._repo = repository
        self._converter = converter
        self._products = product_service
        self._policy = DuplicatePolicy(duplicate_policy)

    def synchronize(self) -> List[ProductDTO]:
        """Import the external catalog and return every stored product.

        Raises:
            ProductAlreadyExists: on the first duplicate under ``ABORT``.
            InfrastructureError: if the fetch or a write fails.
        """
        log = logger.bind(policy=self._policy.value)

        with infrastructure_guard("Error fetching and saving catalog products"):
            candidates = self._client.fetch_all()
            log.info("catalog_sync.fetched", count=len(candidates))

            inserted = skipped = 0
            for dto in candidates:
                if self._insert_if_absent(dto):
                    inserted += 1
                else:
                    skipped += 1

        log.info("catalog_sync.finished", inserted=inserted, skipped=skipped)
        return self._products.find_all()

    def _insert_if_absent(self, dto: ProductDTO) -> bool:
        try:
            if self._products.exists(dto.name):
                raise ProductAlreadyExists(dto.name)
            self._repo.save(self._converter.to_stored(dto))
        except ProductAlreadyExists:
            if self._policy is DuplicatePolicy.ABORT:
                logger.warning("catalog_sync.aborted_on_duplicate", name=dto.name)
                raise
            logger.info("catalog_sync.duplicate_skipped", name=dto.name)
            return False
        return True
