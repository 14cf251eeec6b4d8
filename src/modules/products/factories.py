"""Construction of the products components from Django settings.

Each call builds a fresh object graph; nothing is cached at module level.
"""

from __future__ import annotations

from django.conf import settings

from modules.products.clients import FakeStoreCatalogClient
from modules.products.converters import ProductConverter
from modules.products.messaging import ProductMessagingBridge
from modules.products.notifications import CeleryNotificationChannel
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.products.sync import CatalogSyncService, DuplicatePolicy


def build_product_service() -> ProductService:
    return ProductService(
        repository=ProductDjangoRepository(),
        converter=ProductConverter(),
    )


def build_catalog_sync_service() -> CatalogSyncService:
    repository = ProductDjangoRepository()
    converter = ProductConverter()
    return CatalogSyncService(
        catalog_client=FakeStoreCatalogClient(
            base_url=settings.CATALOG_API_URL,
            timeout=settings.CATALOG_API_TIMEOUT,
        ),
        repository=repository,
        converter=converter,
        product_service=ProductService(repository=repository, converter=converter),
        duplicate_policy=DuplicatePolicy(settings.CATALOG_SYNC_DUPLICATE_POLICY),
    )


def build_messaging_bridge() -> ProductMessagingBridge:
    from config.celery import app

    repository = ProductDjangoRepository()
    converter = ProductConverter()
    return ProductMessagingBridge(
        product_service=ProductService(repository=repository, converter=converter),
        repository=repository,
        converter=converter,
        channel=CeleryNotificationChannel(
            app=app,
            task_name=settings.PRODUCT_RESULT_TASK,
            queue=settings.PRODUCT_RESULTS_QUEUE,
        ),
    )
