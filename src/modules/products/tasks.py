"""Celery tasks of the products module.

``products.consume_product_event`` is the inbound event channel: one
product payload per message.  Returning acknowledges the message, raising
rejects it.  Only infrastructure failures that happen before the product
is committed are retried.  A duplicate name is final, and so is a failed
success notification: the save already happened, and a redelivery would
report the stored product as a duplicate.
"""

import structlog
from celery import shared_task

from modules.products.dtos import ProductDTO
from modules.products.exceptions import NotificationError
from modules.products.factories import build_catalog_sync_service, build_messaging_bridge
from shared.domain.exceptions import InfrastructureError

logger = structlog.get_logger(__name__)


@shared_task(
    name="products.consume_product_event",
    acks_late=True,
    autoretry_for=(InfrastructureError,),
    dont_autoretry_for=(NotificationError,),
    retry_backoff=True,
    max_retries=3,
)
def consume_product_event(payload: dict) -> None:
    """Save the product carried by an inbound event and report the outcome."""
    dto = ProductDTO.model_validate(payload)
    logger.info("product_event.received", name=dto.name)
    build_messaging_bridge().handle(dto)


@shared_task(name="products.synchronize_catalog")
def synchronize_catalog() -> int:
    """Import the external catalog; returns the number of stored products."""
    products = build_catalog_sync_service().synchronize()
    logger.info("catalog_sync.task_completed", total=len(products))
    return len(products)
