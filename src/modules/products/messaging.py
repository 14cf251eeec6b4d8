"""Inbound product event handling with an outbound outcome notification.

``ProductMessagingBridge.handle`` receives one product per event and
produces two independent effects:

1. a result: return normally on success, raise ``ProductAlreadyExists`` on
   a duplicate name, raise ``InfrastructureError`` on any other failure;
2. a plain-text notification on the outbound channel describing that
   result.

A failed notification never replaces the primary error.  When the product
was saved but the success notification cannot be sent, ``NotificationError``
is raised; the save itself stays committed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from modules.products.exceptions import NotificationError, ProductAlreadyExists
from shared.domain.exceptions import InfrastructureError

if TYPE_CHECKING:
    from modules.products.converters import ProductConverter
    from modules.products.dtos import ProductDTO
    from modules.products.repositories.interfaces import IProductRepository
    from modules.products.services import ProductService
    from shared.domain.messaging import INotificationChannel

logger = structlog.get_logger(__name__)


def already_exists_message(name: str) -> str:
    return f"Product {name} already exists in the database."


def saved_message(name: str) -> str:
    return f"Product {name} saved successfully."


def error_message(name: str) -> str:
    return f"Error saving product {name}."


class ProductMessagingBridge:
    """Consumes product events and reports each outcome on ``channel``."""

    def __init__(
        self,
        product_service: ProductService,
        repository: IProductRepository,
        converter: ProductConverter,
        channel: INotificationChannel,
    ) -> None:
        self._products = product_service
        self._repo = repository
        self._converter = converter
        self._channel = channel

    def handle(self, dto: ProductDTO) -> None:
        """Save the product carried by an inbound event.

        Raises:
            ProductAlreadyExists: if the name is already stored.
            InfrastructureError: if storage fails, or ``NotificationError``
                if only the success notification failed.
        """
        name = dto.name
        log = logger.bind(name=name)

        try:
            duplicate = self._products.exists(name)
            if not duplicate:
                self._repo.save(self._converter.to_stored(dto))
        except ProductAlreadyExists:
            # Lost an insert race against a concurrent writer.
            duplicate = True
        except InfrastructureError:
            log.error("product_event.failed")
            self._publish_quietly(error_message(name))
            raise
        except Exception as exc:
            log.error("product_event.failed", error=str(exc))
            self._publish_quietly(error_message(name))
            raise InfrastructureError(f"Error saving product {name}", cause=exc) from exc

        if duplicate:
            log.warning("product_event.conflict")
            self._publish_quietly(already_exists_message(name))
            raise ProductAlreadyExists(name)

        log.info("product_event.saved")
        try:
            self._channel.publish(saved_message(name))
        except NotificationError:
            raise
        except Exception as exc:
            raise NotificationError("Error publishing product notification", cause=exc) from exc

    def _publish_quietly(self, text: str) -> None:
        try:
            self._channel.publish(text)
        except Exception as exc:
            logger.error("product_event.notification_failed", text=text, error=str(exc))
