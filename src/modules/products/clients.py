"""HTTP client for the external product catalog (Fake Store API).

One ``GET {base_url}/products`` returns the whole catalog; there is no
paging and no authentication.  Transport errors (connection refused,
timeouts) are retried with exponential backoff; HTTP error statuses and
malformed payloads fail at once.  Every failure leaves the client as
``CatalogUnavailable``.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from modules.products.dtos import ProductDTO
from modules.products.exceptions import CatalogUnavailable

logger = structlog.get_logger(__name__)

_catalog_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)

_product_list = TypeAdapter(List[ProductDTO])


class ICatalogClient(Protocol):
    """Source of catalog candidates for synchronization."""

    def fetch_all(self) -> List[ProductDTO]: ...


class FakeStoreCatalogClient:
    """Synchronous client for the Fake Store ``/products`` endpoint.

    Args:
        base_url: Root URL of the catalog API.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (tests use ``MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={"Accept": "application/json"},
        )

    def fetch_all(self) -> List[ProductDTO]:
        """Return every product listed by the catalog.

        Raises:
            CatalogUnavailable: on network, HTTP or payload errors.
        """
        try:
            payload = self._get_products()
            products = _product_list.validate_python(payload)
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            logger.error("catalog.fetch_failed", base_url=self._base_url, error=str(exc))
            raise CatalogUnavailable("Error fetching products from the catalog", cause=exc) from exc

        logger.info("catalog.fetched", base_url=self._base_url, count=len(products))
        return products

    @_catalog_retry
    def _get_products(self) -> object:
        with self._client() as client:
            response = client.get("/products")
            response.raise_for_status()
            return response.json()
