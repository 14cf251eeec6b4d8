"""Product API views.

Exposes ``ProductService`` and ``CatalogSyncService`` via HTTP using DRF
ViewSets.  Products are addressed by name; updates are addressed by id.
Business exceptions are caught here and translated into HTTP status codes;
infrastructure errors propagate to the project exception handler.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.dtos import ProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.factories import build_catalog_sync_service, build_product_service


def _dump(dto: ProductDTO) -> dict:
    return dto.model_dump(mode="json")


class ProductViewSet(ViewSet):
    """ViewSet for Product operations.

    All storage access goes through the service layer; nothing here touches
    the ORM.
    """

    lookup_field = "name"
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_product_service()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        products = self._service.find_all()
        return Response([_dump(product) for product in products])

    def retrieve(self, request: Request, name: str | None = None) -> Response:
        """GET /api/v1/products/{name}/"""
        try:
            product = self._service.find_by_name(name or "")
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(_dump(product))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = ProductDTO.model_validate(request.data)
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.save(dto)
        except ProductAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(_dump(product), status=status.HTTP_201_CREATED)

    @action(
        detail=False,
        methods=["put", "patch"],
        url_path=r"by-id/(?P<product_id>[^/.]+)",
    )
    def update_by_id(self, request: Request, product_id: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/by-id/{id}/"""
        try:
            dto = UpdateProductDTO.model_validate(request.data)
        except (PydanticValidationError, ValueError) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            product = self._service.update(product_id or "", dto)
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        return Response(_dump(product))

    def destroy(self, request: Request, name: str | None = None) -> Response:
        """DELETE /api/v1/products/{name}/"""
        try:
            self._service.delete_by_name(name or "")
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CatalogViewSet(ViewSet):
    """Catalog synchronization.

    Lives under its own prefix so that every product name stays
    addressable under `/products/{name}/`.
    """

    @action(detail=False, methods=["post"], url_path="sync")
    def sync(self, request: Request) -> Response:
        """POST /api/v1/catalog/sync/

        Imports the external catalog and returns every stored product.
        """
        try:
            products = build_catalog_sync_service().synchronize()
        except ProductAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response([_dump(product) for product in products])
