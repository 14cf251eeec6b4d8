"""Unit tests for ProductService.

Covers:
- exists: delegation, infrastructure wrapping.
- save: happy path, duplicate name, storage failure.
- find_by_name / find_all.
- delete_by_name: happy path, not found.
- update: partial merge, not found, re-read after write.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.utils import timezone

from modules.products.converters import ProductConverter
from modules.products.dtos import ProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product
from modules.products.repositories import ProductDjangoRepository
from modules.products.services import ProductService
from shared.domain.exceptions import InfrastructureError

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo, converter=ProductConverter())


def _product(**overrides) -> Product:
    defaults = {
        "id": uuid.uuid4(),
        "name": "Red Jacket",
        "category": "Clothing",
        "description": "Red jacket with side pockets",
        "price": Decimal("250.00"),
        "image": "jacket.png",
        "created_at": timezone.now(),
    }
    defaults.update(overrides)
    return Product(**defaults)


# ===========================================================================
# exists
# ===========================================================================


class TestExists:
    def test_delegates_to_repository(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = True
        assert service.exists("Red Jacket") is True
        mock_repo.exists_by_name.assert_called_once_with("Red Jacket")

    def test_gateway_failure_is_infrastructure_error(self, service, mock_repo):
        mock_repo.exists_by_name.side_effect = RuntimeError("db down")

        with pytest.raises(InfrastructureError) as exc_info:
            service.exists("Red Jacket")

        assert isinstance(exc_info.value.cause, RuntimeError)


# ===========================================================================
# save
# ===========================================================================


class TestSave:
    def test_success(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False
        mock_repo.save.side_effect = lambda p: p

        result = service.save(
            ProductDTO(name="Red Jacket", category="Clothing", price=Decimal("250.00"))
        )

        assert result.name == "Red Jacket"
        assert result.entity_id is not None
        mock_repo.save.assert_called_once()

    def test_duplicate_name_raises(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = True

        with pytest.raises(ProductAlreadyExists, match="Red Jacket"):
            service.save(ProductDTO(name="Red Jacket"))

        mock_repo.save.assert_not_called()

    def test_conflict_from_storage_is_not_wrapped(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False
        mock_repo.save.side_effect = ProductAlreadyExists("Red Jacket")

        with pytest.raises(ProductAlreadyExists):
            service.save(ProductDTO(name="Red Jacket"))

    def test_storage_failure_is_infrastructure_error(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False
        mock_repo.save.side_effect = RuntimeError("disk full")

        with pytest.raises(InfrastructureError, match="Red Jacket"):
            service.save(ProductDTO(name="Red Jacket"))


# ===========================================================================
# find_by_name / find_all
# ===========================================================================


class TestQueries:
    def test_find_by_name(self, service, mock_repo):
        stored = _product()
        mock_repo.get_by_name.return_value = stored

        result = service.find_by_name("Red Jacket")

        assert result.entity_id == str(stored.id)
        assert result.description == "Red jacket with side pockets"

    def test_find_by_name_not_found(self, service, mock_repo):
        mock_repo.get_by_name.return_value = None

        with pytest.raises(ProductNotFound, match="Ghost"):
            service.find_by_name("Ghost")

    def test_find_all_keeps_repository_order(self, service, mock_repo):
        mock_repo.list.return_value = [_product(name="B"), _product(name="A")]

        result = service.find_all()

        assert [dto.name for dto in result] == ["B", "A"]

    def test_find_all_empty(self, service, mock_repo):
        mock_repo.list.return_value = []
        assert service.find_all() == []

    def test_find_all_failure(self, service, mock_repo):
        mock_repo.list.side_effect = RuntimeError("timeout")
        with pytest.raises(InfrastructureError):
            service.find_all()


# ===========================================================================
# delete_by_name
# ===========================================================================


class TestDeleteByName:
    def test_success(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = True

        service.delete_by_name("Red Jacket")

        mock_repo.delete_by_name.assert_called_once_with("Red Jacket")

    def test_not_found_performs_no_delete(self, service, mock_repo):
        mock_repo.exists_by_name.return_value = False

        with pytest.raises(ProductNotFound):
            service.delete_by_name("Ghost")

        mock_repo.delete_by_name.assert_not_called()

    def test_deletion_is_logged_once(self, make_product, caplog):
        make_product(name="Red Jacket")
        service = ProductService(
            repository=ProductDjangoRepository(), converter=ProductConverter()
        )

        with caplog.at_level(logging.INFO):
            service.delete_by_name("Red Jacket")

        deleted = [
            record
            for record in caplog.records
            if isinstance(record.msg, dict) and record.msg.get("event") == "product.deleted"
        ]
        assert len(deleted) == 1
        assert deleted[0].msg["name"] == "Red Jacket"


# ===========================================================================
# update
# ===========================================================================


class TestUpdate:
    def test_not_found_raises(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(ProductNotFound):
            service.update("non-existent-id", UpdateProductDTO(price=Decimal("1.00")))

        mock_repo.save.assert_not_called()

    def test_merges_and_skips_duplicate_check(self, service, mock_repo):
        existing = _product()
        saved = []
        mock_repo.get_by_id.return_value = existing
        mock_repo.get_by_name.side_effect = lambda name: saved[-1]
        mock_repo.save.side_effect = lambda p: saved.append(p) or p

        result = service.update(str(existing.id), UpdateProductDTO(price=Decimal("199.90")))

        mock_repo.exists_by_name.assert_not_called()
        assert saved[0].price == Decimal("199.90")
        assert saved[0].updated_at is not None
        assert result.price == Decimal("199.90")
        assert result.entity_id == str(existing.id)

    def test_returns_re_read_record(self, service, mock_repo):
        existing = _product()
        persisted = _product(id=existing.id, price=Decimal("200.00"))
        mock_repo.get_by_id.return_value = existing
        mock_repo.get_by_name.return_value = persisted

        result = service.update(str(existing.id), UpdateProductDTO(price=Decimal("199.999")))

        mock_repo.get_by_name.assert_called_once_with("Red Jacket")
        assert result.price == Decimal("200.00")

    def test_storage_failure_is_infrastructure_error(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _product()
        mock_repo.save.side_effect = RuntimeError("lock timeout")

        with pytest.raises(InfrastructureError):
            service.update("some-id", UpdateProductDTO(price=Decimal("1.00")))
