"""Unit tests for Product DTOs.

Covers:
- ProductDTO: catalog ``title`` alias, defaults, ignored keys, immutability.
- UpdateProductDTO: which fields count as set.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import ProductDTO, UpdateProductDTO

pytestmark = pytest.mark.unit


# ===========================================================================
# ProductDTO
# ===========================================================================


class TestProductDTO:
    def test_accepts_name(self):
        dto = ProductDTO(name="Red Jacket", category="Clothing", price=Decimal("250.00"))
        assert dto.name == "Red Jacket"
        assert dto.category == "Clothing"
        assert dto.price == Decimal("250.00")

    def test_accepts_catalog_payload(self):
        dto = ProductDTO.model_validate(
            {
                "id": 1,
                "title": "Fjallraven Backpack",
                "price": 109.95,
                "description": "Your perfect pack",
                "category": "men's clothing",
                "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
                "rating": {"rate": 3.9, "count": 120},
            }
        )
        assert dto.name == "Fjallraven Backpack"
        assert dto.price == Decimal("109.95")
        assert dto.entity_id is None

    def test_optional_fields_default(self):
        dto = ProductDTO(name="Red Jacket")
        assert dto.category == ""
        assert dto.description == ""
        assert dto.price is None
        assert dto.image is None

    def test_null_text_fields_become_empty(self):
        dto = ProductDTO.model_validate({"name": "Red Jacket", "description": None})
        assert dto.description == ""

    def test_missing_name_rejected(self):
        with pytest.raises(ValidationError):
            ProductDTO.model_validate({"category": "Clothing"})

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Name must not be empty"):
            ProductDTO(name="   ")

    def test_is_frozen(self):
        dto = ProductDTO(name="Red Jacket")
        with pytest.raises(ValidationError):
            dto.name = "Blue Jacket"

    def test_dump_has_no_timestamps(self):
        data = ProductDTO(name="Red Jacket", entity_id="abc").model_dump(mode="json")
        assert set(data) == {"entity_id", "name", "category", "description", "price", "image"}


# ===========================================================================
# UpdateProductDTO
# ===========================================================================


class TestUpdateProductDTO:
    def test_changes_only_contains_supplied_fields(self):
        dto = UpdateProductDTO(price=Decimal("199.90"))
        assert dto.changes() == {"price": Decimal("199.90")}

    def test_explicit_null_is_not_a_change(self):
        dto = UpdateProductDTO.model_validate({"description": None, "image": "new.png"})
        assert dto.changes() == {"image": "new.png"}

    def test_name_and_category_are_ignored(self):
        dto = UpdateProductDTO.model_validate({"name": "Other", "category": "Shoes"})
        assert dto.changes() == {}
