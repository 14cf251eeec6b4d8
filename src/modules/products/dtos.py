"""Product DTOs (wire form).

Framework-agnostic data transfer objects using Pydantic v2.  They are the
contract of every boundary of the products module: the REST API, the
external catalog and the inbound event channel.  DTOs are immutable
(``frozen=True``).

- ``ProductDTO``: the wire form of a product.  Stored timestamps are never
  exposed; the storage key travels as ``entity_id``.
- ``UpdateProductDTO``: partial payload of an update (mutable fields only).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

MUTABLE_FIELDS = ("description", "price", "image")


class ProductDTO(BaseModel):
    """Immutable wire representation of a product.

    The external catalog names the product ``title``; both ``title`` and
    ``name`` are accepted on input.  Unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    entity_id: Optional[str] = None
    name: str = Field(validation_alias=AliasChoices("name", "title"))
    category: str = ""
    description: str = ""
    price: Optional[Decimal] = None
    image: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v

    @field_validator("category", "description", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class UpdateProductDTO(BaseModel):
    """Immutable DTO for update requests.

    Only ``description``, ``price`` and ``image`` can change; ``name`` and
    ``category`` sent by a client are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    description: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Return the mutable fields the payload actually sets."""
        return {
            field: getattr(self, field)
            for field in MUTABLE_FIELDS
            if field in self.model_fields_set and getattr(self, field) is not None
        }
