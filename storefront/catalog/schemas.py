"""
Pydantic schema definitions for the catalog module.

``Product`` captures the fields needed to render a product card. The
backend returns Typesense documents, so field names arrive in camelCase
(``productType``, ``inventoryQuantity``); they are exposed in snake case
and any extra document fields are kept untouched. ``SearchResponse``
mirrors the JSON body returned by ``/search`` and ``SearchPage`` is the
normalised result handed to the state machine.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ProductImage(BaseModel):
    model_config = ConfigDict(extra="allow")

    src: Optional[str] = None


class Product(BaseModel):
    """A single catalog entry.

    ``price`` is an integer amount in cents. ``inventory_quantity`` is
    ``-1`` for items that are never out of stock and ``None`` when the
    backend does not track stock.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[Union[str, int]] = None
    title: str = ""
    price: int = 0
    product_type: Optional[str] = Field(default=None, alias="productType")
    inventory_quantity: Optional[int] = Field(default=None, alias="inventoryQuantity")
    image: Optional[ProductImage] = None


class SearchHit(BaseModel):
    model_config = ConfigDict(extra="allow")

    document: Product


class SearchResponse(BaseModel):
    """Body of a successful ``GET /search`` call."""

    model_config = ConfigDict(extra="allow")

    found: int
    hits: List[SearchHit] = Field(default_factory=list)


class SearchPage(BaseModel):
    """One page of products plus the total match count for the query."""

    items: List[Product] = Field(default_factory=list)
    total_found: int = 0
