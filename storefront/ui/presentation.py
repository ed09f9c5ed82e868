"""
View models for the search page.

``render()`` turns a ``SearchState`` plus the raw input text into a
``PageView``: what the input box shows, one ``ProductCard`` per result
and at most one status banner. Rendering has no side effects; the host
decides how the view models look on screen.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from ..catalog.schemas import Product
from .state import Phase, SearchState


NO_IMAGE_URL = "https://placehold.co/400x400/E0E0E0/333333?text=No+Image"
IMAGE_ERROR_URL = "https://placehold.co/400x400/E0E0E0/333333?text=Image+Error"

LOW_STOCK_LIMIT = 10
UNLIMITED_STOCK = -1


class StockBand(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    UNLIMITED = "unlimited"
    LOW = "low"
    IN_STOCK = "in_stock"


class StatusKind(str, Enum):
    ERROR = "error"
    LOADING_MORE = "loading_more"
    NO_RESULTS = "no_results"
    START_TYPING = "start_typing"
    END_OF_RESULTS = "end_of_results"


class ProductCard(BaseModel):
    id: Optional[str] = None
    title: str
    category: str
    price_label: str
    stock_band: StockBand
    stock_label: str
    image_url: str
    # Shown instead of ``image_url`` when the image fails to load.
    fallback_image_url: str = IMAGE_ERROR_URL


class StatusBanner(BaseModel):
    kind: StatusKind
    message: str


class PageView(BaseModel):
    input_text: str
    cards: List[ProductCard] = Field(default_factory=list)
    status: Optional[StatusBanner] = None


def format_price(cents: int) -> str:
    return f"${cents / 100:.2f}"


def classify_stock(quantity: Optional[int]) -> Tuple[StockBand, str]:
    if quantity is None:
        return StockBand.IN_STOCK, "In Stock"
    if quantity == 0:
        return StockBand.OUT_OF_STOCK, "Out of Stock"
    if quantity == UNLIMITED_STOCK:
        return StockBand.UNLIMITED, "Available (Unlimited)"
    if 0 < quantity < LOW_STOCK_LIMIT:
        return StockBand.LOW, f"Low Stock ({quantity})"
    return StockBand.IN_STOCK, "In Stock"


def image_url(product: Product) -> str:
    if product.image is not None and product.image.src:
        return product.image.src
    return NO_IMAGE_URL


def product_card(product: Product) -> ProductCard:
    band, label = classify_stock(product.inventory_quantity)
    return ProductCard(
        id=str(product.id) if product.id is not None else None,
        title=product.title,
        category=product.product_type or "N/A",
        price_label=format_price(product.price),
        stock_band=band,
        stock_label=label,
        image_url=image_url(product),
    )


def status_banner(state: SearchState) -> Optional[StatusBanner]:
    """Pick the single status banner to show, if any."""
    if state.phase is Phase.ERROR:
        return StatusBanner(kind=StatusKind.ERROR, message=state.error or "An unknown error occurred.")
    if state.loading:
        if state.items:
            return StatusBanner(kind=StatusKind.LOADING_MORE, message="Loading more products...")
        return None
    if not state.items:
        if state.query:
            return StatusBanner(
                kind=StatusKind.NO_RESULTS,
                message=f'No products found for "{state.query}".',
            )
        return StatusBanner(kind=StatusKind.START_TYPING, message="Start typing to search for products.")
    if not state.has_more:
        return StatusBanner(
            kind=StatusKind.END_OF_RESULTS,
            message=f"You've reached the end of the results ({state.total_found} products).",
        )
    return None


def render(state: SearchState, text: str) -> PageView:
    return PageView(
        input_text=text,
        cards=[product_card(p) for p in state.items],
        status=status_banner(state),
    )
