# src/models/product.py

"""Product data model for one catalog item returned by the API."""

from dataclasses import dataclass, field
from enum import Enum

from src.config.settings import Settings


class StockStatus(str, Enum):
    """Availability band shown on the detail view."""

    OUT_OF_STOCK = "out_of_stock"
    LOW_STOCK = "low_stock"
    IN_STOCK = "in_stock"


@dataclass(frozen=True)
class Product:
    """Represents a single catalog item, immutable once fetched.

    Only ``id`` is guaranteed.  Every other field is ``None`` when the
    API omitted it, so a missing ``stock`` is never mistaken for zero.
    """

    id: int
    title: str | None = None
    description: str | None = None
    category: str | None = None
    price: float | None = None
    rating: float | None = None
    stock: int | None = None
    brand: str | None = None
    thumbnail: str | None = None
    images: tuple[str, ...] = field(default_factory=tuple)
    warranty_information: str | None = None
    shipping_information: str | None = None
    return_policy: str | None = None
    minimum_order_quantity: int | None = None

    @property
    def stock_status(self) -> StockStatus | None:
        """Classify ``stock`` into out / low / in stock bands."""
        if self.stock is None:
            return None
        if self.stock <= 0:
            return StockStatus.OUT_OF_STOCK
        if self.stock <= Settings.LOW_STOCK_THRESHOLD:
            return StockStatus.LOW_STOCK
        return StockStatus.IN_STOCK
