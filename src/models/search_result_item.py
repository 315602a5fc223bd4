# src/models/search_result_item.py

"""Per-request view of a product joined with its vendor."""

from dataclasses import dataclass, field

from src.models.product import Product
from src.models.vendor import Vendor


@dataclass
class SearchResultItem:
    """A product row as shown in search, browse and related listings.

    Built fresh for every search; never stored.  ``low_price`` marks the
    cheapest matches of a free-text search.
    """

    id: str
    name: str
    price: float
    vendor_id: str
    vendor_name: str
    vendor_rating: float = 0.0
    unit: str | None = None
    description: str | None = None
    discount: str | None = None
    image: str | None = None
    sizes: list[str] = field(default_factory=lambda: list[str]())
    colors: list[str] = field(default_factory=lambda: list[str]())
    low_price: bool = False

    @classmethod
    def from_product(
        cls, product: Product, vendor: Vendor
    ) -> "SearchResultItem":
        """Copy *product* and attach the owning vendor's context."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            vendor_rating=vendor.rating,
            unit=product.unit,
            description=product.description,
            discount=product.discount,
            image=product.image,
            sizes=list(product.sizes),
            colors=list(product.colors),
        )
