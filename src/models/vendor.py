# src/models/vendor.py

"""Vendor data model: a storefront and the products it owns."""

from dataclasses import dataclass, field

from src.models.product import Product


@dataclass
class Vendor:
    """A marketplace storefront with an ordered product listing."""

    id: str
    name: str
    category: str | None = None
    rating: float = 0.0
    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    image: str | None = None
    description: str | None = None
