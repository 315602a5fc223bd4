# src/models/product.py

"""Product data model owned by a vendor's listing."""

from dataclasses import dataclass, field


@dataclass
class Product:
    """A single item a vendor offers for sale."""

    id: str
    vendor_id: str
    name: str
    price: float
    unit: str | None = None
    description: str | None = None
    discount: str | None = None
    image: str | None = None
    sizes: list[str] = field(default_factory=lambda: list[str]())
    colors: list[str] = field(default_factory=lambda: list[str]())
