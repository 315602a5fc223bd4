# src/storage/catalog_loader.py

"""Builds the in-memory catalog from JSON files or store rows."""

import json
import logging
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.product import Product
from src.models.vendor import Vendor

logger = logging.getLogger("market_search.storage")

UNKNOWN_VENDOR_NAME = "Unknown Vendor"


class CatalogLoadError(Exception):
    """Raised when catalog data cannot be read or is malformed."""


def _pick(record: dict[str, Any], *keys: str) -> Any:
    """Return the first present value among *keys* (snake or camel case)."""
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def _string_list(value: Any) -> list[str]:
    if not value:
        return []
    return [str(v) for v in value]


class CatalogLoader:
    """Convert vendor records (with nested products) into models."""

    @staticmethod
    def _product_from_record(
        record: dict[str, Any], vendor_id: str
    ) -> Product:
        try:
            price = float(record["price"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogLoadError(
                f"Product {record.get('id')!r} has no usable price"
            ) from exc

        return Product(
            id=str(record.get("id", "")),
            vendor_id=str(
                _pick(record, "vendor_id", "vendorId") or vendor_id
            ),
            name=str(record.get("name") or ""),
            price=price,
            unit=record.get("unit"),
            description=record.get("description"),
            discount=record.get("discount"),
            image=_pick(record, "image", "image_url", "imageUrl"),
            sizes=_string_list(record.get("sizes")),
            colors=_string_list(record.get("colors")),
        )

    @staticmethod
    def from_records(records: list[dict[str, Any]]) -> list[Vendor]:
        """Build vendors from plain dict records, preserving their order."""
        if not isinstance(records, list):
            raise CatalogLoadError(
                f"Expected a list of vendors, got {type(records).__name__}"
            )

        vendors: list[Vendor] = []
        for record in records:
            if not isinstance(record, dict) or "id" not in record:
                raise CatalogLoadError(
                    f"Vendor record without an id: {record!r}"
                )
            vendor_id = str(record["id"])
            try:
                rating = float(record.get("rating") or 0.0)
            except (TypeError, ValueError) as exc:
                raise CatalogLoadError(
                    f"Vendor {vendor_id!r} has a non-numeric rating"
                ) from exc

            raw_products = record.get("products") or []
            if not isinstance(raw_products, list):
                raise CatalogLoadError(
                    f"Vendor {vendor_id!r} products must be a list, "
                    f"got {type(raw_products).__name__}"
                )
            products: list[Product] = []
            for raw in raw_products:
                if not isinstance(raw, dict):
                    raise CatalogLoadError(
                        f"Vendor {vendor_id!r} has a malformed product "
                        f"entry: {raw!r}"
                    )
                products.append(
                    CatalogLoader._product_from_record(raw, vendor_id)
                )
            vendors.append(
                Vendor(
                    id=vendor_id,
                    name=record.get("name") or UNKNOWN_VENDOR_NAME,
                    category=record.get("category"),
                    rating=rating,
                    products=products,
                    image=record.get("image"),
                    description=record.get("description"),
                )
            )

        logger.debug(
            "Built %d vendors with %d products",
            len(vendors),
            sum(len(v.products) for v in vendors),
        )
        return vendors

    @staticmethod
    def load_file(path: Path | None = None) -> list[Vendor]:
        """Read a JSON catalog file (defaults to ``Settings.CATALOG_PATH``)."""
        filepath = path or Settings.CATALOG_PATH
        try:
            with open(filepath, encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogLoadError(
                f"Cannot read catalog file {filepath}: {exc}"
            ) from exc

        vendors = CatalogLoader.from_records(records)
        logger.info("Loaded %d vendors from %s", len(vendors), filepath)
        return vendors
