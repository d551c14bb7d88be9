"""
Product data models.

Pure data classes for representing navigation links, raw extracted
variants and the canonical product records handed to exporters.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CategoryLink:
    """Navigation link (display name + URL)."""
    name: str
    url: str


@dataclass(frozen=True)
class ProductLink(CategoryLink):
    """Link to a single product page found on a category/listing page."""


@dataclass
class ProductCandidate:
    """
    A product reached by a navigator, waiting to be extracted.

    Menu-driven templates carry only the link and category; listing
    templates also carry the embedded product record in ``payload``.
    """
    name: str
    url: str
    category: str = ""
    product_id: Optional[int] = None
    payload: Optional[Dict[str, Any]] = None

    @property
    def identity(self) -> str:
        """Source identity used for deduplication."""
        if self.url:
            return self.url
        return f"product:{self.product_id}"


@dataclass
class RawVariant:
    """
    One variant as read from the page, before normalization.

    Price fields:
    - source_price: price as found on the page
    - price_in_minor_units: True when source_price is in cents

    Stock fields, highest precedence first:
    - authoritative_in_stock: page-level flag (None if not found)
    - purchasable: per-variant flag from the pricing call (None if n/a)
    - otherwise inferred from price > 0
    """
    source_product_id: int
    name: str
    url: str
    category: str = ""
    description: str = ""
    variant_id: int = -1
    size_label: str = ""
    source_price: Decimal = Decimal("0")
    price_in_minor_units: bool = False
    authoritative_in_stock: Optional[bool] = None
    purchasable: Optional[bool] = None


@dataclass(frozen=True)
class Product:
    """
    Canonical product record.

    ``display_price`` is always ``source_price / MARKUP_DIVISOR`` rounded
    to three places; the Normalizer is the only producer of this type.
    """
    name: str
    category: str
    source_product_id: int
    source_price: Decimal
    display_price: Decimal
    in_stock: bool
    url: str = ""
    description: str = ""
    size: str = ""
    source_variant_id: int = -1

    @property
    def display_name(self) -> str:
        """Name with the size label appended when there is one."""
        return f"{self.name} {self.size}" if self.size else self.name

    @property
    def detail(self) -> str:
        """One-line summary used in log output."""
        stock = "In stock" if self.in_stock else "OUT OF STOCK"
        return (
            f"ID: {self.source_product_id}, Variant ID: {self.source_variant_id}, "
            f"Name: {self.name}, Category: {self.category}, Size: {self.size}, "
            f"Source Price: ${self.source_price:,.2f}, Price: ${self.display_price:,.2f}, {stock}"
        )
