"""
Product Normalizer

Turns raw variants into canonical Product records:
- source price in currency units (listing prices arrive in cents)
- display price = source price / MARKUP_DIVISOR, rounded to 3 places
- stock: page-level flag, else per-variant purchasable flag, else price > 0
- description kept on the first variant of a product only
- repeated (product id, variant id) pairs dropped
"""

import logging
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Iterable, List, Optional

from ..common.constants import DISPLAY_PRICE_QUANTUM, MARKUP_DIVISOR, MINOR_UNITS_PER_UNIT
from ..models import Product, RawVariant

logger = logging.getLogger(__name__)


def compute_display_price(source_price: Decimal) -> Decimal:
    """Retail price for a source price (banker's rounding to 3 places)."""
    return (source_price / MARKUP_DIVISOR).quantize(DISPLAY_PRICE_QUANTUM, rounding=ROUND_HALF_EVEN)


def to_source_price(variant: RawVariant) -> Decimal:
    """Source price of a raw variant in currency units."""
    if variant.price_in_minor_units:
        return variant.source_price / MINOR_UNITS_PER_UNIT
    return variant.source_price


def resolve_stock(
    authoritative: Optional[bool],
    purchasable: Optional[bool],
    source_price: Decimal,
) -> bool:
    """Stock status by precedence: page flag, then variant flag, then price."""
    if authoritative is not None:
        return authoritative
    if purchasable is not None:
        return purchasable
    return source_price > 0


class Normalizer:
    """
    Converts raw variants into canonical products.

    Usage:
        normalizer = Normalizer()
        products = normalizer.normalize(raw_variants)
    """

    def normalize_variant(self, variant: RawVariant, include_description: bool = True) -> Product:
        """Build one Product from a raw variant."""
        source_price = to_source_price(variant)
        return Product(
            name=variant.name,
            category=variant.category,
            source_product_id=variant.source_product_id,
            source_price=source_price,
            display_price=compute_display_price(source_price),
            in_stock=resolve_stock(variant.authoritative_in_stock, variant.purchasable, source_price),
            url=variant.url,
            description=variant.description if include_description else "",
            size=variant.size_label,
            source_variant_id=variant.variant_id,
        )

    def normalize(self, variants: Iterable[RawVariant]) -> List[Product]:
        """
        Normalize the variants of one or more products, keeping input order.

        Returns:
            Products; only the first variant of each source product keeps
            the description
        """
        products = []
        described = set()
        seen_variants = set()

        for variant in variants:
            key = (variant.source_product_id, variant.variant_id)
            if variant.variant_id != -1 and key in seen_variants:
                logger.debug("Dropping repeated variant %s of product %s",
                             variant.variant_id, variant.source_product_id)
                continue
            seen_variants.add(key)

            first = variant.source_product_id not in described
            described.add(variant.source_product_id)
            products.append(self.normalize_variant(variant, include_description=first))

        return products
