"""
Listing-template Product Extractor

Expands an embedded product record into variants. The listing page
already carries everything needed:

    {"id": 123, "title": "...", "handle": "...", "type": "Nuts",
     "description": "<p>...</p>",
     "variants": [{"id": 456, "available": true, "name": "Almonds - 5 lb",
                   "price": 2599, "title": "5 lb"}, ...]}

Prices are integer cents. No further request is made.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from ..models import ProductCandidate, RawVariant
from .base import ExtractionError, VariantExtractor
from .parsers.description import strip_links

logger = logging.getLogger(__name__)


class EmbeddedJsonExtractor(VariantExtractor):
    """Extracts product variants from listing-page JSON records."""

    def extract(self, candidate: ProductCandidate) -> List[RawVariant]:
        record = candidate.payload
        if not record:
            raise ExtractionError(f"No embedded product data for {candidate.name or candidate.identity}")

        variants_data = record.get("variants")
        if not isinstance(variants_data, list):
            raise ExtractionError(f"Product {candidate.product_id} has no variant list")

        description = strip_links(record.get("description") or "")

        variants = []
        for entry in variants_data:
            try:
                variants.append(self._variant_from_entry(candidate, description, entry))
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                logger.warning("Skipping variant of product %s: %s: %s",
                               candidate.product_id, type(e).__name__, e)
        return variants

    def _variant_from_entry(
        self,
        candidate: ProductCandidate,
        description: str,
        entry: Dict[str, Any],
    ) -> RawVariant:
        price = entry["price"]
        if isinstance(price, bool):
            raise ValueError(f"price is not an integer amount of cents: {price!r}")
        cents = Decimal(str(price))
        if not cents.is_finite() or cents != cents.to_integral_value():
            raise ValueError(f"price is not an integer amount of cents: {price!r}")

        return RawVariant(
            source_product_id=candidate.product_id,
            name=candidate.name or entry.get("name") or "",
            url=candidate.url,
            category=candidate.category,
            description=description,
            variant_id=int(entry["id"]),
            size_label=entry.get("title") or "",
            source_price=cents,
            price_in_minor_units=True,
            purchasable=entry.get("available") is True,
        )
