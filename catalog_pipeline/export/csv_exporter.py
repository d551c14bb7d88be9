"""
Price List CSV Exporter

Writes the canonical product list as a price list, one row per variant,
ordered by category and then name.
"""

import csv
import logging
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Union

from ..models import Product

logger = logging.getLogger(__name__)

PRICE_LIST_FIELDNAMES = ['Source ID', 'Variant ID', 'Name', 'Source Price', 'Price', 'Stock']


def format_currency(value: Decimal) -> str:
    """Format an amount as dollars, e.g. ``$1,234.50``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


class PriceListCSVExporter:
    """
    Exports products to a CSV price list.

    Usage:
        exporter = PriceListCSVExporter("output/2024_01_31/price_list.csv")
        exporter.export(products)
    """

    def __init__(self, output_path: Union[str, Path]):
        self.output_path = Path(output_path)
        self.fieldnames = PRICE_LIST_FIELDNAMES

    def product_to_row(self, product: Product) -> Dict[str, str]:
        """Convert product to a CSV row (name carries the size label)."""
        return {
            'Source ID': str(product.source_product_id),
            'Variant ID': str(product.source_variant_id),
            'Name': product.display_name,
            'Source Price': format_currency(product.source_price),
            'Price': format_currency(product.display_price),
            'Stock': 'In stock' if product.in_stock else 'OUT OF STOCK',
        }

    def sort_products(self, products: List[Product]) -> List[Product]:
        return sorted(products, key=lambda p: (p.category, p.name))

    def export(self, products: List[Product]) -> int:
        """
        Write the price list.

        Returns:
            Number of rows written
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        rows = [self.product_to_row(p) for p in self.sort_products(products)]

        with open(self.output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=self.fieldnames)
            writer.writeheader()
            writer.writerows(rows)

        logger.info("Wrote %d price list row(s) to %s", len(rows), self.output_path)
        return len(rows)
