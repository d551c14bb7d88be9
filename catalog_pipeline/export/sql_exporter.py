"""
SQL Script Exporter

Writes a MySQL script that refreshes bulk products through a stored
procedure:

1. Delete bulk products that never appeared in a basket
2. CALL <proc>(sku, name, description, category, unit_price,
               pricing_unit, modified, is_unlisted) per variant
3. Unlist bulk products not touched by this import

Procedure parameters:
    prm_sku VARCHAR(20), prm_name VARCHAR(75), prm_description LONGTEXT,
    prm_category VARCHAR(50), prm_unit_price DECIMAL(9, 3),
    prm_pricing_unit VARCHAR(50), prm_modified DATETIME,
    prm_is_unlisted BOOLEAN
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from ..models import Product

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

DELETE_UNUSED_BULK_PRODUCTS = """DELETE FROM kvfc_products
WHERE IFNULL(kvfc_products.bulk_sku, '') != ''
AND kvfc_products.pvid NOT IN (
    SELECT x.pvid
    FROM (
        SELECT kvfc_products.pvid
        FROM kvfc_products
        JOIN kvfc_basket_items USING (product_id, product_version)
        WHERE IFNULL(bulk_sku, '') != ''
    ) AS x
);"""

UNLIST_STALE_BULK_PRODUCTS = (
    "UPDATE kvfc_products SET confirmed = 0, listing_auth_type = 'unlisted' "
    "WHERE producer_id IN (SELECT producer_id FROM kvfc_producers WHERE IFNULL(is_bulk, 0) = 1) "
    "AND modified < '{modified}';"
)


def sql_quote(value: str) -> str:
    """Single-quoted SQL string literal."""
    return "'" + (value or "").replace("\\", "\\\\").replace("'", "''") + "'"


class SQLScriptExporter:
    """
    Exports products as a stored-procedure import script.

    Usage:
        exporter = SQLScriptExporter("output/2024_01_31/products.sql", proc_name="import_bulk_product")
        exporter.export(products)
    """

    def __init__(
        self,
        output_path: Union[str, Path],
        proc_name: str,
        started_at: Optional[datetime] = None,
    ):
        """
        Initialize the exporter.

        Args:
            output_path: Path of the .sql file
            proc_name: Stored procedure called once per product
            started_at: Run start; stamped as "modified" and used to unlist stale rows
        """
        self.output_path = Path(output_path)
        self.proc_name = proc_name
        self.started_at = started_at or datetime.now()

    def product_to_call(self, product: Product) -> str:
        """CALL statement for one product."""
        modified = self.started_at.strftime(TIMESTAMP_FORMAT)
        return "CALL {proc}({sku}, {name}, {description}, {category}, {price}, {size}, {modified}, {unlisted});".format(
            proc=self.proc_name,
            sku=sql_quote(f"{product.source_product_id}_{product.source_variant_id}"),
            name=sql_quote(product.name),
            description=sql_quote(product.description),
            category=sql_quote(product.category),
            price=product.display_price,
            size=sql_quote(product.size),
            modified=sql_quote(modified),
            unlisted="0" if product.in_stock else "1",
        )

    def build_statements(self, products: List[Product]) -> List[str]:
        """All statements of the script, in execution order."""
        ordered = sorted(products, key=lambda p: (p.source_product_id, p.source_variant_id))
        statements = [DELETE_UNUSED_BULK_PRODUCTS]
        statements.extend(self.product_to_call(p) for p in ordered)
        statements.append(UNLIST_STALE_BULK_PRODUCTS.format(
            modified=self.started_at.strftime(TIMESTAMP_FORMAT)
        ))
        return statements

    def export(self, products: List[Product]) -> int:
        """
        Write the SQL script.

        Returns:
            Number of CALL statements written
        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        statements = self.build_statements(products)

        with open(self.output_path, 'w', encoding='utf-8') as f:
            for statement in statements:
                f.write(statement + "\n")

        logger.info("Wrote %d product call(s) to %s", len(products), self.output_path)
        return len(products)
