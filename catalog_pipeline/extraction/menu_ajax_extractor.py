"""
Menu-template Product Extractor

Extracts variants from a product page of the menu-driven template.

Data sources on the product page:
- Main product section (``data-product-container``) with the numeric
  product id in ``data-product-id``
- Description block, exported as HTML with links removed
- ``var BCData = {...}`` inline script with a page-level purchasable flag
- Size radio buttons; each size is priced by POSTing to the
  ``/remote/v1/product-attributes/<id>`` endpoint
- Without size options, the single visible price block
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..models import ProductCandidate, RawVariant
from .base import ExtractionError, VariantExtractor
from .parsers.description import extract_inner_html
from .parsers.dom_query import (
    attribute_value,
    find_all,
    find_all_by_class,
    find_first_with_attribute,
    find_one_by_class,
    find_one_with_attribute,
)
from .parsers.script_data import ScriptDataParser

logger = logging.getLogger(__name__)

OUT_OF_STOCK_MARKER = "out of stock"


class MenuAjaxExtractor(VariantExtractor):
    """Extracts product variants from menu-template product pages."""

    def extract(self, candidate: ProductCandidate) -> List[RawVariant]:
        """Fetch the product page and extract its variants."""
        logger.debug("Reading %s page ...", candidate.name)
        page = self.fetcher.fetch(self.settings.url(candidate.url))
        if not isinstance(page, BeautifulSoup):
            raise ExtractionError(page.message)

        return self.extract_from_page(candidate, page)

    def extract_from_page(self, candidate: ProductCandidate, page: BeautifulSoup) -> List[RawVariant]:
        """Extract variants from an already fetched product page."""
        main_section = find_first_with_attribute(
            page, "section", self.settings.product_container_attribute
        )
        if main_section is None:
            raise ExtractionError("Main product section not found.")

        description = self.extract_description(page)
        product_id = self.extract_product_id(main_section)
        in_stock = ScriptDataParser(page).extract_purchasable(
            self.settings.stock_script_prefix, self.settings.stock_script_variable
        )

        options = self.find_size_options(main_section)
        if options:
            return self.extract_option_variants(candidate, product_id, description, in_stock, options)

        return [self.extract_single_price(candidate, product_id, description, main_section)]

    def extract_description(self, page: BeautifulSoup) -> str:
        """Description HTML with links unwrapped (empty if the block is missing)."""
        node = find_one_by_class(page, "div", self.settings.description_class)
        return extract_inner_html(node)

    def extract_product_id(self, main_section: Tag) -> int:
        """
        Parse the numeric product id from the main product section.

        Raises:
            ExtractionError: If the id is missing or not numeric
        """
        value = attribute_value(main_section, self.settings.product_id_attribute).strip()
        try:
            return int(value)
        except ValueError:
            raise ExtractionError("Unable to parse product ID from the page contents.") from None

    def find_size_options(self, main_section: Tag) -> List[Tag]:
        """Radio inputs of the size selector, or an empty list if there is none."""
        group = find_one_with_attribute(main_section, "div", self.settings.option_group_attribute)
        if group is None:
            return []
        return find_all(group, "input", "type", "radio", strict=True)

    def size_label(self, option: Tag) -> str:
        """Size text from the label wrapping a radio input."""
        label = option.parent
        if label is None:
            return ""
        spans = find_all_by_class(label, "span", self.settings.option_label_class, strict=True)
        return spans[0].get_text().strip() if spans else ""

    def extract_option_variants(
        self,
        candidate: ProductCandidate,
        product_id: int,
        description: str,
        in_stock: Optional[bool],
        options: List[Tag],
    ) -> List[RawVariant]:
        """Price every size option through the pricing endpoint."""
        endpoint = self.settings.url(self.settings.pricing_endpoint.format(product_id=product_id))
        variants = []

        for option in options:
            form = [
                ("action", "add"),
                ("product_id", str(product_id)),
                (attribute_value(option, "name"), attribute_value(option, "value")),
                ("qty[]", "1"),
            ]
            response = self.fetcher.post_form(endpoint, form)
            if not isinstance(response, dict):
                logger.warning("No pricing data for product ID %d: %s", product_id, response.message)
                continue

            try:
                data = response["data"]
                price = Decimal(str(data["price"]["without_tax"]["value"]))
                if not price.is_finite():
                    raise ValueError(f"price is not a finite amount: {price}")
                variant_id = int(data["variantId"])
            except (KeyError, TypeError, ValueError, InvalidOperation) as e:
                logger.warning("Unexpected pricing data for product ID %d: %s: %s",
                               product_id, type(e).__name__, e)
                continue

            variants.append(RawVariant(
                source_product_id=product_id,
                name=candidate.name,
                url=candidate.url,
                category=candidate.category,
                description=description,
                variant_id=variant_id,
                size_label=self.size_label(option),
                source_price=price,
                authoritative_in_stock=in_stock,
                purchasable=data.get("purchasable") is True,
            ))

        return variants

    def extract_single_price(
        self,
        candidate: ProductCandidate,
        product_id: int,
        description: str,
        main_section: Tag,
    ) -> RawVariant:
        """
        Read the only price shown on a product page without size options.

        An "Out of stock" notice in the price block means price 0; an
        unparseable price also means 0. Stock follows the price.

        Raises:
            ExtractionError: If the price block or price value is missing
        """
        price_block = find_one_by_class(main_section, "div", self.settings.price_class, strict=True)
        if price_block is None:
            raise ExtractionError(f"Cannot find {self.settings.price_class} price block in the main product section")

        return RawVariant(
            source_product_id=product_id,
            name=candidate.name,
            url=candidate.url,
            category=candidate.category,
            description=description,
            source_price=self.parse_price_block(price_block),
        )

    def parse_price_block(self, price_block: Tag) -> Decimal:
        """Price shown in a price block, 0 when marked out of stock or unreadable."""
        notice = price_block.find("p", recursive=False)
        if notice is not None and OUT_OF_STOCK_MARKER in notice.get_text().lower():
            return Decimal("0")

        value_span = find_one_by_class(price_block, "span", self.settings.price_value_class)
        if value_span is None:
            raise ExtractionError(f"Cannot find {self.settings.price_value_class} span in the price block")

        return parse_price(value_span.get_text())


def parse_price(text: str) -> Decimal:
    """
    Parse a currency-prefixed price such as ``$1,234.50``.

    Returns:
        The price, or 0 if the text is not a number
    """
    cleaned = text.strip().lstrip("$").replace(",", "").strip()
    try:
        price = Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")
    return price if price.is_finite() else Decimal("0")
