"""
Paged listing navigation

Walks ``/collections/all?page=N`` from page 1 until a page carries no
product data. Each product on a listing page is embedded as a JSON
assignment in its own inline script block, so the listing alone yields
complete product records and no product page is fetched.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from ..common.config_loader import SiteSettings
from ..common.page_fetcher import FetchFailure, PageFetcher
from ..extraction.parsers.script_data import ScriptDataParser
from ..models import ProductCandidate

logger = logging.getLogger(__name__)


class ListingNavigator:
    """Discovers products from the paged "all products" listing."""

    def __init__(self, fetcher: PageFetcher, settings: SiteSettings):
        self.fetcher = fetcher
        self.settings = settings
        self.pages_read = 0
        self.failed_urls: List[str] = []

    def page_url(self, page_number: int) -> str:
        """Absolute URL of a listing page (1-based)."""
        return f"{self.settings.url(self.settings.listing_path)}?page={page_number}"

    def read_page(self, page_number: int) -> Optional[List[Dict[str, Any]]]:
        """
        Fetch one listing page and decode its product records.

        Returns:
            Product records (possibly empty), or None if the page could not be read
        """
        url = self.page_url(page_number)
        logger.info("Reading listing page %d ...", page_number)
        page = self.fetcher.fetch(url)
        if isinstance(page, FetchFailure):
            logger.warning("%s", page.message)
            self.failed_urls.append(url)
            return None

        self.pages_read += 1
        records = list(ScriptDataParser(page).iter_payloads(self.settings.product_script_prefix))
        logger.info("Found %d product(s) on page %d", len(records), page_number)
        return records

    def candidate_from_record(self, record: Dict[str, Any]) -> Optional[ProductCandidate]:
        """Build a candidate from an embedded product record (None if it has no usable id)."""
        try:
            product_id = int(record["id"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping product record without a numeric id")
            return None

        variants = record.get("variants") or []
        name = record.get("title") or ""
        if not name and variants and isinstance(variants[0], dict):
            name = variants[0].get("name") or ""

        handle = record.get("handle")
        url = self.settings.url(f"/products/{handle}") if handle else ""

        return ProductCandidate(
            name=name,
            url=url,
            category=record.get("type") or "",
            product_id=product_id,
            payload=record,
        )

    def iter_candidates(self) -> Iterator[ProductCandidate]:
        """
        Yield products page by page until a page has none.

        There is no page limit; a consumer that stops iterating (e.g. on
        reaching a processing cap) stops the crawl.
        """
        page_number = 1
        while True:
            records = self.read_page(page_number)
            if not records:
                logger.info("No products on listing page %d; listing finished.", page_number)
                return

            for record in records:
                candidate = self.candidate_from_record(record)
                if candidate is not None:
                    yield candidate

            page_number += 1

    def get_stats(self) -> dict:
        """Return navigation statistics."""
        return {
            "pages_read": self.pages_read,
            "failed_urls": len(self.failed_urls),
        }
