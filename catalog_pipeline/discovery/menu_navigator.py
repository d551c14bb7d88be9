"""
Menu-driven catalog navigation

Walks the storefront's main navigation menu. The menu is a list of top
level links; the products entry holds one list item per category (flagged
"has-children"), each with an anchor to the category page and a nested
list of subcategory anchors. Every category page lists its products as
title headings wrapping an anchor to the product page.
"""

import logging
from typing import Iterator, List

from bs4 import BeautifulSoup

from ..common.config_loader import SiteSettings
from ..common.page_fetcher import FetchFailure, PageFetcher
from ..extraction.parsers.dom_query import find_all_by_class, find_one_by_class, links_from_anchors
from ..models import CategoryLink, ProductCandidate, ProductLink

logger = logging.getLogger(__name__)


class MenuNavigator:
    """Discovers products through the main menu and category pages."""

    def __init__(self, fetcher: PageFetcher, settings: SiteSettings):
        self.fetcher = fetcher
        self.settings = settings
        self.categories: List[CategoryLink] = []
        self.categories_visited = 0
        self.failed_urls: List[str] = []

    def discover_categories(self) -> List[CategoryLink]:
        """
        Read the home page and collect category links from the main menu.

        Returns:
            Category links in menu order; empty if the menu or its
            categories cannot be found
        """
        logger.info("Reading main page %s ...", self.settings.site_root)
        main_page = self.fetcher.fetch(self.settings.site_root)
        if isinstance(main_page, FetchFailure):
            logger.error("%s", main_page.message)
            self.failed_urls.append(main_page.url)
            return []

        main_nav = find_one_by_class(main_page, "section", self.settings.main_nav_class)
        if main_nav is None:
            logger.error("Cannot locate main navigation section containing product links; aborting.")
            return []

        category_nodes = find_all_by_class(main_nav, "li", self.settings.category_class)
        logger.info("Found %d category node(s)", len(category_nodes))
        if not category_nodes:
            return []

        self.categories = links_from_anchors(category_nodes, CategoryLink)
        if not self.categories:
            logger.error("Unable to parse any URLs out of the category node(s).")
            return []

        logger.info("Found %d category links", len(self.categories))
        logger.debug("Category URLs:")
        for category in self.categories:
            logger.debug("%s: %s", category.name, category.url)

        return self.categories

    def discover_products(self, category: CategoryLink, page: BeautifulSoup) -> List[ProductLink]:
        """Collect product links from a fetched category page."""
        title_nodes = find_all_by_class(
            page, self.settings.product_title_tag, self.settings.product_title_class
        )
        logger.info("Found %d product node(s) for %s", len(title_nodes), category.name)
        if not title_nodes:
            return []

        products = links_from_anchors(title_nodes, ProductLink)
        if not products:
            logger.warning("Unable to parse any URLs out for the %s category.", category.name)
        return products

    def iter_candidates(self) -> Iterator[ProductCandidate]:
        """
        Yield every product reachable from the menu, category by category.

        Category pages are fetched lazily, so a consumer that stops
        iterating stops the crawl.
        """
        categories = self.discover_categories()
        total = len(categories)

        for index, category in enumerate(categories, 1):
            logger.info("Reading %s page (%d of %d) ...", category.name, index, total)
            page = self.fetcher.fetch(self.settings.url(category.url))
            self.categories_visited += 1
            if isinstance(page, FetchFailure):
                logger.warning("%s", page.message)
                self.failed_urls.append(page.url)
                continue

            for product in self.discover_products(category, page):
                yield ProductCandidate(
                    name=product.name,
                    url=product.url,
                    category=category.name,
                )

    def get_stats(self) -> dict:
        """Return navigation statistics."""
        return {
            "categories_found": len(self.categories),
            "categories_visited": self.categories_visited,
            "failed_urls": len(self.failed_urls),
        }
