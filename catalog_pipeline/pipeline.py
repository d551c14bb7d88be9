"""
Catalog Pipeline

Drives one extraction pass: navigator -> variant extractor -> normalizer,
accumulating canonical products and handing them to exporters.

Features:
- Deduplication by source identity (first category to reach a product wins)
- Optional processing cap, checked before and after each product
- Per-product failures logged and skipped
- Exporters always receive the accumulated list, even after a fault
"""

from __future__ import annotations

import logging
from decimal import InvalidOperation
from enum import Enum
from typing import Dict, Iterable, List, Optional

import requests

from .extraction.base import ExtractionError, VariantExtractor
from .extraction.normalizer import Normalizer
from .models import Product, ProductCandidate

logger = logging.getLogger(__name__)

# Per-product failures that skip the product instead of ending the run
ITEM_ERRORS = (
    ExtractionError,
    requests.RequestException,
    ValueError,
    KeyError,
    TypeError,
    AttributeError,
    InvalidOperation,
)


class PipelineState(Enum):
    IDLE = "idle"
    NAVIGATING = "navigating"
    EXTRACTING = "extracting"
    ACCUMULATING = "accumulating"
    DONE = "done"


class CatalogPipeline:
    """
    Sequential catalog extraction.

    Usage:
        pipeline = CatalogPipeline(navigator, extractor, exporters=[csv_exporter], limit=10)
        products = pipeline.run()
    """

    def __init__(
        self,
        navigator,
        extractor: VariantExtractor,
        normalizer: Optional[Normalizer] = None,
        exporters: Iterable = (),
        limit: int = 0,
    ):
        """
        Initialize the pipeline.

        Args:
            navigator: Object with iter_candidates() yielding ProductCandidate
            extractor: Variant extractor for the same template
            normalizer: Normalizer (default: Normalizer())
            exporters: Objects with export(products), called after the pass
            limit: Maximum number of products to process (0 = no limit)
        """
        self.navigator = navigator
        self.extractor = extractor
        self.normalizer = normalizer or Normalizer()
        self.exporters = list(exporters)
        self.limit = max(0, limit or 0)

        self.state = PipelineState.IDLE
        self.products: List[Product] = []
        self.seen: Dict[str, str] = {}
        self.products_processed = 0
        self.duplicates_skipped = 0
        self.failures = 0

    def limit_reached(self) -> bool:
        """True once a non-zero cap has been reached."""
        return self.limit > 0 and self.products_processed >= self.limit

    def parse_catalog(self) -> List[Product]:
        """
        Walk the catalog and accumulate canonical products.

        Errors outside a single product propagate; run() handles them.

        Returns:
            Accumulated products in discovery order
        """
        self.state = PipelineState.NAVIGATING
        candidates = self.navigator.iter_candidates()
        try:
            for candidate in candidates:
                if self.limit_reached():
                    break

                self.process_candidate(candidate)
                self.state = PipelineState.NAVIGATING

                if self.limit_reached():
                    logger.info("Processing limit of %d product(s) reached.", self.limit)
                    break
        finally:
            close = getattr(candidates, "close", None)
            if close is not None:
                close()

        return self.products

    def process_candidate(self, candidate: ProductCandidate) -> None:
        """Extract, normalize and accumulate one product; failures are logged and skipped."""
        first_category = self.seen.get(candidate.identity)
        if first_category is not None:
            self.duplicates_skipped += 1
            logger.debug("SKIPPING %s (%s) - already processed for category %s",
                         candidate.name, candidate.identity, first_category)
            return

        self.state = PipelineState.EXTRACTING
        try:
            variants = self.extractor.extract(candidate)
        except ITEM_ERRORS as e:
            self.failures += 1
            logger.warning("Skipped %s (%s): %s", candidate.name, candidate.identity, e)
            return

        if not variants:
            self.failures += 1
            logger.warning("No variants extracted for %s (%s)", candidate.name, candidate.identity)
            return

        self.state = PipelineState.ACCUMULATING
        products = self.normalizer.normalize(variants)
        self.products.extend(products)
        self.seen[candidate.identity] = candidate.category
        self.products_processed += 1

        for product in products:
            logger.debug("%s", product.detail)
        logger.info("[%d] OK: %s (%d variant(s))", self.products_processed, candidate.name, len(products))

    def export(self, products: List[Product]) -> None:
        """Hand the product list to every exporter; one failing exporter does not stop the rest."""
        for exporter in self.exporters:
            try:
                exporter.export(products)
            except (OSError, ValueError, ArithmeticError) as e:
                logger.error("%s failed: %s", type(exporter).__name__, e)

    def run(self) -> List[Product]:
        """
        Run a full pass and export the result.

        A fault that escapes the pass is logged, not raised; whatever was
        accumulated up to that point is still exported.

        Returns:
            The accumulated products
        """
        try:
            self.parse_catalog()
        except Exception as e:
            logger.error("PARSING ERROR: %s", e)
            logger.debug("Parsing error details", exc_info=True)

        self.state = PipelineState.DONE
        self._log_summary()
        self.export(self.products)
        return list(self.products)

    def _log_summary(self) -> None:
        stats = self.get_stats()
        logger.info(
            "Extraction finished: products=%d, variants=%d, duplicates skipped=%d, failures=%d",
            stats["products_processed"], stats["variants"],
            stats["duplicates_skipped"], stats["failures"],
        )

    def get_stats(self) -> dict:
        """Return extraction statistics."""
        stats = {
            "products_processed": self.products_processed,
            "variants": len(self.products),
            "duplicates_skipped": self.duplicates_skipped,
            "failures": self.failures,
        }
        navigator_stats = getattr(self.navigator, "get_stats", None)
        if navigator_stats is not None:
            stats.update(navigator_stats())
        return stats
