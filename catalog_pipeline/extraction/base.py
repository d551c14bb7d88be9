"""
Variant extractor interface

One extractor per storefront template, chosen once per run. An
extractor turns a product candidate into the raw variants found for it.
"""

from abc import ABC, abstractmethod
from typing import List

from ..common.config_loader import SiteSettings
from ..common.page_fetcher import PageFetcher
from ..models import ProductCandidate, RawVariant


class ExtractionError(ValueError):
    """A product could not be extracted; the pipeline logs it and moves on."""


class VariantExtractor(ABC):
    """Base class for template-specific variant extraction."""

    def __init__(self, fetcher: PageFetcher, settings: SiteSettings):
        self.fetcher = fetcher
        self.settings = settings

    @abstractmethod
    def extract(self, candidate: ProductCandidate) -> List[RawVariant]:
        """
        Extract the variants of one product.

        Individual variants that fail are logged and left out.

        Raises:
            ExtractionError: If the product as a whole has to be skipped
        """
