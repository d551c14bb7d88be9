"""
Variant extraction for storefront templates.

Modules:
    base - VariantExtractor interface and ExtractionError
    menu_ajax_extractor - MenuAjaxExtractor: product pages + pricing endpoint
    embedded_json_extractor - EmbeddedJsonExtractor: listing-page JSON records
    normalizer - Normalizer: raw variants -> canonical Product records
    parsers - Document queries, description cleanup, inline script data
"""

from ..common.config_loader import TEMPLATE_LISTING, TEMPLATE_MENU
from .base import ExtractionError, VariantExtractor
from .embedded_json_extractor import EmbeddedJsonExtractor
from .menu_ajax_extractor import MenuAjaxExtractor
from .normalizer import Normalizer, compute_display_price, resolve_stock

# Registry of supported template extractors
TEMPLATE_EXTRACTORS = {
    TEMPLATE_MENU: MenuAjaxExtractor,
    TEMPLATE_LISTING: EmbeddedJsonExtractor,
}


def get_extractor_for_template(template: str):
    """
    Get the extractor class for a storefront template.

    Args:
        template: Template name ("menu" or "listing")

    Returns:
        Extractor class (e.g., MenuAjaxExtractor)

    Raises:
        ValueError: If template is not supported
    """
    template = template.lower().strip()

    if template in TEMPLATE_EXTRACTORS:
        return TEMPLATE_EXTRACTORS[template]

    supported = ', '.join(TEMPLATE_EXTRACTORS.keys())
    raise ValueError(f"Unsupported template: {template}. Supported: {supported}")


__all__ = [
    # Template extractors
    'VariantExtractor',
    'MenuAjaxExtractor',
    'EmbeddedJsonExtractor',
    'ExtractionError',
    'get_extractor_for_template',
    # Normalization
    'Normalizer',
    'compute_display_price',
    'resolve_stock',
]
