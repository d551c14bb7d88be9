"""
Catalog discovery for storefront templates.

Modules:
    menu_navigator - MenuNavigator: main menu -> category pages -> product links
    listing_navigator - ListingNavigator: paged "all products" listing with embedded JSON
"""

from ..common.config_loader import TEMPLATE_LISTING, TEMPLATE_MENU
from .listing_navigator import ListingNavigator
from .menu_navigator import MenuNavigator

# Template name to navigator mapping
TEMPLATE_NAVIGATORS = {
    TEMPLATE_MENU: MenuNavigator,
    TEMPLATE_LISTING: ListingNavigator,
}


def get_navigator_for_template(template: str):
    """
    Get the navigator class for a storefront template.

    Args:
        template: Template name ("menu" or "listing")

    Returns:
        Navigator class

    Raises:
        ValueError: If template is not supported
    """
    template = template.lower().strip()

    if template in TEMPLATE_NAVIGATORS:
        return TEMPLATE_NAVIGATORS[template]

    raise ValueError(f"Unsupported template: {template}. Supported: {', '.join(TEMPLATE_NAVIGATORS.keys())}")


__all__ = [
    'MenuNavigator',
    'ListingNavigator',
    'get_navigator_for_template',
    'TEMPLATE_NAVIGATORS',
]
