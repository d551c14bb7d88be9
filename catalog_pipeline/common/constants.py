"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

from decimal import Decimal

# Retail price = source (wholesale) price / MARKUP_DIVISOR, i.e. a 25% margin
# on the retail price. Fixed business constant, not configurable.
MARKUP_DIVISOR = Decimal("0.75")

# Display prices are rounded to 3 places (matches DECIMAL(9, 3) downstream)
DISPLAY_PRICE_QUANTUM = Decimal("0.001")

# Listing-template prices are integer cents
MINOR_UNITS_PER_UNIT = Decimal("100")

USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
