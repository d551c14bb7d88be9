"""
Data models for catalog extraction.

This module contains pure data classes with no business logic.
"""

from .product import CategoryLink, Product, ProductCandidate, ProductLink, RawVariant

__all__ = ['CategoryLink', 'ProductLink', 'ProductCandidate', 'RawVariant', 'Product']
