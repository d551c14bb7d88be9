"""
Specialized parsers for storefront pages.

Each parser handles a specific concern:
- dom_query: Tag/attribute lookups shared by every template
- description: Description HTML cleanup (link stripping)
- script_data: JSON payloads assigned in inline <script> blocks
"""

from .description import extract_inner_html, replace_with_children, strip_links
from .dom_query import (
    attribute_value,
    find_all,
    find_all_by_class,
    find_first_with_attribute,
    find_one,
    find_one_by_class,
    find_one_with_attribute,
    links_from_anchors,
)
from .script_data import ScriptDataParser

__all__ = [
    'attribute_value',
    'find_all',
    'find_all_by_class',
    'find_first_with_attribute',
    'find_one',
    'find_one_by_class',
    'find_one_with_attribute',
    'links_from_anchors',
    'extract_inner_html',
    'replace_with_children',
    'strip_links',
    'ScriptDataParser',
]
