"""
Document Query Helpers

Tag + attribute lookups over a parsed BeautifulSoup tree.

Single-match lookups treat ambiguity as absence: zero matches and more
than one match both return None, never the first hit.
"""

from typing import Iterable, List, Optional, Type, TypeVar

from bs4 import Tag

from ...models import CategoryLink

LinkT = TypeVar("LinkT", bound=CategoryLink)


def attribute_value(node: Optional[Tag], attr_name: str) -> str:
    """
    Get an attribute value as a string.

    Multi-valued attributes (``class``) are joined with spaces, the way
    they appear in the markup.

    Returns:
        Attribute value, or empty string if the node or attribute is missing
    """
    if node is None or not node.has_attr(attr_name):
        return ""
    value = node.get(attr_name)
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value or ""


def find_all(
    node: Tag,
    tag: str,
    attr_name: str,
    attr_value: str,
    strict: bool = False,
) -> List[Tag]:
    """
    Find all descendants of a tag type whose attribute matches a value.

    Args:
        node: Root of the search
        tag: Tag name to look for
        attr_name: Attribute to compare
        attr_value: Value to match
        strict: True for exact equality, False for substring match

    Returns:
        Matching descendants in document order
    """
    matches = []
    for element in node.find_all(tag):
        if not element.has_attr(attr_name):
            continue
        value = attribute_value(element, attr_name)
        if (value == attr_value) if strict else (attr_value in value):
            matches.append(element)
    return matches


def find_one(
    node: Tag,
    tag: str,
    attr_name: str,
    attr_value: str,
    strict: bool = False,
) -> Optional[Tag]:
    """Single descendant matching find_all(), or None if zero or several match."""
    matches = find_all(node, tag, attr_name, attr_value, strict)
    return matches[0] if len(matches) == 1 else None


def find_all_by_class(node: Tag, tag: str, class_name: str, strict: bool = False) -> List[Tag]:
    """find_all() on the ``class`` attribute."""
    return find_all(node, tag, "class", class_name, strict)


def find_one_by_class(node: Tag, tag: str, class_name: str, strict: bool = False) -> Optional[Tag]:
    """find_one() on the ``class`` attribute."""
    return find_one(node, tag, "class", class_name, strict)


def find_first_with_attribute(node: Tag, tag: str, attr_name: str) -> Optional[Tag]:
    """First descendant of a tag type that has the attribute, whatever its value."""
    for element in node.find_all(tag):
        if element.has_attr(attr_name):
            return element
    return None


def find_one_with_attribute(node: Tag, tag: str, attr_name: str) -> Optional[Tag]:
    """Single descendant of a tag type that has the attribute, or None if zero or several do."""
    matches = [element for element in node.find_all(tag) if element.has_attr(attr_name)]
    return matches[0] if len(matches) == 1 else None


def _clean_link_text(text: str) -> str:
    """Normalize anchor text (the storefront renders '&' as a bullet in menus)."""
    return text.replace("&amp;", "&").replace("•", "&").strip()


def links_from_anchors(
    nodes: Iterable[Tag],
    link_class: Type[LinkT] = CategoryLink,
) -> List[LinkT]:
    """
    Collect (name, url) pairs from every anchor under the given nodes.

    Links are deduplicated by URL (first occurrence wins) and the result is
    reversed: the navigation markup lists entries bottom-up relative to how
    they are displayed.

    Args:
        nodes: Nodes whose descendant anchors should be collected
        link_class: CategoryLink or ProductLink

    Returns:
        Links in visual (top-to-bottom) order
    """
    links = []
    seen_urls = set()

    for node in nodes:
        for anchor in node.find_all("a"):
            url = attribute_value(anchor, "href")
            if not url or url in seen_urls:
                continue
            seen_urls.add(url)
            links.append(link_class(name=_clean_link_text(anchor.get_text()), url=url))

    links.reverse()
    return links
