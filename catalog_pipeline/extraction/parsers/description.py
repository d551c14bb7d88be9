"""
Description Cleanup

Product descriptions are exported as HTML fragments with hyperlinks
removed. Link text and any markup inside a link is kept in place.
"""

from collections import deque
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag


def replace_with_children(root: Tag, predicate: Callable[[Tag], bool]) -> Tag:
    """
    Replace every matching descendant of ``root`` with its own children.

    Walks the tree breadth-first; children of a replaced node are still
    visited, so nested matches are unwrapped too. ``root`` itself is never
    replaced.

    Args:
        root: Tree to rewrite in place
        predicate: Returns True for nodes that should be unwrapped

    Returns:
        The same root, for chaining
    """
    queue = deque(child for child in root.children if isinstance(child, Tag))

    while queue:
        node = queue.popleft()
        queue.extend(child for child in node.children if isinstance(child, Tag))

        if predicate(node):
            node.unwrap()

    return root


def _is_anchor(node: Tag) -> bool:
    return node.name is not None and node.name.lower() == "a"


def extract_inner_html(node: Optional[Tag]) -> str:
    """Inner HTML of a node with all anchors unwrapped (empty if node is None)."""
    if node is None:
        return ""
    replace_with_children(node, _is_anchor)
    return node.decode_contents()


def strip_links(html: str) -> str:
    """
    Remove hyperlinks from an HTML fragment, keeping their content.

    Args:
        html: HTML fragment (e.g. a product description)

    Returns:
        The fragment without <a> elements
    """
    if not html:
        return ""
    fragment = BeautifulSoup(html, "html.parser")
    replace_with_children(fragment, _is_anchor)
    return fragment.decode_contents()
