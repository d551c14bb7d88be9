"""
Inline Script Data Parser

Extracts JSON payloads assigned to JavaScript variables in inline
<script> blocks, e.g.:

    var BCData = {"product_attributes": {"purchasable": true, ...}};
    var productJSON = {"id": 123, "type": "Nuts", "variants": [...]};

A block is selected when its trimmed text starts with a fixed prefix
(case-insensitive). Decoding is lenient: a block that does not decode
to a JSON object is treated as absent.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


class ScriptDataParser:
    """
    Parses JSON assignments out of a page's inline scripts.

    Usage:
        parser = ScriptDataParser(soup)
        in_stock = parser.extract_purchasable('var BCData = {"product_attributes":', "var BCData = ")
        for record in parser.iter_payloads("var productJSON = "):
            ...
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def find_scripts(self, prefix: str) -> List[Tag]:
        """Inline JavaScript blocks whose trimmed text starts with ``prefix``."""
        prefix_lower = prefix.lower()
        scripts = []
        for script in self.soup.find_all("script"):
            script_type = script.get("type", "text/javascript")
            if "javascript" not in script_type.lower():
                continue
            if self._script_text(script).lower().startswith(prefix_lower):
                scripts.append(script)
        return scripts

    def parse_assignment(self, script: Tag, variable: str) -> Optional[Dict[str, Any]]:
        """
        Decode the object assigned in ``<variable> {...};``.

        Args:
            script: Script tag to decode
            variable: Assignment prefix to strip, e.g. ``"var BCData = "``

        Returns:
            Decoded object, or None if the text is not a JSON object
        """
        text = self._script_text(script)
        if text.lower().startswith(variable.lower()):
            text = text[len(variable):]
        text = text.strip().rstrip(";").strip()

        try:
            data = json.loads(text, parse_float=Decimal)
        except json.JSONDecodeError as e:
            logger.debug("Could not decode script payload: %s", e)
            return None

        return data if isinstance(data, dict) else None

    def extract_purchasable(self, prefix: str, variable: str) -> Optional[bool]:
        """
        Read the page-level ``product_attributes.purchasable`` flag.

        Returns:
            The flag, or None if the script is missing or unreadable
        """
        scripts = self.find_scripts(prefix)
        if not scripts:
            return None

        data = self.parse_assignment(scripts[0], variable)
        if not data:
            return None

        attributes = data.get("product_attributes")
        if not isinstance(attributes, dict):
            return None

        purchasable = attributes.get("purchasable")
        return purchasable if isinstance(purchasable, bool) else None

    def iter_payloads(self, prefix: str) -> Iterator[Dict[str, Any]]:
        """Yield every decodable object assigned by a script starting with ``prefix``."""
        for script in self.find_scripts(prefix):
            data = self.parse_assignment(script, prefix)
            if data is None:
                logger.warning("Skipping unreadable product script block")
                continue
            yield data

    @staticmethod
    def _script_text(script: Tag) -> str:
        return script.get_text().strip()
