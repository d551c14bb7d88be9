"""
Page Fetcher

Retrieves storefront pages as parsed documents and posts form data to
the site's pricing endpoint.

The target site serves a certificate that does not validate and only
speaks modern TLS, so the session skips certificate checks and pins
TLS 1.2 as the minimum version. Nothing here raises past the fetcher:
network, TLS and parse problems come back as a FetchFailure and the
caller decides what to log.
"""

from __future__ import annotations

import json
import ssl
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Union

import requests
import urllib3
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.ssl_ import create_urllib3_context

from .constants import USER_AGENT

urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


@dataclass(frozen=True)
class FetchFailure:
    """Failed fetch with a human-readable reason."""
    url: str
    message: str

    def __str__(self) -> str:
        return self.message


class TrustAllTLSAdapter(HTTPAdapter):
    """HTTPS adapter that accepts any certificate and requires TLS 1.2+."""

    def _context(self) -> ssl.SSLContext:
        context = create_urllib3_context()
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    def init_poolmanager(self, *args, **kwargs):
        kwargs["ssl_context"] = self._context()
        return super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args, **kwargs):
        kwargs["ssl_context"] = self._context()
        return super().proxy_manager_for(*args, **kwargs)


class PageFetcher:
    """
    Blocking, single-session page fetcher.

    Usage:
        with PageFetcher() as fetcher:
            page = fetcher.fetch("https://example.com/")
            if isinstance(page, FetchFailure):
                logger.warning(page.message)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = False
        self.session.mount("https://", TrustAllTLSAdapter())
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        })

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()

    def fetch(self, url: str) -> Union[BeautifulSoup, FetchFailure]:
        """
        GET a page and parse it.

        Returns:
            Parsed document, or FetchFailure when the request fails or the
            page has no parseable content
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            html = response.text
        except requests.RequestException as e:
            return FetchFailure(url, f"ERROR: {e}")

        if not html or not html.strip():
            return FetchFailure(url, f"Failed to retrieve anything from {url}.")

        try:
            soup = BeautifulSoup(html, "lxml")
        except (ValueError, TypeError) as e:
            return FetchFailure(url, f"ERROR: could not parse {url}: {e}")

        if soup.find() is None:
            return FetchFailure(url, f"Failed to retrieve anything from {url}.")

        return soup

    def post_form(
        self,
        url: str,
        data: List[Tuple[str, str]],
    ) -> Union[Dict[str, Any], FetchFailure]:
        """
        POST form-encoded data and decode the JSON response.

        Floats in the response are decoded as Decimal so prices keep
        their exact value.

        Returns:
            Decoded JSON object, or FetchFailure on transport errors,
            an empty body, or a body that is not a JSON object
        """
        try:
            response = self.session.post(url, data=data, timeout=self.timeout)
            response.raise_for_status()
            body = response.text
        except requests.RequestException as e:
            return FetchFailure(url, f"ERROR: {e}")

        if not body or not body.strip():
            return FetchFailure(url, f"Retrieved no data from {url}")

        try:
            payload = json.loads(body, parse_float=Decimal)
        except json.JSONDecodeError as e:
            return FetchFailure(url, f"ERROR: malformed JSON from {url}: {e}")

        if not isinstance(payload, dict):
            return FetchFailure(url, f"ERROR: unexpected JSON from {url}")

        return payload
