"""Shared test fixtures."""

import json
from decimal import Decimal

import pytest
from bs4 import BeautifulSoup

from catalog_pipeline.common.config_loader import TEMPLATE_LISTING, SiteSettings
from catalog_pipeline.common.page_fetcher import FetchFailure
from catalog_pipeline.models import Product, RawVariant

SITE_ROOT = "https://shop.example.com"
PRICING_URL = SITE_ROOT + "/remote/v1/product-attributes/{product_id}"


class FakeFetcher:
    """
    In-memory stand-in for PageFetcher.

    Serves HTML per URL and JSON per (URL, option value); anything unknown
    comes back as a FetchFailure. Every call is recorded in ``calls``.
    """

    def __init__(self, pages=None, responses=None):
        self.pages = dict(pages or {})
        self.responses = dict(responses or {})
        self.calls = []

    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass

    def fetch(self, url):
        self.calls.append(("GET", url))
        html = self.pages.get(url)
        if html is None:
            return FetchFailure(url, f"ERROR: 404 Not Found for {url}")
        return BeautifulSoup(html, "lxml")

    def post_form(self, url, data):
        self.calls.append(("POST", url, list(data)))
        option_value = data[2][1]
        response = self.responses.get((url, option_value))
        if response is None:
            return FetchFailure(url, f"Retrieved no data from {url}")
        return response

    def requested_urls(self):
        return [call[1] for call in self.calls]


def home_page(categories):
    """Home page whose main menu lists (name, href) categories in DOM order."""
    items = "".join(
        f'<li class="navPages-item has-children"><a href="{href}">{name}</a></li>'
        for name, href in categories
    )
    return f"""
    <html><body>
    <header><a href="/">Home</a></header>
    <section class="main-nav-bar">
      <ul>
        <li class="navPages-item"><a href="/about">About</a></li>
        {items}
      </ul>
    </section>
    </body></html>
    """


def category_page(products):
    """Category page listing (name, href) products in DOM order."""
    titles = "".join(
        f'<div class="card"><h5 class="product-item-title"><a href="{href}">{name}</a></h5></div>'
        for name, href in products
    )
    return f"<html><body><main>{titles}</main></body></html>"


def single_price_page(product_id, price_html, description="<p>Tasty</p>", stock_script=""):
    """Product page without size options."""
    return f"""
    <html><head>{stock_script}</head><body>
    <section class="productView" data-product-container="" data-product-id="{product_id}">
      <div class="product-price">{price_html}</div>
    </section>
    <div class="product-description">{description}</div>
    </body></html>
    """


def sized_product_page(product_id, sizes, description="<p>Tasty</p>", purchasable=None):
    """Product page with size radio buttons; sizes are (label, value) pairs."""
    stock_script = ""
    if purchasable is not None:
        payload = json.dumps({"product_attributes": {"purchasable": purchasable, "instock": purchasable}})
        stock_script = f'<script type="text/javascript">var BCData = {payload};</script>'
    options = "".join(
        f'<label class="form-option"><input type="radio" name="attribute[12]" value="{value}">'
        f'<span class="form-label-text">{label}</span></label>'
        for label, value in sizes
    )
    return f"""
    <html><head>{stock_script}</head><body>
    <section class="productView" data-product-container="" data-product-id="{product_id}">
      <div class="form-field" data-product-option-change="">{options}</div>
    </section>
    <div class="product-description">{description}</div>
    </body></html>
    """


def pricing_response(value, variant_id, purchasable=True):
    """Pricing endpoint JSON as decoded by PageFetcher.post_form()."""
    return {
        "data": {
            "price": {"without_tax": {"value": Decimal(str(value))}},
            "variantId": variant_id,
            "purchasable": purchasable,
        }
    }


def listing_page(records, prefix="var productJSON = "):
    """Listing page with one product script block per record."""
    scripts = "".join(
        f'<script type="text/javascript">{prefix}{json.dumps(record)};</script>'
        for record in records
    )
    return f"<html><head></head><body>{scripts}<div class='grid'></div></body></html>"


@pytest.fixture
def settings():
    """Menu-template settings pointing at the test site."""
    return SiteSettings(site_root=SITE_ROOT)


@pytest.fixture
def listing_settings():
    """Listing-template settings pointing at the test site."""
    return SiteSettings(site_root=SITE_ROOT, template=TEMPLATE_LISTING)


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def html_builders():
    """Page builders for menu and listing templates."""
    class Builders:
        home = staticmethod(home_page)
        category = staticmethod(category_page)
        single_price = staticmethod(single_price_page)
        sized = staticmethod(sized_product_page)
        pricing = staticmethod(pricing_response)
        listing = staticmethod(listing_page)
    return Builders


@pytest.fixture
def raw_variant():
    """A raw variant from a sized product."""
    return RawVariant(
        source_product_id=101,
        name="Almonds",
        url="/almonds/",
        category="Nuts",
        description="<p>Raw almonds</p>",
        variant_id=501,
        size_label="5 lb",
        source_price=Decimal("7.50"),
    )


@pytest.fixture
def sample_products():
    """Canonical products spanning two categories."""
    return [
        Product(
            name="Walnuts", category="Nuts", source_product_id=202,
            source_price=Decimal("4.50"), display_price=Decimal("6.000"),
            in_stock=False, size="", source_variant_id=-1,
            description="<p>It's crunchy</p>",
        ),
        Product(
            name="Almonds, raw", category="Nuts", source_product_id=101,
            source_price=Decimal("7.50"), display_price=Decimal("10.000"),
            in_stock=True, size="5 lb", source_variant_id=501,
            description="<p>Raw almonds</p>",
        ),
        Product(
            name="Dates", category="Dried Fruit", source_product_id=303,
            source_price=Decimal("1.00"), display_price=Decimal("1.333"),
            in_stock=True, size="1 lb", source_variant_id=701,
        ),
    ]
