"""Tests for catalog_pipeline/extraction/menu_ajax_extractor.py"""

from decimal import Decimal

import pytest

from catalog_pipeline.extraction import ExtractionError, MenuAjaxExtractor, get_extractor_for_template
from catalog_pipeline.extraction.embedded_json_extractor import EmbeddedJsonExtractor
from catalog_pipeline.extraction.menu_ajax_extractor import parse_price
from catalog_pipeline.models import ProductCandidate

ROOT = "https://shop.example.com"
PRICING = ROOT + "/remote/v1/product-attributes/101"


@pytest.fixture
def candidate():
    return ProductCandidate(name="Almonds", url="/almonds/", category="Nuts")


@pytest.fixture
def extractor(settings, fake_fetcher):
    return MenuAjaxExtractor(fake_fetcher, settings)


class TestProductPage:
    def test_unreachable_page_raises(self, extractor, candidate):
        with pytest.raises(ExtractionError, match="404"):
            extractor.extract(candidate)

    def test_missing_main_section_raises(self, extractor, fake_fetcher, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = "<html><body><section>Nothing</section></body></html>"
        with pytest.raises(ExtractionError, match="Main product section"):
            extractor.extract(candidate)

    @pytest.mark.parametrize("product_id", ["", "abc"])
    def test_bad_product_id_raises(self, extractor, fake_fetcher, html_builders, candidate, product_id):
        fake_fetcher.pages[ROOT + "/almonds/"] = html_builders.single_price(
            product_id, '<span class="price-value">$5.00</span>'
        )
        with pytest.raises(ExtractionError, match="product ID"):
            extractor.extract(candidate)

    def test_description_links_removed(self, extractor, fake_fetcher, html_builders, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = html_builders.single_price(
            101, '<span class="price-value">$5.00</span>',
            description='<p>From <a href="/farm">our <b>farm</b></a>.</p>',
        )
        variants = extractor.extract(candidate)
        assert variants[0].description == "<p>From our <b>farm</b>.</p>"

    def test_missing_description_is_empty(self, extractor, fake_fetcher, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = (
            '<html><body><section data-product-container="" data-product-id="101">'
            '<div class="product-price"><span class="price-value">$5.00</span></div>'
            "</section></body></html>"
        )
        assert extractor.extract(candidate)[0].description == ""


class TestSizeOptions:
    def page(self, html_builders, purchasable=None):
        return html_builders.sized(101, [("5 lb", "34"), ("25 lb", "35")], purchasable=purchasable)

    def test_one_variant_per_option(self, extractor, fake_fetcher, html_builders, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = self.page(html_builders)
        fake_fetcher.responses[(PRICING, "34")] = html_builders.pricing("7.50", 501)
        fake_fetcher.responses[(PRICING, "35")] = html_builders.pricing("33.00", 502)

        variants = extractor.extract(candidate)

        assert [(v.variant_id, v.size_label, v.source_price) for v in variants] == [
            (501, "5 lb", Decimal("7.50")),
            (502, "25 lb", Decimal("33.00")),
        ]
        assert all(v.source_product_id == 101 and v.category == "Nuts" for v in variants)
        assert all(not v.price_in_minor_units for v in variants)

    def test_pricing_request_form(self, extractor, fake_fetcher, html_builders, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = self.page(html_builders)

        extractor.extract(candidate)

        posts = [call for call in fake_fetcher.calls if call[0] == "POST"]
        assert posts[0] == ("POST", PRICING, [
            ("action", "add"), ("product_id", "101"), ("attribute[12]", "34"), ("qty[]", "1"),
        ])
        assert len(posts) == 2

    def test_failed_option_is_skipped(self, extractor, fake_fetcher, html_builders, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = self.page(html_builders)
        fake_fetcher.responses[(PRICING, "35")] = html_builders.pricing("33.00", 502)

        variants = extractor.extract(candidate)

        assert [v.variant_id for v in variants] == [502]

    def test_unexpected_pricing_json_is_skipped(self, extractor, fake_fetcher, html_builders, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = self.page(html_builders)
        fake_fetcher.responses[(PRICING, "34")] = {"data": {"variantId": 501}}
        fake_fetcher.responses[(PRICING, "35")] = html_builders.pricing("33.00", 502)

        assert [v.variant_id for v in extractor.extract(candidate)] == [502]

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_price_is_skipped(self, extractor, fake_fetcher, html_builders, candidate, value):
        fake_fetcher.pages[ROOT + "/almonds/"] = self.page(html_builders)
        fake_fetcher.responses[(PRICING, "34")] = html_builders.pricing(value, 501)
        fake_fetcher.responses[(PRICING, "35")] = html_builders.pricing("33.00", 502)

        variants = extractor.extract(candidate)

        assert [(v.variant_id, v.source_price) for v in variants] == [(502, Decimal("33.00"))]

    def test_page_flag_and_purchasable_carried(self, extractor, fake_fetcher, html_builders, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = self.page(html_builders, purchasable=True)
        fake_fetcher.responses[(PRICING, "34")] = html_builders.pricing("7.50", 501, purchasable=False)

        variant = extractor.extract(candidate)[0]

        assert variant.authoritative_in_stock is True
        assert variant.purchasable is False

    def test_no_page_flag(self, extractor, fake_fetcher, html_builders, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = self.page(html_builders)
        fake_fetcher.responses[(PRICING, "34")] = html_builders.pricing("7.50", 501, purchasable=True)

        variant = extractor.extract(candidate)[0]

        assert variant.authoritative_in_stock is None
        assert variant.purchasable is True


class TestSinglePrice:
    def extract(self, extractor, fake_fetcher, html_builders, candidate, price_html):
        fake_fetcher.pages[ROOT + "/almonds/"] = html_builders.single_price(101, price_html)
        return extractor.extract(candidate)

    def test_price_parsed(self, extractor, fake_fetcher, html_builders, candidate):
        variants = self.extract(extractor, fake_fetcher, html_builders, candidate,
                                '<span class="price-value">$12.40</span>')
        assert len(variants) == 1
        variant = variants[0]
        assert variant.source_price == Decimal("12.40")
        assert variant.variant_id == -1
        assert variant.size_label == ""
        assert variant.authoritative_in_stock is None
        assert variant.purchasable is None

    def test_out_of_stock_notice_forces_zero(self, extractor, fake_fetcher, html_builders, candidate):
        variant = self.extract(extractor, fake_fetcher, html_builders, candidate,
                               '<p>OUT OF STOCK - back soon</p><span class="price-value">$12.40</span>')[0]
        assert variant.source_price == Decimal("0")

    def test_unparseable_price_is_zero(self, extractor, fake_fetcher, html_builders, candidate):
        variant = self.extract(extractor, fake_fetcher, html_builders, candidate,
                               '<span class="price-value">Call us</span>')[0]
        assert variant.source_price == Decimal("0")

    def test_missing_price_span_raises(self, extractor, fake_fetcher, html_builders, candidate):
        with pytest.raises(ExtractionError, match="price-value"):
            self.extract(extractor, fake_fetcher, html_builders, candidate, "<em>soon</em>")

    def test_missing_price_block_raises(self, extractor, fake_fetcher, candidate):
        fake_fetcher.pages[ROOT + "/almonds/"] = (
            '<html><body><section data-product-container="" data-product-id="101"></section></body></html>'
        )
        with pytest.raises(ExtractionError, match="product-price"):
            extractor.extract(candidate)

    def test_page_flag_ignored_without_options(self, extractor, fake_fetcher, html_builders, candidate):
        stock_script = ('<script type="text/javascript">'
                        'var BCData = {"product_attributes":{"purchasable":true}};</script>')
        fake_fetcher.pages[ROOT + "/almonds/"] = html_builders.single_price(
            101, "<p>Out of stock</p>", stock_script=stock_script
        )
        variant = extractor.extract(candidate)[0]
        assert variant.authoritative_in_stock is None


class TestParsePrice:
    @pytest.mark.parametrize("text,expected", [
        ("$12.40", Decimal("12.40")),
        ("  $1,234.50 ", Decimal("1234.50")),
        ("7", Decimal("7")),
        ("", Decimal("0")),
        ("N/A", Decimal("0")),
        ("NaN", Decimal("0")),
    ])
    def test_parse_price(self, text, expected):
        assert parse_price(text) == expected


class TestRegistry:
    def test_menu(self):
        assert get_extractor_for_template("menu") is MenuAjaxExtractor

    def test_listing(self):
        assert get_extractor_for_template("LISTING") is EmbeddedJsonExtractor

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unsupported template"):
            get_extractor_for_template("spa")
