"""Tests for catalog_pipeline/export/csv_exporter.py"""

import csv
from decimal import Decimal

import pytest

from catalog_pipeline.export import PRICE_LIST_FIELDNAMES, PriceListCSVExporter
from catalog_pipeline.export.csv_exporter import format_currency


@pytest.fixture
def exporter(tmp_path):
    return PriceListCSVExporter(tmp_path / "price_list.csv")


def read_rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestFormatCurrency:
    @pytest.mark.parametrize("value,expected", [
        ("7.5", "$7.50"),
        ("1.333", "$1.33"),
        ("1234.5", "$1,234.50"),
        ("0", "$0.00"),
        ("-2", "-$2.00"),
    ])
    def test_format(self, value, expected):
        assert format_currency(Decimal(value)) == expected


class TestProductToRow:
    def test_sized_product(self, exporter, sample_products):
        assert exporter.product_to_row(sample_products[1]) == {
            "Source ID": "101",
            "Variant ID": "501",
            "Name": "Almonds, raw 5 lb",
            "Source Price": "$7.50",
            "Price": "$10.00",
            "Stock": "In stock",
        }

    def test_out_of_stock(self, exporter, sample_products):
        row = exporter.product_to_row(sample_products[0])
        assert row["Name"] == "Walnuts"
        assert row["Variant ID"] == "-1"
        assert row["Stock"] == "OUT OF STOCK"


class TestExport:
    def test_rows_sorted_by_category_then_name(self, exporter, sample_products):
        assert exporter.export(sample_products) == 3

        rows = read_rows(exporter.output_path)
        assert [r["Name"] for r in rows] == ["Dates 1 lb", "Almonds, raw 5 lb", "Walnuts"]

    def test_header(self, exporter, sample_products):
        exporter.export(sample_products)
        with open(exporter.output_path, encoding="utf-8") as f:
            assert f.readline().strip() == ",".join(PRICE_LIST_FIELDNAMES)

    def test_commas_in_names_are_quoted(self, exporter, sample_products):
        exporter.export(sample_products)
        text = exporter.output_path.read_text(encoding="utf-8")
        assert '"Almonds, raw 5 lb"' in text

    def test_empty_list_writes_header_only(self, exporter):
        assert exporter.export([]) == 0
        assert read_rows(exporter.output_path) == []

    def test_creates_parent_directory(self, tmp_path, sample_products):
        exporter = PriceListCSVExporter(tmp_path / "2024_01_31" / "price_list.csv")
        exporter.export(sample_products)
        assert exporter.output_path.exists()
