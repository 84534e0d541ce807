"""Unit tests for the catalog record matcher.

Covers:
- Conjunctive (all terms) matching across fields
- Order, case and separator independence
- Empty and whitespace-only queries
- Records with missing or null fields
- Option description fields in the searchable text
"""

import logging

import pytest

from storefront.search.matcher import (
    CatalogMatcher,
    matches,
    option_description_fields,
    query_terms,
    searchable_text,
)


@pytest.fixture
def hp_battery():
    return {"name": "HP 510 4-Cell Battery", "sku": "HP510-4C", "brand": "HP"}


@pytest.fixture
def dell_laptop():
    return {"name": "Dell XPS 13", "brand": "Dell"}


class TestMatches:
    """Tests for matches()."""

    def test_hp_battery_scenario(self, hp_battery):
        assert matches("hp 510", hp_battery) is True
        assert matches("hp 511", hp_battery) is False
        assert matches("", hp_battery) is True

    def test_all_terms_required(self, dell_laptop):
        assert matches("dell xps", dell_laptop) is True
        assert matches("dell hp", dell_laptop) is False

    @pytest.mark.parametrize("query", ["", "   ", "\t\n", None, " - / "])
    def test_queries_without_terms_match_everything(self, query, dell_laptop):
        assert matches(query, dell_laptop) is True
        assert matches(query, {}) is True

    def test_order_independent(self):
        record = {"name": "65W Dell Adapter", "brand": "Dell"}
        assert matches("dell 65w", record) == matches("65w dell", record) is True

    def test_case_independent(self, dell_laptop):
        assert matches("DELL", dell_laptop) == matches("dell", dell_laptop) is True

    def test_separator_independent(self):
        record = {"name": "Charger", "sku": "65-W"}
        assert matches("65w", record) is True
        assert matches("65-w", record) is True

    def test_term_may_span_fields(self):
        # Field joins collapse during normalization, so a term can cross a boundary
        record = {"name": "Latitude", "brand": "Dell"}
        assert matches("latitudedell", record) is True

    def test_terms_are_substrings(self, hp_battery):
        assert matches("batt", hp_battery) is True
        assert matches("4c", hp_battery) is True

    def test_missing_and_null_fields(self):
        record = {"name": "Logitech Mouse", "description": None}
        assert matches("logitech", record) is True
        assert matches("none", record) is False

    def test_record_without_searchable_text(self):
        record = {"collection": "Mouse", "price": 100}
        assert matches("", record) is True
        assert matches("mouse", record) is False

    def test_non_mapping_record_only_matches_empty_query(self):
        assert matches("", None) is True
        assert matches("dell", None) is False
        assert matches("dell", ["Dell"]) is False

    def test_option_descriptions_are_searchable(self):
        record = {"name": "Adapter", "productOptionDescription2": "Blue tip 4.5mm"}
        assert matches("4.5mm", record) is True

        legacy = {"name": "Adapter", "optionDescription_1": "Yellow tip"}
        assert matches("yellow", legacy) is True

    def test_other_fields_are_not_searchable(self):
        record = {"name": "Adapter", "collection": "Adapters", "ribbon": "Sale"}
        assert matches("sale", record) is False


class TestSearchableText:
    """Tests for searchable_text() and helpers."""

    def test_field_order_and_missing_fields(self):
        record = {"description": "d", "name": "n", "sku": "s"}
        assert searchable_text(record) == "n  s d"

    def test_option_descriptions_follow_in_numeric_order(self):
        record = {
            "name": "n",
            "productOptionDescription10": "ten",
            "productOptionDescription2": "two",
        }
        assert option_description_fields(record) == [
            "productOptionDescription2",
            "productOptionDescription10",
        ]
        assert searchable_text(record).endswith("two ten")

    def test_non_mapping_has_no_text(self):
        assert searchable_text("Dell") == ""

    def test_query_terms(self):
        assert query_terms("  Dell  65-W  / ") == ("dell", "65w")
        assert query_terms(None) == ()


class TestCatalogMatcher:
    """Tests for the CatalogMatcher class."""

    def test_evaluate_reports_missing_terms(self, hp_battery):
        result = CatalogMatcher().evaluate("hp 511 battery", hp_battery)
        assert result.is_match is False
        assert result.terms == ("hp", "511", "battery")
        assert result.missing_terms == ("511",)

    def test_evaluate_empty_query(self, hp_battery):
        result = CatalogMatcher().evaluate("", hp_battery)
        assert result.is_match is True
        assert result.is_match_all is True

    def test_filter_preserves_order(self, sample_records):
        matched = CatalogMatcher().filter("dell", sample_records)
        assert [r["id"] for r in matched] == [2, 3]

    def test_filter_without_terms_returns_all(self, sample_records):
        assert CatalogMatcher().filter("  ", sample_records) == sample_records

    def test_filter_agrees_with_matches(self, sample_records):
        for query in ("battery", "dell 65w", "hp 510", "mouse logitech", "zzz"):
            expected = [r for r in sample_records if matches(query, r)]
            assert CatalogMatcher().filter(query, sample_records) == expected

    def test_filter_logs_with_search_component(self, sample_records, caplog):
        with caplog.at_level(logging.DEBUG, logger="storefront.search.matcher"):
            CatalogMatcher().filter("dell", sample_records)
        record = next(r for r in caplog.records if getattr(r, "event", None) == "search.filter.completed")
        assert record.component == "search"
        assert record.matched == 2
