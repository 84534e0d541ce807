"""Unit tests for catalog pages and admin inventory operations."""

import pytest

from storefront.catalog import AdminService, CatalogService, ProductDetail, inventory_status
from storefront.config.models import CatalogConfig
from storefront.persistence.exceptions import RecordNotFoundError
from storefront.stores import InMemoryCatalogStore


class TestCatalogService:
    """Tests for the shopper-facing queries."""

    def test_categories_default_list(self, memory_store):
        titles = [c.title for c in CatalogService(memory_store).categories()]
        assert titles[:3] == ["Batteries", "Adapters", "Docking Station"]
        assert len(titles) == 12

    def test_best_sellers_limit(self, memory_store):
        assert len(CatalogService(memory_store).best_sellers()) == 4
        config = CatalogConfig(best_sellers_limit=2)
        assert [r["id"] for r in CatalogService(memory_store, config).best_sellers()] == [1, 2]

    def test_products_by_type(self, memory_store):
        memory_store.insert_records([{"name": "Mystery", "type": "refurbished"}])
        groups = CatalogService(memory_store).products_by_type()
        assert [r["id"] for r in groups["original"]] == [2, 4]
        assert [r["id"] for r in groups["compatible"]] == [1, 3]

    def test_product_detail(self, memory_store):
        detail = CatalogService(memory_store).product_detail(1)
        assert detail.name == "HP 510 4-Cell Battery"
        assert detail.inventory_status == "High/In Stock"
        assert detail.visible_label == "Yes"

    def test_product_detail_missing(self, memory_store):
        with pytest.raises(RecordNotFoundError):
            CatalogService(memory_store).product_detail(404)


class TestProductDetail:
    """Tests for ProductDetail display helpers."""

    @pytest.mark.parametrize("value,expected", [(99999, "High/In Stock"), (3, "3"), (0, "N/A"), (None, "N/A"), ("", "N/A")])
    def test_inventory_status(self, value, expected):
        assert inventory_status(value) == expected

    def test_options_skip_empty_slots(self):
        detail = ProductDetail.from_record(
            {
                "productOptionName1": "Capacity",
                "productOptionType1": "DROP_DOWN",
                "productOptionDescription1": "2200mAh",
                "productOptionName2": "",
                "productOptionDescription3": "Blue tip",
            }
        )
        assert [(o.name, o.description) for o in detail.options] == [
            ("Capacity", "2200mAh"),
            (None, "Blue tip"),
        ]

    def test_additional_info_defaults(self):
        detail = ProductDetail.from_record(
            {"additionalInfoTitle1": "Warranty", "additionalInfoDescription2": "Ships in 2 days"}
        )
        assert [(s.title, s.description) for s in detail.additional_info] == [
            ("Warranty", "No description."),
            ("Section 2", "Ships in 2 days"),
        ]

    def test_visible_label_and_specifications(self):
        detail = ProductDetail.from_record({"visible": False, "brand": "HP", "inventory": None})
        assert detail.visible_label == "No"
        specs = detail.specifications()
        assert specs["Brand"] == "HP"
        assert specs["Inventory Status"] == "N/A"


class TestAdminService:
    """Tests for the admin dashboard operations."""

    def test_inventory_pages_results(self, sample_records):
        store = InMemoryCatalogStore(sample_records)
        page = AdminService(store, page_size=2).inventory()
        assert page.shown == 2
        assert page.summary == "Showing 2 of 4 products"

    def test_inventory_uses_core_matcher(self, memory_store):
        page = AdminService(memory_store).inventory("65w dell")
        assert [r["id"] for r in page.records] == [3]

    def test_update_product_coerces_values(self, memory_store):
        record = AdminService(memory_store).update_product(2, {"price": "2100", "inventory": "instock"})
        assert record["price"] == 2100.0
        assert record["inventory"] == 99999

    def test_update_product_rejects_unknown_field(self, memory_store):
        with pytest.raises(ValueError):
            AdminService(memory_store).update_product(2, {"id": "5"})

    def test_delete_product(self, memory_store):
        AdminService(memory_store).delete_product(3)
        with pytest.raises(RecordNotFoundError):
            memory_store.get_record(3)

    def test_import_rows(self, memory_store):
        result = AdminService(memory_store).import_rows([{"name": "Webcam C270", "collection": "Webcam"}])
        assert result.inserted == 1
        assert AdminService(memory_store).inventory("c270").total == 1
