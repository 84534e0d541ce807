"""End-to-end: CSV import into SQLite, then search and admin edits."""

from pathlib import Path

import pytest

from storefront.catalog import AdminService, CatalogService
from storefront.persistence import RecordNotFoundError
from storefront.search.service import CatalogSearchService
from storefront.stores import SqlCatalogStore

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def store(database):
    return SqlCatalogStore()


@pytest.fixture
def admin(store):
    result = AdminService(store).import_file(FIXTURES_DIR / "products.csv")
    assert result.succeeded
    assert result.inserted == 3
    return AdminService(store)


def names(records):
    return [record["name"] for record in records]


class TestImportedCatalog:
    def test_category_includes_every_stored_spelling(self, store, admin):
        search = CatalogSearchService(store)
        assert names(search.search(category="Batteries").records) == ["HP 510 4-Cell Battery"]
        assert names(search.search(category="Docking Station").records) == ["Lenovo ThinkPad Dock"]

    def test_text_and_category_together(self, store, admin):
        search = CatalogSearchService(store)
        result = search.search(query="dell 65w", category="Adapters")
        assert names(result.records) == ["Dell 65W Adapter"]
        assert search.search(query="dell", category="Batteries").records == []

    def test_option_descriptions_are_searched(self, store, admin):
        result = CatalogSearchService(store).search(query="2600 mAh")
        assert names(result.records) == ["HP 510 4-Cell Battery"]

    def test_imported_values_are_coerced(self, store, admin):
        adapter = CatalogService(store).product_detail(2)
        assert adapter.record["price"] == 1100.5
        assert adapter.record["inventory"] == 12
        assert adapter.record["visible"] is True
        assert adapter.record["customTextMandatory1"] is True

        battery = CatalogService(store).product_detail(1)
        assert battery.inventory_status == "High/In Stock"

    def test_update_then_search(self, store, admin):
        admin.update_product(3, {"collection": "Dock", "name": "Lenovo USB-C Dock"})
        result = CatalogSearchService(store).search(query="usb c", category="Docking Station")
        assert names(result.records) == ["Lenovo USB-C Dock"]

    def test_delete(self, store, admin):
        admin.delete_product(2)
        assert admin.inventory().total == 2
        with pytest.raises(RecordNotFoundError):
            store.get_record(2)

    def test_grouped_by_type(self, store, admin):
        groups = CatalogService(store).products_by_type()
        assert names(groups["compatible"]) == ["HP 510 4-Cell Battery", "Dell 65W Adapter"]
        assert names(groups["original"]) == ["Lenovo ThinkPad Dock"]
