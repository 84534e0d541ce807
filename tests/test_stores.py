"""Unit tests for catalog store implementations."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests

from storefront.config.environment import EnvironmentConfig
from storefront.config.models import AppConfig
from storefront.persistence import RecordNotFoundError, close_database
from storefront.search.service import CatalogSearchService
from storefront.stores import (
    InMemoryCatalogStore,
    RestCatalogStore,
    SqlCatalogStore,
    StoreConfigurationError,
    StoreHTTPError,
    StoreResponseError,
    StoreTimeoutError,
    get_store,
    load_sample_records,
)
from storefront.stores.rest import in_filter


class TestInMemoryCatalogStore:
    """Tests for the list-backed store."""

    def test_fetch_all_in_insert_order(self, memory_store):
        assert [r["id"] for r in memory_store.fetch_records()] == [1, 2, 3, 4]

    def test_fetch_by_exact_collection(self, memory_store):
        records = memory_store.fetch_records(categories={"Batteries", "Laptop Battery"})
        assert [r["id"] for r in records] == [1, 2]

    def test_collection_filter_is_exact(self, memory_store):
        assert memory_store.fetch_records(categories={"batteries"}) == []

    def test_empty_category_set_matches_nothing(self, memory_store):
        assert memory_store.fetch_records(categories=set()) == []

    def test_limit(self, memory_store):
        assert len(memory_store.fetch_records(limit=2)) == 2

    def test_returned_records_are_copies(self, memory_store):
        memory_store.fetch_records()[0]["name"] = "changed"
        assert memory_store.get_record(1)["name"] == "HP 510 4-Cell Battery"

    def test_insert_assigns_ids_after_existing(self, memory_store):
        assert memory_store.insert_records([{"name": "Cable"}, {"name": "Bag"}]) == 2
        assert [r["id"] for r in memory_store.fetch_records()][-2:] == [5, 6]

    def test_update(self, memory_store):
        updated = memory_store.update_record(2, {"price": 2000.0, "id": 99})
        assert updated["price"] == 2000.0
        assert updated["id"] == 2

    def test_delete(self, memory_store):
        memory_store.delete_record(4)
        assert len(memory_store) == 3

    @pytest.mark.parametrize("method,args", [("get_record", ()), ("delete_record", ()), ("update_record", ({},))])
    def test_missing_id_raises(self, memory_store, method, args):
        with pytest.raises(RecordNotFoundError):
            getattr(memory_store, method)(42, *args)

    def test_sample_data(self):
        store = InMemoryCatalogStore.with_sample_data()
        names = [r["name"] for r in store.fetch_records()]
        assert "HP 510 4-Cell Battery" in names
        assert len(names) == len(load_sample_records())


class TestSqlCatalogStore:
    """Tests for the SQLAlchemy-backed store."""

    @pytest.fixture
    def sql_store(self, sqlite_url, sample_records):
        store = SqlCatalogStore(sqlite_url)
        store.insert_records(sample_records)
        yield store
        close_database()

    def test_fetch_by_collection(self, sql_store):
        records = sql_store.fetch_records(categories={"Batteries", "Laptop Battery"})
        assert [r["id"] for r in records] == [1, 2]
        assert records[0]["sku"] == "HP510-4C"

    def test_fetch_with_limit_orders_by_id(self, sql_store):
        assert [r["id"] for r in sql_store.fetch_records(limit=3)] == [1, 2, 3]

    def test_empty_category_set_matches_nothing(self, sql_store):
        assert sql_store.fetch_records(categories=frozenset()) == []

    def test_option_description_round_trips(self, sql_store):
        assert sql_store.get_record(3)["productOptionDescription1"] == "Blue tip, 4.5mm"

    def test_older_option_description_keys_are_kept(self, sql_store):
        sql_store.insert_records(
            [{"name": "Adapter", "optionDescription_1": "Yellow tip", "optionDescription_8": "Spare fuse"}]
        )
        record = sql_store.get_record(5)
        assert record["productOptionDescription1"] == "Yellow tip"
        assert record["productOptionDescription8"] == "Spare fuse"

    @pytest.mark.parametrize("store_type", ["memory", "sql"])
    def test_older_option_descriptions_are_searchable(self, database, store_type):
        record = {"name": "Adapter", "optionDescription_1": "Yellow tip"}
        if store_type == "sql":
            store = SqlCatalogStore()
        else:
            store = InMemoryCatalogStore()
        store.insert_records([record])

        result = CatalogSearchService(store).search("yellow")

        assert result.total == 1

    def test_update_and_get(self, sql_store):
        sql_store.update_record(2, {"inventory": 7})
        assert sql_store.get_record(2)["inventory"] == 7

    def test_delete(self, sql_store):
        sql_store.delete_record(1)
        assert sql_store.count() == 3
        with pytest.raises(RecordNotFoundError):
            sql_store.get_record(1)

    def test_missing_id_raises(self, sql_store):
        with pytest.raises(RecordNotFoundError):
            sql_store.update_record(99, {"price": 1.0})
        with pytest.raises(RecordNotFoundError):
            sql_store.delete_record(99)

    def test_requires_initialized_database(self):
        close_database()
        with pytest.raises(StoreConfigurationError):
            SqlCatalogStore()


def _response(status_code=200, payload=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload
    return response


class TestRestCatalogStore:
    """Tests for the hosted backend client (requests mocked)."""

    @pytest.fixture
    def store(self):
        return RestCatalogStore("https://catalog.example.com/", "anon-key", timeout=10)

    def test_headers(self, store):
        headers = store._session.headers
        assert headers["apikey"] == "anon-key"
        assert headers["Authorization"] == "Bearer anon-key"
        assert store.base_url == "https://catalog.example.com/rest/v1/products"

    def test_fetch_records_builds_in_filter(self, store):
        with patch.object(store._session, "request", return_value=_response(payload=[{"id": 1}])) as req:
            records = store.fetch_records(categories={"Battery", "Batteries"}, limit=5)

        assert records == [{"id": 1}]
        kwargs = req.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["params"]["collection"] == 'in.("Batteries","Battery")'
        assert kwargs["params"]["limit"] == "5"
        assert kwargs["timeout"] == 10

    def test_fetch_without_categories_has_no_filter(self, store):
        with patch.object(store._session, "request", return_value=_response(payload=[])) as req:
            store.fetch_records()
        assert "collection" not in req.call_args.kwargs["params"]

    def test_empty_categories_skip_request(self, store):
        with patch.object(store._session, "request") as req:
            assert store.fetch_records(categories=[]) == []
        req.assert_not_called()

    def test_in_filter_quotes_values(self):
        assert in_filter({'Say "hi"'}) == 'in.("Say \\"hi\\"")'

    def test_get_record_not_found(self, store):
        with patch.object(store._session, "request", return_value=_response(payload=[])):
            with pytest.raises(RecordNotFoundError):
                store.get_record(5)

    def test_insert_records_posts_with_representation(self, store):
        with patch.object(store._session, "request", return_value=_response(201, [{"id": 1}, {"id": 2}])) as req:
            assert store.insert_records([{"name": "a"}, {"name": "b"}]) == 2
        kwargs = req.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["headers"]["Prefer"] == "return=representation"
        assert kwargs["json"] == [{"name": "a"}, {"name": "b"}]

    def test_update_record_patches_by_id(self, store):
        with patch.object(store._session, "request", return_value=_response(payload=[{"id": 3, "price": 5}])) as req:
            assert store.update_record(3, {"price": 5, "id": 9}) == {"id": 3, "price": 5}
        kwargs = req.call_args.kwargs
        assert kwargs["method"] == "PATCH"
        assert kwargs["params"] == {"id": "eq.3"}
        assert kwargs["json"] == {"price": 5}

    def test_delete_missing_raises(self, store):
        with patch.object(store._session, "request", return_value=_response(payload=[])):
            with pytest.raises(RecordNotFoundError):
                store.delete_record(3)

    def test_http_error(self, store):
        with patch.object(store._session, "request", return_value=_response(401, reason="Unauthorized")):
            with pytest.raises(StoreHTTPError) as exc_info:
                store.fetch_records()
        assert exc_info.value.status_code == 401
        assert exc_info.value.is_retryable is False

    def test_server_error_is_retryable(self, store):
        with patch.object(store._session, "request", return_value=_response(503, reason="Unavailable")):
            with pytest.raises(StoreHTTPError) as exc_info:
                store.fetch_records()
        assert exc_info.value.is_retryable is True

    def test_timeout(self, store):
        with patch.object(store._session, "request", side_effect=requests.exceptions.Timeout()):
            with pytest.raises(StoreTimeoutError):
                store.fetch_records()

    def test_connection_error(self, store):
        with patch.object(store._session, "request", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(StoreHTTPError) as exc_info:
                store.fetch_records()
        assert exc_info.value.status_code == 0

    def test_invalid_json(self, store):
        response = _response()
        response.json.side_effect = ValueError("bad json")
        with patch.object(store._session, "request", return_value=response):
            with pytest.raises(StoreResponseError):
                store.fetch_records()

    def test_unexpected_payload_shape(self, store):
        with patch.object(store._session, "request", return_value=_response(payload={"message": "x"})):
            with pytest.raises(StoreResponseError):
                store.fetch_records()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"api_url": "catalog.example.com", "api_key": "k"},
            {"api_url": "https://catalog.example.com", "api_key": ""},
            {"api_url": "https://catalog.example.com", "api_key": "k", "timeout": 1},
        ],
    )
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(StoreConfigurationError):
            RestCatalogStore(**kwargs)


class TestGetStore:
    """Tests for the store factory."""

    def test_memory_backend(self):
        store = get_store(AppConfig.model_validate({"store": {"backend": "memory"}}), EnvironmentConfig())
        assert isinstance(store, InMemoryCatalogStore)
        assert store.fetch_records() == []

    def test_memory_backend_with_sample_data(self):
        config = AppConfig.model_validate({"store": {"backend": "memory", "seed_sample_data": True}})
        store = get_store(config, EnvironmentConfig())
        assert len(store.fetch_records()) == len(load_sample_records())

    def test_sql_backend_with_default_config(self, sqlite_url):
        store = get_store(AppConfig(), EnvironmentConfig(database_url=sqlite_url))
        try:
            assert isinstance(store, SqlCatalogStore)
        finally:
            close_database()

    def test_sql_seeding_only_fills_empty_store(self, sqlite_url):
        config = AppConfig.model_validate({"store": {"backend": "sql", "seed_sample_data": True}})
        env = EnvironmentConfig(database_url=sqlite_url)
        try:
            first = get_store(config, env)
            count = first.count()
            second = get_store(config, env)
            assert second.count() == count == len(load_sample_records())
        finally:
            close_database()

    def test_rest_backend(self):
        config = AppConfig.model_validate({"store": {"backend": "rest", "table": "items"}})
        env = EnvironmentConfig(catalog_api_url="https://catalog.example.com", catalog_api_key="k")
        store = get_store(config, env)
        assert isinstance(store, RestCatalogStore)
        assert store.base_url.endswith("/rest/v1/items")

    def test_rest_backend_without_credentials(self):
        config = AppConfig.model_validate({"store": {"backend": "rest"}})
        with pytest.raises(StoreConfigurationError):
            get_store(config, EnvironmentConfig())
