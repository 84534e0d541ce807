"""CatalogStore for a hosted PostgREST-style backend.

The hosted backend exposes the products table at ``{api_url}/rest/v1/{table}``
and filters with query operators such as ``collection=in.("A","B")``.
"""

import logging
from typing import Any, Collection, Dict, Iterable, List, Optional

import requests

from storefront.logging import get_logger
from storefront.persistence.exceptions import RecordNotFoundError
from storefront.search.models import CatalogRecord

from .base import CatalogStore
from .exceptions import (
    StoreConfigurationError,
    StoreHTTPError,
    StoreResponseError,
    StoreTimeoutError,
)

logger = get_logger(__name__, component="store")


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def in_filter(values: Collection[str]) -> str:
    """Build a PostgREST ``in`` operator, e.g. ``in.("Adapters","Adapter")``."""
    return "in.(" + ",".join(_quote(value) for value in sorted(values)) + ")"


class RestCatalogStore(CatalogStore):
    """Talks to the hosted catalog with a shared requests.Session.

    Attributes:
        base_url: Table endpoint (``{api_url}/rest/v1/{table}``)
        timeout: HTTP request timeout in seconds
    """

    name = "rest"

    def __init__(
        self,
        api_url: str,
        api_key: str,
        table: str = "products",
        timeout: int = 30,
        user_agent: str = "StorefrontCatalog/1.0",
    ) -> None:
        if not api_url or not api_url.startswith(("http://", "https://")):
            raise StoreConfigurationError(f"Catalog API URL must be http(s), got: {api_url!r}")
        if not api_key:
            raise StoreConfigurationError("Catalog API key cannot be empty")
        if not 5 <= timeout <= 300:
            raise StoreConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )

        self.base_url = f"{api_url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout

        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent,
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    def fetch_records(
        self,
        categories: Optional[Collection[str]] = None,
        limit: Optional[int] = None,
    ) -> List[CatalogRecord]:
        if categories is not None and not categories:
            return []

        params: Dict[str, str] = {"select": "*", "order": "id.asc"}
        if categories is not None:
            params["collection"] = in_filter(categories)
        if limit is not None:
            params["limit"] = str(limit)

        return self._expect_rows(self._make_request(self.base_url, params=params))

    def get_record(self, record_id: int) -> CatalogRecord:
        rows = self._expect_rows(
            self._make_request(self.base_url, params={"select": "*", "id": f"eq.{record_id}"})
        )
        if not rows:
            raise RecordNotFoundError(f"Product {record_id} not found", record_id=record_id)
        return rows[0]

    def insert_records(self, records: Iterable[Dict[str, Any]]) -> int:
        payload = [dict(record) for record in records]
        if not payload:
            return 0
        rows = self._expect_rows(
            self._make_request(
                self.base_url,
                method="POST",
                headers={"Prefer": "return=representation"},
                json_data=payload,
            )
        )
        logger.info(
            "Inserted products",
            extra={"event": "store.records.inserted", "count": len(rows), "store": self.name},
        )
        return len(rows)

    def update_record(self, record_id: int, changes: Dict[str, Any]) -> CatalogRecord:
        body = {key: value for key, value in changes.items() if key != "id"}
        rows = self._expect_rows(
            self._make_request(
                self.base_url,
                method="PATCH",
                headers={"Prefer": "return=representation"},
                params={"id": f"eq.{record_id}"},
                json_data=body,
            )
        )
        if not rows:
            raise RecordNotFoundError(f"Product {record_id} not found", record_id=record_id)
        return rows[0]

    def delete_record(self, record_id: int) -> None:
        rows = self._expect_rows(
            self._make_request(
                self.base_url,
                method="DELETE",
                headers={"Prefer": "return=representation"},
                params={"id": f"eq.{record_id}"},
            )
        )
        if not rows:
            raise RecordNotFoundError(f"Product {record_id} not found", record_id=record_id)

    def close(self) -> None:
        self._session.close()

    def _expect_rows(self, data: Any) -> List[CatalogRecord]:
        if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
            raise StoreResponseError(
                f"Expected a JSON array of objects from {self.base_url}, got {type(data).__name__}"
            )
        return data

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        json_data: Any = None,
    ) -> Any:
        """Make an HTTP request and return the decoded JSON body.

        Raises:
            StoreHTTPError: On 4xx/5xx status or connection failure
            StoreTimeoutError: On request timeout
            StoreResponseError: On a body that is not valid JSON
        """
        try:
            logger.debug(
                f"HTTP {method} request to {url}",
                extra={
                    "event": "store.request.started",
                    "method": method,
                    "url": url,
                    "timeout": self.timeout,
                },
            )

            response = self._session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )

            if response.status_code >= 400:
                is_retryable = response.status_code >= 500
                event_name = "store.request.retryable_error" if is_retryable else "store.request.error"
                log_level = logging.WARNING if is_retryable else logging.ERROR

                logger.log(
                    log_level,
                    f"HTTP {response.status_code} error from {url}",
                    extra={
                        "event": event_name,
                        "status_code": response.status_code,
                        "method": method,
                        "url": url,
                    },
                )
                raise StoreHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=url,
                )

            try:
                data = response.json()
            except ValueError as e:
                logger.error(
                    f"Failed to parse JSON response from {url}",
                    extra={"event": "store.request.error", "error_type": "JSONDecodeError", "url": url},
                )
                raise StoreResponseError(f"Failed to parse JSON response from {url}: {e}") from e

            logger.debug(
                "HTTP request succeeded",
                extra={
                    "event": "store.request.succeeded",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            return data

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "store.request.retryable_error",
                    "error_type": "Timeout",
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise StoreTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "store.request.error", "error_type": type(e).__name__, "url": url},
            )
            raise StoreHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e
