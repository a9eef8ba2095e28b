"""HTTP client for the CoffeeHub API."""

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://localhost:4000"
DEFAULT_TIMEOUT_SECONDS = 10.0


class CatalogClientError(Exception):
    """Raised when a request fails or the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []

    def __str__(self) -> str:
        text = self.message
        if self.status_code is not None:
            text = f"{text} (HTTP {self.status_code})"
        if self.details:
            text = f"{text}: {'; '.join(self.details)}"
        return text


def _error_from_response(response: requests.Response) -> CatalogClientError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return CatalogClientError(
        body.get("error") or f"HTTP error {response.status_code}",
        status_code=response.status_code,
        details=body.get("details"),
    )


class CatalogClient:
    """Thin wrapper over the REST endpoints; every method returns decoded JSON."""

    def __init__(
        self,
        base_url: str = DEFAULT_BACKEND_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise CatalogClientError(f"Could not reach the server at {self.base_url}") from e

        if not response.ok:
            error = _error_from_response(response)
            logger.warning(f"{method} {url} returned {response.status_code}: {error.message}")
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise CatalogClientError("Server returned a non-JSON response", response.status_code) from e

    def list_products(self) -> list[dict]:
        return self._request("GET", "/api/products")

    def get_product(self, product_id) -> dict:
        return self._request("GET", f"/api/products/{product_id}")

    def create_product(self, payload: dict) -> dict:
        return self._request("POST", "/api/products", payload)

    def update_product(self, product_id, payload: dict) -> dict:
        return self._request("PUT", f"/api/products/{product_id}", payload)

    def delete_product(self, product_id) -> dict:
        return self._request("DELETE", f"/api/products/{product_id}")

    def get_stats(self) -> dict:
        return self._request("GET", "/api/stats")

    def health(self) -> dict:
        return self._request("GET", "/api/health")

    def close(self) -> None:
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
