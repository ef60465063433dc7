# sdk/pyinventory.py
import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """Base class for everything the client raises."""


class ValidationError(InventoryError):
    def __init__(self, errors: Mapping[str, List[str]]):
        self.errors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(f"validation failed: {', '.join(self.errors) or 'unknown field'}")


class NotFoundError(InventoryError):
    def __init__(self, product_id: Any):
        self.product_id = product_id
        super().__init__(f"product {product_id} not found")


class TransportError(InventoryError):
    pass


class InventoryClient:
    def __init__(self, base_url: str = "http://127.0.0.1:8085", timeout: float = 10, session: Optional[Any] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # anything with requests-style get/post/put/delete works here (tests pass a TestClient)
        self.session = session if session is not None else requests.Session()

    def _url(self, product_id: Optional[int] = None) -> str:
        url = f"{self.base_url}/api/products"
        return url if product_id is None else f"{url}/{product_id}"

    def _send(self, method: str, url: str, **kwargs):
        try:
            return getattr(self.session, method)(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method.upper(), url, e)
            raise TransportError(str(e)) from e

    def _check(self, r, product_id: Optional[int] = None):
        if r.status_code == 404:
            if product_id is None:
                # the collection itself is missing: wrong base url or a proxy in the way
                raise TransportError("HTTP 404: products endpoint not found")
            raise NotFoundError(product_id)
        if r.status_code == 422:
            try:
                errors = r.json().get("errors") or {}
            except ValueError:
                errors = {}
            logger.info("server rejected product fields: %s", errors)
            raise ValidationError(errors)
        if not 200 <= r.status_code < 300:
            raise TransportError(f"HTTP {r.status_code}: {r.text}")
        return r

    def _decode(self, r):
        try:
            return r.json()
        except ValueError as e:
            logger.error("response is not JSON: %s", e)
            raise TransportError(f"invalid JSON in response: {e}") from e

    # Products
    def list_products(self) -> List[Dict[str, Any]]:
        r = self._check(self._send("get", self._url()))
        return self._decode(r)

    def get_product(self, product_id: int) -> Dict[str, Any]:
        r = self._check(self._send("get", self._url(product_id)), product_id)
        return self._decode(r)

    def create_product(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        r = self._check(self._send("post", self._url(), json=dict(fields)))
        return self._decode(r)

    def update_product(self, product_id: int, fields: Mapping[str, Any]) -> Dict[str, Any]:
        r = self._check(self._send("put", self._url(product_id), json=dict(fields)), product_id)
        return self._decode(r)

    def delete_product(self, product_id: int) -> None:
        # 204 carries no body, nothing to decode
        self._check(self._send("delete", self._url(product_id)), product_id)
