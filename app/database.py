import asyncio
import itertools
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import Product

# In-memory record store plus the per-record locks guarding it.


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductStore:
    """Products keyed by id, in creation order.

    Soft-deleted records stay in ``_records`` so their ids are never handed out
    again; reads skip them.
    """

    def __init__(self) -> None:
        self._records: Dict[int, Product] = {}
        self._ids = itertools.count(1)

    def active(self) -> List[Product]:
        return [p for p in self._records.values() if not p.is_deleted]

    def get_active(self, product_id: int) -> Optional[Product]:
        p = self._records.get(product_id)
        if p is None or p.is_deleted:
            return None
        return p

    def assigned(self, product_id: int) -> bool:
        return product_id in self._records

    def insert(self, fields: Dict[str, Any]) -> Product:
        now = utcnow()
        product = Product(id=next(self._ids), created_at=now, updated_at=now, **fields)
        self._records[product.id] = product
        return product

    def replace(self, product_id: int, fields: Dict[str, Any]) -> Product:
        current = self._records[product_id]
        updated = current.model_copy(update={**fields, "updated_at": utcnow()})
        self._records[product_id] = updated
        return updated

    def soft_delete(self, product_id: int) -> Product:
        current = self._records[product_id]
        deleted = current.model_copy(update={"deleted_at": utcnow()})
        self._records[product_id] = deleted
        return deleted

    def clear(self) -> None:
        # used by tests; ids restart, which is only safe on an empty store
        self._records.clear()
        self._ids = itertools.count(1)


PRODUCTS = ProductStore()
_LOCKS: Dict[str, asyncio.Lock] = {}


def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]


def reset_store() -> None:
    PRODUCTS.clear()
    _LOCKS.clear()
