import logging
from typing import Any, Dict, List

from fastapi import HTTPException

from .core import ProductIn, _make_product_dict
from .database import PRODUCTS, _get_lock
from .models import Product

# Record-store logic behind the /api/products endpoints.

logger = logging.getLogger(__name__)

NOT_FOUND = "Product not found."


def _not_found(product_id: int) -> HTTPException:
    logger.warning("product %s not found or deleted", product_id)
    return HTTPException(status_code=404, detail=NOT_FOUND)


async def list_products_logic() -> List[Dict[str, Any]]:
    return [p.to_public() for p in PRODUCTS.active()]


async def get_product_logic(product_id: int) -> Dict[str, Any]:
    p = PRODUCTS.get_active(product_id)
    if p is None:
        raise _not_found(product_id)
    return p.to_public()


async def create_product_logic(payload: ProductIn) -> Dict[str, Any]:
    # id assignment is the only store-wide critical section
    async with _get_lock("products:create"):
        product = PRODUCTS.insert(_make_product_dict(payload))
    logger.info("created product %s (%s)", product.id, product.product_name)
    return product.to_public()


async def update_product_logic(product_id: int, payload: ProductIn) -> Dict[str, Any]:
    # unknown ids never get a lock entry
    if not PRODUCTS.assigned(product_id):
        raise _not_found(product_id)
    async with _get_lock(f"product:{product_id}"):
        if PRODUCTS.get_active(product_id) is None:
            raise _not_found(product_id)
        product: Product = PRODUCTS.replace(product_id, _make_product_dict(payload))
    logger.info("updated product %s", product_id)
    return product.to_public()


async def delete_product_logic(product_id: int) -> None:
    # unknown ids never get a lock entry
    if not PRODUCTS.assigned(product_id):
        raise _not_found(product_id)
    async with _get_lock(f"product:{product_id}"):
        if PRODUCTS.get_active(product_id) is None:
            raise _not_found(product_id)
        PRODUCTS.soft_delete(product_id)
    logger.info("soft-deleted product %s", product_id)
