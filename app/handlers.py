import uuid
from typing import Any, Dict, Optional

import structlog

from .core import apply_patch, filter_products, make_product_record, validate_product
from .database import ProductNotFound, ProductStore
from .errors import NotFound

logger = structlog.get_logger()

# This file contains the logic behind every product endpoint. Auth is checked
# by the route before any of these run; validation happens here, before the
# store is touched.


def _find(store: ProductStore, product_id: str) -> Dict[str, Any]:
    try:
        return store.get(product_id)
    except ProductNotFound:
        raise NotFound("Product not found")


def _new_id(store: ProductStore) -> str:
    pid = str(uuid.uuid4())
    while pid in store:
        pid = str(uuid.uuid4())
    return pid


# Product endpoints
async def list_products_logic(
    store: ProductStore,
    name: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    in_stock: Optional[str] = None,
):
    out = filter_products(
        store.list(),
        name=name,
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
    )
    return {"success": True, "count": len(out), "data": out}


async def get_product_logic(store: ProductStore, product_id: str):
    return {"success": True, "data": _find(store, product_id)}


async def create_product_logic(store: ProductStore, payload: Any):
    validate_product(payload)
    record = make_product_record(_new_id(store), payload)
    store.insert(record)
    logger.info("Product created", product_id=record["id"], name=record["name"])
    return {"success": True, "data": record}


async def update_product_logic(store: ProductStore, product_id: str, payload: Any):
    validate_product(payload)
    existing = _find(store, product_id)
    updated = apply_patch(existing, payload)
    store.replace(product_id, updated)
    logger.info("Product updated", product_id=product_id)
    return {"success": True, "data": updated}


async def delete_product_logic(store: ProductStore, product_id: str):
    _find(store, product_id)
    store.remove(product_id)
    logger.info("Product deleted", product_id=product_id)
    return {"success": True, "data": {}}
