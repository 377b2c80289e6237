import uuid
import logging
from typing import Optional, Dict, Any

from pydantic import ValidationError

from .core import (
    ProductValidationError, PageParams, filter_products, paginate
)
from .database import ProductStore
from .models import (
    Product, ProductCreate, ProductUpdate, ProductPage, DeleteResult, ProductStats
)

# This file contains the core logic for all product endpoints. Auth is
# enforced by the router before any of these run.

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "description", "price", "category")


def _validate_create(payload: Any) -> ProductCreate:
    if not isinstance(payload, dict):
        raise ProductValidationError()
    # presence is truthiness here: an empty name or a zero price is rejected
    if not all(payload.get(f) for f in REQUIRED_FIELDS):
        raise ProductValidationError()
    try:
        return ProductCreate.model_validate(payload)
    except ValidationError:
        raise ProductValidationError()


def _validate_update(payload: Any) -> ProductUpdate:
    if payload is None:
        return ProductUpdate()
    if not isinstance(payload, dict):
        raise ProductValidationError("Request body must be a JSON object")
    try:
        return ProductUpdate.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}))
        raise ProductValidationError(f"Invalid value for: {fields}")


# Product endpoints
def list_products_logic(store: ProductStore, params: PageParams,
                        category: Optional[str] = None, search: Optional[str] = None) -> ProductPage:
    matches = filter_products(store.all(), category=category, search=search)
    return paginate(matches, params)


def get_product_logic(store: ProductStore, product_id: str) -> Product:
    return store.get(product_id)


def create_product_logic(store: ProductStore, payload: Any) -> Product:
    data = _validate_create(payload)
    product = Product(id=uuid.uuid4().hex, **data.model_dump())
    store.add(product)
    logger.info("created product %s (%s)", product.id, product.name)
    return product


def update_product_logic(store: ProductStore, product_id: str, payload: Any) -> Product:
    # existence is checked before the body is looked at
    store.get(product_id)
    changes: Dict[str, Any] = _validate_update(payload).changes()
    updated = store.update(product_id, lambda old: old.model_copy(update=changes))
    logger.info("updated product %s fields=%s", product_id, sorted(changes))
    return updated


def delete_product_logic(store: ProductStore, product_id: str) -> DeleteResult:
    removed = store.remove(product_id)
    logger.info("deleted product %s", product_id)
    return DeleteResult(message="Product deleted successfully", deleted_product=[removed])


def product_stats_logic(store: ProductStore) -> ProductStats:
    # single snapshot so the total and the per-category counts agree
    products = store.all()
    counts: Dict[str, int] = {}
    for p in products:
        counts[p.category] = counts.get(p.category, 0) + 1
    return ProductStats(total_products=len(products), count_by_category=counts)
