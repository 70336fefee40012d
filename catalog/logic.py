import re
from collections import Counter
from typing import Any, Dict, List, Optional, Union

from .core import make_product, merge_product
from .database import ProductStore
from .errors import Failure
from .models import Product

# This file contains the core logic behind the product endpoints.
# Expected failures come back as Failure values, never as exceptions.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
NOT_FOUND_MESSAGE = "Product not found."

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_count(raw: Optional[str], default: int) -> int:
    """Leading integer of raw, or default when absent or not positive."""
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    value = int(m.group(1))
    return value if value > 0 else default


async def list_products_logic(
    store: ProductStore,
    category: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> List[Product]:
    products = store.list()
    if category:
        wanted = category.lower()
        products = [p for p in products if p.category.lower() == wanted]

    page_number = _parse_count(page, DEFAULT_PAGE)
    page_size = _parse_count(limit, DEFAULT_LIMIT)
    start = (page_number - 1) * page_size
    return products[start:start + page_size]


async def search_products_logic(store: ProductStore, q: str) -> List[Product]:
    term = q.lower()
    return [p for p in store.list() if term in p.name.lower()]


async def product_stats_logic(store: ProductStore) -> Dict[str, int]:
    return dict(Counter(p.category for p in store.list()))


async def get_product_logic(store: ProductStore, product_id: str) -> Union[Product, Failure]:
    p = store.find_by_id(product_id)
    if p is None:
        return Failure.not_found(NOT_FOUND_MESSAGE)
    return p


async def create_product_logic(store: ProductStore, payload: Dict[str, Any]) -> Union[Product, Failure]:
    product = make_product(store.new_id(), payload)
    if isinstance(product, Failure):
        return product
    store.insert(product)
    return product


async def update_product_logic(
    store: ProductStore, product_id: str, payload: Dict[str, Any]
) -> Union[Product, Failure]:
    existing = store.find_by_id(product_id)
    if existing is None:
        return Failure.not_found(NOT_FOUND_MESSAGE)
    updated = merge_product(existing, payload, product_id)
    if isinstance(updated, Failure):
        return updated
    if not store.replace(product_id, updated):
        # deleted between lookup and replace
        return Failure.not_found(NOT_FOUND_MESSAGE)
    return updated


async def delete_product_logic(store: ProductStore, product_id: str) -> Optional[Failure]:
    if not store.remove(product_id):
        return Failure.not_found(NOT_FOUND_MESSAGE)
    return None
