import math
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from .errors import Failure
from .models import Product

# Fields a client may set on create/update, by wire name.
PRODUCT_FIELDS = ("name", "price", "description", "category", "inStock")


def validate_product_payload(payload: Dict[str, Any]) -> Optional[Failure]:
    name = payload.get("name")
    if not isinstance(name, str) or not name:
        return Failure.validation("Name must be a non-empty string.")

    price = payload.get("price")
    # bool is an int subclass but never a price
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return Failure.validation("Price must be a positive number.")
    # ints are exact and unbounded; only floats can be inf or nan
    if (isinstance(price, float) and not math.isfinite(price)) or price <= 0:
        return Failure.validation("Price must be a positive number.")
    return None


def _build(data: Dict[str, Any]) -> Union[Product, Failure]:
    try:
        return Product.model_validate(data)
    except ValidationError as exc:
        err = exc.errors()[0]
        field = ".".join(str(part) for part in err["loc"])
        return Failure.validation(f"Invalid value for '{field}': {err['msg']}")


def make_product(product_id: str, payload: Dict[str, Any]) -> Union[Product, Failure]:
    data = {field: payload[field] for field in PRODUCT_FIELDS if field in payload}
    data["id"] = product_id
    return _build(data)


def merge_product(existing: Product, payload: Dict[str, Any], product_id: str) -> Union[Product, Failure]:
    data = existing.model_dump(by_alias=True)
    for field in PRODUCT_FIELDS:
        if field in payload:
            data[field] = payload[field]
    data["id"] = product_id
    return _build(data)
