# tests/test_store.py
import pytest

from catalog.core import make_product, merge_product, validate_product_payload
from catalog.database import ProductStore, seed_products
from catalog.errors import ErrorKind, Failure
from catalog.models import Product


def test_store_basic_operations():
    s = ProductStore(seed_products())
    assert len(s) == 3
    assert "2" in s
    assert s.find_by_id("404") is None

    s.insert(Product(id="4", name="Desk", price=150))
    assert [p.id for p in s.list()] == ["1", "2", "3", "4"]

    assert s.replace("2", Product(id="2", name="Big Mug", price=20)) is True
    assert s.list()[1].name == "Big Mug"
    assert s.replace("404", Product(id="404", name="x", price=1)) is False

    assert s.remove("1") is True
    assert s.remove("1") is False
    assert [p.id for p in s.list()] == ["2", "3", "4"]


def test_store_rejects_duplicate_ids():
    s = ProductStore(seed_products())
    with pytest.raises(ValueError):
        s.insert(Product(id="1", name="Again", price=1))
    assert len(s) == 3


def test_list_is_a_snapshot():
    s = ProductStore(seed_products())
    snapshot = s.list()
    s.remove("1")
    assert len(snapshot) == 3


def test_new_id_is_unused():
    s = ProductStore(seed_products())
    pid = s.new_id()
    assert pid not in s
    assert pid != s.new_id()


def test_validate_payload():
    assert validate_product_payload({"name": "Desk", "price": 150}) is None
    assert validate_product_payload({"name": "Desk", "price": 0.01}) is None
    bad_price = validate_product_payload({"name": "Desk", "price": float("inf")})
    assert bad_price == Failure(ErrorKind.VALIDATION, "Price must be a positive number.")
    # name is checked first
    both = validate_product_payload({"name": "", "price": -1})
    assert both.message == "Name must be a non-empty string."


def test_make_product_uses_fixed_fields():
    p = make_product("abc", {"name": "Desk", "price": 150, "inStock": False, "extra": 1})
    assert p.id == "abc"
    assert p.in_stock is False
    assert p.category == "general"
    assert "extra" not in p.model_dump()


def test_merge_only_touches_present_fields():
    laptop = seed_products()[0]
    merged = merge_product(laptop, {"price": 999, "id": "other"}, "1")
    assert merged.id == "1"
    assert merged.price == 999
    assert merged.name == "Laptop"
    assert merged.description == laptop.description
    # the input record is not mutated
    assert laptop.price == 1200


def test_merge_reports_type_errors():
    laptop = seed_products()[0]
    failure = merge_product(laptop, {"inStock": "maybe"}, "1")
    assert isinstance(failure, Failure)
    assert failure.kind is ErrorKind.VALIDATION
    assert "inStock" in failure.message


def test_make_product_rejects_truthy_in_stock_values():
    for value in ("yes", 1):
        failure = make_product("abc", {"name": "Desk", "price": 5, "inStock": value})
        assert isinstance(failure, Failure)
        assert "inStock" in failure.message


def test_validate_payload_with_huge_integer_price():
    assert validate_product_payload({"name": "Desk", "price": 10 ** 400}) is None
    assert validate_product_payload({"name": "Desk", "price": -(10 ** 400)}).message == (
        "Price must be a positive number."
    )
