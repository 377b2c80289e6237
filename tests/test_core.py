# tests/test_core.py
import pytest

from app.core import (
    PageParams, ProductNotFoundError, ProductValidationError,
    filter_products, paginate, parse_page_params
)
from app.database import ProductStore, seed_products
from app.models import Product, ProductUpdate
from app import services


def _make(n: int, category: str = "misc") -> Product:
    return Product(id=str(n), name=f"Item {n}", description="", price=n, category=category, in_stock=True)


def test_parse_page_params_defaults():
    assert parse_page_params() == PageParams(page=1, limit=10)
    assert parse_page_params("", "") == PageParams(page=1, limit=10)
    assert parse_page_params(None, None, default_limit=25).limit == 25


def test_parse_page_params_coerces_strings():
    assert parse_page_params("3", " 5 ") == PageParams(page=3, limit=5)
    assert parse_page_params("-2", "5").page == -2


@pytest.mark.parametrize("page,limit", [("1.5", "10"), ("x", "10"), ("1", "0"), ("1", "-1"), ("1", "a"),
                                        ("1_0", "10"), ("1", "1_0"), ("\u0661", "10"), ("+1", "10")])
def test_parse_page_params_rejects(page, limit):
    with pytest.raises(ProductValidationError):
        parse_page_params(page, limit)


def test_filter_keeps_order():
    products = [_make(1, "A"), _make(2, "b"), _make(3, "a")]
    assert [p.id for p in filter_products(products, category="a")] == ["1", "3"]
    assert [p.id for p in filter_products(products)] == ["1", "2", "3"]


def test_filter_search_case_insensitive():
    products = seed_products()
    assert [p.name for p in filter_products(products, search="COFFEE")] == ["Coffee Maker"]
    assert [p.name for p in filter_products(products, search="o")] == ["Laptop", "Smartphone", "Coffee Maker"]


def test_window_length_property():
    products = [_make(n) for n in range(23)]
    total = len(products)
    for limit in (1, 4, 10, 23, 30):
        for page in range(1, 8):
            result = paginate(products, PageParams(page=page, limit=limit))
            expected = min(limit, max(0, total - (page - 1) * limit))
            assert len(result.products) == expected
            assert result.total_products == total
            assert result.total_pages == -(-total // limit)


def test_paginate_empty_collection():
    result = paginate([], PageParams())
    assert result.total_products == 0
    assert result.total_pages == 0
    assert result.products == []


def test_paginate_nonpositive_page():
    products = [_make(n) for n in range(5)]
    assert paginate(products, PageParams(page=0, limit=2)).products == []
    assert paginate(products, PageParams(page=-1, limit=2)).products == []


# ---------------------------
# Store
# ---------------------------
def test_store_get_and_missing():
    store = ProductStore(seed_products())
    assert store.get("2").name == "Smartphone"
    with pytest.raises(ProductNotFoundError):
        store.get("missing")


def test_store_rejects_duplicate_id():
    store = ProductStore(seed_products())
    with pytest.raises(ValueError):
        store.add(_make(1))
    assert store.count() == 3


def test_store_update_keeps_position():
    store = ProductStore(seed_products())
    store.update("2", lambda old: old.model_copy(update={"price": 1}))
    assert [p.id for p in store.all()] == ["1", "2", "3"]
    assert store.get("2").price == 1


def test_store_update_id_immutable():
    store = ProductStore(seed_products())
    with pytest.raises(ValueError):
        store.update("2", lambda old: old.model_copy(update={"id": "9"}))
    assert store.get("2").name == "Smartphone"


def test_store_snapshot_is_a_copy():
    store = ProductStore(seed_products())
    snapshot = store.all()
    store.remove("1")
    assert len(snapshot) == 3
    assert store.count() == 2


# ---------------------------
# Services
# ---------------------------
def test_update_changes_distinguish_omitted_from_falsy():
    upd = ProductUpdate.model_validate({"inStock": False, "price": 0, "name": None})
    assert upd.changes() == {"in_stock": False, "price": 0}
    assert ProductUpdate.model_validate({}).changes() == {}


def test_update_logic_merges():
    store = ProductStore(seed_products())
    updated = services.update_product_logic(store, "1", {"description": "Refurbished"})
    assert updated.description == "Refurbished"
    assert updated.name == "Laptop"
    assert updated.price == 1200
    assert updated.in_stock is True


def test_update_logic_missing_before_body():
    store = ProductStore(seed_products())
    with pytest.raises(ProductNotFoundError):
        services.update_product_logic(store, "nope", "not a dict")


def test_update_logic_rejects_non_object():
    store = ProductStore(seed_products())
    with pytest.raises(ProductValidationError):
        services.update_product_logic(store, "1", ["name"])


def test_create_logic_rejects_non_object():
    store = ProductStore(seed_products())
    with pytest.raises(ProductValidationError):
        services.create_product_logic(store, None)
    with pytest.raises(ProductValidationError):
        services.create_product_logic(store, [1, 2])


def test_create_logic_rejects_bool_price():
    store = ProductStore(seed_products())
    payload = {"name": "X", "description": "Y", "price": True, "category": "c", "inStock": True}
    with pytest.raises(ProductValidationError):
        services.create_product_logic(store, payload)


def test_stats_sum_matches_total():
    store = ProductStore([_make(n, category=c) for n, c in enumerate("aabcbbz")])
    stats = services.product_stats_logic(store)
    assert stats.total_products == 7
    assert stats.count_by_category == {"a": 2, "b": 3, "c": 1, "z": 1}
    assert sum(stats.count_by_category.values()) == stats.total_products


def test_stats_empty_store():
    stats = services.product_stats_logic(ProductStore())
    assert stats.total_products == 0
    assert stats.count_by_category == {}


@pytest.mark.parametrize("price", [float("nan"), float("inf"), float("-inf")])
def test_create_logic_rejects_non_finite_price(price):
    store = ProductStore(seed_products())
    payload = {"name": "X", "description": "Y", "price": price, "category": "c", "inStock": True}
    with pytest.raises(ProductValidationError):
        services.create_product_logic(store, payload)
    assert store.count() == 3


@pytest.mark.parametrize("price", [float("nan"), float("inf")])
def test_update_logic_rejects_non_finite_price(price):
    store = ProductStore(seed_products())
    with pytest.raises(ProductValidationError):
        services.update_product_logic(store, "1", {"price": price})
    assert store.get("1").price == 1200


def test_delete_logic_returns_list():
    store = ProductStore(seed_products())
    result = services.delete_product_logic(store, "3")
    assert [p.id for p in result.deleted_product] == ["3"]
